"""Typed configuration loading and access.

Configuration lives in ``relform.toml``. Every key is optional; missing
keys fall back to the defaults below, which match the production
deployment (Windows file share, official release-request template).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "FormConfig",
    "GlyphsConfig",
    "OutputConfig",
    "PathsConfig",
    "TemplateConfig",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "discover_config_path",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relform.toml"
CONFIG_ENV_VAR = "RELFORM_CONFIG"

DEFAULT_TEMPLATE_PATH = "templates/release-request.docx"
DEFAULT_TITLE = "系統換版申請單"
DEFAULT_BASE_PATH = "Y:\\共享資料\\換版文件"

PathFlavor = Literal["windows", "posix"]
VariantName = Literal["release", "welcome"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    path: str = DEFAULT_TEMPLATE_PATH


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where generated documents go and how they are named."""

    dir: str = "."
    title: str = DEFAULT_TITLE
    extension: str = "docx"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Base of the composed file-share path written into the document.

    ``flavor`` selects the separator convention of the machines that will
    open the path, not of the machine running relform.
    """

    base: str = DEFAULT_BASE_PATH
    flavor: PathFlavor = "windows"


@dataclass(frozen=True, slots=True)
class FormConfig:
    variant: VariantName = "release"


@dataclass(frozen=True, slots=True)
class GlyphsConfig:
    """Checkbox glyphs substituted into the template."""

    selected: str = "■"
    unselected: str = "□"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    template: TemplateConfig = field(default_factory=TemplateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    form: FormConfig = field(default_factory=FormConfig)
    glyphs: GlyphsConfig = field(default_factory=GlyphsConfig)
    source: Path | None = None

    @property
    def template_path(self) -> Path:
        """Template path, resolved against the config file's directory."""
        return self._resolve(self.template.path)

    @property
    def output_dir(self) -> Path:
        return self._resolve(self.output.dir)

    def _resolve(self, raw: str) -> Path:
        p = Path(raw).expanduser()
        if p.is_absolute() or self.source is None:
            return p
        return self.source.parent / p

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, source: Path | None = None) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: An enumerated key holds an unsupported value.
        """
        template: StrDict = get_table(data, "template") or {}
        output: StrDict = get_table(data, "output") or {}
        paths: StrDict = get_table(data, "paths") or {}
        form: StrDict = get_table(data, "form") or {}
        glyphs: StrDict = get_table(data, "glyphs") or {}

        flavor = get_str(paths, "flavor") or "windows"
        if flavor not in ("windows", "posix"):
            raise ValueError(f"paths.flavor must be 'windows' or 'posix', got '{flavor}'")
        variant = get_str(form, "variant") or "release"
        if variant not in ("release", "welcome"):
            raise ValueError(f"form.variant must be 'release' or 'welcome', got '{variant}'")

        return cls(
            template=TemplateConfig(path=get_str(template, "path") or DEFAULT_TEMPLATE_PATH),
            output=OutputConfig(
                dir=get_str(output, "dir") or ".",
                title=get_str(output, "title") or DEFAULT_TITLE,
                extension=(get_str(output, "extension") or "docx").lstrip("."),
            ),
            paths=PathsConfig(
                base=get_str(paths, "base") or DEFAULT_BASE_PATH,
                flavor=flavor,  # type: ignore[arg-type]
            ),
            form=FormConfig(variant=variant),  # type: ignore[arg-type]
            glyphs=GlyphsConfig(
                selected=get_str(glyphs, "selected") or "■",
                unselected=get_str(glyphs, "unselected") or "□",
            ),
            source=source,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relform.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value, source=path))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def discover_config_path(explicit: Path | None = None, *, cwd: Path | None = None) -> Path | None:
    """Find the config file to use.

    Order: explicit path, ``RELFORM_CONFIG``, ``./relform.toml``.
    Returns None when nothing applies (built-in defaults are used).
    """
    if explicit is not None:
        return explicit.expanduser()

    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config from ``path``, or return defaults when there is none."""
    if path is None:
        return Ok(Config())
    return load_config(path)
