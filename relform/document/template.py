"""Where the Word template comes from."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relform.core.result import Err, Ok, Result
from relform.document.errors import TemplateFetchError

__all__ = ["FileTemplateSource", "TemplateSource"]


class TemplateSource(Protocol):
    def fetch(self) -> Result[bytes, TemplateFetchError]: ...


class FileTemplateSource:
    """Reads the template from a fixed path on every fetch."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch(self) -> Result[bytes, TemplateFetchError]:
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return Err(
                TemplateFetchError(
                    path=self.path,
                    message=f"template not found: {self.path}",
                    hint="run `relform template` to create a starter template",
                )
            )
        except OSError as e:
            return Err(TemplateFetchError(path=self.path, message=f"cannot read template: {e}"))

        if not data:
            return Err(TemplateFetchError(path=self.path, message="template file is empty"))
        return Ok(data)
