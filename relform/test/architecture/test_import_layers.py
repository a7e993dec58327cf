from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def relform_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    return [p for p in sorted(base.rglob("*.py")) if "__pycache__" not in p.parts]


def parse_imports(path: Path) -> list[ImportRef]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[ImportRef] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(module=alias.name, line=node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(package: str, forbidden: tuple[str, ...]) -> list[str]:
    root = relform_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_form_is_independent_of_document_output_and_cli() -> None:
    offenders = _offenders("form", ("relform.document", "relform.output", "relform.cli"))
    assert not offenders, "form layering violations:\n" + "\n".join(offenders)


def test_document_does_not_import_cli_or_output() -> None:
    offenders = _offenders("document", ("relform.cli", "relform.output"))
    assert not offenders, "document layering violations:\n" + "\n".join(offenders)


def test_core_imports_nothing_above_it() -> None:
    offenders = _offenders(
        "core",
        ("relform.form", "relform.document", "relform.output", "relform.cli", "relform.platform"),
    )
    assert not offenders, "core layering violations:\n" + "\n".join(offenders)


def test_third_party_imports_stay_at_their_seams() -> None:
    root = relform_root()
    allowed = {
        "rich": {"output/console.py", "cli/logs.py"},
        "typer": {
            "cli/app.py",
            "cli/context.py",
            "cli/commands/_helpers.py",
            "cli/commands/generate.py",
            "cli/commands/validate.py",
            "cli/commands/wizard.py",
            "cli/commands/init_cmd.py",
            "cli/commands/template_cmd.py",
        },
        "docxtpl": {"document/renderer.py"},
        "docx": {"document/starter.py"},
    }

    offenders: list[str] = []
    for file_path in iter_python_files(root):
        rel = file_path.relative_to(root)
        if rel.parts and rel.parts[0] == "test":
            continue
        rel_str = rel.as_posix()
        for item in parse_imports(file_path):
            for lib, files in allowed.items():
                if matches_prefix(item.module, lib) and rel_str not in files:
                    offenders.append(f"{rel}:{item.line}: direct {lib} import '{item.module}'")

    assert not offenders, "third-party usage policy violations:\n" + "\n".join(offenders)
