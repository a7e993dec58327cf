from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
import typer

from relform.cli.commands._helpers import build_workflow
from relform.cli.commands.wizard import PathPreview, run_wizard
from relform.cli.context import CLIContext
from relform.core.config import Config
from relform.core.errors import ErrorCode
from relform.document.mapper import MappingContext
from relform.document.starter import build_starter_template
from relform.form.demo import demo_state
from relform.form.files import load_form_file, write_form_file
from relform.form.release_form import ReleaseForm
from relform.form.variants import RELEASE
from relform.output.console import MockConsole


def _answers() -> dict[str, list[str]]:
    return {
        "Risk level": ["low"],
        "Development type": ["1"],
        "Version type": ["定期換版"],
        "Change number": [""],
        "System name": ["核心系統"],
        "Scheduled date": ["20/01/2025", "2025-01-20"],
        "Scheduled time of day": ["14:30"],
        "Primary system code": ["TEST"],
        "Secondary system code": ["00"],
        "Change subject": ["優化換版流程"],
        "Request number": ["TEST202402001", "TEST202402002", ""],
        "Others": [""],
        "Department": ["1"],
        "Division": ["跨境業務科"],
        "Project path": ["TEST\\20250120"],
        "Affected systems": ["無影響"],
        "Impact areas": ["效能相關"],
        "Employee ID": ["012797"],
        "Extension": ["1234"],
    }


def _scripted(answers: dict[str, list[str]]) -> Callable[[str, str], str]:
    def ask(prompt: str, default: str) -> str:
        for key, queue in answers.items():
            if key in prompt:
                return queue.pop(0) if queue else default
        raise AssertionError(f"unexpected prompt: {prompt}")

    return ask


def _confirm(prompt: str, default: bool) -> bool:
    return prompt in ("Normal version", "System change notice", "Fix these fields now?")


def _ctx(tmp_path: Path) -> CLIContext:
    template = tmp_path / "t.docx"
    build_starter_template(template, title="系統換版申請單")
    config = Config.from_dict(
        {"template": {"path": str(template)}, "output": {"dir": str(tmp_path / "out")}}
    )
    return CLIContext(config=config, variant=RELEASE, console=MockConsole())


def _run(ctx: CLIContext, answers: dict[str, list[str]], **kwargs: object) -> None:
    run_wizard(
        ctx,
        build_workflow(ctx, out_dir=None, template=None),
        start_from=kwargs.get("start_from"),  # type: ignore[arg-type]
        save=kwargs.get("save"),  # type: ignore[arg-type]
        ask=_scripted(answers),
        confirm=_confirm,
        clock=lambda: datetime(2025, 1, 1),
    )


def test_guided_entry_generates_document(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    save = tmp_path / "answers.json"

    _run(ctx, _answers(), save=save)

    assert (tmp_path / "out" / "0 - 系統換版申請單_202501201430.docx").is_file()
    state = load_form_file(save).unwrap()
    assert state.risk_level == "low"
    assert state.type == "self"
    assert state.version_type == "regular"
    assert state.request_numbers == ("TEST202402001", "TEST202402002")
    assert state.department == "經紀系統部"
    assert state.division == "跨境業務科"
    assert state.version_types.normal_version
    assert state.deliverables.system_change_notice


def test_bad_date_is_asked_again(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    answers = _answers()
    _run(ctx, answers)
    assert answers["Scheduled date"] == []
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("not a date")


def test_preview_follows_location(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    _run(ctx, _answers())
    assert isinstance(ctx.console, MockConsole)
    previews = [m for m in ctx.console.messages if m.startswith("file path: ")]
    assert previews[0] == "file path: Y:\\共享資料\\換版文件\\2025\\經紀系統部"
    assert previews[-1] == "file path: Y:\\共享資料\\換版文件\\2025\\經紀系統部\\跨境業務科\\TEST\\20250120"


def test_invalid_fields_are_asked_again(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    answers = _answers()
    answers["System name"] = ["", "核心系統"]

    _run(ctx, answers)

    assert answers["System name"] == []
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("System name (系統名稱): this field is required")
    assert ctx.console.has_success()


def test_declining_fix_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    answers = _answers()
    answers["System name"] = [""]

    with pytest.raises(typer.Exit) as exc:
        run_wizard(
            ctx,
            build_workflow(ctx, out_dir=None, template=None),
            start_from=None,
            save=None,
            ask=_scripted(answers),
            confirm=lambda prompt, default: prompt == "Normal version",
        )

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert not (tmp_path / "out").exists()


def test_start_from_file_uses_saved_values_as_defaults(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    form_file = tmp_path / "form.json"
    write_form_file(form_file, demo_state())
    prompts: list[tuple[str, str]] = []

    def accept_defaults(prompt: str, default: str) -> str:
        prompts.append((prompt, default))
        return default

    run_wizard(
        ctx,
        build_workflow(ctx, out_dir=None, template=None),
        start_from=form_file,
        save=None,
        ask=accept_defaults,
        confirm=lambda prompt, default: default,
    )

    assert ("System name (系統名稱)", "換版文件線上平台") in prompts
    assert ("Request number #2 (blank to finish)", "TEST202402002") in prompts
    assert (tmp_path / "out" / "0 - 系統換版申請單_202501201430.docx").is_file()


def test_path_preview_prints_only_changes() -> None:
    console = MockConsole()
    preview = PathPreview(MappingContext(base_path="/share", flavor="posix", year=2025), console)
    form = ReleaseForm(on_change=(preview,))
    form.set_value("system_name", "x")
    form.set_value("department", "資訊營管部")
    form.set_value("system_name", "y")
    form.set_value("division", "系統管理科")
    assert console.messages == [
        "file path: /share/2025/資訊營管部",
        "file path: /share/2025/資訊營管部/系統管理科",
    ]
