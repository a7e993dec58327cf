from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

from relform.core.result import Err, Ok
from relform.form.demo import demo_state
from relform.form.files import (
    FORM_SCHEMA,
    form_state_from_dict,
    form_state_to_dict,
    load_form_file,
    write_form_file,
)
from relform.form.model import FormState


def test_written_file_loads_back(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    assert write_form_file(path, demo_state()) == Ok(path)
    assert load_form_file(path) == Ok(demo_state())


def test_written_file_is_readable_json(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    write_form_file(path, demo_state())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["schema"] == FORM_SCHEMA
    assert data["scheduled_time"] == {"date": "2025-01-20", "time": "14:30"}
    assert data["department"] == "經紀系統部"
    assert "經紀系統部" in path.read_text(encoding="utf-8")


def test_toml_form(tmp_path: Path) -> None:
    path = tmp_path / "form.toml"
    path.write_text(
        "\n".join(
            [
                'system_name = "核心系統"',
                'request_numbers = ["R1"]',
                "[scheduled_time]",
                "date = 2025-01-20",
                "time = 14:30:00",
                "[version_types]",
                "new_system = true",
            ]
        ),
        encoding="utf-8",
    )
    result = load_form_file(path)
    assert isinstance(result, Ok)
    state = result.value
    assert state.system_name == "核心系統"
    assert state.scheduled_time.date == date(2025, 1, 20)
    assert state.scheduled_time.time == datetime(2025, 1, 20, 14, 30)
    assert state.version_types.new_system


def test_missing_keys_use_defaults() -> None:
    assert form_state_from_dict({}) == FormState()


def test_unknown_keys_are_ignored() -> None:
    assert form_state_from_dict({"future_field": 1}) == FormState()


def test_blank_schedule_round_trips() -> None:
    data = form_state_to_dict(FormState())
    assert data["scheduled_time"] == {"date": "", "time": ""}
    assert form_state_from_dict(data) == FormState()


def test_bad_values_are_reported(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"version_types": {"new_system": "yes"}}), encoding="utf-8")
    result = load_form_file(path)
    assert isinstance(result, Err)
    assert "new_system" in result.error.message


def test_bad_date(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"scheduled_time": {"date": "20/01/2025"}}), encoding="utf-8")
    assert isinstance(load_form_file(path), Err)


def test_unsupported_schema(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"schema": 99}), encoding="utf-8")
    result = load_form_file(path)
    assert isinstance(result, Err)
    assert "schema" in result.error.message


def test_invalid_json_hints_at_toml(tmp_path: Path) -> None:
    path = tmp_path / "form.txt"
    path.write_text("system_name = 'x'", encoding="utf-8")
    result = load_form_file(path)
    assert isinstance(result, Err)
    assert result.error.hint is not None


def test_missing_file(tmp_path: Path) -> None:
    result = load_form_file(tmp_path / "nope.json")
    assert isinstance(result, Err)
    assert result.error.path == tmp_path / "nope.json"


def test_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_bytes(b"\xef\xbb\xbf{}")
    assert load_form_file(path) == Ok(FormState())


def test_groups_must_be_tables(tmp_path: Path) -> None:
    for key, value in (
        ("scheduled_time", "2025-01-20 14:30"),
        ("applicant", "012797"),
        ("version_types", ["normal_version"]),
        ("deliverables", True),
    ):
        path = tmp_path / f"{key}.json"
        path.write_text(json.dumps({key: value}), encoding="utf-8")
        result = load_form_file(path)
        assert isinstance(result, Err), key
        assert f"'{key}' must be a table" in result.error.message
