from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from relform.core.result import Err, Ok
from relform.form.demo import demo_state
from relform.form.model import Applicant, FormState, ScheduledTime
from relform.form.release_form import ReleaseForm
from relform.form.variants import WELCOME


class TestEditing:
    def test_set_value_marks_dirty(self) -> None:
        form = ReleaseForm()
        form.set_value("system_name", "核心系統")
        assert form.state.system_name == "核心系統"
        assert form.dirty == {"system_name"}

    def test_silent_write(self) -> None:
        form = ReleaseForm()
        form.set_value("system_name", "x", emit=False)
        assert form.dirty == set()

    def test_unknown_path(self) -> None:
        with pytest.raises(KeyError):
            ReleaseForm().set_value("nope", "x")

    def test_departments(self) -> None:
        assert ReleaseForm().departments[0] == "經紀系統部"


class TestRequestNumbers:
    def test_add_and_remove(self) -> None:
        form = ReleaseForm()
        form.set_value("request_numbers.0", "A")
        form.add_request_number("B")
        form.add_request_number()
        assert form.state.request_numbers == ("A", "B", "")
        form.remove_request_number(0)
        assert form.state.request_numbers == ("B", "")

    def test_last_entry_is_kept(self) -> None:
        form = ReleaseForm()
        form.remove_request_number(0)
        assert form.state.request_numbers == ("",)

    def test_out_of_range_is_ignored(self) -> None:
        form = ReleaseForm()
        form.add_request_number("B")
        form.remove_request_number(5)
        assert len(form.state.request_numbers) == 2

    def test_flags_follow_entries(self) -> None:
        form = ReleaseForm()
        form.add_request_number()
        form.add_request_number()
        form.touch("request_numbers.0")
        form.touch("request_numbers.2")
        form.remove_request_number(0)
        assert form.touched == {"request_numbers.1"}


class TestValidity:
    def test_field_invalid_only_after_interaction(self) -> None:
        form = ReleaseForm()
        assert "system_name" in form.errors()
        assert not form.is_field_invalid("system_name")
        form.touch("system_name")
        assert form.is_field_invalid("system_name")

    def test_submit_invalid_reveals_all_errors(self) -> None:
        form = ReleaseForm()
        result = form.submit()
        assert isinstance(result, Err)
        for path in result.error:
            assert form.is_field_invalid(path)
        assert "applicant" in form.touched
        assert "request_numbers.0" in form.dirty

    def test_submit_valid(self) -> None:
        form = ReleaseForm()
        form.load(demo_state())
        assert form.is_valid()
        assert form.submit() == Ok(demo_state())

    def test_variant_controls_rules(self) -> None:
        form = ReleaseForm(variant=WELCOME)
        form.load(replace(demo_state(), request_numbers=("A", "")))
        assert form.is_valid()

    def test_group_invalid_when_a_child_is(self) -> None:
        form = ReleaseForm()
        form.load(replace(demo_state(), scheduled_time=ScheduledTime()))
        form.submit()
        assert form.is_field_invalid("scheduled_time")
        assert form.is_field_invalid("scheduled_time.date")
        assert not form.is_field_invalid("applicant")

    def test_group_needs_interaction(self) -> None:
        form = ReleaseForm()
        form.load(replace(demo_state(), applicant=Applicant()))
        assert not form.is_field_invalid("applicant")
        form.touch("applicant")
        assert form.is_field_invalid("applicant")

    def test_list_entries_are_separate(self) -> None:
        form = ReleaseForm()
        form.load(replace(demo_state(), request_numbers=("A", "")))
        form.mark_all_touched()
        assert form.is_field_invalid("request_numbers")
        assert form.is_field_invalid("request_numbers.1")
        assert not form.is_field_invalid("request_numbers.0")


class TestLoad:
    def test_load_populates_divisions_without_dirtying(self) -> None:
        form = ReleaseForm()
        form.load(demo_state())
        assert form.divisions == ("核心系統科", "跨境業務科", "電子交易科")
        assert form.state.division == "跨境業務科"
        assert form.dirty == set()

    def test_load_drops_foreign_division(self, caplog: pytest.LogCaptureFixture) -> None:
        form = ReleaseForm()
        with caplog.at_level(logging.WARNING, logger="relform"):
            form.load(replace(demo_state(), division="系統開發科"))
        assert form.state.division == ""
        assert "系統開發科" in caplog.text

    def test_load_empty_request_numbers(self) -> None:
        form = ReleaseForm()
        form.load(replace(demo_state(), request_numbers=()))
        assert form.state.request_numbers == ("",)

    def test_reset(self) -> None:
        form = ReleaseForm()
        form.load(demo_state())
        form.touch("system_name")
        form.reset()
        assert form.state == FormState()
        assert form.divisions == ()
        assert form.touched == set()


def test_load_notifies_once_with_final_state() -> None:
    seen: list[tuple[str, str]] = []
    form = ReleaseForm(on_change=(lambda f: seen.append((f.state.department, f.state.division)),))
    form.load(demo_state())
    assert seen == [("經紀系統部", "跨境業務科")]
