from __future__ import annotations

from datetime import date, datetime

from relform.form.release_form import ReleaseForm


class TestDepartmentDivisions:
    def test_department_change_populates_divisions(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "資訊營管部")
        assert form.divisions == ("系統管理科", "資訊管理科")

    def test_division_cleared_when_not_offered(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "經紀系統部")
        form.set_value("division", "核心系統科")
        form.set_value("department", "資訊營管部")
        assert form.state.division == ""
        assert form.divisions == ("系統管理科", "資訊管理科")

    def test_clearing_is_not_a_user_edit(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "經紀系統部")
        form.set_value("division", "核心系統科")
        form.dirty.clear()
        form.set_value("department", "資訊營管部")
        assert form.dirty == {"department"}

    def test_same_department_keeps_division(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "經紀系統部")
        form.set_value("division", "核心系統科")
        form.set_value("department", "經紀系統部")
        assert form.state.division == "核心系統科"

    def test_empty_department_clears_everything(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "經紀系統部")
        form.set_value("division", "核心系統科")
        form.set_value("department", "")
        assert form.divisions == ()
        assert form.state.division == ""

    def test_unknown_department(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "不存在部")
        assert form.divisions == ()

    def test_unknown_department_clears_division(self) -> None:
        form = ReleaseForm()
        form.set_value("department", "經紀系統部")
        form.set_value("division", "核心系統科")
        form.set_value("department", "不存在部")
        assert form.state.division == ""
        assert form.divisions == ()


class TestTimeFollowsDate:
    def test_time_moves_to_new_date(self) -> None:
        form = ReleaseForm()
        form.set_value("scheduled_time.date", date(2025, 1, 20))
        form.set_value("scheduled_time.time", datetime(2025, 1, 20, 14, 30, 15))
        form.set_value("scheduled_time.date", date(2025, 3, 5))
        assert form.state.scheduled_time.time == datetime(2025, 3, 5, 14, 30)

    def test_no_time_stays_empty(self) -> None:
        form = ReleaseForm()
        form.set_value("scheduled_time.date", date(2025, 3, 5))
        assert form.state.scheduled_time.time is None

    def test_date_cleared_keeps_time(self) -> None:
        form = ReleaseForm()
        form.set_value("scheduled_time.time", datetime(2025, 1, 20, 9, 0))
        form.set_value("scheduled_time.date", None)
        assert form.state.scheduled_time.time == datetime(2025, 1, 20, 9, 0)

    def test_time_write_is_silent(self) -> None:
        form = ReleaseForm()
        form.set_value("scheduled_time.time", datetime(2025, 1, 20, 9, 0))
        form.dirty.clear()
        form.set_value("scheduled_time.date", date(2025, 2, 1))
        assert form.dirty == {"scheduled_time.date"}


def test_field_reactions_run_before_form_reactions() -> None:
    seen: list[tuple[str, tuple[str, ...]]] = []

    def record(form: ReleaseForm) -> None:
        seen.append((form.state.division, form.divisions))

    form = ReleaseForm(on_change=(record,))
    form.set_value("department", "經紀系統部")
    form.set_value("division", "核心系統科")
    form.set_value("department", "法人系統部")
    assert seen[-1] == ("", ("交易管理科", "系統開發科"))
