from __future__ import annotations

from relform.form.demo import demo_state


def test_demo_values() -> None:
    state = demo_state()
    assert state.request_numbers == ("TEST202402001", "TEST202402002")
    assert (state.department, state.division) == ("經紀系統部", "跨境業務科")
    assert state.scheduled_time.time is not None
    assert state.scheduled_time.time.strftime("%H:%M") == "14:30"


def test_demo_is_fresh_each_call() -> None:
    assert demo_state() == demo_state()
    assert demo_state() is not demo_state()
