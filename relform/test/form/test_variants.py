from __future__ import annotations

import pytest

from relform.form.variants import RELEASE, WELCOME, get_variant


def test_lookup() -> None:
    assert get_variant("release") is RELEASE
    assert get_variant("welcome") is WELCOME


def test_unknown_variant() -> None:
    with pytest.raises(KeyError):
        get_variant("other")


def test_differences() -> None:
    assert RELEASE.show_change_number and not WELCOME.show_change_number
    assert RELEASE.require_each_request_number and not WELCOME.require_each_request_number
    assert WELCOME.project_path_label == "File path"
