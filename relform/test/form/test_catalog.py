from __future__ import annotations

import pytest

from relform.form.catalog import DEFAULT_CATALOG, DEPARTMENTS, DepartmentCatalog


def test_four_departments_in_order() -> None:
    assert DEFAULT_CATALOG.department_names() == ("經紀系統部", "支援系統部", "資訊營管部", "法人系統部")
    assert len(DEFAULT_CATALOG) == 4


def test_divisions() -> None:
    assert DEFAULT_CATALOG.divisions_for("經紀系統部") == ("核心系統科", "跨境業務科", "電子交易科")
    assert DEFAULT_CATALOG.divisions_for("資訊營管部") == ("系統管理科", "資訊管理科")


def test_unknown_department_has_no_divisions() -> None:
    assert DEFAULT_CATALOG.divisions_for("不存在部") == ()
    assert DEFAULT_CATALOG.divisions_for("") == ()
    assert "不存在部" not in DEFAULT_CATALOG


def test_has_division() -> None:
    assert DEFAULT_CATALOG.has_division("法人系統部", "系統開發科")
    assert not DEFAULT_CATALOG.has_division("法人系統部", "核心系統科")


def test_custom_catalog_is_copied() -> None:
    source = {"A部": ["甲科"]}
    catalog = DepartmentCatalog(source)  # type: ignore[arg-type]
    source["A部"].append("乙科")
    assert catalog.divisions_for("A部") == ("甲科",)


def test_catalog_mapping_is_read_only() -> None:
    with pytest.raises(TypeError):
        DEPARTMENTS["新部"] = ()  # type: ignore[index]
