"""Department → division lookup feeding the dependent division choice."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

__all__ = ["DEPARTMENTS", "DepartmentCatalog", "DEFAULT_CATALOG"]


DEPARTMENTS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "經紀系統部": ("核心系統科", "跨境業務科", "電子交易科"),
        "支援系統部": ("核心支援科", "投資業務科", "業務支援科"),
        "資訊營管部": ("系統管理科", "資訊管理科"),
        "法人系統部": ("交易管理科", "系統開發科"),
    }
)


class DepartmentCatalog:
    """Immutable, ordered department catalog."""

    def __init__(self, departments: Mapping[str, tuple[str, ...]] = DEPARTMENTS) -> None:
        self._departments = MappingProxyType({k: tuple(v) for k, v in departments.items()})

    def department_names(self) -> tuple[str, ...]:
        return tuple(self._departments)

    def divisions_for(self, department: str) -> tuple[str, ...]:
        """Divisions of ``department``; empty for an unknown department."""
        return self._departments.get(department, ())

    def has_division(self, department: str, division: str) -> bool:
        return division in self.divisions_for(department)

    def __contains__(self, department: object) -> bool:
        return department in self._departments

    def __len__(self) -> int:
        return len(self._departments)


DEFAULT_CATALOG = DepartmentCatalog()
