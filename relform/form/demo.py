"""Sample data for trying the generator without typing a whole form."""

from __future__ import annotations

from datetime import date, datetime

from relform.form.model import (
    Applicant,
    DeliverableFlags,
    FormState,
    ScheduledTime,
    VersionTypeFlags,
)

__all__ = ["demo_state"]


def demo_state() -> FormState:
    return FormState(
        risk_level="low",
        type="self",
        version_type="regular",
        change_number="",
        system_name="換版文件線上平台",
        scheduled_time=ScheduledTime(
            date=date(2025, 1, 20),
            time=datetime(2025, 1, 20, 14, 30),
        ),
        primary_system_code="TEST",
        secondary_system_code="00",
        change_subject="優化換版流程",
        version_types=VersionTypeFlags(normal_version=True),
        request_numbers=("TEST202402001", "TEST202402002"),
        deliverables=DeliverableFlags(
            system_change_notice=True,
            program_function=True,
            version_notice=True,
            integration_test=True,
            user_test=True,
            code_comparison=True,
            mandatory_test_list=True,
            source_inspection=True,
        ),
        others="系統效能報告、資料庫最佳化評估報告",
        department="經紀系統部",
        division="跨境業務科",
        project_path="TEST\\20250120",
        affected_systems="無影響",
        impact_areas="效能相關",
        applicant=Applicant(employee_id="012797", extension="1234"),
    )
