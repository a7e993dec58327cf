"""Human-readable labels for form controls."""

from __future__ import annotations

from relform.form.variants import FormVariant

__all__ = ["FIELD_LABELS", "label_for"]

FIELD_LABELS: dict[str, str] = {
    "risk_level": "Risk level (風險等級)",
    "type": "Development type (開發類型)",
    "version_type": "Version type (換版類型)",
    "change_number": "Change number (變更單號)",
    "system_name": "System name (系統名稱)",
    "scheduled_time": "Scheduled time (預計換版時間)",
    "scheduled_time.date": "Scheduled date (換版日期)",
    "scheduled_time.time": "Scheduled time of day (換版時間)",
    "primary_system_code": "Primary system code (主系統代碼)",
    "secondary_system_code": "Secondary system code (次系統代碼)",
    "change_subject": "Change subject (變更主旨)",
    "version_types": "Version categories (版本類別)",
    "request_numbers": "Request numbers (需求單號)",
    "deliverables": "Deliverables (交付文件)",
    "others": "Others (其他)",
    "department": "Department (部門)",
    "division": "Division (科別)",
    "project_path": "Project path (專案路徑)",
    "affected_systems": "Affected systems (影響系統)",
    "impact_areas": "Impact areas (影響範圍)",
    "applicant": "Applicant (申請人)",
    "applicant.employee_id": "Employee ID (員編)",
    "applicant.extension": "Extension (分機)",
}


def label_for(path: str, variant: FormVariant | None = None) -> str:
    if path == "project_path" and variant is not None:
        return variant.project_path_label
    head, _, rest = path.partition(".")
    if head == "request_numbers" and rest.isdigit():
        return f"Request number #{int(rest) + 1}"
    return FIELD_LABELS.get(path, path)
