"""Starter template containing every placeholder the mapper produces.

Deployments without the official form can generate one of these, restyle
it in Word, and point ``[template] path`` at the result.
"""

from __future__ import annotations

import io
from pathlib import Path

from docx import Document

from relform.core.result import Err, Ok, Result
from relform.document.errors import ExportError
from relform.document.mapper import DELIVERABLE_KEYS, SINGLE_SELECT_KEYS, VERSION_TYPE_KEYS
from relform.form.model import SINGLE_SELECT_CHOICES
from relform.platform.files import atomic_write_bytes

__all__ = ["build_starter_template", "starter_template_bytes"]

_DELIVERABLE_LABELS = {
    "requirement_spec": "需求規格書",
    "feasibility_report": "可行性評估報告",
    "source_code_report": "原始碼檢測報告",
    "security_check_form": "資安檢核表",
    "system_change_notice": "系統變更通知",
    "program_function": "程式功能說明",
    "version_notice": "換版通知",
    "integration_test": "整合測試報告",
    "user_test": "使用者測試報告",
    "code_comparison": "程式比對報告",
    "version_logs": "版本紀錄",
    "mandatory_test_list": "必測項目清單",
    "source_inspection": "原始碼檢視",
}

_VERSION_TYPE_LABELS = {
    "normal_version": "一般換版",
    "new_system": "新系統上線",
    "major_change": "重大變更",
    "database_change": "資料庫變更",
}

_SINGLE_SELECT_LABELS = {
    "risk_level": "風險等級",
    "type": "開發類型",
    "version_type": "換版類型",
}

_TEXT_ROWS = (
    ("變更單號", "changeNumber"),
    ("系統名稱", "systemName"),
    ("預計換版時間", "{{ year }}/{{ month }}/{{ day }} {{ hour }}:{{ minute }}"),
    ("主系統代碼", "primarySystemCode"),
    ("次系統代碼", "secondarySystemCode"),
    ("變更主旨", "changeSubject"),
    ("需求單號", "requestNumbers"),
    ("其他", "others"),
    ("文件路徑", "filePath"),
    ("影響系統", "affectedSystems"),
    ("影響範圍", "impactAreas"),
    ("申請人員編", "employeeId"),
    ("分機", "extension"),
)


def _placeholder(key: str) -> str:
    return key if key.startswith("{{") else f"{{{{ {key} }}}}"


def starter_template_bytes(title: str) -> bytes:
    doc = Document()
    doc.add_heading(title, level=1)

    table = doc.add_table(rows=0, cols=2)
    for field, options in SINGLE_SELECT_KEYS.items():
        labels = {c.value: c.label for c in SINGLE_SELECT_CHOICES[field]}
        row = table.add_row().cells
        row[0].text = _SINGLE_SELECT_LABELS[field]
        row[1].text = "  ".join(f"{_placeholder(key)} {labels[v]}" for v, key in options.items())

    row = table.add_row().cells
    row[0].text = "版本類別"
    row[1].text = "  ".join(
        f"{_placeholder(key)} {_VERSION_TYPE_LABELS[name]}" for name, key in VERSION_TYPE_KEYS.items()
    )

    for label, key in _TEXT_ROWS:
        row = table.add_row().cells
        row[0].text = label
        row[1].text = _placeholder(key)

    doc.add_heading("交付文件", level=2)
    for name, key in DELIVERABLE_KEYS.items():
        doc.add_paragraph(f"{_placeholder(key)} {_DELIVERABLE_LABELS[name]}")

    out = io.BytesIO()
    doc.save(out)
    return out.getvalue()


def build_starter_template(path: Path, *, title: str) -> Result[Path, ExportError]:
    try:
        atomic_write_bytes(path, starter_template_bytes(title))
    except OSError as e:
        return Err(ExportError(path=path, message=f"cannot write template: {e}"))
    return Ok(path)
