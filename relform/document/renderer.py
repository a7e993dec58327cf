"""Fill the Word template with docxtpl."""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import Protocol

from docxtpl import DocxTemplate, Listing

from relform.core.result import Err, Ok, Result
from relform.document.errors import RenderError

__all__ = ["DocxTemplateRenderer", "Renderer"]

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, template: bytes, fields: Mapping[str, str]) -> Result[bytes, RenderError]: ...


class DocxTemplateRenderer:
    """Renders ``{{ key }}`` placeholders of a .docx template.

    Values are XML-escaped; multi-line values keep their line breaks.
    """

    def render(self, template: bytes, fields: Mapping[str, str]) -> Result[bytes, RenderError]:
        context = {key: Listing(value) if "\n" in value else value for key, value in fields.items()}
        try:
            doc = DocxTemplate(io.BytesIO(template))
            doc.render(context, autoescape=True)
            out = io.BytesIO()
            doc.save(out)
        except Exception as e:  # noqa: BLE001
            logger.exception("template rendering failed")
            return Err(RenderError(message=f"template rendering failed: {e}"))
        return Ok(out.getvalue())
