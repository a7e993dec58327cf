"""Save the produced document under its generated filename."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from relform.core.result import Err, Ok, Result
from relform.document.errors import ExportError
from relform.platform.files import atomic_write_bytes

__all__ = ["Exporter", "FileExporter"]

logger = logging.getLogger(__name__)


class Exporter(Protocol):
    def export(self, document: bytes, filename: str) -> Result[Path, ExportError]: ...


class FileExporter:
    """Writes documents into ``out_dir``.

    The write is atomic: either the complete document appears under its
    final name or nothing does.
    """

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir

    def export(self, document: bytes, filename: str) -> Result[Path, ExportError]:
        target = self.out_dir / filename
        try:
            atomic_write_bytes(target, document)
        except OSError as e:
            logger.error("writing %s failed: %s", target, e)
            return Err(ExportError(path=target, message=f"cannot write document: {e}"))
        logger.debug("wrote %d bytes to %s", len(document), target)
        return Ok(target)
