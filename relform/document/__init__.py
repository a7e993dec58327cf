"""Turning a validated form into a filled Word document."""

from .errors import (
    ExportError,
    GenerationError,
    RenderError,
    TemplateFetchError,
    ValidationFailed,
    WorkflowBusy,
)
from .mapper import DocumentFields, MappingContext, map_document_fields
from .workflow import GenerationOutcome, GenerationWorkflow

__all__ = [
    "DocumentFields",
    "ExportError",
    "GenerationError",
    "GenerationOutcome",
    "GenerationWorkflow",
    "MappingContext",
    "RenderError",
    "TemplateFetchError",
    "ValidationFailed",
    "WorkflowBusy",
    "map_document_fields",
]
