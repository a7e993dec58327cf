"""Generation workflow: validate → map → fetch → render → export.

Only one generation runs at a time. Any failure ends the run, returns the
workflow to ``idle`` and leaves the form untouched so the user can retry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Literal

from relform.core.config import Config
from relform.core.fsm import FINISH, StepOutcome, advance, run_state_machine
from relform.core.result import Err, Ok, Result
from relform.document.errors import (
    ExportError,
    GenerationError,
    RenderError,
    ValidationFailed,
    WorkflowBusy,
)
from relform.document.exporter import Exporter
from relform.document.mapper import (
    DocumentFields,
    MappingContext,
    document_filename,
    map_document_fields,
)
from relform.document.renderer import Renderer
from relform.document.template import TemplateSource
from relform.form.model import FormState
from relform.form.release_form import ReleaseForm

__all__ = ["GenerationOutcome", "GenerationRun", "GenerationWorkflow", "Phase"]

logger = logging.getLogger(__name__)

Phase = Literal["idle", "validating", "mapping", "rendering", "exporting"]
Step = Literal["validate", "map", "fetch", "render", "export", "done"]

_PHASE_OF_STEP: dict[Step, Phase] = {
    "validate": "validating",
    "map": "mapping",
    "fetch": "rendering",
    "render": "rendering",
    "export": "exporting",
    "done": "idle",
}


@dataclass(frozen=True, slots=True)
class GenerationRun:
    step: Step
    state: FormState | None = None
    fields: DocumentFields | None = None
    filename: str | None = None
    template: bytes | None = None
    document: bytes | None = None
    output: Path | None = None


@dataclass(frozen=True, slots=True)
class GenerationOutcome:
    path: Path
    filename: str
    fields: DocumentFields


class GenerationWorkflow:
    def __init__(
        self,
        *,
        config: Config,
        template_source: TemplateSource,
        renderer: Renderer,
        exporter: Exporter,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._template_source = template_source
        self._renderer = renderer
        self._exporter = exporter
        self._clock = clock
        self._phase: Phase = "idle"
        self._history: list[Phase] = []

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def busy(self) -> bool:
        """True while a generation is in flight; callers disable re-submit."""
        return self._phase != "idle"

    @property
    def history(self) -> tuple[Phase, ...]:
        """Phases visited by the most recent run."""
        return tuple(self._history)

    def generate(self, form: ReleaseForm) -> Result[GenerationOutcome, GenerationError]:
        if self.busy:
            return Err(WorkflowBusy())

        self._history = []
        self._enter("validating")
        handlers = {
            "validate": lambda run: self._validate(run, form),
            "map": self._map,
            "fetch": self._fetch,
            "render": self._render,
            "export": self._export,
            "done": lambda run: Ok(FINISH),
        }
        try:
            result = run_state_machine(
                initial_state=GenerationRun(step="validate"),
                get_step=lambda run: run.step,
                handlers=handlers,
                save_state=self._save,
                unknown_step=lambda step: RenderError(message=f"unknown generation step: {step}"),
            )
        except Exception as e:  # noqa: BLE001
            logger.exception("document generation crashed during %s", self._phase)
            result = Err(self._unexpected(e))
        finally:
            self._enter("idle")

        if isinstance(result, Err):
            return result

        run = result.value
        assert run.output is not None and run.filename is not None and run.fields is not None
        return Ok(GenerationOutcome(path=run.output, filename=run.filename, fields=run.fields))

    # Transitions

    def _enter(self, phase: Phase) -> None:
        if phase != self._phase:
            logger.debug("generation phase %s -> %s", self._phase, phase)
        self._phase = phase
        self._history.append(phase)

    def _save(self, run: GenerationRun) -> Result[GenerationRun, GenerationError]:
        phase = _PHASE_OF_STEP[run.step]
        if phase != self._phase and phase != "idle":
            self._enter(phase)
        return Ok(run)

    def _unexpected(self, e: Exception) -> GenerationError:
        if self._phase == "exporting":
            return ExportError(path=self._config.output_dir, message=f"unexpected error: {e}")
        return RenderError(message=f"unexpected error during {self._phase}: {e}")

    # Steps

    def _validate(
        self, run: GenerationRun, form: ReleaseForm
    ) -> Result[StepOutcome[GenerationRun], GenerationError]:
        submitted = form.submit()
        if isinstance(submitted, Err):
            logger.info("form invalid: %s", ", ".join(sorted(submitted.error)))
            return Err(ValidationFailed(errors=submitted.error))
        return Ok(advance(replace(run, step="map", state=submitted.value)))

    def _map(self, run: GenerationRun) -> Result[StepOutcome[GenerationRun], GenerationError]:
        assert run.state is not None
        ctx = MappingContext.from_config(self._config, year=self._clock().year)
        fields = map_document_fields(run.state, ctx)
        filename = document_filename(
            self._config.output.title,
            run.state.scheduled_time,
            extension=self._config.output.extension,
        )
        return Ok(advance(replace(run, step="fetch", fields=fields, filename=filename)))

    def _fetch(self, run: GenerationRun) -> Result[StepOutcome[GenerationRun], GenerationError]:
        template = self._template_source.fetch()
        if isinstance(template, Err):
            logger.error("template fetch failed: %s", template.error.message)
            return template
        return Ok(advance(replace(run, step="render", template=template.value)))

    def _render(self, run: GenerationRun) -> Result[StepOutcome[GenerationRun], GenerationError]:
        assert run.template is not None and run.fields is not None
        document = self._renderer.render(run.template, run.fields)
        if isinstance(document, Err):
            logger.error("render failed: %s", document.error.message)
            return document
        return Ok(advance(replace(run, step="export", template=None, document=document.value)))

    def _export(self, run: GenerationRun) -> Result[StepOutcome[GenerationRun], GenerationError]:
        assert run.document is not None and run.filename is not None
        written = self._exporter.export(run.document, run.filename)
        if isinstance(written, Err):
            logger.error("export failed: %s", written.error.message)
            return written
        return Ok(advance(replace(run, step="done", document=None, output=written.value)))
