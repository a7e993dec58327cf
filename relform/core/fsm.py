"""Minimal step-driven state machine runner.

A run is an immutable state object whose current step is read with
``get_step``. Each step handler either advances to a new state or
finishes; ``save_state`` sees every intermediate state and may veto it.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from relform.core.result import Err, Ok, Result


@dataclass(frozen=True, slots=True)
class StepAdvance[S]:
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish:
    pass


type StepOutcome[S] = StepAdvance[S] | StepFinish
type StepHandler[S, E] = Callable[[S], Result[StepOutcome[S], E]]
type SaveState[S, E] = Callable[[S], Result[S, E]]


FINISH = StepFinish()


def advance[S](state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def run_state_machine[S, E](
    *,
    initial_state: S,
    get_step: Callable[[S], str],
    handlers: Mapping[str, StepHandler[S, E]],
    save_state: SaveState[S, E],
    unknown_step: Callable[[str], E],
) -> Result[S, E]:
    """Drive ``initial_state`` through ``handlers`` until one finishes.

    Returns the last saved state on success.
    """
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(unknown_step(step))

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(current)

        saved = save_state(outcome.value.state)
        if isinstance(saved, Err):
            return saved
        current = saved.value
