from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

from .state_store import mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single forward-only installer step."""

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def run_pipeline(*, state: Dict[str, Any], steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first exception stops the run.

    ``execution.current_step`` is left pointing at the failing step so the run
    record shows where the target disks were left.
    """

    ran: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        state = step.run(state)
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
