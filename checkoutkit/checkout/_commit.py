"""
Commit sequence with compensation.

Each completed step may record an undo action; when a later step fails the
recorded actions run in reverse order.

    compensators: list[RecordedCompensator[Any]] = []

    paid = await run_step(CommitStep(charge, compensate=void), compensators)
    ...
    submitted = await run_step(CommitStep(submit), compensators)
    if isinstance(submitted, Error):
        await run_compensators(compensators)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutkit._types import Compensator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommitStep[T, E]:
    action: LazyCoroResult[T, E]
    compensate: Compensator[T] | None = None


type RecordedCompensator[T] = tuple[T, Compensator[T]]


async def run_step[T, E](
    step: CommitStep[T, E],
    compensators: list[RecordedCompensator[Any]],
) -> Result[T, E]:
    """Execute a step, recording its compensator on success."""
    result = await step.action
    match result:
        case Ok(value):
            if step.compensate is not None:
                compensators.append((value, step.compensate))
            return Ok(value)
        case Error(e):
            return Error(e)


async def run_compensators(compensators: list[RecordedCompensator[Any]]) -> tuple[int, int]:
    """Run compensators in reverse. Returns (run, failed)."""
    comp_run = 0
    comp_failed = 0

    for value, comp in reversed(compensators):
        try:
            await comp(value)
            comp_run += 1
        except Exception as exc:
            comp_failed += 1
            logger.error("compensator_failed", compensator=getattr(comp, "__name__", repr(comp)), error=str(exc))

    compensators.clear()
    return comp_run, comp_failed


__all__ = ("CommitStep", "RecordedCompensator", "run_step", "run_compensators")
