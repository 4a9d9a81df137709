"""Tests for the commit steps and compensation."""

from __future__ import annotations

from typing import Any

from kungfu import Ok, Error

from checkoutkit.checkout import CommitStep, RecordedCompensator, run_compensators, run_step
from checkoutkit.lift import from_result

from tests.helpers import error_of, run, value_of


class TestRunStep:
    def test_records_compensator_on_success(self) -> None:
        compensators: list[RecordedCompensator[Any]] = []

        async def undo(value: str) -> None:
            return None

        result = run(run_step(CommitStep(from_result(Ok("txn-1")), compensate=undo), compensators))

        assert value_of(result) == "txn-1"
        assert compensators == [("txn-1", undo)]

    def test_nothing_recorded_on_failure(self) -> None:
        compensators: list[RecordedCompensator[Any]] = []

        async def undo(value: str) -> None:
            return None

        result = run(run_step(CommitStep(from_result(Error("declined")), compensate=undo), compensators))

        assert error_of(result) == "declined"
        assert compensators == []

    def test_step_without_compensator(self) -> None:
        compensators: list[RecordedCompensator[Any]] = []

        result = run(run_step(CommitStep(from_result(Ok(1))), compensators))

        assert isinstance(result, Ok)
        assert compensators == []


class TestRunCompensators:
    def test_reverse_order_and_cleared(self) -> None:
        calls: list[str] = []

        async def undo(value: str) -> None:
            calls.append(value)

        compensators: list[RecordedCompensator[Any]] = [("first", undo), ("second", undo)]

        assert run(run_compensators(compensators)) == (2, 0)
        assert calls == ["second", "first"]
        assert compensators == []

    def test_failure_does_not_stop_the_rest(self) -> None:
        calls: list[str] = []

        async def undo(value: str) -> None:
            calls.append(value)

        async def broken(value: str) -> None:
            raise RuntimeError("refund endpoint down")

        compensators: list[RecordedCompensator[Any]] = [("a", undo), ("b", broken), ("c", undo)]

        assert run(run_compensators(compensators)) == (2, 1)
        assert calls == ["c", "a"]

    def test_empty(self) -> None:
        assert run(run_compensators([])) == (0, 0)


def test_failed_step_result_is_an_error() -> None:
    result = run(run_step(CommitStep(from_result(Error(ValueError("x")))), []))
    assert isinstance(result, Error)
