"""
Mock network — injects latency and faults in front of local computations
to emulate real-world conditions.

    sim = NetworkSimulator(NetworkProfile.unreliable(), rng=random.Random(7))
    result = await sim.run(computation, endpoint="shipping/quote")

``run`` returns ``Ok(value)``, the computation's own ``Error``, or
``Error(NetworkFault)`` when a fault was injected.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

import structlog
from kungfu import Result, Ok, Error, LazyCoroResult

from checkoutkit.config import NetworkProfile

logger = structlog.get_logger(__name__)

type Sleep = Callable[[float], Awaitable[None]]


class FaultKind(str, Enum):
    NO_CONNECTION = "no_connection"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    INVALID_DATA = "invalid_data"


@dataclass(frozen=True, slots=True)
class NetworkFault:
    kind: FaultKind
    status_code: int | None = None

    @property
    def message(self) -> str:
        match self.kind:
            case FaultKind.NO_CONNECTION:
                return "No internet connection"
            case FaultKind.TIMEOUT:
                return "Request timed out"
            case FaultKind.SERVER_ERROR:
                return f"Server error ({self.status_code})"
            case FaultKind.INVALID_DATA:
                return "Invalid response data"


class Outcome(str, Enum):
    SUCCESS = "success"
    SLOW = "slow"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class Scenario:
    outcome: Outcome
    fault: NetworkFault | None = None


SERVER_ERROR_CODES = (500, 502, 503, 504)


class NetworkSimulator:
    """Decides a scenario per request from the profile rates, then delays."""

    def __init__(
        self,
        profile: NetworkProfile | None = None,
        *,
        rng: random.Random | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.profile = profile or NetworkProfile.default()
        self._rng = rng or random.Random()
        self._sleep = sleep

    def scenario(self) -> Scenario:
        p = self.profile
        if not p.online:
            return Scenario(Outcome.FAILURE, NetworkFault(FaultKind.NO_CONNECTION))

        draw = self._rng.random()
        edge = p.timeout_rate
        if draw < edge:
            return Scenario(Outcome.FAILURE, NetworkFault(FaultKind.TIMEOUT))
        edge += p.server_error_rate
        if draw < edge:
            code = self._rng.choice(SERVER_ERROR_CODES)
            return Scenario(Outcome.FAILURE, NetworkFault(FaultKind.SERVER_ERROR, code))
        edge += p.failure_rate
        if draw < edge:
            return Scenario(Outcome.FAILURE, NetworkFault(FaultKind.INVALID_DATA))
        edge += p.slow_rate
        if draw < edge:
            return Scenario(Outcome.SLOW)
        return Scenario(Outcome.SUCCESS)

    def delay_for(self, outcome: Outcome) -> float:
        p = self.profile
        match outcome:
            case Outcome.SUCCESS:
                return p.base_delay + self._rng.uniform(0, p.base_jitter)
            case Outcome.SLOW:
                return p.slow_delay + self._rng.uniform(0, p.slow_jitter)
            case Outcome.FAILURE:
                return p.base_delay * 0.3

    async def run[T, E](
        self,
        computation: LazyCoroResult[T, E],
        *,
        endpoint: str,
        scenario: Scenario | None = None,
    ) -> Result[T, E | NetworkFault]:
        chosen = scenario or self.scenario()
        await self._sleep(self.delay_for(chosen.outcome))

        if chosen.fault is not None:
            logger.warning(
                "network_fault_injected",
                endpoint=endpoint,
                fault=chosen.fault.kind.value,
                status_code=chosen.fault.status_code,
            )
            return Error(chosen.fault)

        if chosen.outcome is Outcome.SLOW:
            await self._sleep(self.delay_for(Outcome.SUCCESS))

        result = await computation
        match result:
            case Ok(value):
                return Ok(value)
            case Error(e):
                return Error(e)

    def __call__[T, E](
        self,
        computation: LazyCoroResult[T, E],
        *,
        endpoint: str,
    ) -> LazyCoroResult[T, E | NetworkFault]:
        async def inner() -> Result[T, E | NetworkFault]:
            return await self.run(computation, endpoint=endpoint)
        return LazyCoroResult(inner)


__all__ = (
    "FaultKind",
    "NetworkFault",
    "Outcome",
    "Scenario",
    "SERVER_ERROR_CODES",
    "NetworkSimulator",
)
