"""Tests for the mock network simulator and the quote services behind it."""

from __future__ import annotations

import random

import pytest
from kungfu import Ok, LazyCoroResult
from pydantic import ValidationError

from checkoutkit.config import NetworkProfile
from checkoutkit.errors import NetworkError, ServiceTemporarilyUnavailable, Timeout
from checkoutkit.lift import from_result
from checkoutkit.network import FaultKind, NetworkFault, NetworkSimulator, Outcome, Scenario
from checkoutkit.shipping import (
    LocalQuoteService,
    SimulatedQuoteService,
    fault_to_shipping_error,
)

from tests.helpers import error_of, make_product, make_request, run, value_of


class FakeSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class TestScenario:
    def test_offline_always_no_connection(self) -> None:
        sim = NetworkSimulator(NetworkProfile.offline(), rng=random.Random(1))

        for _ in range(20):
            assert sim.scenario() == Scenario(Outcome.FAILURE, NetworkFault(FaultKind.NO_CONNECTION))

    def test_instant_profile_never_fails(self) -> None:
        sim = NetworkSimulator(NetworkProfile.instant(), rng=random.Random(1))

        assert {sim.scenario().outcome for _ in range(200)} == {Outcome.SUCCESS}

    def test_slices_follow_rates(self) -> None:
        profile = NetworkProfile(timeout_rate=1.0, failure_rate=0.0, server_error_rate=0.0, slow_rate=0.0)
        sim = NetworkSimulator(profile, rng=random.Random(3))

        assert sim.scenario().fault == NetworkFault(FaultKind.TIMEOUT)

    def test_server_errors_carry_status_codes(self) -> None:
        profile = NetworkProfile(server_error_rate=1.0, failure_rate=0.0, timeout_rate=0.0, slow_rate=0.0)
        sim = NetworkSimulator(profile, rng=random.Random(5))

        fault = sim.scenario().fault
        assert fault is not None
        assert fault.kind is FaultKind.SERVER_ERROR
        assert fault.status_code in (500, 502, 503, 504)
        assert fault.message == f"Server error ({fault.status_code})"

    def test_same_seed_same_scenarios(self) -> None:
        a = NetworkSimulator(NetworkProfile.unreliable(), rng=random.Random(42))
        b = NetworkSimulator(NetworkProfile.unreliable(), rng=random.Random(42))

        assert [a.scenario() for _ in range(50)] == [b.scenario() for _ in range(50)]


class TestRun:
    def test_success_passes_value_through(self) -> None:
        sleep = FakeSleep()
        sim = NetworkSimulator(NetworkProfile.instant(), sleep=sleep)

        result = run(sim.run(from_result(Ok(7)), endpoint="test"))

        assert value_of(result) == 7
        assert sleep.calls == [0.0]

    def test_injected_fault_skips_computation(self) -> None:
        sleep = FakeSleep()
        sim = NetworkSimulator(NetworkProfile.default(), sleep=sleep)
        called: list[bool] = []

        async def _never() -> Ok[int]:
            called.append(True)
            return Ok(1)

        scenario = Scenario(Outcome.FAILURE, NetworkFault(FaultKind.INVALID_DATA))
        result = run(sim.run(LazyCoroResult(_never), endpoint="test", scenario=scenario))

        assert error_of(result) == NetworkFault(FaultKind.INVALID_DATA)
        assert called == []
        assert sleep.calls == [pytest.approx(0.15)]

    def test_slow_responses_wait_longer(self) -> None:
        sleep = FakeSleep()
        profile = NetworkProfile(base_delay=0.5, slow_delay=3.0, base_jitter=0.0, slow_jitter=0.0)
        sim = NetworkSimulator(profile, sleep=sleep)

        run(sim.run(from_result(Ok(1)), endpoint="test", scenario=Scenario(Outcome.SLOW)))

        assert sleep.calls == [3.0, 0.5]


class TestProfiles:
    def test_rates_must_fit_one_draw(self) -> None:
        with pytest.raises(ValidationError):
            NetworkProfile(failure_rate=0.5, timeout_rate=0.5, server_error_rate=0.1, slow_rate=0.0)

    def test_profiles_are_frozen(self) -> None:
        with pytest.raises(ValidationError):
            NetworkProfile.default().online = False  # type: ignore[misc]


class TestQuoteServices:
    @pytest.mark.parametrize(
        ("fault", "expected"),
        [
            (NetworkFault(FaultKind.TIMEOUT), Timeout()),
            (NetworkFault(FaultKind.SERVER_ERROR, 503), ServiceTemporarilyUnavailable()),
            (NetworkFault(FaultKind.NO_CONNECTION), NetworkError("No internet connection")),
            (NetworkFault(FaultKind.INVALID_DATA), NetworkError("Invalid response data")),
        ],
    )
    def test_faults_map_to_transient_errors(self, fault: NetworkFault, expected: object) -> None:
        assert fault_to_shipping_error(fault) == expected

    def test_local_service_returns_engine_result(self) -> None:
        request = make_request((make_product("BOOK"), 1))

        quotes = value_of(run(LocalQuoteService().quote(request)))

        assert quotes

    def test_simulated_service_offline_is_retryable(self) -> None:
        service = SimulatedQuoteService(simulator=NetworkSimulator(NetworkProfile.offline(), sleep=FakeSleep()))

        error = error_of(run(service.quote(make_request((make_product("BOOK"), 1)))))

        assert isinstance(error, NetworkError)
        assert error.retryable

    def test_simulated_service_passes_validation_errors(self) -> None:
        service = SimulatedQuoteService(simulator=NetworkSimulator(NetworkProfile.instant(), sleep=FakeSleep()))
        request = make_request((make_product("ANVIL", weight=90.0), 1))

        error = error_of(run(service.quote(request)))

        assert not error.retryable
        assert error.message == "Cart is too heavy (max 70 lbs)"
