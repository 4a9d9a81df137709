"""
Network — mock network simulation (latency and injected faults).

    from checkoutkit import network as N

    sim = N.NetworkSimulator(NetworkProfile.unreliable())
"""

from checkoutkit.network._simulator import (
    FaultKind,
    NetworkFault,
    Outcome,
    Scenario,
    SERVER_ERROR_CODES,
    NetworkSimulator,
)

__all__ = (
    "FaultKind",
    "NetworkFault",
    "Outcome",
    "Scenario",
    "SERVER_ERROR_CODES",
    "NetworkSimulator",
)
