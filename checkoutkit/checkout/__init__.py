"""
Checkout — the step-by-step flow from cart review to a placed order.

    from checkoutkit import checkout as CO

    flow = CO.CheckoutFlow(products=catalog, quotes=quotes, payments=processors, orders=sink)
    await flow.initialize(snapshot)

    while flow.current_step is not CO.CheckoutStep.CONFIRMATION:
        ...                       # collect selections for the current step
        await flow.advance()

    result = await flow.commit_order()
"""

from checkoutkit.checkout._step import CheckoutStep
from checkoutkit.checkout._listener import FlowListener, Unsubscribe
from checkoutkit.checkout._commit import (
    CommitStep,
    RecordedCompensator,
    run_step,
    run_compensators,
)
from checkoutkit.checkout._flow import CheckoutFlow, PaymentReceipt, AdvanceError

__all__ = (
    "CheckoutStep",
    "FlowListener",
    "Unsubscribe",
    "CommitStep",
    "RecordedCompensator",
    "run_step",
    "run_compensators",
    "CheckoutFlow",
    "PaymentReceipt",
    "AdvanceError",
)
