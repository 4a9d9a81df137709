"""
Change notifications for UI layers.

Listeners are called synchronously, after the change has been applied.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from checkoutkit.checkout._step import CheckoutStep
from checkoutkit.models import OrderDraft


class FlowListener(Protocol):
    def step_changed(self, old: CheckoutStep, new: CheckoutStep) -> None: ...

    def draft_changed(self, draft: OrderDraft) -> None: ...


type Unsubscribe = Callable[[], None]


__all__ = ("FlowListener", "Unsubscribe")
