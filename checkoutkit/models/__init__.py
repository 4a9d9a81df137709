"""
Models — cart, address, shipping, payment and order data.

    from checkoutkit import models as M

    cart = M.CartSnapshot.of(M.CartLine("LAPTOP", 1, 1999.00))
"""

from checkoutkit.models._cart import Dimensions, ProductInfo, CartLine, CartSnapshot
from checkoutkit.models._address import AddressRole, AddressIssue, Address, validate_address
from checkoutkit.models._shipping import ShippingOption, ShippingQuote
from checkoutkit.models._payment import PaymentType, PaymentMethod
from checkoutkit.models._order import OrderStatus, OrderItem, OrderDraft, Order

__all__ = (
    "Dimensions",
    "ProductInfo",
    "CartLine",
    "CartSnapshot",
    "AddressRole",
    "AddressIssue",
    "Address",
    "validate_address",
    "ShippingOption",
    "ShippingQuote",
    "PaymentType",
    "PaymentMethod",
    "OrderStatus",
    "OrderItem",
    "OrderDraft",
    "Order",
)
