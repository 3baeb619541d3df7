"""Mini README: Order and payment validation for pizza deliveries.

The `validation` module holds the order data types and the rule chain that
decides whether an order may be dispatched.
"""

from .validation import (
    CreditCardInformation,
    Order,
    OrderStatus,
    OrderValidationCode,
    OrderValidationResult,
    OrderValidator,
    Pizza,
    Restaurant,
    is_valid_expiry,
)

__all__ = [
    "CreditCardInformation",
    "Order",
    "OrderStatus",
    "OrderValidationCode",
    "OrderValidationResult",
    "OrderValidator",
    "Pizza",
    "Restaurant",
    "is_valid_expiry",
]
