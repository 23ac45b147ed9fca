"""
Value objects for the domain layer.

Value objects are immutable objects that represent concepts
with no conceptual identity, only defined by their attributes.
"""

from .commission_rate import calculate_commission, to_commission_rate
from .money import Money
from .order_status import CommissionStatus, ParentOrderStatus, StoreOrderStatus, TransitionStatus

__all__ = [
    "Money",
    "calculate_commission",
    "to_commission_rate",
    "TransitionStatus",
    "ParentOrderStatus",
    "StoreOrderStatus",
    "CommissionStatus",
]
