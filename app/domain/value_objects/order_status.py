"""
Closed status types for parent orders, store orders and commissions.

Each status enum owns an explicit transition table. Terminal states have no
outgoing transitions, and moving to the current state is not a transition.
"""

from enum import Enum
from typing import Dict, FrozenSet

from app.utils.error_handler import InvalidStatusTransitionException, ValidationException


class TransitionStatus(str, Enum):
    """Base for status enums backed by a transition table."""

    @classmethod
    def parse(cls, value: "str | TransitionStatus") -> "TransitionStatus":
        """
        Convert a raw status string into a member of this enum.

        Raises:
            ValidationException: If the value is not a known status
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ValidationException(
                message=f"Unknown {cls.__name__} value: {value!r}",
                field="status",
                invalid_value=value,
                expected_format=", ".join(member.value for member in cls),
            ) from e

    @property
    def allowed_transitions(self) -> FrozenSet["TransitionStatus"]:
        return _TRANSITIONS[type(self)][self]

    @property
    def is_terminal(self) -> bool:
        return not self.allowed_transitions

    def can_transition_to(self, target: "TransitionStatus") -> bool:
        return target in self.allowed_transitions

    def ensure_transition(self, target: "TransitionStatus", entity: str, entity_id: int | None = None) -> None:
        """Raise InvalidStatusTransitionException unless ``self -> target`` is allowed."""
        if not self.can_transition_to(target):
            raise InvalidStatusTransitionException(
                entity=entity,
                entity_id=entity_id,
                current_status=self.value,
                requested_status=target.value,
            )


class ParentOrderStatus(TransitionStatus):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class StoreOrderStatus(TransitionStatus):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CommissionStatus(TransitionStatus):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


_TRANSITIONS: Dict[type, Dict[TransitionStatus, FrozenSet[TransitionStatus]]] = {
    ParentOrderStatus: {
        ParentOrderStatus.PENDING: frozenset(
            {ParentOrderStatus.PROCESSING, ParentOrderStatus.COMPLETED, ParentOrderStatus.CANCELLED}
        ),
        ParentOrderStatus.PROCESSING: frozenset({ParentOrderStatus.COMPLETED, ParentOrderStatus.CANCELLED}),
        ParentOrderStatus.COMPLETED: frozenset(),
        ParentOrderStatus.CANCELLED: frozenset(),
    },
    StoreOrderStatus: {
        StoreOrderStatus.PENDING: frozenset({StoreOrderStatus.PROCESSING, StoreOrderStatus.CANCELLED}),
        StoreOrderStatus.PROCESSING: frozenset({StoreOrderStatus.SHIPPED, StoreOrderStatus.CANCELLED}),
        StoreOrderStatus.SHIPPED: frozenset({StoreOrderStatus.DELIVERED}),
        StoreOrderStatus.DELIVERED: frozenset(),
        StoreOrderStatus.CANCELLED: frozenset(),
    },
    CommissionStatus: {
        CommissionStatus.PENDING: frozenset({CommissionStatus.PAID, CommissionStatus.CANCELLED}),
        CommissionStatus.PAID: frozenset(),
        CommissionStatus.CANCELLED: frozenset(),
    },
}
