"""
Catalog snapshots consumed by order creation.

Products and sellers are owned by the catalog; order creation only reads
them. These snapshots capture the values that order creation depends on.
"""

from dataclasses import dataclass
from decimal import Decimal

from app.domain.value_objects.commission_rate import to_commission_rate

SELLABLE_STORE_STATUS = "approved"


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Read-only view of a catalog product at checkout time.

    Attributes:
        id: Product ID
        store_id: Owning seller, or None if the product is unassigned
        price_cents: Unit price in minor currency units
        name: Product name (used in error messages)
    """

    id: int
    store_id: int | None
    price_cents: int
    name: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.price_cents, bool) or not isinstance(self.price_cents, int):
            raise TypeError(f"Product price must be integer cents, got {type(self.price_cents).__name__}")
        if self.price_cents < 0:
            raise ValueError(f"Product price cannot be negative: {self.price_cents}")

    @property
    def is_assigned(self) -> bool:
        return self.store_id is not None


@dataclass(frozen=True)
class Seller:
    """
    Read-only view of a marketplace seller (store).

    Attributes:
        id: Store ID
        name: Store display name
        commission_rate: Marketplace commission percentage
        status: Approval status in the catalog; only "approved" stores sell
    """

    id: int
    name: str
    commission_rate: Decimal
    status: str = SELLABLE_STORE_STATUS

    def __post_init__(self) -> None:
        object.__setattr__(self, "commission_rate", to_commission_rate(self.commission_rate))

    @property
    def sellable(self) -> bool:
        """Whether the store is allowed to receive orders."""
        return self.status == SELLABLE_STORE_STATUS
