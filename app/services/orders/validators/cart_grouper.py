"""
CartGrouper service: validates a checkout request and partitions it by seller.

This service follows SRP by only validating and grouping; it never writes.
"""

import logging

from app.domain.models import GroupedLine, OrderRequest
from app.services.orders.interfaces import ProductLookup
from app.utils.error_handler import (
    ProductNotFoundException,
    ProductUnassignedException,
    ValidationException,
)

logger = logging.getLogger(__name__)

MAX_LINE_QUANTITY = 1_000_000
# Money columns are signed 64-bit integers
MAX_AMOUNT_CENTS = 2**63 - 1


class CartGrouper:
    """
    Groups cart lines by the seller that owns each product.

    Responsibilities:
    - Validate the request shape
    - Resolve every product through the catalog
    - Partition lines by seller, in first-appearance order
    """

    def __init__(self, product_lookup: ProductLookup):
        self.product_lookup = product_lookup

    async def group(self, request: OrderRequest) -> dict[int, list[GroupedLine]]:
        """
        Validate and group a checkout request.

        Args:
            request: Customer checkout request

        Returns:
            dict: store_id -> lines, ordered by first appearance of each store

        Raises:
            ValidationException: If the request is empty, a quantity is out of range
                or the order total does not fit in a money column
            ProductNotFoundException: If a product does not exist
            ProductUnassignedException: If a product has no seller
        """
        self._validate_request(request)

        groups: dict[int, list[GroupedLine]] = {}
        order_total = 0
        for index, line in enumerate(request.items):
            product = await self.product_lookup.find_by_id(line.product_id)
            if product is None:
                raise ProductNotFoundException(product_id=line.product_id)

            if not product.is_assigned:
                raise ProductUnassignedException(product_id=product.id, product_name=product.name or None)

            grouped = GroupedLine(product_id=line.product_id, quantity=line.quantity, product=product)
            order_total += grouped.line_total
            if order_total > MAX_AMOUNT_CENTS:
                raise ValidationException(
                    message=f"Order total exceeds the maximum amount at product {line.product_id}",
                    field=f"items[{index}].quantity",
                    invalid_value=line.quantity,
                    expected_format=f"order total <= {MAX_AMOUNT_CENTS} cents",
                )

            groups.setdefault(product.store_id, []).append(grouped)

        logger.debug(f"Grouped {len(request.items)} lines for customer {request.customer_id} into {len(groups)} stores")
        return groups

    def _validate_request(self, request: OrderRequest) -> None:
        if not request.items:
            raise ValidationException(
                message="Order must contain at least one item",
                field="items",
                invalid_value=request.items,
            )

        for index, line in enumerate(request.items):
            if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity <= 0:
                raise ValidationException(
                    message=f"Quantity must be a positive integer for product {line.product_id}",
                    field=f"items[{index}].quantity",
                    invalid_value=line.quantity,
                    expected_format="integer > 0",
                )

            if line.quantity > MAX_LINE_QUANTITY:
                raise ValidationException(
                    message=f"Quantity cannot exceed {MAX_LINE_QUANTITY} for product {line.product_id}",
                    field=f"items[{index}].quantity",
                    invalid_value=line.quantity,
                    expected_format=f"integer <= {MAX_LINE_QUANTITY}",
                )
