"""Limit/offset normalization shared by the read services."""

from typing import Optional

from app.utils.error_handler import ValidationException


def resolve_page(
    limit: Optional[int],
    offset: int,
    default_page_size: int,
    max_page_size: int,
) -> tuple[int, int]:
    """
    Apply the default page size and cap ``limit``.

    Raises:
        ValidationException: If limit is below 1 or offset is negative
    """
    if limit is None:
        limit = default_page_size

    if limit < 1:
        raise ValidationException(
            message=f"Limit must be at least 1, got {limit}",
            field="limit",
            invalid_value=limit,
            expected_format="integer >= 1",
        )

    if offset < 0:
        raise ValidationException(
            message=f"Offset cannot be negative, got {offset}",
            field="offset",
            invalid_value=offset,
            expected_format="integer >= 0",
        )

    return min(limit, max_page_size), offset
