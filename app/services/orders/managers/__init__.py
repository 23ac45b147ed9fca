"""Manager services for business operations."""

from .order_decomposer import OrderDecomposer
from .order_number_allocator import OrderNumberAllocator

__all__ = ["OrderDecomposer", "OrderNumberAllocator"]
