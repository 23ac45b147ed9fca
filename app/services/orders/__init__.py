"""
Order services package for multi-vendor order decomposition.

This package contains the write side (grouping, numbering, decomposition)
and the read side (queries, reporting, commission ledger).
"""

from app.services.orders.factories import OrderServices, create_order_services

__all__ = ["OrderServices", "create_order_services"]
