"""
Validator services for validating business rules and data integrity.
"""

from .cart_grouper import CartGrouper

__all__ = ["CartGrouper"]
