"""
Domain layer for marketplace order decomposition.

This layer contains business entities, value objects, and domain logic
following Domain-Driven Design principles.
"""
