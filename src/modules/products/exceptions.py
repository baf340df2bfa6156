"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The controller layer catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist or has been soft-deleted."""


class ProductCategoryNotFound(Exception):
    """The referenced category does not exist or has been soft-deleted."""
