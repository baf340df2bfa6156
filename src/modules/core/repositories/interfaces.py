"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Look-ups are predicate based: callers pass a ``Q`` expression tree
instead of calling one named query method per use case.  Writes are
*staged*, and nothing is durable until the unit of work commits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from django.db import models
from django.db.models import Q

T = TypeVar("T", bound=models.Model)


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``, ``ProductCategory``).
    """

    @abstractmethod
    async def exists(self, predicate: Q) -> bool:
        """Return ``True`` if at least one entity matches ``predicate``."""

    @abstractmethod
    async def get(self, predicate: Q) -> Optional[T]:
        """Return the first entity matching ``predicate`` or ``None``."""

    @abstractmethod
    def get_all(self) -> "models.QuerySet[T]":
        """Return a lazy, unfiltered queryable source of entities."""

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Stage a new entity for insertion."""

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Stage an existing entity for update."""
