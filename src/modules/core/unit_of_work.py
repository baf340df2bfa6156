"""Unit of Work: the transaction boundary of the service layer.

Repositories never write to the database themselves; they register
entities here.  ``commit()`` saves everything that was staged inside a
single ``transaction.atomic()`` block, so either every staged change is
durable or none of it is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

import structlog
from asgiref.sync import sync_to_async
from django.db import DEFAULT_DB_ALIAS, models, transaction

logger = structlog.get_logger(__name__)


class IUnitOfWork(ABC):
    """Transaction boundary contract."""

    @abstractmethod
    async def commit(self) -> None:
        """Durably apply all staged changes atomically."""


class DjangoUnitOfWork(IUnitOfWork):
    """Unit of work backed by Django's ``transaction.atomic``.

    Staged entries keep their registration order; new entities are saved
    with ``force_insert`` so a clashing primary key fails loudly instead
    of silently turning into an UPDATE.  A commit takes ownership of the
    staged list up front: whether it succeeds or fails, that work is gone
    from the unit.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using
        self._staged: List[Tuple[models.Model, bool]] = []

    # ------------------------------------------------------------------
    # Staging
    # ------------------------------------------------------------------

    def register_new(self, entity: models.Model) -> None:
        self._staged.append((entity, True))

    def register_dirty(self, entity: models.Model) -> None:
        self._staged.append((entity, False))

    @property
    def pending(self) -> int:
        """Number of staged, not yet committed, writes."""
        return len(self._staged)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        if not self._staged:
            return

        staged, self._staged = self._staged, []
        await sync_to_async(self._flush)(staged)

        logger.info("unit_of_work.committed", entity_count=len(staged))

    def _flush(self, staged: List[Tuple[models.Model, bool]]) -> None:
        with transaction.atomic(using=self._using):
            for entity, is_new in staged:
                entity.save(using=self._using, force_insert=is_new)
