"""Django ORM implementation of the generic repository.

Satisfies ``IRepository[T]`` using Django's async QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
(or ``False``) for malformed identifiers instead of raising; the Service
Layer decides how to translate a missing entity into an error.

Writes are handed to the ``DjangoUnitOfWork`` the repository was built
with. Nothing touches the database until that unit of work commits.
"""

from __future__ import annotations

from typing import Optional, Type

import structlog
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from modules.core.repositories.interfaces import IRepository, T
from modules.core.unit_of_work import DjangoUnitOfWork

logger = structlog.get_logger(__name__)


class DjangoRepository(IRepository[T]):
    """Concrete generic repository backed by Django ORM.

    Subclasses set ``model`` to the managed model class.
    """

    model: Type[T]

    def __init__(self, unit_of_work: DjangoUnitOfWork) -> None:
        self._uow = unit_of_work

    async def exists(self, predicate: Q) -> bool:
        try:
            return await self.model.objects.filter(predicate).aexists()
        except (ValueError, ValidationError):
            return False

    async def get(self, predicate: Q) -> Optional[T]:
        try:
            return await self.model.objects.filter(predicate).afirst()
        except (ValueError, ValidationError):
            return None

    def get_all(self) -> "models.QuerySet[T]":
        return self.model.objects.all()

    async def add(self, entity: T) -> None:
        self._uow.register_new(entity)
        logger.debug(
            "repository.add_staged",
            model=self.model.__name__,
            entity_id=str(entity.pk),
        )

    async def update(self, entity: T) -> None:
        self._uow.register_dirty(entity)
        logger.debug(
            "repository.update_staged",
            model=self.model.__name__,
            entity_id=str(entity.pk),
        )
