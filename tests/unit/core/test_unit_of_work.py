"""Unit tests for DjangoUnitOfWork and the generic DjangoRepository.

Covers:
- Repository writes are only staged on the unit of work.
- Commit saves staged entities in order, inserts forced for new ones.
- Commit with nothing staged is a no-op.
- A failing save propagates and discards the staged work.
"""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest

from modules.core.repositories.django_repository import DjangoRepository
from modules.core.unit_of_work import DjangoUnitOfWork
from modules.products.models import Product

pytestmark = pytest.mark.unit


class StubProductRepository(DjangoRepository[Product]):
    model = Product


@pytest.fixture()
def uow():
    return DjangoUnitOfWork()


class TestRepositoryStaging:
    @pytest.mark.asyncio
    async def test_add_registers_new_entity(self):
        uow = MagicMock(spec=DjangoUnitOfWork)
        repo = StubProductRepository(uow)
        entity = MagicMock()

        await repo.add(entity)

        uow.register_new.assert_called_once_with(entity)
        entity.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_registers_dirty_entity(self):
        uow = MagicMock(spec=DjangoUnitOfWork)
        repo = StubProductRepository(uow)
        entity = MagicMock()

        await repo.update(entity)

        uow.register_dirty.assert_called_once_with(entity)
        entity.save.assert_not_called()


class TestCommit:
    @pytest.mark.asyncio
    async def test_saves_staged_entities_in_order(self, uow):
        calls = MagicMock()
        uow.register_new(calls.first)
        uow.register_dirty(calls.second)

        await uow.commit()

        assert calls.mock_calls == [
            call.first.save(using="default", force_insert=True),
            call.second.save(using="default", force_insert=False),
        ]
        assert uow.pending == 0

    @pytest.mark.asyncio
    async def test_commit_without_staged_work_is_noop(self, uow):
        await uow.commit()
        assert uow.pending == 0

    @pytest.mark.asyncio
    async def test_failed_save_propagates_and_discards_staged_work(self, uow):
        entity = MagicMock()
        entity.save.side_effect = RuntimeError("disk full")
        uow.register_new(entity)

        with pytest.raises(RuntimeError, match="disk full"):
            await uow.commit()

        assert uow.pending == 0

    @pytest.mark.asyncio
    async def test_commit_after_failure_saves_only_new_work(self, uow):
        broken = MagicMock()
        broken.save.side_effect = RuntimeError("disk full")
        uow.register_new(broken)
        with pytest.raises(RuntimeError):
            await uow.commit()

        healthy = MagicMock()
        uow.register_dirty(healthy)
        await uow.commit()

        broken.save.assert_called_once()
        healthy.save.assert_called_once_with(using="default", force_insert=False)

    @pytest.mark.asyncio
    async def test_entity_registered_during_flush_waits_for_next_commit(self, uow):
        late = MagicMock()
        early = MagicMock()
        early.save.side_effect = lambda **kwargs: uow.register_dirty(late)
        uow.register_new(early)

        await uow.commit()

        late.save.assert_not_called()
        assert uow.pending == 1

        await uow.commit()

        late.save.assert_called_once_with(using="default", force_insert=False)
        assert uow.pending == 0
