"""Tests for the InMemoryAggregateStore."""

from __future__ import annotations

import pytest

from message_assembly.adapters.memory.aggregate_store import InMemoryAggregateStore
from message_assembly.correlation import CorrelationContext
from message_assembly.domain.aggregate import MessageAggregate
from message_assembly.domain.events import ConstructionStarted, PartAcquired
from message_assembly.domain.fsm import AssemblyState
from message_assembly.ports.aggregate_store import IAggregateStore
from message_assembly.primitives.exceptions import (
    ConcurrencyError,
    OptimisticLockingError,
)

from .support import RecordingPublisher


@pytest.fixture
def store(publisher: RecordingPublisher) -> InMemoryAggregateStore:
    return InMemoryAggregateStore(publisher)


class TestInMemoryAggregateStore:
    def test_satisfies_protocol(self, store: InMemoryAggregateStore) -> None:
        assert isinstance(store, IAggregateStore)

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(
        self, store: InMemoryAggregateStore
    ) -> None:
        missing = CorrelationContext(correlation_id="nobody")

        assert await store.find_by_id(missing) is None

    @pytest.mark.asyncio
    async def test_create_stores_started_aggregate(
        self,
        store: InMemoryAggregateStore,
        publisher: RecordingPublisher,
        context: CorrelationContext,
    ) -> None:
        aggregate = await store.create(context)

        assert aggregate.state == AssemblyState.AWAITING_PART_1
        assert aggregate.version == 1
        assert aggregate.uncommitted_events == []
        assert await store.find_by_id(context) is aggregate
        assert [type(e) for e in publisher.events] == [ConstructionStarted]
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_events_are_published_after_storing(
        self, context: CorrelationContext
    ) -> None:
        seen: list[MessageAggregate | None] = []

        class LookupPublisher:
            def publish(self, event: object) -> None:
                seen.append(store._store.get("c1"))

        store = InMemoryAggregateStore(LookupPublisher())

        aggregate = await store.create(context)

        assert seen == [aggregate]

    @pytest.mark.asyncio
    async def test_save_bumps_version_and_commits(
        self,
        store: InMemoryAggregateStore,
        publisher: RecordingPublisher,
        context: CorrelationContext,
    ) -> None:
        aggregate = await store.create(context)
        aggregate.acquire_part("Hello")

        await store.save(aggregate)

        assert aggregate.version == 2
        assert aggregate.uncommitted_events == []
        assert isinstance(publisher.events[-1], PartAcquired)

    @pytest.mark.asyncio
    async def test_reused_correlation_id_is_rejected(
        self,
        store: InMemoryAggregateStore,
        publisher: RecordingPublisher,
        context: CorrelationContext,
    ) -> None:
        original = await store.create(context)

        with pytest.raises(OptimisticLockingError) as exc_info:
            await store.create(context)

        assert isinstance(exc_info.value, ConcurrencyError)
        assert exc_info.value.expected_version == 0
        assert exc_info.value.actual_version == 1
        assert await store.find_by_id(context) is original
        assert len(publisher.events) == 1

    @pytest.mark.asyncio
    async def test_stale_copy_is_rejected(
        self, store: InMemoryAggregateStore, context: CorrelationContext
    ) -> None:
        aggregate = await store.create(context)
        stale = MessageAggregate.from_history(context, [])
        stale.start_construction()

        aggregate.acquire_part("Hello")
        await store.save(aggregate)

        with pytest.raises(OptimisticLockingError):
            await store.save(stale)

    @pytest.mark.asyncio
    async def test_discard_and_clear(
        self, store: InMemoryAggregateStore, context: CorrelationContext
    ) -> None:
        other = CorrelationContext(correlation_id="c2")
        await store.create(context)
        await store.create(other)

        await store.discard(context)
        await store.discard(context)

        assert await store.find_by_id(context) is None
        assert len(store) == 1

        store.clear()
        assert len(store) == 0
