"""InMemoryAggregateStore — dict-backed store that publishes on save."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from message_assembly.domain.aggregate import MessageAggregate
from message_assembly.primitives.exceptions import OptimisticLockingError

if TYPE_CHECKING:
    from message_assembly.correlation import CorrelationContext
    from message_assembly.ports.bus import IEventPublisher

logger = logging.getLogger("message_assembly.store")


class InMemoryAggregateStore:
    """In-memory implementation of ``IAggregateStore``.

    Stores aggregates in a plain dict keyed by correlation id. Volatile and
    process-lifetime only.

    ``save`` rejects an aggregate when a *different* instance is stored
    under the same correlation id at another version, which also stops a
    correlation id from being reused for a second process.
    """

    def __init__(self, publisher: IEventPublisher) -> None:
        self._publisher = publisher
        self._store: dict[str, MessageAggregate] = {}

    async def create(self, context: CorrelationContext) -> MessageAggregate:
        aggregate = MessageAggregate(context=context)
        aggregate.start_construction()
        await self.save(aggregate)
        logger.info("Created aggregate (correlation_id=%s)", context.correlation_id)
        return aggregate

    async def find_by_id(self, context: CorrelationContext) -> MessageAggregate | None:
        return self._store.get(context.correlation_id)

    async def save(self, aggregate: MessageAggregate) -> None:
        key = aggregate.correlation_id
        stored = self._store.get(key)
        if (
            stored is not None
            and stored is not aggregate
            and stored.version != aggregate.version
        ):
            raise OptimisticLockingError(key, aggregate.version, stored.version)

        aggregate.increment_version()
        self._store[key] = aggregate
        # Stored first: listeners reacting to these events must find it.
        aggregate.commit(self._publisher.publish)

    async def discard(self, context: CorrelationContext) -> None:
        if self._store.pop(context.correlation_id, None) is not None:
            logger.info(
                "Discarded aggregate (correlation_id=%s)", context.correlation_id
            )

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
