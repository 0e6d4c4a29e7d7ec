"""IAggregateStore — persistence protocol for message aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..correlation import CorrelationContext
    from ..domain.aggregate import MessageAggregate


@runtime_checkable
class IAggregateStore(Protocol):
    """
    Keyed by correlation id. ``save`` must store the aggregate before
    publishing its pending events.
    """

    async def create(self, context: CorrelationContext) -> MessageAggregate: ...

    async def find_by_id(
        self, context: CorrelationContext
    ) -> MessageAggregate | None: ...

    async def save(self, aggregate: MessageAggregate) -> None: ...

    async def discard(self, context: CorrelationContext) -> None: ...
