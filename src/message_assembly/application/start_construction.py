"""StartConstructionHandler — opens a new construction process."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..cqrs.response import CommandResponse

if TYPE_CHECKING:
    from ..cqrs.command import StartConstruction
    from ..domain.fsm import AssemblyState
    from ..ports.aggregate_store import IAggregateStore


class StartConstructionHandler:
    """Creates the aggregate; saving it publishes ``ConstructionStarted``."""

    def __init__(self, store: IAggregateStore) -> None:
        self._store = store

    async def handle(
        self, command: StartConstruction
    ) -> CommandResponse[AssemblyState]:
        aggregate = await self._store.create(command.context)
        return CommandResponse(
            result=aggregate.state, correlation_id=command.correlation_id
        )
