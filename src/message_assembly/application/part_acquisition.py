"""PartAcquisitionHandler — resolves a part via the gateway and records it."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..cqrs.response import CommandResponse
from .retry import ExponentialBackoffPolicy, retryable_operation

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import Any

    from ..cqrs.command import AcquirePart
    from ..ports.aggregate_store import IAggregateStore
    from ..ports.offload import IOffloadGateway

logger = logging.getLogger("message_assembly.handlers")


class PartAcquisitionHandler:
    """Command handler for :class:`AcquirePart`.

    The gateway call is retried with exponential backoff. If every attempt
    fails the command is logged and dropped, leaving the aggregate where it
    was. Errors raised by the aggregate itself (illegal transitions,
    invariant violations) are programmer errors and propagate.
    """

    def __init__(
        self,
        store: IAggregateStore,
        gateway: IOffloadGateway,
        retry_policy: ExponentialBackoffPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._retry_policy = retry_policy or ExponentialBackoffPolicy()
        self._sleep = sleep

    async def handle(self, command: AcquirePart) -> CommandResponse[str | None]:
        context = command.context
        part = command.part_to_acquire
        try:
            acquired = await self.retryable_operation(
                lambda: self._gateway.process(part)
            )
        except Exception as exc:
            logger.exception(
                "Failed to acquire part %r (correlation_id=%s); dropping command",
                part,
                context.correlation_id,
            )
            return CommandResponse(
                result=None,
                success=False,
                correlation_id=context.correlation_id,
                error=repr(exc),
            )

        aggregate = await self._store.find_by_id(context)
        if aggregate is None:
            logger.info(
                "No aggregate for correlation_id=%s; dropping acquired part %r",
                context.correlation_id,
                acquired,
            )
            return CommandResponse(
                result=None, success=False, correlation_id=context.correlation_id
            )

        aggregate.acquire_part(acquired)
        await self._store.save(aggregate)
        logger.debug(
            "Acquired part %r (correlation_id=%s, state=%s)",
            acquired,
            context.correlation_id,
            aggregate.state.value,
        )
        return CommandResponse(result=acquired, correlation_id=context.correlation_id)

    async def retryable_operation(self, operation: Callable[[], Awaitable[Any]]) -> Any:
        return await retryable_operation(
            operation, self._retry_policy, sleep=self._sleep
        )
