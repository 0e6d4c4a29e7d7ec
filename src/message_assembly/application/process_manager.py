"""ProcessManager — stateless saga that drives part acquisition forward."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..cqrs.command import AcquirePart
from ..domain.events import ConstructionStarted, PartAcquired
from ..domain.fsm import ASSEMBLY_FSM, AssemblyAction
from ..primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..correlation import CorrelationContext
    from ..cqrs.message_bus import MessageBus
    from ..ports.bus import ICommandBus

logger = logging.getLogger("message_assembly.sagas")

DEFAULT_PARTS: tuple[str, ...] = ("Hello", "World")


class ProcessManager:
    """
    Reacts to domain events by dispatching the next :class:`AcquirePart`.

    Holds no per-process state: everything it needs is on the event. The
    parts sequence must have one entry per ACQUIRE transition of
    ``ASSEMBLY_FSM``.

    * ``ConstructionStarted`` → acquire ``parts[0]``.
    * ``PartAcquired{part, position}`` → if ``part`` is the expected value
      for ``position`` and another part follows, acquire
      ``parts[position + 1]``. Otherwise do nothing.

    Usage::

        saga = ProcessManager(bus, parts=("Hello", "World"))
        saga.subscribe(bus)
    """

    def __init__(
        self, command_bus: ICommandBus, parts: Sequence[str] = DEFAULT_PARTS
    ) -> None:
        expected = ASSEMBLY_FSM.action_count(AssemblyAction.ACQUIRE)
        if len(parts) != expected:
            raise ConfigurationError(
                f"ProcessManager needs one part per acquire step: "
                f"expected {expected}, got {len(parts)}"
            )
        if any(not isinstance(p, str) or not p for p in parts):
            raise ConfigurationError("Every part must be a non-empty string")
        self._command_bus = command_bus
        self._parts = tuple(parts)

    @property
    def parts(self) -> tuple[str, ...]:
        return self._parts

    def subscribe(self, bus: MessageBus) -> None:
        bus.register_event_listener(ConstructionStarted, self.on_construction_started)
        bus.register_event_listener(PartAcquired, self.on_part_acquired)

    async def on_construction_started(self, event: ConstructionStarted) -> None:
        await self._acquire(event.context, self._parts[0])

    async def on_part_acquired(self, event: PartAcquired) -> None:
        position = event.position
        if position >= len(self._parts) or event.part != self._parts[position]:
            logger.debug(
                "Unexpected part %r at position %d (correlation_id=%s); stopping",
                event.part,
                position,
                event.correlation_id,
            )
            return
        if position + 1 == len(self._parts):
            return
        await self._acquire(event.context, self._parts[position + 1])

    async def _acquire(self, context: CorrelationContext, part: str) -> None:
        logger.debug(
            "Dispatching AcquirePart %r (correlation_id=%s)",
            part,
            context.correlation_id,
        )
        await self._command_bus.dispatch(
            AcquirePart(context=context, part_to_acquire=part)
        )
