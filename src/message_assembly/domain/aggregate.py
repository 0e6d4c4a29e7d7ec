"""MessageAggregate — event-sourced consistency boundary of one construction."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..correlation import CorrelationContext
from ..primitives.exceptions import InvariantViolationError
from .events import (
    ConstructionFinalized,
    ConstructionStarted,
    DomainEvent,
    PartAcquired,
)
from .fsm import ASSEMBLY_FSM, AssemblyAction, AssemblyState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class MessageAggregate(BaseModel):
    """Builds a message from parts acquired one at a time.

    Every mutation goes through the same path: the operation asks the state
    machine for the next state (raising on an illegal move), builds the
    event describing what happened, and hands it to :meth:`_apply`. Events
    wait in an internal queue until :meth:`commit` publishes them.

    Usage::

        aggregate = MessageAggregate(context=ctx)
        aggregate.start_construction()
        aggregate.acquire_part("Hello")
        aggregate.acquire_part("World")
        aggregate.commit(bus.publish)
        # ConstructionStarted, PartAcquired x2, ConstructionFinalized
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    context: CorrelationContext
    state: AssemblyState = AssemblyState.IDLE
    parts: list[str] = Field(default_factory=list)
    _version: int = PrivateAttr(default=0)
    _uncommitted_events: list[DomainEvent] = PrivateAttr(
        default_factory=lambda: cast("list[DomainEvent]", [])
    )

    # ── Factories ────────────────────────────────────────────────

    @classmethod
    def from_history(
        cls, context: CorrelationContext, events: Iterable[DomainEvent]
    ) -> MessageAggregate:
        """Rebuild an aggregate by replaying previously committed events."""
        aggregate = cls(context=context)
        for event in events:
            aggregate._apply(event)
        return aggregate

    # ── Operations ───────────────────────────────────────────────

    def start_construction(self) -> None:
        """IDLE → AWAITING_PART_1."""
        ASSEMBLY_FSM.transition(self.state, AssemblyAction.START)
        self._raise(ConstructionStarted(context=self.context))

    def acquire_part(self, part: str) -> None:
        """Record the next part; finalizes the message after the last one."""
        if not isinstance(part, str) or not part:
            raise InvariantViolationError("Acquired part must be a non-empty string")
        ASSEMBLY_FSM.transition(self.state, AssemblyAction.ACQUIRE)
        self._raise(
            PartAcquired(context=self.context, part=part, position=len(self.parts))
        )
        if ASSEMBLY_FSM.is_terminal(self.state):
            self._raise(
                ConstructionFinalized(
                    context=self.context, final_message=" ".join(self.parts)
                )
            )

    def commit(self, publish: Callable[[DomainEvent], None]) -> None:
        """Publish pending events in the order they were raised."""
        events, self._uncommitted_events = self._uncommitted_events, []
        for event in events:
            publish(event)

    # ── State ────────────────────────────────────────────────────

    @property
    def correlation_id(self) -> str:
        return self.context.correlation_id

    @property
    def uncommitted_events(self) -> list[DomainEvent]:
        return list(self._uncommitted_events)

    @property
    def is_finalized(self) -> bool:
        return ASSEMBLY_FSM.is_terminal(self.state)

    @property
    def final_message(self) -> str | None:
        return " ".join(self.parts) if self.is_finalized else None

    @property
    def version(self) -> int:
        """Read-only version, managed by the store."""
        return self._version

    def increment_version(self) -> None:
        self._version += 1

    # ── Internals ────────────────────────────────────────────────

    def _raise(self, event: DomainEvent) -> None:
        self._apply(event)
        self._uncommitted_events.append(event)

    def _apply(self, event: DomainEvent) -> None:
        match event:
            case ConstructionStarted():
                self.state = ASSEMBLY_FSM.transition(self.state, AssemblyAction.START)
            case PartAcquired(part=part, position=position):
                if position != len(self.parts):
                    raise InvariantViolationError(
                        f"Part {part!r} recorded at position {position}, "
                        f"expected {len(self.parts)}"
                    )
                self.state = ASSEMBLY_FSM.transition(
                    self.state, AssemblyAction.ACQUIRE
                )
                self.parts.append(part)
            case ConstructionFinalized():
                if not ASSEMBLY_FSM.is_terminal(self.state):
                    raise InvariantViolationError(
                        f"Cannot finalize construction in {self.state.value} state"
                    )
            case _:
                raise InvariantViolationError(
                    f"{type(event).__name__} cannot be applied to {type(self).__name__}"
                )
