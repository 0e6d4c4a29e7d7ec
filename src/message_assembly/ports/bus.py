"""Bus protocols: command dispatch and event publication."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from ..cqrs.command import Command
    from ..domain.events import DomainEvent

E_contra = TypeVar("E_contra", bound="DomainEvent", contravariant=True)
C_contra = TypeVar("C_contra", bound="Command", contravariant=True)


class EventListenerProtocol(Protocol[E_contra]):
    """Listener object exposing ``handle(event)``."""

    def handle(self, event: E_contra) -> Awaitable[None] | None: ...


class EventListenerCallable(Protocol[E_contra]):
    def __call__(self, event: E_contra) -> Awaitable[None] | None: ...


EventListener: TypeAlias = "EventListenerCallable[Any] | EventListenerProtocol[Any]"


class CommandHandlerCallable(Protocol[C_contra]):
    def __call__(self, command: C_contra) -> Awaitable[Any]: ...


@runtime_checkable
class IEventPublisher(Protocol):
    """Anything events can be handed to without blocking the caller."""

    def publish(self, event: DomainEvent) -> None: ...


@runtime_checkable
class ICommandBus(Protocol):
    """Routes a command to its single registered handler."""

    async def dispatch(self, command: Command) -> Any: ...
