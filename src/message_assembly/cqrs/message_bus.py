"""MessageBus — single-handler command dispatch plus queued event delivery."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from ..correlation import correlation_scope
from ..primitives.exceptions import DuplicateHandlerRegistrationError

if TYPE_CHECKING:
    from ..domain.events import DomainEvent
    from ..ports.bus import CommandHandlerCallable, EventListener
    from .command import Command

logger = logging.getLogger("message_assembly.bus")


class MessageBus:
    """In-process command bus and event publisher.

    **Commands** have at most one handler. Registering a second handler for
    the same command class fails immediately with
    :class:`DuplicateHandlerRegistrationError`. Dispatching a command nobody
    handles is logged and returns ``None``.

    **Events** go onto a single-consumer :class:`asyncio.Queue`. One drain
    task takes them off in FIFO order and starts one task per registered
    listener, bounded by a semaphore of ``max_concurrency`` slots. Listeners
    therefore run independently: a slow or hung listener holds up neither
    its siblings nor later events. ``publish`` never runs a listener itself,
    so a publisher always finishes its current step before its events are
    seen. A listener that raises is logged and the publisher never sees the
    error.

    Usage::

        bus = MessageBus()
        bus.register_command_handler(AcquirePart, handler.handle)
        bus.register_event_listener(PartAcquired, saga.on_part_acquired)
        await bus.start()
        await bus.dispatch(AcquirePart(context=ctx, part_to_acquire="Hello"))
        await bus.join()
    """

    def __init__(self, max_concurrency: int = 10) -> None:
        self._command_handlers: dict[
            type[Command], CommandHandlerCallable[Any]
        ] = {}
        # dict keys keep insertion order and deduplicate listeners.
        self._event_listeners: dict[
            type[DomainEvent], dict[EventListener, None]
        ] = {}
        self._queue: asyncio.Queue[DomainEvent] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None
        self._semaphore = asyncio.Semaphore(max_concurrency)
        # Strong references keep running listener tasks alive.
        self._listener_tasks: set[asyncio.Task[None]] = set()

    # ── Registration ─────────────────────────────────────────────

    def register_command_handler(
        self, command_type: type[Command], handler: CommandHandlerCallable[Any]
    ) -> None:
        existing = self._command_handlers.get(command_type)
        if existing is not None:
            raise DuplicateHandlerRegistrationError(command_type, existing, handler)
        self._command_handlers[command_type] = handler
        logger.debug("Registered command handler for %s", command_type.__name__)

    def register_event_listener(
        self, event_type: type[DomainEvent], listener: EventListener
    ) -> None:
        listeners = self._event_listeners.setdefault(event_type, {})
        if listener not in listeners:
            listeners[listener] = None
            logger.debug("Registered event listener for %s", event_type.__name__)

    # ── Commands ─────────────────────────────────────────────────

    async def dispatch(self, command: Command) -> Any:
        """Run the handler for *command* and return its result."""
        handler = self._command_handlers.get(type(command))
        if handler is None:
            logger.info(
                "No handler registered for command %s (correlation_id=%s)",
                type(command).__name__,
                command.correlation_id,
            )
            return None
        with correlation_scope(command.context):
            return await handler(command)

    # ── Events ───────────────────────────────────────────────────

    def publish(self, event: DomainEvent) -> None:
        """Queue *event* for delivery after the caller yields."""
        self._queue.put_nowait(event)
        self._ensure_draining()

    async def start(self) -> None:
        """Start the drain task on the running loop."""
        self._ensure_draining()

    async def stop(self) -> None:
        """Cancel the drain task and running listeners.

        Undelivered events stay queued.
        """
        task, self._task = self._task, None
        listener_tasks = list(self._listener_tasks)
        self._listener_tasks.clear()
        for pending in listener_tasks:
            pending.cancel()
        if listener_tasks:
            await asyncio.gather(*listener_tasks, return_exceptions=True)
            logger.debug("Cancelled %d running listener(s)", len(listener_tasks))
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("MessageBus drain task stopped")

    async def join(self) -> None:
        """Wait until every queued event has been delivered.

        Also waits for the listeners those events started, and for any
        events those listeners publish in turn.
        """
        self._ensure_draining()
        while True:
            await self._queue.join()
            running = [t for t in self._listener_tasks if not t.done()]
            if not running:
                return
            await asyncio.wait(running)

    @property
    def pending_events(self) -> int:
        return self._queue.qsize()

    @property
    def running_listeners(self) -> int:
        return sum(1 for t in self._listener_tasks if not t.done())

    def _ensure_draining(self) -> None:
        if self._task is not None and not self._task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Outside a loop: events wait in the queue until start().
            return
        self._task = loop.create_task(self._drain(), name="message-bus-drain")

    async def _drain(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                self._deliver(event)
            finally:
                self._queue.task_done()

    def _deliver(self, event: DomainEvent) -> None:
        listeners = list(self._event_listeners.get(type(event), ()))
        if not listeners:
            return
        # Tasks copy the current context, so each listener sees the
        # event's correlation id.
        with correlation_scope(event.context):
            for listener in listeners:
                task = asyncio.create_task(
                    self._invoke(listener, event),
                    name=f"listener-{type(event).__name__}",
                )
                self._listener_tasks.add(task)
                task.add_done_callback(self._listener_tasks.discard)

    async def _invoke(self, listener: EventListener, event: DomainEvent) -> None:
        """Invoke a single listener within the concurrency limit."""
        async with self._semaphore:
            try:
                if callable(listener):
                    result = listener(event)
                elif hasattr(listener, "handle"):
                    result = listener.handle(event)
                else:
                    raise TypeError(
                        "Listener must be a callable or have a handle() method"
                    )
                if isawaitable(result):
                    await result
            except Exception:
                logger.exception(
                    "Error executing listener %s for event %s (correlation_id=%s)",
                    getattr(listener, "__qualname__", type(listener).__name__),
                    type(event).__name__,
                    event.correlation_id,
                )

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, Any]:
        """Return a snapshot of all registrations (debugging utility)."""
        return {
            "commands": sorted(k.__name__ for k in self._command_handlers),
            "events": {
                k.__name__: len(v) for k, v in self._event_listeners.items()
            },
        }

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._command_handlers.clear()
        self._event_listeners.clear()
