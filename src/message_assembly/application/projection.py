"""Render projection and sink — the presentation side of the process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain.events import ConstructionFinalized, UIStateReadyToRender

if TYPE_CHECKING:
    from ..cqrs.message_bus import MessageBus
    from ..ports.bus import IEventPublisher

logger = logging.getLogger("message_assembly.projections")


class RenderProjection:
    """Turns ``ConstructionFinalized`` into ``UIStateReadyToRender``."""

    def __init__(self, publisher: IEventPublisher) -> None:
        self._publisher = publisher

    def subscribe(self, bus: MessageBus) -> None:
        bus.register_event_listener(ConstructionFinalized, self.handle)

    def handle(self, event: ConstructionFinalized) -> None:
        self._publisher.publish(
            UIStateReadyToRender(
                context=event.context, final_message=event.final_message
            )
        )


class InMemoryRenderSink:
    """Records render-ready messages instead of drawing them."""

    def __init__(self) -> None:
        self.rendered: list[tuple[str, str]] = []

    def subscribe(self, bus: MessageBus) -> None:
        bus.register_event_listener(UIStateReadyToRender, self.handle)

    def handle(self, event: UIStateReadyToRender) -> None:
        self.rendered.append((event.correlation_id, event.final_message))
        logger.info(
            "Ready to render %r (correlation_id=%s)",
            event.final_message,
            event.correlation_id,
        )

    def messages_for(self, correlation_id: str) -> list[str]:
        return [message for cid, message in self.rendered if cid == correlation_id]
