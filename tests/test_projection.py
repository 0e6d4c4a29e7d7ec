"""Tests for the render projection and sink."""

from __future__ import annotations

import logging

import pytest

from message_assembly.application.projection import (
    InMemoryRenderSink,
    RenderProjection,
)
from message_assembly.correlation import CorrelationContext
from message_assembly.cqrs.message_bus import MessageBus
from message_assembly.domain.events import (
    ConstructionFinalized,
    UIStateReadyToRender,
)

from .support import RecordingPublisher


class TestRenderProjection:
    def test_finalized_becomes_ready_to_render(
        self, publisher: RecordingPublisher, context: CorrelationContext
    ) -> None:
        projection = RenderProjection(publisher)

        projection.handle(
            ConstructionFinalized(context=context, final_message="Hello World")
        )

        (event,) = publisher.events
        assert isinstance(event, UIStateReadyToRender)
        assert event.final_message == "Hello World"
        assert event.correlation_id == "c1"


class TestInMemoryRenderSink:
    def test_records_by_correlation_id(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        sink = InMemoryRenderSink()

        with caplog.at_level(logging.INFO, logger="message_assembly.projections"):
            for cid, message in [("a", "Hello World"), ("b", "Hi"), ("a", "Again")]:
                sink.handle(
                    UIStateReadyToRender(
                        context=CorrelationContext(correlation_id=cid),
                        final_message=message,
                    )
                )

        assert sink.messages_for("a") == ["Hello World", "Again"]
        assert sink.messages_for("b") == ["Hi"]
        assert sink.messages_for("c") == []
        assert "Ready to render 'Hi'" in caplog.text

    @pytest.mark.asyncio
    async def test_projection_feeds_sink_through_bus(
        self, bus: MessageBus, context: CorrelationContext
    ) -> None:
        RenderProjection(bus).subscribe(bus)
        sink = InMemoryRenderSink()
        sink.subscribe(bus)

        bus.publish(ConstructionFinalized(context=context, final_message="Hello World"))
        await bus.join()

        assert sink.rendered == [("c1", "Hello World")]
