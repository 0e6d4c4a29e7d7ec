"""Shared fixtures for the message-assembly test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from message_assembly.correlation import CorrelationContext
from message_assembly.cqrs.message_bus import MessageBus

from .support import RecordingPublisher, RecordingSleep


@pytest.fixture
def context() -> CorrelationContext:
    return CorrelationContext(correlation_id="c1")


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest_asyncio.fixture
async def bus() -> AsyncIterator[MessageBus]:
    message_bus = MessageBus()
    await message_bus.start()
    yield message_bus
    await message_bus.stop()
