"""Test doubles shared across the suite."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Collection
from typing import Any

from message_assembly.correlation import get_correlation_id
from message_assembly.domain.events import DomainEvent
from message_assembly.offload.messages import OffloadRequest, OffloadResponse


class RecordingPublisher:
    """Publisher double that keeps events in publish order."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self.events.append(event)


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class SilentWorker:
    """Secondary worker that accepts requests and only answers on demand."""

    def __init__(self, on_message: Any) -> None:
        self.on_message = on_message
        self.requests: list[OffloadRequest] = []
        self.started = False
        self.terminated = False

    def start(self) -> None:
        self.started = True

    def post_message(self, request: OffloadRequest) -> None:
        self.requests.append(request)

    def terminate(self) -> None:
        self.terminated = True

    def reply(self, request: OffloadRequest, result: Any = None) -> None:
        self.on_message(OffloadResponse(id=request.id, result=result))


class SelectiveWorker(SilentWorker):
    """Echoes every request at once, except those from stalled correlation ids."""

    def __init__(self, on_message: Any, stalled: Collection[str] = ()) -> None:
        super().__init__(on_message)
        self.stalled = frozenset(stalled)

    def post_message(self, request: OffloadRequest) -> None:
        super().post_message(request)
        if get_correlation_id() not in self.stalled:
            self.reply(request, result=request.payload)


async def wait_until(predicate: Callable[[], object], timeout: float = 1.0) -> None:
    """Poll *predicate* on the running loop until it is truthy."""

    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(poll(), timeout)
