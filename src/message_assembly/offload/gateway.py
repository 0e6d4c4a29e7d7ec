"""OffloadGateway — id-correlated request/response over a secondary context."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import (
    OffloadError,
    OffloadTerminatedError,
    OffloadTimeoutError,
)
from .messages import OffloadRequest, OffloadResponse
from .worker import ThreadedWorker

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.offload import ISecondaryWorker
    from ..primitives.id_generator import IIDGenerator

    WorkerFactory = Callable[[Callable[[OffloadResponse], None]], ISecondaryWorker]

logger = logging.getLogger("message_assembly.offload")


class OffloadGateway:
    """Sends work to a secondary execution context and awaits the answer.

    Every request gets a fresh id and a pending :class:`asyncio.Future`.
    The worker answers from its own thread; responses are marshalled onto
    the event loop with ``call_soon_threadsafe``, so the inflight map is
    only ever touched from the loop thread.

    If the worker cannot be created, the gateway runs the work in-process
    (a pass-through) for the rest of its life. Initialization is attempted
    once.

    Each request waits at most ``request_timeout`` seconds
    (:class:`OffloadTimeoutError`); ``terminate`` fails every pending
    request with :class:`OffloadTerminatedError`.
    """

    def __init__(
        self,
        id_generator: IIDGenerator,
        worker_factory: WorkerFactory | None = None,
        *,
        request_timeout: float | None = 5.0,
    ) -> None:
        self._id_generator = id_generator
        self._worker_factory: WorkerFactory = worker_factory or ThreadedWorker
        self._request_timeout = request_timeout
        self._worker: ISecondaryWorker | None = None
        self._initialized = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    # ── Lifecycle ────────────────────────────────────────────────

    def initialize(self) -> None:
        if self._initialized:
            logger.debug("OffloadGateway already initialized; ignoring")
            return
        self._initialized = True
        try:
            worker = self._worker_factory(self._on_worker_message)
            worker.start()
        except Exception:
            logger.exception(
                "Failed to start offload worker; falling back to in-process execution"
            )
            return
        self._worker = worker
        logger.info("Offload worker started")

    def terminate(self) -> None:
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.terminate()
            logger.info("Offload worker terminated")

        pending, self._inflight = self._inflight, {}
        for request_id, future in pending.items():
            if not future.done():
                future.set_exception(
                    OffloadTerminatedError(
                        f"Offload request {request_id} abandoned by terminate()"
                    )
                )
        if pending:
            logger.warning(
                "Failed %d inflight offload request(s) on terminate", len(pending)
            )

    @property
    def is_offloading(self) -> bool:
        return self._worker is not None

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    # ── Processing ───────────────────────────────────────────────

    async def process(self, payload: Any) -> Any:
        worker = self._worker
        if worker is None:
            return payload

        loop = asyncio.get_running_loop()
        self._loop = loop
        request_id = self._id_generator.next_id()
        future: asyncio.Future[Any] = loop.create_future()
        self._inflight[request_id] = future
        try:
            try:
                worker.post_message(OffloadRequest(id=request_id, payload=payload))
            except Exception as exc:
                raise OffloadError(
                    f"Could not send offload request {request_id}"
                ) from exc

            if self._request_timeout is None:
                return await future
            try:
                return await asyncio.wait_for(future, self._request_timeout)
            except asyncio.TimeoutError:
                raise OffloadTimeoutError(request_id, self._request_timeout) from None
        finally:
            self._inflight.pop(request_id, None)

    # ── Internals ────────────────────────────────────────────────

    def _on_worker_message(self, response: OffloadResponse) -> None:
        """Called from the worker thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(self._resolve, response)
        except RuntimeError:
            logger.debug("Event loop closed; dropping response %s", response.id)

    def _resolve(self, response: OffloadResponse) -> None:
        future = self._inflight.pop(response.id, None)
        if future is None:
            logger.debug("Ignoring response for unknown request %s", response.id)
            return
        if future.done():
            return
        if response.ok:
            future.set_result(response.result)
        else:
            future.set_exception(
                OffloadError(f"Offload request {response.id} failed: {response.error}")
            )
