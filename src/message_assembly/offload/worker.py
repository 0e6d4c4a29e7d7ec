"""ThreadedWorker — secondary execution context backed by a daemon thread."""

from __future__ import annotations

import logging
import queue
import threading
from typing import TYPE_CHECKING, Any

from .messages import OffloadRequest, OffloadResponse

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("message_assembly.offload")

_STOP = object()


def echo(payload: Any) -> Any:
    """Default processing: return the payload unchanged."""
    return payload


class ThreadedWorker:
    """Runs ``processor`` on a dedicated thread, one request at a time.

    Requests travel over a :class:`queue.Queue`; each response is handed to
    ``on_message`` from the worker thread, so the callback must be
    thread-safe.
    """

    def __init__(
        self,
        on_message: Callable[[OffloadResponse], None],
        processor: Callable[[Any], Any] = echo,
        *,
        name: str = "offload-worker",
    ) -> None:
        self._on_message = on_message
        self._processor = processor
        self._inbox: queue.Queue[Any] = queue.Queue()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def post_message(self, request: OffloadRequest) -> None:
        if not self._thread.is_alive():
            raise RuntimeError("Worker thread is not running")
        self._inbox.put(request)

    def terminate(self) -> None:
        """Ask the thread to stop once queued requests have been answered.

        Returns immediately; use :meth:`join` to wait for the thread.
        """
        if not self._thread.is_alive():
            return
        self._inbox.put(_STOP)

    def join(self, timeout: float | None = None) -> bool:
        """Block until the thread exits; return whether it did."""
        if self._thread.is_alive():
            self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while True:
            request = self._inbox.get()
            if request is _STOP:
                return
            self._on_message(self._process(request))

    def _process(self, request: OffloadRequest) -> OffloadResponse:
        try:
            result = self._processor(request.payload)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Offload request %s failed: %r", request.id, exc)
            return OffloadResponse(id=request.id, error=repr(exc))
        return OffloadResponse(id=request.id, result=result)
