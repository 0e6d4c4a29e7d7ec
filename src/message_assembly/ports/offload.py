"""Offload protocols: the gateway seen by handlers and the worker behind it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..offload.messages import OffloadRequest


@runtime_checkable
class IOffloadGateway(Protocol):
    """Runs a unit of work away from the event loop thread."""

    def initialize(self) -> None: ...

    async def process(self, payload: Any) -> Any: ...

    def terminate(self) -> None: ...


@runtime_checkable
class ISecondaryWorker(Protocol):
    """
    Secondary execution context.

    Receives requests through :meth:`post_message` and reports each result
    by calling the ``on_message`` callback it was built with, possibly from
    another thread. :meth:`terminate` is called on the event loop thread
    and must not block.
    """

    def start(self) -> None: ...

    def post_message(self, request: OffloadRequest) -> None: ...

    def terminate(self) -> None: ...
