"""Offloading work to a secondary execution context."""

from __future__ import annotations

from .gateway import OffloadGateway
from .messages import OffloadRequest, OffloadResponse
from .worker import ThreadedWorker, echo

__all__ = [
    "OffloadGateway",
    "OffloadRequest",
    "OffloadResponse",
    "ThreadedWorker",
    "echo",
]
