"""Application layer: command handlers, saga and projections."""

from __future__ import annotations

from .part_acquisition import PartAcquisitionHandler
from .process_manager import DEFAULT_PARTS, ProcessManager
from .projection import InMemoryRenderSink, RenderProjection
from .retry import ExponentialBackoffPolicy, retryable_operation
from .start_construction import StartConstructionHandler

__all__ = [
    "DEFAULT_PARTS",
    "ExponentialBackoffPolicy",
    "InMemoryRenderSink",
    "PartAcquisitionHandler",
    "ProcessManager",
    "RenderProjection",
    "StartConstructionHandler",
    "retryable_operation",
]
