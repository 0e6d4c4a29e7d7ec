"""Response wrapper for command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CommandResponse(Generic[T]):
    """Wrapper returned by command handlers.

    ``success=False`` marks a command that was logged and dropped.
    """

    result: T
    success: bool = True
    correlation_id: str | None = None
    error: str | None = None
