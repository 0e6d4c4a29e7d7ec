"""Correlation context — binds every command and event of one process."""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .primitives.id_generator import IIDGenerator

# ContextVar carrying the correlation id of the message being handled.
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationContext(BaseModel):
    """Immutable tracing context created once per process instance."""

    model_config = ConfigDict(frozen=True)

    correlation_id: str = Field(min_length=1)

    @classmethod
    def new(cls, id_generator: IIDGenerator) -> CorrelationContext:
        """Build a context with a freshly generated correlation id."""
        return cls(correlation_id=id_generator.next_id())


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


@contextlib.contextmanager
def correlation_scope(context: CorrelationContext | None) -> Iterator[None]:
    """Expose *context* through :func:`get_correlation_id` for the block."""
    token = _correlation_id.set(context.correlation_id if context else None)
    try:
        yield
    finally:
        _correlation_id.reset(token)
