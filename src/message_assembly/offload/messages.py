"""Wire messages exchanged with the secondary execution context."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class OffloadRequest(BaseModel):
    """``{id, payload}`` sent to the worker."""

    model_config = ConfigDict(frozen=True)

    id: str
    payload: Any = None


class OffloadResponse(BaseModel):
    """``{id, result}`` sent back; ``error`` is set when processing failed."""

    model_config = ConfigDict(frozen=True)

    id: str
    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
