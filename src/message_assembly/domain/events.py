"""Domain events — immutable facts raised by the message aggregate."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import CorrelationContext


class EventType(str, Enum):
    """Values of the ``type`` discriminator on each event variant."""

    CONSTRUCTION_STARTED = "CONSTRUCTION_STARTED"
    PART_ACQUIRED = "PART_ACQUIRED"
    CONSTRUCTION_FINALIZED = "CONSTRUCTION_FINALIZED"
    UI_STATE_READY_TO_RENDER = "UI_STATE_READY_TO_RENDER"


class DomainEvent(BaseModel):
    """Base class for all events.

    Events are frozen once raised and carry the correlation context of the
    process that produced them. Subclasses add a ``type`` literal plus their
    payload fields.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    context: CorrelationContext

    @property
    def correlation_id(self) -> str:
        return self.context.correlation_id

    @property
    def payload(self) -> dict[str, Any]:
        """Variant-specific fields, without envelope metadata."""
        return self.model_dump(exclude={"event_id", "occurred_at", "context", "type"})


class ConstructionStarted(DomainEvent):
    type: Literal["CONSTRUCTION_STARTED"] = "CONSTRUCTION_STARTED"


class PartAcquired(DomainEvent):
    type: Literal["PART_ACQUIRED"] = "PART_ACQUIRED"
    part: str
    position: int = Field(ge=0)


class ConstructionFinalized(DomainEvent):
    type: Literal["CONSTRUCTION_FINALIZED"] = "CONSTRUCTION_FINALIZED"
    final_message: str


class UIStateReadyToRender(DomainEvent):
    type: Literal["UI_STATE_READY_TO_RENDER"] = "UI_STATE_READY_TO_RENDER"
    final_message: str


AnyEvent = Annotated[
    Union[
        ConstructionStarted,
        PartAcquired,
        ConstructionFinalized,
        UIStateReadyToRender,
    ],
    Field(discriminator="type"),
]
