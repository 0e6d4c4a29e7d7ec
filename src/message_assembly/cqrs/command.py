"""Commands — immutable intents routed through the message bus."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import CorrelationContext


class CommandType(str, Enum):
    """Values of the ``type`` discriminator on each command variant."""

    START_CONSTRUCTION = "START_CONSTRUCTION"
    ACQUIRE_PART = "ACQUIRE_PART"


class Command(BaseModel):
    """
    Base for all commands.

    Commands are constructed, dispatched once and discarded. Every command
    carries the :class:`CorrelationContext` of the process it belongs to.
    """

    model_config = ConfigDict(frozen=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    context: CorrelationContext

    @property
    def correlation_id(self) -> str:
        return self.context.correlation_id


class StartConstruction(Command):
    type: Literal["START_CONSTRUCTION"] = "START_CONSTRUCTION"


class AcquirePart(Command):
    type: Literal["ACQUIRE_PART"] = "ACQUIRE_PART"
    part_to_acquire: str = Field(min_length=1)


AnyCommand = Annotated[
    Union[StartConstruction, AcquirePart],
    Field(discriminator="type"),
]
