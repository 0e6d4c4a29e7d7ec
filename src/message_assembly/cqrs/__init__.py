"""CQRS building blocks: commands, responses and the message bus."""

from __future__ import annotations

from .command import AcquirePart, AnyCommand, Command, CommandType, StartConstruction
from .message_bus import MessageBus
from .response import CommandResponse

__all__ = [
    "AcquirePart",
    "AnyCommand",
    "Command",
    "CommandResponse",
    "CommandType",
    "MessageBus",
    "StartConstruction",
]
