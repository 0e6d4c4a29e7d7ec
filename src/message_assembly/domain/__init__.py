"""Domain layer: state machine, events and the message aggregate."""

from __future__ import annotations

from .aggregate import MessageAggregate
from .events import (
    AnyEvent,
    ConstructionFinalized,
    ConstructionStarted,
    DomainEvent,
    EventType,
    PartAcquired,
    UIStateReadyToRender,
)
from .fsm import ASSEMBLY_FSM, AssemblyAction, AssemblyState, FiniteStateMachine

__all__ = [
    "ASSEMBLY_FSM",
    "AnyEvent",
    "AssemblyAction",
    "AssemblyState",
    "ConstructionFinalized",
    "ConstructionStarted",
    "DomainEvent",
    "EventType",
    "FiniteStateMachine",
    "MessageAggregate",
    "PartAcquired",
    "UIStateReadyToRender",
]
