from .aggregate_store import IAggregateStore
from .bus import (
    CommandHandlerCallable,
    EventListener,
    EventListenerCallable,
    EventListenerProtocol,
    ICommandBus,
    IEventPublisher,
)
from .offload import IOffloadGateway, ISecondaryWorker

__all__ = [
    "CommandHandlerCallable",
    "EventListener",
    "EventListenerCallable",
    "EventListenerProtocol",
    "IAggregateStore",
    "ICommandBus",
    "IEventPublisher",
    "IOffloadGateway",
    "ISecondaryWorker",
]
