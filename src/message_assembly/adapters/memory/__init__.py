from .aggregate_store import InMemoryAggregateStore

__all__ = ["InMemoryAggregateStore"]
