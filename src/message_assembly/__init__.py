"""message-assembly — builds a message from sequentially acquired parts.

A command/event bus, an FSM-guarded event-sourced aggregate, a stateless
saga and an offload gateway with retry, wired by an explicit composition
root.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryAggregateStore

# ── Application ─────────────────────────────────────────────────
from .application import (
    DEFAULT_PARTS,
    ExponentialBackoffPolicy,
    InMemoryRenderSink,
    PartAcquisitionHandler,
    ProcessManager,
    RenderProjection,
    StartConstructionHandler,
    retryable_operation,
)
from .bootstrap import AssemblyApplication, build_application
from .config import AssemblySettings
from .correlation import CorrelationContext, correlation_scope, get_correlation_id

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    AcquirePart,
    AnyCommand,
    Command,
    CommandResponse,
    CommandType,
    MessageBus,
    StartConstruction,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    ASSEMBLY_FSM,
    AnyEvent,
    AssemblyAction,
    AssemblyState,
    ConstructionFinalized,
    ConstructionStarted,
    DomainEvent,
    EventType,
    FiniteStateMachine,
    MessageAggregate,
    PartAcquired,
    UIStateReadyToRender,
)

# ── Offload ──────────────────────────────────────────────────────
from .offload import OffloadGateway, OffloadRequest, OffloadResponse, ThreadedWorker

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    ConcurrencyError,
    ConfigurationError,
    DomainError,
    DuplicateHandlerRegistrationError,
    HandlerError,
    IIDGenerator,
    IllegalTransitionError,
    InfrastructureError,
    InvariantViolationError,
    MessageAssemblyError,
    OffloadError,
    OffloadTerminatedError,
    OffloadTimeoutError,
    OptimisticLockingError,
    PersistenceError,
    UUID4Generator,
)

__all__: list[str] = [
    # Domain
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
    # CQRS
    "AcquirePart",
    "AnyCommand",
    "Command",
    "CommandResponse",
    "CommandType",
    "MessageBus",
    "StartConstruction",
    "CorrelationContext",
    "correlation_scope",
    "get_correlation_id",
    # Application
    "DEFAULT_PARTS",
    "ExponentialBackoffPolicy",
    "InMemoryRenderSink",
    "PartAcquisitionHandler",
    "ProcessManager",
    "RenderProjection",
    "StartConstructionHandler",
    "retryable_operation",
    # Offload
    "OffloadGateway",
    "OffloadRequest",
    "OffloadResponse",
    "ThreadedWorker",
    # Adapters
    "InMemoryAggregateStore",
    # Wiring
    "AssemblyApplication",
    "AssemblySettings",
    "build_application",
    # Primitives
    "ConcurrencyError",
    "ConfigurationError",
    "DomainError",
    "DuplicateHandlerRegistrationError",
    "HandlerError",
    "IIDGenerator",
    "IllegalTransitionError",
    "InfrastructureError",
    "InvariantViolationError",
    "MessageAssemblyError",
    "OffloadError",
    "OffloadTerminatedError",
    "OffloadTimeoutError",
    "OptimisticLockingError",
    "PersistenceError",
    "UUID4Generator",
]
