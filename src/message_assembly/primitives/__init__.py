"""Primitives: exceptions, ID generation."""

from __future__ import annotations

from .exceptions import (
    ConcurrencyError,
    ConfigurationError,
    DomainError,
    DuplicateHandlerRegistrationError,
    HandlerError,
    IllegalTransitionError,
    InfrastructureError,
    InvariantViolationError,
    MessageAssemblyError,
    OffloadError,
    OffloadTerminatedError,
    OffloadTimeoutError,
    OptimisticLockingError,
    PersistenceError,
)
from .id_generator import IIDGenerator, UUID4Generator

__all__ = [
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
