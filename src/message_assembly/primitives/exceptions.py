"""Domain and infrastructure exceptions for message-assembly."""

from __future__ import annotations


class MessageAssemblyError(Exception):
    """Root exception for the entire message-assembly package."""


class DomainError(MessageAssemblyError):
    """Base class for all domain-related errors."""


class IllegalTransitionError(DomainError):
    """Raised when the state machine has no mapping for ``(state, action)``.

    Always fatal to the calling operation.
    """

    def __init__(self, current_state: object, action: object) -> None:
        self.current_state = current_state
        self.action = action
        super().__init__(
            f"Illegal transition: no mapping for action {_name(action)} "
            f"from state {_name(current_state)}"
        )


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated."""


class HandlerError(MessageAssemblyError):
    """Base class for all handler related errors (registration, lookup, execution)."""


class DuplicateHandlerRegistrationError(HandlerError):
    """Raised when a second command handler is registered for the same type.

    Usage: MessageBus raises this at registration time, never at dispatch.
    """

    def __init__(self, message_type: type, existing: object, rejected: object) -> None:
        self.message_type = message_type
        self.existing = existing
        self.rejected = rejected
        super().__init__(
            f"Duplicate command handler for {message_type.__name__}: "
            f"{_handler_name(existing)} already registered, "
            f"cannot register {_handler_name(rejected)}"
        )


class ConfigurationError(MessageAssemblyError):
    """Raised when components are wired with invalid settings."""


class InfrastructureError(MessageAssemblyError):
    """Base class for all infrastructure-related errors."""


class OffloadError(InfrastructureError):
    """Raised when a unit of work could not be completed by the secondary context.

    Treated as transient: callers retry with backoff.
    """


class OffloadTimeoutError(OffloadError):
    """Raised when no response arrived within the request timeout."""

    def __init__(self, request_id: str, timeout: float) -> None:
        self.request_id = request_id
        self.timeout = timeout
        super().__init__(f"Offload request {request_id} timed out after {timeout}s")


class OffloadTerminatedError(OffloadError):
    """Raised for inflight requests when the gateway is terminated."""


class ConcurrencyError(MessageAssemblyError):
    """Base class for all concurrency-related conflicts."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class OptimisticLockingError(ConcurrencyError, PersistenceError):
    """Raised when the store detects a version mismatch during save."""

    def __init__(
        self, correlation_id: str, expected_version: int, actual_version: int
    ) -> None:
        self.correlation_id = correlation_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Aggregate {correlation_id!r} was modified concurrently: "
            f"expected version {expected_version}, found {actual_version}"
        )


def _name(value: object) -> str:
    return str(getattr(value, "value", value))


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__
