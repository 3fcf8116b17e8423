"""
ScopeFaults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- LIFECYCLE faults (enter failures)
- PROTOCOL faults (sequence-context misuse)
- IO faults (collaborator preconditions, state restoration)
- CONFIG faults
- FLOW faults (failures produced by a protected block)
"""

from typing import Any, Optional

from .core import ErrorKind, Fault, FaultDomain, Severity


# ============================================================================
# LIFECYCLE Faults
# ============================================================================

class ContextFault(Fault):
    """Base class for faults raised or returned by contexts."""

    kind_default = ErrorKind.OTHER

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[ErrorKind] = None,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            kind or self.kind_default,
            message,
            severity=severity,
            metadata=metadata,
            cause=cause,
        )


class EnterFault(ContextFault):
    """A resource failed to enter."""

    kind_default = ErrorKind.ENTER_ERROR


# ============================================================================
# PROTOCOL Faults
# ============================================================================

class IterEnterFault(ContextFault):
    """A sequence context was exhausted before producing its enter value."""

    kind_default = ErrorKind.ITER_ENTER_ERROR

    def __init__(self, message: str = "None returned on enter", **kwargs):
        super().__init__(message, **kwargs)


class ProtocolViolation(ContextFault):
    """
    A context behaved outside its contract.

    Always FATAL: the resource state is undefined afterwards, so this is
    raised and never carried inside an outcome.
    """

    kind_default = ErrorKind.ITER_EXIT_ERROR

    def __init__(self, message: str, **kwargs):
        kwargs["severity"] = Severity.FATAL
        super().__init__(message, **kwargs)


class IterExitFault(ProtocolViolation):
    """A sequence context yielded another value on exit."""

    def __init__(self, message: str = "Context iterator returned more than 1 value", **kwargs):
        super().__init__(message, **kwargs)


# ============================================================================
# IO Faults
# ============================================================================

class NotFoundFault(ContextFault):
    """A collaborator precondition failed (e.g. target is not a directory)."""

    kind_default = ErrorKind.NOT_FOUND

    def __init__(self, path: Any, **kwargs):
        super().__init__(
            f"Not a directory: {path}",
            metadata={"path": str(path), **kwargs.pop("metadata", {})},
            **kwargs,
        )


class RestoreDirFault(ContextFault):
    """Restoring the previous working directory failed."""

    kind_default = ErrorKind.OTHER

    def __init__(self, path: Any, **kwargs):
        super().__init__(
            f"Could not set directory: {path}",
            severity=Severity.FATAL,
            metadata={"path": str(path)},
            **kwargs,
        )


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            ErrorKind.CONFIG_ERROR,
            message,
            code=code,
            domain=FaultDomain.CONFIG,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# FLOW Faults
# ============================================================================

class OtherFault(ContextFault):
    """Generic failure, usually produced by a protected block."""

    kind_default = ErrorKind.OTHER

    @classmethod
    def wrap(cls, exc: BaseException) -> "OtherFault":
        """Wrap a foreign exception, keeping it as the cause."""
        return cls(
            str(exc) or exc.__class__.__name__,
            metadata={"exception": exc.__class__.__name__},
            cause=exc,
        )
