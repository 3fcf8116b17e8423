"""
ScopeFaults - Core types and fault taxonomy.

Defines:
- ErrorKind (flat kind enumeration carried by every fault)
- Severity levels
- FaultDomain (explicit fault domains)
- Fault base class (structured fault objects)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


# ============================================================================
# Kind, Severity & Domain
# ============================================================================

class ErrorKind(str, Enum):
    """
    Kind tag carried by every fault.

    The kind is fixed when the fault is built and never changes afterwards.
    """
    ENTER_ERROR = "enter_error"            # Resource acquisition failed
    ITER_ENTER_ERROR = "iter_enter_error"  # Sequence exhausted before enter
    ITER_EXIT_ERROR = "iter_exit_error"    # Sequence yielded again on exit
    NOT_FOUND = "not_found"                # Collaborator precondition failed
    CONFIG_ERROR = "config_error"          # Invalid configuration
    OTHER = "other"                        # Generic / user failure


class Severity(str, Enum):
    """
    Fault severity levels.

    FATAL faults are never folded into an outcome value; they are raised.
    """
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Fault domains (taxonomy).

    Identifies the functional area where a fault occurred.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


# Standard Domains
FaultDomain.LIFECYCLE = FaultDomain("lifecycle", "Resource enter/exit failures")
FaultDomain.PROTOCOL = FaultDomain("protocol", "Context protocol violations")
FaultDomain.IO = FaultDomain("io", "Operating system state")
FaultDomain.CONFIG = FaultDomain("config", "Configuration errors")
FaultDomain.FLOW = FaultDomain("flow", "Failures produced by a protected block")


# Domain defaults
DOMAIN_DEFAULTS = {
    FaultDomain.LIFECYCLE: {"severity": Severity.ERROR},
    FaultDomain.PROTOCOL: {"severity": Severity.FATAL},
    FaultDomain.IO: {"severity": Severity.ERROR},
    FaultDomain.CONFIG: {"severity": Severity.ERROR},
    FaultDomain.FLOW: {"severity": Severity.ERROR},
}

# Domain a kind belongs to when none is given explicitly
KIND_DOMAINS = {
    ErrorKind.ENTER_ERROR: FaultDomain.LIFECYCLE,
    ErrorKind.ITER_ENTER_ERROR: FaultDomain.PROTOCOL,
    ErrorKind.ITER_EXIT_ERROR: FaultDomain.PROTOCOL,
    ErrorKind.NOT_FOUND: FaultDomain.IO,
    ErrorKind.CONFIG_ERROR: FaultDomain.CONFIG,
    ErrorKind.OTHER: FaultDomain.FLOW,
}


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class - a kind plus a message.

    A fault is a first-class value: it travels inside an ``Outcome`` through
    ``enter``/``exit``, and it can also be raised like any exception.

    Attributes:
        kind: ErrorKind tag (read-only)
        message: Human-readable summary
        code: Stable machine-readable identifier (defaults to the kind name)
        domain: Fault domain
        severity: Fault severity
        metadata: Additional context data
        cause: Exception this fault wraps, if any

    Example:
        ```python
        fault = Fault(ErrorKind.OTHER, "disk full")
        outcome = Outcome.failure(fault)
        ```
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        code: Optional[str] = None,
        domain: Optional[FaultDomain] = None,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"{self.__class__.__name__} expects an ErrorKind, got {kind!r}")

        super().__init__(message)

        self._kind = kind
        self.message = message
        self.code = code or kind.name
        self.domain = domain or KIND_DOMAINS[kind]

        defaults = DOMAIN_DEFAULTS.get(self.domain, {"severity": Severity.ERROR})
        self.severity = severity or defaults["severity"]

        self.metadata = metadata or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def fatal(self) -> bool:
        return self.severity == Severity.FATAL

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self._kind.name}, "
            f"message={self.message!r}, severity={self.severity.value})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Fault):
            return NotImplemented
        return self._kind == other._kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self._kind, self.message))

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize fault to dictionary.

        Returns:
            Dictionary representation suitable for logging
        """
        return {
            "kind": self._kind.value,
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metadata": self.metadata,
            "cause": repr(self.cause) if self.cause is not None else None,
        }
