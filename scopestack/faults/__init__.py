"""
ScopeFaults - Structured failures for scoped resources.

Every failure that travels through ``enter``/``exit`` is a typed fault with
a kind, a message and a severity. Faults are values first: enter failures
are returned inside an ``Outcome``. Only FATAL faults (protocol violations,
failed state restoration) are raised.

Core exports:
- Fault: Base fault class
- ErrorKind: Kind enumeration
- FaultDomain: Domain taxonomy
- Severity: Severity levels
"""

from .core import (
    DOMAIN_DEFAULTS,
    ErrorKind,
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    ContextFault,
    EnterFault,
    IterEnterFault,
    IterExitFault,
    NotFoundFault,
    OtherFault,
    ProtocolViolation,
    RestoreDirFault,
)

__all__ = [
    # Core types
    "DOMAIN_DEFAULTS",
    "ErrorKind",
    "Fault",
    "FaultDomain",
    "Severity",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "ContextFault",
    "EnterFault",
    "IterEnterFault",
    "IterExitFault",
    "NotFoundFault",
    "OtherFault",
    "ProtocolViolation",
    "RestoreDirFault",
]
