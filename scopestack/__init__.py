"""
scopestack - Scoped resources with guaranteed, ordered cleanup.

Complete integration of:
- Context: uniform enter/exit capability with suppression semantics
- with_context: run a block inside one context, exit exactly once
- ExitStack: aggregate context unwinding its members in LIFO order
- CallbackContext / IterContext: callables and generators as contexts
- Faults: structured failures carried inside Outcome values
"""

__version__ = "0.1.0"

# ============================================================================
# Faults & Outcomes
# ============================================================================

from .faults import (
    ConfigFault,
    ConfigInvalidFault,
    ContextFault,
    EnterFault,
    ErrorKind,
    Fault,
    FaultDomain,
    IterEnterFault,
    IterExitFault,
    NotFoundFault,
    OtherFault,
    ProtocolViolation,
    RestoreDirFault,
    Severity,
)
from .outcome import OK, Outcome

# ============================================================================
# Contexts
# ============================================================================

from .context import Context, with_context
from .callbacks import CallbackContext
from .iterctx import IterContext, itercontext
from .stack import ExitStack
from .util import DropContext, SwitchDir

# ============================================================================
# Configuration
# ============================================================================

from .config import ConfigLoader, ScopeConfig, configure, get_config


__all__ = [
    "__version__",
    # Faults
    "ConfigFault",
    "ConfigInvalidFault",
    "ContextFault",
    "EnterFault",
    "ErrorKind",
    "Fault",
    "FaultDomain",
    "IterEnterFault",
    "IterExitFault",
    "NotFoundFault",
    "OtherFault",
    "ProtocolViolation",
    "RestoreDirFault",
    "Severity",
    # Outcomes
    "OK",
    "Outcome",
    # Contexts
    "CallbackContext",
    "Context",
    "DropContext",
    "ExitStack",
    "IterContext",
    "SwitchDir",
    "itercontext",
    "with_context",
    # Configuration
    "ConfigLoader",
    "ScopeConfig",
    "configure",
    "get_config",
]
