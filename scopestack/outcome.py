"""
Outcome - the value passed through enter/exit.

An outcome is either success or a failure carrying a Fault. It is frozen so
every member of an ExitStack sees the same value during an unwind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .faults import ErrorKind, Fault, OtherFault


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Success, or a failure carrying a fault.

    Usage:
        ```python
        Outcome.ok()
        Outcome.error(ErrorKind.OTHER, "boom")
        Outcome.failure(EnterFault("no lock"))
        ```
    """

    fault: Optional[Fault] = None

    @classmethod
    def ok(cls) -> Outcome:
        return OK

    @classmethod
    def failure(cls, fault: Fault) -> Outcome:
        if not isinstance(fault, Fault):
            raise TypeError(f"Outcome.failure expects a Fault, got {type(fault).__name__}")
        return cls(fault)

    @classmethod
    def error(cls, kind: ErrorKind, message: str, **kwargs: Any) -> Outcome:
        """Build a failure from a kind and a message."""
        return cls(Fault(kind, message, **kwargs))

    @classmethod
    def from_exception(cls, exc: Optional[BaseException]) -> Outcome:
        """
        Convert an exception into an outcome.

        Faults are carried as-is; anything else is wrapped in an OtherFault
        whose cause is the original exception.
        """
        if exc is None:
            return OK
        if isinstance(exc, Fault):
            return cls(exc)
        return cls(OtherFault.wrap(exc))

    @classmethod
    def coerce(cls, value: Any) -> Outcome:
        """Normalize a block or iterator result into an outcome."""
        if value is None:
            return OK
        if isinstance(value, Outcome):
            return value
        if isinstance(value, Fault):
            return cls(value)
        raise TypeError(
            f"Expected Outcome, Fault or None, got {type(value).__name__}"
        )

    @property
    def is_ok(self) -> bool:
        return self.fault is None

    @property
    def is_failure(self) -> bool:
        return self.fault is not None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.fault.kind if self.fault is not None else None

    @property
    def message(self) -> Optional[str]:
        return self.fault.message if self.fault is not None else None

    def raise_for_failure(self) -> None:
        """Raise the carried fault, if any."""
        if self.fault is not None:
            raise self.fault

    def __bool__(self) -> bool:
        return self.fault is None

    def __repr__(self) -> str:
        if self.fault is None:
            return "Outcome(ok)"
        return f"Outcome(failure={self.fault!r})"


OK = Outcome()
