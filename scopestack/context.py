"""
Context capability and the scoped-execution helper.

A Context is anything that can be entered and exited. ``exit`` receives the
outcome of the protected block and returns whether it handled (suppressed)
that outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar

from .faults import Fault
from .outcome import OK, Outcome


C = TypeVar("C", bound="Context")


class Context(ABC):
    """
    Base class for scoped resources.

    Subclasses implement ``exit`` and optionally ``enter``. Every context
    can also be used with the ``with`` statement:

        with SwitchDir(path) as ctx:
            ...

    Entering raises the carried fault when ``enter`` fails; an exception
    leaving the block is suppressed exactly when ``exit`` returns True.
    """

    def enter(self) -> Outcome:
        """Acquire the resource. Default: always succeeds."""
        return OK

    @abstractmethod
    def exit(self, outcome: Outcome) -> bool:
        """
        Release the resource.

        Args:
            outcome: Outcome of the protected block

        Returns:
            True if the outcome was handled and must not propagate
        """

    def __enter__(self: C) -> C:
        self.enter().raise_for_failure()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        outcome = Outcome.from_exception(exc_val)
        if exc_val is not None and not isinstance(exc_val, Exception):
            # KeyboardInterrupt, SystemExit and friends always propagate
            self.exit(outcome)
            return False
        return bool(self.exit(outcome))


def with_context(context: C, block: Callable[[C], Any]) -> Outcome:
    """
    Run ``block`` inside ``context``.

    ``exit`` is skipped only when ``enter`` itself failed; once entered it
    runs exactly once with whatever the block produced.

    Args:
        context: Resource to enter
        block: Callable receiving the entered context. It may return an
            Outcome, a Fault or None (success), or raise.

    Returns:
        OK if the block succeeded or the context suppressed its failure,
        otherwise the block's failure outcome.

    Raises:
        Exception: A non-fault exception raised by the block, re-raised
            unchanged when the context does not suppress it.
        Fault: A FATAL fault raised by the block, always re-raised after
            exit has run.
    """
    entered = context.enter()
    if entered.is_failure:
        return entered

    raised: Optional[BaseException] = None
    try:
        result = Outcome.coerce(block(context))
    except Fault as fault:
        if fault.fatal:
            raised = fault
        result = Outcome.failure(fault)
    except Exception as exc:
        raised = exc
        result = Outcome.from_exception(exc)

    suppressed = context.exit(result)

    # Fatal faults are never swallowed, even by a suppressing context
    if isinstance(raised, Fault):
        raise raised
    if suppressed:
        return OK
    if raised is not None:
        raise raised
    return result
