"""
ExitStack - an aggregate context unwinding its members in LIFO order.

Members are held by reference, so a caller can keep the handle it
registered (or the one ``callback`` returns) and later ``remove`` exactly
that registration. Membership is decided by identity, never by equality.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .callbacks import CallbackContext, ExitCallback
from .config import get_config
from .context import Context
from .faults import Fault
from .outcome import OK, Outcome


logger = logging.getLogger("scopestack.stack")


class ExitStack(Context):
    """
    Ordered collection of entered contexts.

    The stack is itself a Context, so stacks nest. Unwinding calls every
    member's ``exit`` with the same outcome, most recent registration first,
    and reports suppression if any member suppressed.

    ``close`` empties the stack but leaves it usable: contexts can be
    registered again afterwards. An empty stack is still truthy; use
    ``len(stack)`` to test for members.

    Usage:
        ```python
        stack = ExitStack()
        outcome = stack.enter_context(SwitchDir(build_dir))
        if outcome.is_failure:
            stack.close()
            return outcome
        stack.callback(lambda outcome: report(outcome))
        ...
        stack.close()
        ```
    """

    __slots__ = ("_stack",)

    def __init__(self):
        self._stack: List[Context] = []

    def enter_context(self, context: Context) -> Outcome:
        """
        Enter ``context`` and register it.

        A context that fails to enter is not registered. Contexts entered
        earlier stay registered; callers unwind them (e.g. by entering the
        stack itself with ``with``).

        Returns:
            OK, or the failure returned by ``context.enter()``
        """
        outcome = context.enter()
        if outcome.is_failure:
            logger.debug(f"enter failed for {context!r}: {outcome.fault}")
            return outcome

        self._stack.append(context)
        if get_config().trace_unwind:
            logger.debug(f"entered {context!r} (depth={len(self._stack)})")
        return OK

    def push(self, context: Context) -> None:
        """Register an already entered context without entering it."""
        self._stack.append(context)

    def remove(self, context: Context) -> None:
        """
        Drop the first registration of ``context`` without exiting it.

        The caller becomes responsible for the context's cleanup.
        """
        for index, member in enumerate(self._stack):
            if member is context:
                del self._stack[index]
                return
        logger.debug(f"remove: {context!r} is not registered")

    def callback(self, func: ExitCallback) -> CallbackContext:
        """
        Register ``func`` to run on unwind.

        Returns:
            The registered CallbackContext, usable with ``remove``
        """
        context = CallbackContext(func)
        self.push(context)
        return context

    def pop_all(self) -> ExitStack:
        """
        Transfer every registration to a new stack.

        This stack is left empty and no longer responsible for them.
        """
        new_stack = ExitStack()
        new_stack._stack, self._stack = self._stack, []
        return new_stack

    def _rollback(self, outcome: Outcome) -> bool:
        """
        Exit every member, most recent first.

        Each member is popped before its exit runs, so no exit runs twice
        even if a fatal fault escapes mid-unwind. An ordinary exception from
        one exit is logged and the unwind continues; the first such error is
        re-raised once every member has been exited.
        """
        trace = get_config().trace_unwind
        handled = False
        first_error: Optional[Exception] = None

        while self._stack:
            context = self._stack.pop()
            if trace:
                logger.debug(f"exiting {context!r} with {outcome!r}")
            try:
                if context.exit(outcome):
                    handled = True
            except Exception as exc:
                if isinstance(exc, Fault) and exc.fatal:
                    raise
                logger.error(f"Exit of {context!r} failed: {exc}")
                if first_error is None:
                    first_error = exc

        if first_error is not None:
            raise first_error

        if handled and outcome.is_failure:
            logger.warning(f"Unwind suppressed {outcome.fault}")
        return handled

    def close(self) -> None:
        """Unwind every member with a success outcome."""
        self._rollback(OK)

    def exit(self, outcome: Outcome) -> bool:
        handled = self._rollback(outcome)
        self._stack = []
        return handled

    def __len__(self) -> int:
        return len(self._stack)

    def __contains__(self, context: object) -> bool:
        return any(member is context for member in self._stack)

    def __iter__(self) -> Iterator[Context]:
        return iter(list(self._stack))

    def __repr__(self) -> str:
        return f"ExitStack(size={len(self._stack)})"
