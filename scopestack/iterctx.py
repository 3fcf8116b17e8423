"""
IterContext - contexts driven by a two-step iterator.

The first value pulled from the iterator is the enter outcome. The pull
made on exit must exhaust it. With a generator this reads naturally:

    @itercontext
    def locked(lock):
        lock.acquire()
        outcome = yield
        lock.release()

``outcome`` is the value passed to ``exit``. Returning a truthy value from
the generator suppresses that outcome.
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Iterator

from .context import Context
from .faults import (
    EnterFault,
    ErrorKind,
    Fault,
    IterEnterFault,
    IterExitFault,
    ProtocolViolation,
)
from .outcome import Outcome


logger = logging.getLogger("scopestack.iterctx")


class IterContext(Context):
    """
    Context whose enter and exit steps come from one iterator.

    Enter advances once; an immediately exhausted iterator is an
    ITER_ENTER_ERROR failure. Exit advances once more and expects
    exhaustion; any further value raises IterExitFault.
    """

    __slots__ = ("_iterator", "_state")

    def __init__(self, iterator: Iterator[Any]):
        self._iterator = iter(iterator)
        self._state = "idle"

    @property
    def state(self) -> str:
        return self._state

    def enter(self) -> Outcome:
        if self._state != "idle":
            raise ProtocolViolation(
                f"IterContext entered twice (state={self._state})",
                kind=ErrorKind.ITER_ENTER_ERROR,
            )
        self._state = "entered"

        try:
            value = next(self._iterator)
        except StopIteration:
            self._state = "exited"
            return Outcome.failure(IterEnterFault())
        except Fault as fault:
            self._state = "exited"
            if fault.fatal:
                raise
            return Outcome.failure(fault)
        except Exception as exc:
            self._state = "exited"
            return Outcome.failure(EnterFault(f"Iterator failed on enter: {exc}", cause=exc))

        try:
            outcome = Outcome.coerce(value)
        except TypeError:
            self._state = "exited"
            self._close()
            raise
        if outcome.is_failure:
            # Nothing to unwind for a resource that never finished entering
            self._state = "exited"
            self._close()
        return outcome

    def exit(self, outcome: Outcome) -> bool:
        if self._state != "entered":
            raise ProtocolViolation(f"IterContext exited while {self._state}")
        self._state = "exited"

        try:
            if inspect.isgenerator(self._iterator):
                self._iterator.send(outcome)
            else:
                next(self._iterator)
        except StopIteration as stop:
            return bool(stop.value)

        fault = IterExitFault()
        logger.critical(f"{fault.code}: {fault.message}", extra={"fault": fault.to_dict()})
        self._close()
        raise fault

    def _close(self) -> None:
        close = getattr(self._iterator, "close", None)
        if close is not None:
            close()

    def __repr__(self) -> str:
        return f"IterContext({self._iterator!r}, state={self._state})"


def itercontext(func: Callable[..., Iterator[Any]]) -> Callable[..., IterContext]:
    """
    Decorator turning a generator function into an IterContext factory.

    Each call returns a fresh, not yet entered IterContext.
    """

    @functools.wraps(func)
    def factory(*args: Any, **kwargs: Any) -> IterContext:
        return IterContext(func(*args, **kwargs))

    return factory
