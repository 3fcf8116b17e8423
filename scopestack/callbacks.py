"""
CallbackContext - ad-hoc cleanup logic adapted to the Context capability.
"""

from __future__ import annotations

from typing import Callable

from .context import Context
from .outcome import Outcome


ExitCallback = Callable[[Outcome], bool]


class CallbackContext(Context):
    """
    Context whose exit runs a stored callable.

    The callable receives the outcome and returns whether it handled it.
    Copies share the same callable but are distinct registrations.
    """

    __slots__ = ("callback",)

    def __init__(self, callback: ExitCallback):
        if not callable(callback):
            raise TypeError(f"CallbackContext expects a callable, got {type(callback).__name__}")
        self.callback = callback

    def exit(self, outcome: Outcome) -> bool:
        return bool(self.callback(outcome))

    def copy(self) -> CallbackContext:
        return CallbackContext(self.callback)

    __copy__ = copy

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackContext({name})"
