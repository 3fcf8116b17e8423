"""
scopestack Testing - recording contexts for assertions.

Provides :class:`ExitLog`, an ordered recorder shared between contexts, and
:class:`RecordingContext`, a context that logs its enter/exit calls and can
be told to fail on enter or to suppress on exit.

Usage::

    log = ExitLog()
    stack = ExitStack()
    for name in ("a", "b", "c"):
        stack.enter_context(RecordingContext(name, log))
    stack.close()

    assert log.exits() == ["c", "b", "a"]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .context import Context
from .faults import EnterFault
from .outcome import OK, Outcome


@dataclass
class LoggedEvent:
    """One recorded enter or exit call."""
    name: str
    action: str
    outcome: Optional[Outcome] = None

    def __repr__(self) -> str:
        return f"<LoggedEvent {self.action} {self.name!r}>"


@dataclass
class ExitLog:
    """Ordered record of context events."""
    events: List[LoggedEvent] = field(default_factory=list)

    def record(self, name: str, action: str, outcome: Optional[Outcome] = None) -> None:
        self.events.append(LoggedEvent(name, action, outcome))

    def enters(self) -> List[str]:
        return [e.name for e in self.events if e.action == "enter"]

    def exits(self) -> List[str]:
        return [e.name for e in self.events if e.action == "exit"]

    def count(self, name: str, action: str = "exit") -> int:
        return sum(1 for e in self.events if e.name == name and e.action == action)

    def outcomes(self, name: str) -> List[Outcome]:
        return [e.outcome for e in self.events if e.name == name and e.action == "exit"]

    def clear(self) -> None:
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)


class RecordingContext(Context):
    """
    Context recording its calls into an ExitLog.

    Args:
        name: Label written to the log
        log: Shared recorder
        fail_enter: Make ``enter`` return an ENTER_ERROR failure
        suppress: Value returned by ``exit``
    """

    def __init__(
        self,
        name: str,
        log: Optional[ExitLog] = None,
        *,
        fail_enter: bool = False,
        suppress: bool = False,
    ):
        self.name = name
        self.log = log if log is not None else ExitLog()
        self.fail_enter = fail_enter
        self.suppress = suppress
        self.active = False

    def enter(self) -> Outcome:
        self.log.record(self.name, "enter")
        if self.fail_enter:
            return Outcome.failure(EnterFault(f"{self.name} refused to enter"))
        self.active = True
        return OK

    def exit(self, outcome: Outcome) -> bool:
        self.log.record(self.name, "exit", outcome)
        self.active = False
        return self.suppress

    def __repr__(self) -> str:
        return f"RecordingContext({self.name!r})"
