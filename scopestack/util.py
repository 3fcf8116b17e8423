"""
Ready-made contexts: working-directory switch and release adapters.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .context import Context
from .faults import EnterFault, NotFoundFault, RestoreDirFault
from .outcome import OK, Outcome


logger = logging.getLogger("scopestack.util")


# ============================================================================
# SwitchDir
# ============================================================================

class SwitchDir(Context):
    """
    Switch the process working directory for the duration of a scope.

    Raises:
        NotFoundFault: At construction, if ``path`` is not a directory
    """

    def __init__(self, path: Union[str, os.PathLike]):
        path = Path(path)
        if not path.is_dir():
            raise NotFoundFault(path)

        self.new_dir = path
        self.original_dir = Path.cwd()

    def enter(self) -> Outcome:
        try:
            self.original_dir = Path.cwd()
        except OSError as exc:
            return Outcome.failure(EnterFault("Could not get current directory", cause=exc))

        # Nothing to do when already there
        if self._same(self.original_dir, self.new_dir):
            return OK

        try:
            os.chdir(self.new_dir)
        except OSError as exc:
            return Outcome.failure(
                EnterFault(f"Could not set directory: {self.new_dir}", cause=exc)
            )
        return OK

    def exit(self, outcome: Outcome) -> bool:
        try:
            if not self._same(Path.cwd(), self.original_dir):
                os.chdir(self.original_dir)
        except OSError as exc:
            fault = RestoreDirFault(self.original_dir, cause=exc)
            logger.critical(f"{fault.code}: {fault.message}", extra={"fault": fault.to_dict()})
            raise fault
        return False

    @staticmethod
    def _same(a: Path, b: Path) -> bool:
        try:
            return os.path.samefile(a, b)
        except OSError:
            return False

    def __repr__(self) -> str:
        return f"SwitchDir({str(self.new_dir)!r})"


# ============================================================================
# DropContext
# ============================================================================

class DropContext(Context):
    """
    Release an object when the scope ends.

    Calls ``release(obj)`` if given, otherwise ``obj.close()``. The object
    reference is dropped afterwards, so later exits do nothing. Release
    failures are logged and swallowed: exit can only report suppression.
    """

    def __init__(self, obj: Any, release: Optional[Callable[[Any], Any]] = None):
        if release is None and not callable(getattr(obj, "close", None)):
            raise TypeError(
                f"{type(obj).__name__} has no close() method; pass release="
            )
        self.obj = obj
        self.release = release

    @property
    def released(self) -> bool:
        return self.obj is None

    def exit(self, outcome: Outcome) -> bool:
        obj, self.obj = self.obj, None
        if obj is None:
            return False

        try:
            if self.release is not None:
                self.release(obj)
            else:
                obj.close()
        except Exception as e:
            logger.warning(f"Release of {type(obj).__name__} failed: {e}")
        return False

    def __repr__(self) -> str:
        target = type(self.obj).__name__ if self.obj is not None else "released"
        return f"DropContext({target})"
