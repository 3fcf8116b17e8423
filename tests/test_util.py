"""
Ready-made contexts (util.py): SwitchDir, DropContext.
"""

import logging
import os
from pathlib import Path

import pytest

from scopestack import (
    OK,
    DropContext,
    ErrorKind,
    ExitStack,
    NotFoundFault,
    Outcome,
    RestoreDirFault,
    SwitchDir,
    with_context,
)


def cwd() -> Path:
    return Path.cwd().resolve()


# ============================================================================
# SwitchDir
# ============================================================================

class TestSwitchDir:

    def test_changes_and_restores(self, tmp_dirs):
        start = cwd()
        target, _ = tmp_dirs
        assert start != target

        seen = []
        result = with_context(SwitchDir(target), lambda ctx: seen.append(cwd()))

        assert result is OK
        assert seen == [target]
        assert cwd() == start

    def test_restores_after_failure(self, tmp_dirs):
        start = cwd()
        target, _ = tmp_dirs

        def block(ctx):
            assert cwd() == target
            return Outcome.error(ErrorKind.OTHER, "block failed")

        result = with_context(SwitchDir(target), block)
        assert result.message == "block failed"
        assert cwd() == start

    def test_restores_after_exception(self, tmp_dirs):
        start = cwd()
        target, _ = tmp_dirs
        with pytest.raises(RuntimeError):
            with SwitchDir(target):
                raise RuntimeError("inside")
        assert cwd() == start

    def test_same_directory_is_noop(self, restore_cwd):
        start = cwd()
        ctx = SwitchDir(start)
        assert ctx.enter() is OK
        assert cwd() == start
        assert ctx.exit(OK) is False
        assert cwd() == start

    def test_not_a_directory(self, tmp_path, restore_cwd):
        start = cwd()
        missing = tmp_path / "missing"
        with pytest.raises(NotFoundFault) as exc_info:
            SwitchDir(missing)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert cwd() == start

    def test_file_is_not_a_directory(self, tmp_path, restore_cwd):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(NotFoundFault):
            SwitchDir(f)

    def test_accepts_str_paths(self, tmp_dirs):
        target, _ = tmp_dirs
        with SwitchDir(str(target)):
            assert cwd() == target

    def test_enter_failure_when_target_vanishes(self, tmp_path, restore_cwd):
        target = tmp_path / "vanishing"
        target.mkdir()
        ctx = SwitchDir(target)
        target.rmdir()

        outcome = ctx.enter()
        assert outcome.kind is ErrorKind.ENTER_ERROR
        assert "Could not set directory" in outcome.message

    def test_restore_failure_is_fatal(self, tmp_dirs, caplog):
        origin, target = tmp_dirs
        os.chdir(origin)
        ctx = SwitchDir(target)
        assert ctx.enter() is OK

        origin.rmdir()
        with caplog.at_level(logging.CRITICAL, logger="scopestack.util"):
            with pytest.raises(RestoreDirFault) as exc_info:
                ctx.exit(OK)
        assert exc_info.value.fatal
        assert "Could not set directory" in caplog.text

    def test_nested_switches_in_stack(self, tmp_dirs):
        start = cwd()
        first, second = tmp_dirs
        stack = ExitStack()
        stack.enter_context(SwitchDir(first))
        assert cwd() == first
        stack.enter_context(SwitchDir(second))
        assert cwd() == second
        stack.close()
        assert cwd() == start


# ============================================================================
# DropContext
# ============================================================================

class Closeable:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed += 1


class TestDropContext:

    def test_closes_on_exit(self):
        obj = Closeable()
        ctx = DropContext(obj)
        assert ctx.exit(OK) is False
        assert obj.closed == 1
        assert ctx.released

    def test_second_exit_is_noop(self):
        obj = Closeable()
        ctx = DropContext(obj)
        ctx.exit(OK)
        ctx.exit(OK)
        assert obj.closed == 1

    def test_custom_release(self):
        released = []
        ctx = DropContext("handle", release=released.append)
        ctx.exit(OK)
        assert released == ["handle"]

    def test_requires_close_or_release(self):
        with pytest.raises(TypeError):
            DropContext(object())

    def test_release_failure_is_logged_not_raised(self, caplog):
        def explode(obj):
            raise OSError("device busy")

        ctx = DropContext("handle", release=explode)
        with caplog.at_level(logging.WARNING, logger="scopestack.util"):
            assert ctx.exit(OK) is False
        assert "device busy" in caplog.text

    def test_real_file(self, tmp_path):
        fh = open(tmp_path / "data.txt", "w")
        stack = ExitStack()
        stack.enter_context(DropContext(fh))
        fh.write("hello")
        stack.close()
        assert fh.closed
        assert (tmp_path / "data.txt").read_text() == "hello"
