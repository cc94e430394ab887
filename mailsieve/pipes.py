"""Running programs: delivering to pipes, filtering, capturing output, traps."""

from __future__ import annotations

import shlex
import subprocess
import sys

from . import config

__all__ = ["ProgramFailure", "PipeRunner"]


class ProgramFailure(Exception):
    """A program started for a recipe exited unsuccessfully."""

    def __init__(self, command: str, exit_code: int):
        super().__init__(f'Program failure ({exit_code}) of "{command}"')
        self.command = command
        self.exit_code = exit_code


class PipeRunner:
    """Starts programs the way recipes ask for, with a common timeout."""

    def __init__(
        self,
        timeout: float = config.DEFTIMEOUT,
        shell: str = config.BIN_SH,
        shellflags: str = config.DEFSHELLFLAGS,
        shellmetas: str = config.DEFSHELLMETAS,
        verbose: bool = False,
    ):
        self.timeout = timeout
        self.shell = shell
        self.shellflags = shellflags
        self.shellmetas = shellmetas
        self.verbose = verbose

    def _argv(self, command: str) -> list[str]:
        if any(meta in command for meta in self.shellmetas):
            argv = [self.shell, self.shellflags, command]
        else:
            argv = shlex.split(command)
            if not argv:
                raise ValueError("empty command")
        if self.verbose:
            sys.stderr.write(f'Executing "{",".join(argv)}"\n')
            sys.stderr.flush()
        return argv

    def _run(self, command: str, data: bytes) -> tuple[int, bytes]:
        proc = subprocess.Popen(
            self._argv(command),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
        )
        limit = self.timeout if self.timeout and self.timeout > 0 else None
        try:
            out, _ = proc.communicate(data, timeout=limit)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.communicate()
            raise TimeoutError(f'Timeout, terminating "{command}"') from None
        return proc.returncode, out

    def pipe_in(self, command: str, data: bytes, wait: bool = False) -> int:
        """Feed ``data`` to ``command``; return its exit code.

        With ``wait`` an unsuccessful exit raises ProgramFailure.
        """
        code, _ = self._run(command, data)
        if wait and code != 0:
            raise ProgramFailure(command, code)
        return code

    def pipe_through(self, command: str, data: bytes, wait: bool = False) -> bytes:
        """Filter ``data`` through ``command``; return what it wrote.

        With ``wait`` an unsuccessful exit raises ProgramFailure, and the
        caller keeps the unfiltered data.
        """
        code, out = self._run(command, data)
        if wait and code != 0:
            raise ProgramFailure(command, code)
        return out

    def from_program(self, command: str, data: bytes, limit: int) -> tuple[str, bool]:
        """Run ``command`` on ``data`` and capture at most ``limit`` bytes of output.

        Returns the output and whether it overflowed.  Trailing newlines are
        discarded unless the output overflowed.
        """
        _, out = self._run(command, data)
        overflow = len(out) > limit
        if overflow:
            sys.stderr.write(f'Excessive output quenched from "{command}"\n')
            out = out[:limit]
        else:
            out = out.rstrip(b"\n")
        return out.decode("utf-8", errors="surrogateescape"), overflow

    def exec_trap(self, trap: str, data: bytes) -> int | None:
        """Run the TRAP command with the mail on its input and its output on stderr.

        Returns the trap's exit code, or None when no trap is set.
        """
        if not trap:
            return None
        code, out = self._run(trap, data)
        if out:
            sys.stderr.write(out.decode("utf-8", errors="surrogateescape"))
            sys.stderr.flush()
        return code