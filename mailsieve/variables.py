"""Environment and variable handling for the mail filter."""

from __future__ import annotations

import os
import socket
import sys
from collections.abc import Iterable, Mapping
from typing import TextIO

from . import config
from .textutil import strtol

__all__ = [
    "parse_env_int",
    "alphanum",
    "cleanup_environment",
    "VariableStore",
]

_WHITESPACE = " \t\n\v\f\r"


def parse_env_int(default: int, text: str) -> int:
    """Interpret ``text`` as a number or a boolean word.

    Decimal numbers are taken as they are.  Otherwise, after leading white
    space, ``on``/``y``/``t``/``e`` give 1, ``off``/``n``/``f``/``d`` give 0,
    ``a`` gives 2 and anything else gives ``default``.
    """
    value, end = strtol(text, 10)
    if end:
        return value
    word = text.lstrip(_WHITESPACE)
    if not word:
        return default
    first = word[0].lower()
    if first == "o":
        if word[1:2].lower() == "n":
            return 1
        if word[1:3].lower() == "ff":
            return 0
        return default
    if first in "yte":
        return 1
    if first in "nfd":
        return 0
    if first == "a":
        return 2
    return default


def alphanum(c: str) -> int:
    """Return 2 for an ASCII digit, 1 for an ASCII letter or underscore, else 0."""
    if len(c) == 1 and "0" <= c <= "9":
        return 2
    if len(c) == 1 and ("a" <= c <= "z" or "A" <= c <= "Z" or c == "_"):
        return 1
    return 0


def cleanup_environment(environ: Iterable[str], preserve: bool) -> list[str]:
    """Sanitise a list of ``NAME=value`` entries.

    Unless ``preserve`` is true only the entries named in the keep list
    survive.  Then entries without ``=``, repeated names and names starting
    with a dynamic-loader prefix are dropped.
    """
    env = list(environ)
    if not preserve:
        kept = 0
        for keep in config.KEEPENV:
            length = len(keep)
            wildcard = keep.endswith("_")
            index = kept
            while index < len(env):
                entry = env[index]
                if entry.startswith(keep) and (wildcard or entry[length:length + 1] == "="):
                    env[index], env[kept] = env[kept], entry
                    kept += 1
                    if not wildcard:
                        break
                index += 1
        del env[kept:]
    index = 0
    while index < len(env):
        entry = env[index]
        eq = entry.find("=")
        drop = eq < 0
        if not drop:
            prefix = entry[: eq + 1]
            drop = any(earlier.startswith(prefix) for earlier in env[:index])
        if not drop:
            drop = any(entry.startswith(bad) for bad in config.LDENV)
        if drop:
            env[index] = env[-1]
            env.pop()
            continue
        index += 1
    return env


class VariableStore:
    """The filter's environment together with the variables that carry meaning."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self.environ: dict[str, str] = dict(os.environ if environ is None else environ)
        self.numbers: dict[str, int] = dict(config.NUMERIC_DEFAULTS)
        self.strings: dict[str, str] = dict(config.STRING_DEFAULTS)
        self.linebuf = config.DEFLINEBUF
        self.args: list[str] = []
        self.log: TextIO = sys.stderr
        self.changed_dir = False
        self.host_mismatch = False
        self._exit_code_set = False
        self._last: str | None = None

    def putenv(self, assignment: str) -> str:
        """Assign ``NAME=value`` or, without ``=``, remove ``NAME``.

        Returns the assigned value, or an empty string on removal.
        """
        name, eq, value = assignment.partition("=")
        self.environ.pop(name, None)
        if not eq:
            return ""
        self.environ[name] = value
        self._last = name
        return value

    def getenv(self, name: str) -> str:
        """Return the value of ``name``, or an empty string when it is unset."""
        return self.environ.get(name, "")

    def set_value(self, name: str, value: str) -> str:
        """Assign ``value`` to ``name`` without any side effects."""
        return self.putenv(f"{name}={value}")

    def append_to_last(self, value: str) -> str:
        """Append a space and ``value`` to the most recently assigned variable."""
        if self._last is None or self._last not in self.environ:
            raise LookupError("no variable has been assigned yet")
        self.environ[self._last] += " " + value
        return self.environ[self._last]

    def apply(self, name: str, value: str) -> None:
        """Assign ``value`` to ``name`` and carry out what the variable means."""
        self.set_value(name, value)
        if name == "LINEBUF":
            self.linebuf = max(parse_env_int(0, value), config.MINLINEBUF)
        elif name == "MAILDIR":
            try:
                os.chdir(value)
            except OSError:
                self._write_log(f'Couldn\'t chdir to "{value}"\n')
                self.set_value("MAILDIR", config.CURDIR)
            self.changed_dir = True
        elif name == "LOGFILE":
            self._open_log(value)
        elif name == "LOG":
            self._write_log(value)
        elif name == "EXITCODE":
            self._exit_code_set = True
        elif name == "SHIFT":
            count = parse_env_int(0, value)
            if count > 0:
                del self.args[:count]
        elif name == "UMASK":
            os.umask(strtol(value, 8)[0] & 0o7777)
        elif name == "HOST":
            hostname = socket.gethostname()
            if value != hostname:
                self.host_mismatch = True
            self.set_value("HOST", hostname)
        else:
            if name in self.numbers:
                self.numbers[name] = parse_env_int(self.numbers[name], value)
            if name in self.strings:
                self.strings[name] = value

    def set_exit_code(self, trap_is_set: bool, retval: int) -> tuple[int, int]:
        """Settle the exit code before a trap runs.

        Returns ``(forced, retval)``: ``forced`` is the EXITCODE the user set
        (-2 when it is set but not a number) or -1 when none was set; a
        non-negative ``forced`` replaces ``retval``.  Without a user EXITCODE
        and with a trap, EXITCODE is set to ``retval`` for the trap to see.
        """
        current = self.environ.get("EXITCODE")
        if self._exit_code_set and current is not None:
            forced = parse_env_int(-2, current)
            if forced >= 0:
                retval = forced
        else:
            forced = -1
            if trap_is_set:
                self.set_value("EXITCODE", str(retval))
        return forced, retval

    def _write_log(self, text: str) -> None:
        self.log.write(text)
        self.log.flush()

    def _open_log(self, path: str) -> None:
        target = path or os.devnull
        try:
            stream = open(target, "a", encoding="utf-8")
        except OSError:
            self._write_log(f'Error while writing to "{target}"\n')
            return
        if self.log not in (sys.stderr, sys.stdout):
            self.log.close()
        self.log = stream