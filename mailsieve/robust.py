"""System calls that ride out temporary resource shortages."""

from __future__ import annotations

import errno
import os
import time
from collections.abc import Callable
from typing import TextIO, TypeVar

from . import config

__all__ = ["resilient_call", "open_append", "open_log", "set_umask"]

T = TypeVar("T")

_RESOURCE_ERRNOS = frozenset({errno.ENFILE, errno.EMFILE, errno.EAGAIN, errno.ENOMEM})


def resilient_call(func: Callable[..., T], retries: int, suspend: float, *args) -> T:
    """Call ``func(*args)``, retrying while the system is short of resources.

    An interrupted call is always repeated.  A call failing for lack of file
    table slots, processes or memory is retried ``retries`` more times (for
    ever when ``retries`` is negative), sleeping ``suspend`` seconds in
    between.  Any other error, or the last one, is raised.
    """
    left = retries
    while True:
        try:
            return func(*args)
        except InterruptedError:
            continue
        except (OSError, MemoryError) as exc:
            if isinstance(exc, OSError) and exc.errno not in _RESOURCE_ERRNOS:
                raise
            if left == 0:
                raise
            if left > 0:
                left -= 1
            if suspend > 0:
                time.sleep(suspend)


def open_append(path: str, retries: int = config.DEFNORESRETRY) -> int:
    """Open ``path`` for appending, creating it if needed; return the descriptor."""
    return resilient_call(
        os.open,
        retries,
        config.DEFSUSPEND,
        path,
        os.O_WRONLY | os.O_APPEND | os.O_CREAT,
        config.NORMPERM,
    )


def open_log(path: str) -> TextIO:
    """Open the log file ``path`` for appending; an empty path means the null device.

    Raises OSError when the file cannot be opened, so the caller can keep
    its old log.
    """
    target = path or os.devnull
    fd = open_append(target)
    try:
        return os.fdopen(fd, "a", encoding="utf-8", errors="surrogateescape")
    except BaseException:
        os.close(fd)
        raise


def set_umask(mask: int) -> int:
    """Set the process umask to ``mask``; return the previous one."""
    return os.umask(mask & 0o7777)