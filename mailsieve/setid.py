"""Start a shell as another user, for installation scripts run by root."""

from __future__ import annotations

import os
import pwd
import stat
import sys

__all__ = ["check_directory", "main"]

EX_USAGE = 64
EX_UNAVAILABLE = 69
EX_OSERR = 71
CHECK_FILE = "install.sh"


def check_directory(path: str, uid: int, gid: int, username: str) -> os.stat_result:
    """Check that ``path`` is fully accessible to its owner, ``uid`` and ``gid``.

    Returns the directory's status; raises ValueError describing the problem.
    """
    try:
        st = os.stat(path)
    except OSError:
        st = None
    if st is None or (st.st_mode & stat.S_IRWXU) != stat.S_IRWXU:
        raise ValueError(f"Can't access {path}, are you sure it's there?")
    if st.st_uid != uid:
        raise ValueError(
            f"{path} is owned by uid {st.st_uid}!={username}, please fix this first"
        )
    if st.st_gid != gid:
        raise ValueError(
            f"{path} is owned by gid {st.st_gid}!={gid}, please fix this first"
        )
    return st


def main(argv: list[str] | None = None) -> int:
    """Become ``user`` and start $SHELL, optionally after checking a directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    entry = None
    if len(args) in (1, 2) and os.geteuid() == 0:
        try:
            entry = pwd.getpwnam(args[0])
        except KeyError:
            entry = None
    if entry is None:
        sys.stderr.write("Usage: setid user [directory]\n")
        return EX_USAGE
    try:
        os.initgroups(args[0], entry.pw_gid)
        os.setgid(entry.pw_gid)
        os.setuid(entry.pw_uid)
    except OSError:
        return EX_OSERR
    try:
        with open(CHECK_FILE, "r"):
            pass
    except OSError:
        sys.stderr.write(
            f"Please make sure {args[0]} can read & access the source tree\n"
        )
        return EX_UNAVAILABLE
    if len(args) == 2:
        try:
            check_directory(args[1], entry.pw_uid, entry.pw_gid, entry.pw_name)
        except ValueError as exc:
            sys.stderr.write(f"{exc}\n")
            return EX_UNAVAILABLE
    shell = os.environ.get("SHELL")
    if shell:
        try:
            os.execv(shell, [shell])
        except OSError:
            pass
    return EX_UNAVAILABLE


if __name__ == "__main__":
    sys.exit(main())