"""Recommend ownership and modes for the installed delivery binaries."""

from __future__ import annotations

import grp
import os
import stat
import sys
from collections.abc import Iterable

from . import config

__all__ = ["recommend", "main"]

EX_USAGE = 64

PERMIS = (
    stat.S_IRWXU
    | (stat.S_IRWXG & ~stat.S_IWGRP)
    | (stat.S_IRWXO & ~stat.S_IWOTH)
)
MAILSPOOLDIR = "/var/mail/"
CHECKFILES = ("/bin/mail", "/bin/lmail", "/usr/lib/sendmail", "/usr/lib/smail")


def _stat(path: str) -> os.stat_result | None:
    try:
        return os.stat(path)
    except OSError:
        return None


def recommend(
    binary: str,
    lockfile_binary: str,
    spooldir: str = MAILSPOOLDIR,
    checkfiles: Iterable[str] = CHECKFILES,
) -> list[str]:
    """Return the shell commands that set up ``binary`` and ``lockfile_binary``.

    A setgid mailer among ``checkfiles``, or a mail spool directory that is
    not world writable, decides whether the binaries should be setgid too.
    """
    if spooldir.endswith("/") and len(spooldir) > 1:
        spooldir = spooldir[:-1]
    sgid = 0
    gid: int | None = None
    for path in checkfiles:
        st = _stat(path)
        if st is not None and st.st_mode & stat.S_ISGID:
            sgid, gid = stat.S_ISGID, st.st_gid
            break
    chmdir = 0
    spool = _stat(spooldir)
    if spool is not None and not spool.st_mode & stat.S_IWOTH:
        if spool.st_mode & stat.S_ISVTX:
            chmdir = 2
        else:
            if not spool.st_mode & stat.S_IWGRP:
                chmdir = 1
            sgid, gid = stat.S_ISGID, spool.st_gid
    if spool is None or gid != spool.st_gid:
        sgid = 0

    lines = [f"chown root {binary}"]
    if sgid:
        try:
            group = grp.getgrgid(gid).gr_name
        except KeyError:
            group = str(gid)
        lines.append(f"chgrp {group} {binary} {lockfile_binary}")
    lines.append(f"chmod {sgid | stat.S_ISUID | PERMIS:o} {binary}")
    if sgid:
        lines.append(f"chmod {sgid | PERMIS:o} {lockfile_binary}")
    if chmdir and (sgid or chmdir != 1) and not config.SANE_VARMAIL:
        lines.append(f"chmod {'g' if chmdir == 1 else 'a'}+w {spooldir}/.")
    return lines


def main(argv: list[str] | None = None) -> int:
    """Print the recommended commands for the two binaries named in ``argv``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        sys.stderr.write("Please run this program via 'make recommend'\n")
        return EX_USAGE
    for line in recommend(args[0], args[1]):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())