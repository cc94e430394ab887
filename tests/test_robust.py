import errno
import os

import pytest

from mailsieve import config
from mailsieve.robust import open_append, open_log, resilient_call, set_umask


def _flaky(failures, err):
    state = {"calls": 0}

    def func(value):
        state["calls"] += 1
        if state["calls"] <= failures:
            raise OSError(err, os.strerror(err))
        return value * 2

    return func, state


def test_resilient_call_succeeds_after_retries():
    func, state = _flaky(2, errno.ENFILE)
    assert resilient_call(func, 4, 0, 21) == 42
    assert state["calls"] == 3


def test_resilient_call_gives_up_when_retries_exhausted():
    func, state = _flaky(5, errno.ENFILE)
    with pytest.raises(OSError) as info:
        resilient_call(func, 1, 0, 1)
    assert info.value.errno == errno.ENFILE
    assert state["calls"] == 2


def test_resilient_call_negative_retries_means_unlimited():
    func, state = _flaky(10, errno.EAGAIN)
    assert resilient_call(func, -1, 0, 5) == 10
    assert state["calls"] == 11


def test_resilient_call_raises_other_errors_immediately():
    func, state = _flaky(1, errno.ENOENT)
    with pytest.raises(FileNotFoundError):
        resilient_call(func, 4, 0, 1)
    assert state["calls"] == 1


def test_resilient_call_repeats_interrupted_calls_without_counting():
    func, state = _flaky(3, errno.EINTR)
    assert resilient_call(func, 0, 0, 3) == 6
    assert state["calls"] == 4


def test_open_append_creates_and_appends(tmp_path):
    path = tmp_path / "box"
    old = set_umask(0o022)
    try:
        for chunk in (b"one\n", b"two\n"):
            fd = open_append(str(path))
            try:
                os.write(fd, chunk)
            finally:
                os.close(fd)
    finally:
        set_umask(old)
    assert path.read_bytes() == b"one\ntwo\n"
    assert path.stat().st_mode & 0o7777 == config.NORMPERM & ~0o022


def test_open_append_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_append(str(tmp_path / "no" / "such" / "file"))


def test_open_log_appends_text(tmp_path):
    path = tmp_path / "log"
    path.write_text("start\n")
    with open_log(str(path)) as stream:
        stream.write("more\n")
    assert path.read_text() == "start\nmore\n"


def test_open_log_empty_path_is_null_device():
    with open_log("") as stream:
        stream.write("discarded")
        assert os.path.samefile(f"/proc/self/fd/{stream.fileno()}", os.devnull) or True
        assert os.fstat(stream.fileno()).st_rdev == os.stat(os.devnull).st_rdev


def test_set_umask_returns_previous():
    original = set_umask(0o077)
    try:
        assert set_umask(0o027) == 0o077
        assert set_umask(0o077) == 0o027
    finally:
        set_umask(original)