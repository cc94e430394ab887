import io
import os
import socket
import string

import pytest

from mailsieve import config
from mailsieve.variables import (
    VariableStore,
    alphanum,
    cleanup_environment,
    parse_env_int,
)


@pytest.mark.parametrize("word", ["on", "ON", "yes", "true", "enable", "  y"])
def test_parse_env_int_true_words(word):
    assert parse_env_int(5, word) == 1


@pytest.mark.parametrize("word", ["off", "no", "false", "disable", "N"])
def test_parse_env_int_false_words(word):
    assert parse_env_int(5, word) == 0


def test_parse_env_int_all():
    assert parse_env_int(5, "all") == 2


@pytest.mark.parametrize("word", ["", "   ", "xyz", "ox", "-"])
def test_parse_env_int_falls_back_to_default(word):
    assert parse_env_int(5, word) == 5
    assert parse_env_int(-2, word) == -2


@pytest.mark.parametrize("number", [0, 17, 4096, -3])
def test_parse_env_int_numbers(number):
    assert parse_env_int(5, str(number)) == number


def test_alphanum_classes():
    assert all(alphanum(c) == 2 for c in string.digits)
    assert all(alphanum(c) == 1 for c in string.ascii_letters + "_")
    assert all(alphanum(c) == 0 for c in "-=. \t\n$")


def test_cleanup_drops_all_but_kept():
    env = ["HOME=/home/someone", "TZ=UTC", "LD_PRELOAD=evil.so", "PATH=/bin"]
    assert cleanup_environment(env, False) == ["TZ=UTC"]


def test_cleanup_preserve_drops_bad_entries():
    env = ["A=1", "B", "A=2", "LD_LIBRARY_PATH=/x", "_RLD_ROOT=/y", "C=3"]
    result = cleanup_environment(env, True)
    assert sorted(result) == ["A=1", "C=3"]


def test_cleanup_preserve_keeps_everything_clean():
    env = ["A=1", "B=2", "TZ=UTC"]
    assert sorted(cleanup_environment(env, True)) == sorted(env)


def test_cleanup_does_not_modify_input():
    env = ["X", "TZ=UTC"]
    cleanup_environment(env, True)
    assert env == ["X", "TZ=UTC"]


def test_putenv_assign_and_remove():
    store = VariableStore({})
    assert store.putenv("FOO=bar") == "bar"
    assert store.getenv("FOO") == "bar"
    assert store.putenv("FOO") == ""
    assert store.getenv("FOO") == ""
    assert "FOO" not in store.environ


def test_putenv_reassign_moves_to_end():
    store = VariableStore({"A": "1", "B": "2"})
    store.putenv("A=3")
    assert list(store.environ) == ["B", "A"]
    assert store.getenv("A") == "3"


def test_set_value_and_append_to_last():
    store = VariableStore({})
    store.set_value("LIST", "one")
    assert store.append_to_last("two") == "one two"
    assert store.getenv("LIST") == "one two"


def test_append_to_last_without_assignment():
    store = VariableStore({})
    with pytest.raises(LookupError):
        store.append_to_last("value")


def test_apply_linebuf_has_minimum():
    store = VariableStore({})
    store.apply("LINEBUF", "10")
    assert store.linebuf == config.MINLINEBUF
    store.apply("LINEBUF", "8192")
    assert store.linebuf == 8192
    assert store.getenv("LINEBUF") == "8192"


def test_apply_numeric_and_text_variables():
    store = VariableStore({})
    store.apply("VERBOSE", "yes")
    assert store.numbers["VERBOSE"] == 1
    store.apply("TIMEOUT", "garbage")
    assert store.numbers["TIMEOUT"] == config.DEFTIMEOUT
    store.apply("SHELLFLAGS", "-ec")
    assert store.strings["SHELLFLAGS"] == "-ec"


def test_apply_log_writes_to_log():
    store = VariableStore({})
    store.log = io.StringIO()
    store.apply("LOG", "hello\n")
    assert store.log.getvalue() == "hello\n"


def test_apply_logfile_redirects_log(tmp_path):
    store = VariableStore({})
    logpath = tmp_path / "filter.log"
    store.apply("LOGFILE", str(logpath))
    store.apply("LOG", "entry\n")
    store.log.close()
    assert logpath.read_text() == "entry\n"


def test_apply_maildir_changes_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "mail"
    target.mkdir()
    store = VariableStore({})
    store.apply("MAILDIR", str(target))
    assert os.getcwd() == os.path.realpath(target)
    assert store.changed_dir


def test_apply_maildir_failure_resets(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    store = VariableStore({})
    store.log = io.StringIO()
    store.apply("MAILDIR", str(tmp_path / "missing"))
    assert store.getenv("MAILDIR") == config.CURDIR
    assert "missing" in store.log.getvalue()


def test_apply_shift_drops_arguments():
    store = VariableStore({})
    store.args = ["a", "b", "c"]
    store.apply("SHIFT", "2")
    assert store.args == ["c"]
    store.apply("SHIFT", "5")
    assert store.args == []


def test_apply_umask():
    old = os.umask(0)
    os.umask(old)
    try:
        store = VariableStore({})
        store.apply("UMASK", "027")
        current = os.umask(old)
    finally:
        os.umask(old)
    assert store.getenv("UMASK") == "027"
    assert current == 0o027


def test_apply_host_mismatch_restores():
    store = VariableStore({})
    store.apply("HOST", "no-such-host.invalid")
    assert store.host_mismatch
    assert store.getenv("HOST") == socket.gethostname()


def test_exit_code_provided_for_trap():
    store = VariableStore({})
    assert store.set_exit_code(True, 3) == (-1, 3)
    assert store.getenv("EXITCODE") == "3"


def test_exit_code_without_trap_not_set():
    store = VariableStore({})
    assert store.set_exit_code(False, 3) == (-1, 3)
    assert store.getenv("EXITCODE") == ""


def test_exit_code_user_override():
    store = VariableStore({})
    store.apply("EXITCODE", "7")
    assert store.set_exit_code(True, 3) == (7, 7)


def test_exit_code_empty_defers_to_trap():
    store = VariableStore({})
    store.apply("EXITCODE", "")
    assert store.set_exit_code(True, 3) == (-2, 3)