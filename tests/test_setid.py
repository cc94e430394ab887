import os
from types import SimpleNamespace
from unittest import mock

import pytest

from mailsieve.setid import check_directory, main


@pytest.fixture
def user():
    return SimpleNamespace(pw_name="installer", pw_uid=4321, pw_gid=4321)


def test_check_directory_ok(tmp_path):
    st = check_directory(str(tmp_path), os.getuid(), os.stat(tmp_path).st_gid, "me")
    assert st.st_uid == os.getuid()


def test_check_directory_missing(tmp_path):
    with pytest.raises(ValueError, match="Can't access"):
        check_directory(str(tmp_path / "gone"), os.getuid(), os.getgid(), "me")


def test_check_directory_mode(tmp_path):
    d = tmp_path / "d"
    d.mkdir()
    os.chmod(d, 0o500)
    try:
        with pytest.raises(ValueError, match="Can't access"):
            check_directory(str(d), os.getuid(), os.stat(d).st_gid, "me")
    finally:
        os.chmod(d, 0o700)


def test_check_directory_wrong_uid(tmp_path):
    with pytest.raises(ValueError, match="owned by uid .*!=someone"):
        check_directory(str(tmp_path), os.getuid() + 1, os.getgid(), "someone")


def test_check_directory_wrong_gid(tmp_path):
    gid = os.stat(tmp_path).st_gid
    with pytest.raises(ValueError, match="owned by gid"):
        check_directory(str(tmp_path), os.getuid(), gid + 1, "me")


def test_usage_on_wrong_count(capsys):
    assert main([]) == 64
    assert "Usage: setid user [directory]" in capsys.readouterr().err


def test_usage_when_not_root(capsys):
    with mock.patch("os.geteuid", return_value=1):
        assert main(["installer"]) == 64
    assert "Usage" in capsys.readouterr().err


def test_usage_for_unknown_user():
    with mock.patch("os.geteuid", return_value=0), \
         mock.patch("pwd.getpwnam", side_effect=KeyError("nobody")):
        assert main(["installer"]) == 64


def test_oserr_when_identity_change_fails(user):
    with mock.patch("os.geteuid", return_value=0), \
         mock.patch("pwd.getpwnam", return_value=user), \
         mock.patch("os.initgroups", side_effect=PermissionError):
        assert main(["installer"]) == 71


@pytest.fixture
def as_root(user):
    with mock.patch("os.geteuid", return_value=0), \
         mock.patch("pwd.getpwnam", return_value=user), \
         mock.patch("os.initgroups"), mock.patch("os.setgid"), \
         mock.patch("os.setuid"), mock.patch("os.execv") as execv:
        yield execv


def test_missing_check_file(as_root, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["installer"]) == 69
    assert "can read & access the source tree" in capsys.readouterr().err
    as_root.assert_not_called()


def test_directory_problem_reported(as_root, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "install.sh").write_text("")
    assert main(["installer", str(tmp_path / "absent")]) == 69
    assert "are you sure it's there?" in capsys.readouterr().err
    as_root.assert_not_called()


def test_shell_started(as_root, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHELL", "/bin/sh")
    (tmp_path / "install.sh").write_text("")
    assert main(["installer"]) == 69
    as_root.assert_called_once_with("/bin/sh", ["/bin/sh"])