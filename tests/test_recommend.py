import os

import pytest

from mailsieve.recommend import main, recommend


@pytest.fixture
def spool(tmp_path):
    d = tmp_path / "spool"
    d.mkdir()
    yield d
    os.chmod(d, 0o755)


def test_private_spool_makes_binaries_setgid(spool):
    os.chmod(spool, 0o755)
    lines = recommend("/usr/bin/deliver", "/usr/bin/lockit", str(spool) + "/", [])
    assert lines[0] == "chown root /usr/bin/deliver"
    assert lines[1].startswith("chgrp ")
    assert lines[1].endswith(" /usr/bin/deliver /usr/bin/lockit")
    assert lines[2] == "chmod 6755 /usr/bin/deliver"
    assert lines[3] == "chmod 2755 /usr/bin/lockit"
    assert lines[4] == f"chmod g+w {spool}/."
    assert len(lines) == 5


def test_sticky_spool_suggests_world_write(spool):
    os.chmod(spool, 0o1775)
    lines = recommend("bin", "lock", str(spool) + "/", [])
    assert lines == [
        "chown root bin",
        "chmod 4755 bin",
        f"chmod a+w {spool}/.",
    ]


def test_world_writable_spool(spool):
    os.chmod(spool, 0o777)
    lines = recommend("bin", "lock", str(spool), [str(spool / "missing")])
    assert lines == ["chown root bin", "chmod 4755 bin"]


def test_missing_spool(tmp_path):
    lines = recommend("bin", "lock", str(tmp_path / "nothere") + "/", [])
    assert lines == ["chown root bin", "chmod 4755 bin"]


def test_group_writable_spool_without_sticky(spool):
    os.chmod(spool, 0o775)
    lines = recommend("bin", "lock", str(spool), [])
    assert lines[-1] == "chmod 2755 lock"
    assert not any("+w" in line for line in lines)


def test_main_wrong_arguments(capsys):
    assert main(["only-one"]) == 64
    assert "make recommend" in capsys.readouterr().err


def test_main_prints_commands(capsys):
    assert main(["bin", "lock"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "chown root bin"