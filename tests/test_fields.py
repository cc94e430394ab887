import pytest

from mailsieve.fields import KNOWN_FIELDS, is_known_field, known_field_name


def test_subject_is_known():
    assert known_field_name("Subject: hello there") == "Subject:"


def test_case_is_ignored():
    assert known_field_name("message-id: <a@example.com>") == "Message-ID:"


def test_resent_field_not_confused_with_shorter():
    assert known_field_name("Resent-From: a@example.com") == "Resent-From:"
    assert known_field_name("From: a@example.com") == "From:"


def test_value_without_space():
    assert known_field_name("Received:from somewhere") == "Received:"


@pytest.mark.parametrize("line", ["X-Mailer: thing", "Subjectx: y", "no colon here", ""])
def test_unknown_lines(line):
    assert known_field_name(line) is None
    assert is_known_field(line) is False


def test_is_known_field_true():
    assert is_known_field("User-Agent: something") is True


def test_every_known_field_round_trips():
    for name in KNOWN_FIELDS:
        assert known_field_name(name + " value") == name
        assert known_field_name(name.upper() + " value") == name


def test_recognised_names_are_unique_and_end_with_colon():
    recognised = [known_field_name(name.lower() + " value") for name in KNOWN_FIELDS]
    assert len(set(recognised)) == len(KNOWN_FIELDS)
    assert all(name.endswith(":") and name.count(":") == 1 for name in recognised)