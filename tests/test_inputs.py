import pytest

from vectorlab.core.inputs import nudge, parse_number


@pytest.mark.parametrize(
    "text,expected",
    [("3.5", 3.5), (" -2 ", -2.0), ("1,25", 1.25), ("1e2", 100.0), ("0", 0.0)],
)
def test_parse_number_accepts_numbers(text, expected):
    assert parse_number(text, 7.0) == expected


@pytest.mark.parametrize("text", ["", "-", "1e", "abc", "nan", "inf", "--1"])
def test_parse_number_keeps_last_good_value(text):
    assert parse_number(text, 7.0) == 7.0


def test_nudge_up_and_down():
    assert nudge(1.0, -120) == 1.5
    assert nudge(1.0, 120) == 0.5
    assert nudge(1.0, 0) == 1.0


def test_nudge_rounds_to_one_decimal():
    assert nudge(0.12, -1) == 0.6
