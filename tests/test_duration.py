import pytest

from imgeraser.duration import format_duration, parse_duration


@pytest.mark.parametrize(
    "text", ["1h2m3s", "1m0s", "1.5s", "2.25ms", "750ns", "-3m0s", "24h0m0s"]
)
def test_canonical_strings_round_trip(text):
    assert format_duration(parse_duration(text)) == text


def test_zero():
    assert parse_duration("0") == 0
    assert parse_duration("-0") == 0
    assert format_duration(0) == "0s"


def test_units_are_consistent():
    assert parse_duration("1h") == 60 * parse_duration("1m")
    assert parse_duration("1m") == 60 * parse_duration("1s")
    assert parse_duration("1s") == 1000 * parse_duration("1ms")
    assert parse_duration("1ms") == 1000 * parse_duration("1us")
    assert parse_duration("1us") == 1000 * parse_duration("1ns")
    assert parse_duration("1ns") == 1


def test_micro_aliases():
    assert parse_duration("3us") == parse_duration("3\u00b5s") == parse_duration("3\u03bcs")


def test_fraction_equals_composite():
    assert parse_duration("1.5h") == parse_duration("1h30m")
    assert parse_duration(".5s") == parse_duration("500ms")


def test_sign():
    assert parse_duration("-2s") == -parse_duration("2s")
    assert parse_duration("+2s") == parse_duration("2s")


def test_formatting_normalises():
    assert format_duration(parse_duration("90s")) == format_duration(parse_duration("1m30s"))
    assert format_duration(parse_duration("1000ms")) == format_duration(parse_duration("1s"))


def test_most_negative_value_accepted():
    assert parse_duration("-9223372036854775808ns") == -(1 << 63)


@pytest.mark.parametrize(
    "text", ["", "1", "1x", ".s", "-", "1hh", "9223372036854775808ns", "s"]
)
def test_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)