"""Tests for text.py - wrapping, ellipsis marks and small string helpers."""

import pytest

from warntrace.errors import InvalidNumericInput
from warntrace.text import (
    ELLIPSIS,
    add_period,
    combine,
    format_number,
    remove_period,
    title_case,
    wrap,
)

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim "
    "veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea "
    "commodo consequat."
)


class TestWrap:
    def test_short_text_is_unchanged(self):
        assert wrap("short", 20) == ["short"]

    def test_empty_text(self):
        assert wrap("", 20) == []

    def test_two_lines(self):
        assert wrap("This is a long primary message", 20) == [
            f"This is a long{ELLIPSIS}",
            f"{ELLIPSIS}primary message",
        ]

    def test_interior_lines_get_both_marks(self):
        lines = wrap("one two three four five six", 8)
        assert lines == [
            f"one{ELLIPSIS}",
            f"{ELLIPSIS}two{ELLIPSIS}",
            f"{ELLIPSIS}three{ELLIPSIS}",
            f"{ELLIPSIS}four{ELLIPSIS}",
            f"{ELLIPSIS}five{ELLIPSIS}",
            f"{ELLIPSIS}six",
        ]

    def test_decoration_placement(self):
        lines = wrap(LOREM, 30)
        assert len(lines) > 2
        assert lines[0].endswith(ELLIPSIS)
        assert not lines[0].startswith(ELLIPSIS)
        assert lines[-1].startswith(ELLIPSIS)
        assert not lines[-1].endswith(ELLIPSIS)
        for line in lines[1:-1]:
            assert line.startswith(ELLIPSIS)
            assert line.endswith(ELLIPSIS)

    @pytest.mark.parametrize("width", [5, 12, 30, 57, 80])
    def test_width_respected(self, width):
        for line in wrap(LOREM, width):
            assert len(line) <= width

    def test_long_words_are_broken(self):
        assert wrap("abcdefghij", 6) == [
            f"abcd{ELLIPSIS}",
            f"{ELLIPSIS}efgh{ELLIPSIS}",
            f"{ELLIPSIS}ij",
        ]

    def test_plain_wrap(self):
        lines = wrap(LOREM, 30, ellipsis=False)
        assert all(ELLIPSIS not in line for line in lines)
        assert " ".join(lines) == LOREM

    def test_text_that_fits_is_unchanged(self):
        assert wrap("x" * 20, 20) == ["x" * 20]
        assert wrap("ab", 2) == ["ab"]

    @pytest.mark.parametrize("width", [1, 2])
    def test_too_narrow_for_marks(self, width):
        lines = wrap("abc def", width)
        assert lines
        assert all(len(line) <= width for line in lines)
        assert all(ELLIPSIS not in line for line in lines)
        assert "".join(lines) == "abcdef"

    def test_no_trailing_space_before_mark(self):
        for line in wrap("word " * 20, 16):
            assert f" {ELLIPSIS}" not in line


class TestCombine:
    def test_primary_fits(self):
        wrapped = combine(40, "Short message.")
        assert wrapped.primary == "Short message."
        assert wrapped.overflow == []
        assert wrapped.secondary == []

    def test_primary_exactly_width(self):
        text = "x" * 20
        assert combine(20, text).primary == text

    def test_primary_overflows(self):
        wrapped = combine(20, "This is a long primary message", "")
        assert wrapped.primary == f"This is a long{ELLIPSIS}"
        assert len(wrapped.primary) <= 20
        assert wrapped.overflow == [f"{ELLIPSIS}primary message"]
        assert wrapped.secondary == []

    def test_secondary_fits(self):
        wrapped = combine(20, "Primary.", "Details here.")
        assert wrapped.secondary == ["Details here."]

    def test_secondary_is_not_decorated(self):
        wrapped = combine(20, "Primary.", "alpha beta gamma delta epsilon")
        assert wrapped.secondary == ["alpha beta gamma", "delta epsilon"]
        assert wrapped.overflow == []

    def test_primary_and_secondary_are_independent(self):
        wrapped = combine(30, LOREM, LOREM)
        assert wrapped.overflow
        assert len(wrapped.secondary) == len(wrapped.overflow) + 1
        assert all(ELLIPSIS not in line for line in wrapped.secondary)


class TestPeriods:
    def test_add_period(self):
        assert add_period("Done") == "Done."
        assert add_period("Done.") == "Done."

    def test_add_period_empty(self, caplog):
        assert add_period("") is None
        assert "cannot be empty" in caplog.text

    def test_remove_period(self):
        assert remove_period("Done.") == "Done"
        assert remove_period("Done") == "Done"
        assert remove_period("") is None


@pytest.mark.parametrize(
    "name, expected",
    [
        ("stack_trace", "Stack Trace"),
        ("warn", "Warn"),
        ("display_main_menu", "Display Main Menu"),
        ("LOUD_name", "Loud Name"),
    ],
)
def test_title_case(name, expected):
    assert title_case(name) == expected


class TestFormatNumber:
    def test_leading_zeros(self):
        assert format_number("0007", width=4) == "   7"

    def test_octal_looking_input(self):
        assert format_number("010") == "  10"

    def test_int_input(self):
        assert format_number(42) == "  42"
        assert format_number(0, 1) == "0"

    def test_number_wider_than_field(self):
        assert format_number(123456, 4) == "123456"

    def test_width_as_string(self):
        assert format_number(5, "3") == "  5"

    @pytest.mark.parametrize(
        "number", ["", "abc", "-1", "1.5", " 7", -1, 1.5, None, True]
    )
    def test_invalid_number(self, number):
        with pytest.raises(InvalidNumericInput, match="non-negative integer"):
            format_number(number)

    @pytest.mark.parametrize("width", [0, -4, "x", "", 2.0, False])
    def test_invalid_width(self, width):
        with pytest.raises(InvalidNumericInput, match="positive integer"):
            format_number(7, width)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            format_number("seven")
