"""Tests for coercions, function builders and the standard preludes."""

import pytest
from chunkparse import (
    Config, parse, resolve_group, format_value, to_number, to_bool,
    binary, numeric, logical, special_minus, safe_div, ReducedChunk,
    ARITHMETIC_PRELUDE, COMPARISON_PRELUDE, LOGIC_PRELUDE, FULL_PRELUDE,
    NO_PRELUDE, GROUP_MODIFIERS, MINUS,
)


class TestToNumber:
    """Tests for numeric coercion."""

    def test_integer_string(self):
        result = to_number("4")
        assert result == 4
        assert isinstance(result, int)

    def test_float_string(self):
        assert to_number(" 1.5 ") == 1.5

    def test_negative(self):
        assert to_number("-3") == -3

    def test_bool(self):
        assert to_number(True) == 1
        assert to_number(False) == 0

    def test_numbers_pass_through(self):
        assert to_number(2.5) == 2.5
        assert to_number(7) == 7

    def test_blank_is_zero(self):
        """Empty fragments left by edge tokens read as zero."""
        assert to_number("") == 0
        assert to_number("   ") == 0

    def test_not_a_number(self):
        with pytest.raises(ValueError):
            to_number("abc")
        with pytest.raises(ValueError):
            to_number(None)


class TestToBool:
    """Tests for boolean coercion."""

    def test_words(self):
        assert to_bool("true") is True
        assert to_bool("False") is False

    def test_numbers(self):
        assert to_bool(0) is False
        assert to_bool("1") is True
        assert to_bool(2.5) is True

    def test_bool_passes_through(self):
        assert to_bool(True) is True

    def test_not_a_bool(self):
        with pytest.raises(ValueError):
            to_bool("maybe")


class TestFormatValue:
    """Tests for rendering values back into text."""

    def test_bools(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_integral_float(self):
        assert format_value(3.0) == "3"
        assert format_value(2.5) == "2.5"

    def test_none(self):
        assert format_value(None) == ""

    def test_reduced_chunk(self):
        assert format_value(ReducedChunk("+", (0, 1, 2), ("1", "2"), None, 3)) == "3"

    def test_sequence(self):
        """Sequences render as their values joined by spaces."""
        chunks = ["a", ReducedChunk(">", (1,), (), None, True)]
        assert format_value(chunks) == "a true"


class TestBuilders:
    """Tests for reduction function builders."""

    def test_binary_needs_two(self):
        """Binary reducers yield None for boundary tokens."""
        fn = binary(lambda a, b: (a, b))
        assert fn("x", "y") == ("x", "y")
        assert fn("x") is None
        assert fn() is None

    def test_numeric(self):
        add = numeric(lambda a, b: a + b)
        assert add("1", "2") == 3
        assert add("1.5", 2) == 3.5

    def test_numeric_collapses_floats(self):
        result = numeric(lambda a, b: a / b)("6", "3")
        assert result == 2
        assert isinstance(result, int)

    def test_logical(self):
        both = logical(lambda a, b: a and b)
        assert both("true", True) is True
        assert both("true", "0") is False

    def test_special_minus(self):
        minus = special_minus()
        assert minus("5") == -5
        assert minus("5", "3") == 2
        assert minus() is None

    def test_safe_div(self):
        div = safe_div()
        assert div("6", "3") == 2
        assert div("1", "4") == 0.25
        assert div("1", "0") is None


class TestArithmeticPrelude:
    """Tests for ARITHMETIC_PRELUDE."""

    def setup_method(self):
        self.parser = parse({"rules": ARITHMETIC_PRELUDE})

    def test_precedence(self):
        assert self.parser("4 + 2 * 3") == 10

    def test_power_first(self):
        assert self.parser("2 ^ 3 * 2") == 16

    def test_modulo(self):
        assert self.parser("7 % 4 + 1") == 4

    def test_division(self):
        assert self.parser("10 / 4") == 2.5

    def test_division_by_zero(self):
        assert self.parser("10 / 0") is None

    def test_negative_literals(self):
        assert self.parser("-1 - -1") == 0

    def test_leading_minus(self):
        """A leading minus subtracts from the empty fragment."""
        assert self.parser("- 5") == -5

    def test_minus_pattern(self):
        assert MINUS.search("-1") is None
        assert MINUS.search("- 1") is not None

    def test_order(self):
        assert list(ARITHMETIC_PRELUDE)[:5] == ["^", "*", "/", "%", "+"]


class TestComparisonPrelude:
    """Tests for COMPARISON_PRELUDE."""

    def setup_method(self):
        self.parser = parse({"rules": COMPARISON_PRELUDE})

    def test_two_character_operators(self):
        assert self.parser("1 >= 1") is True
        assert self.parser("3 <= 2") is False
        assert self.parser("2 != 2") is False

    def test_single_character_operators(self):
        assert self.parser("2 > 1") is True
        assert self.parser("2 < 1") is False
        assert self.parser("2 = 2.0") is True


class TestLogicPrelude:
    """Tests for LOGIC_PRELUDE."""

    def test_and_or(self):
        parser = parse({"rules": LOGIC_PRELUDE})
        assert parser("true && false") is False
        assert parser("false || true") is True


class TestFullPrelude:
    """Tests for FULL_PRELUDE with groups."""

    def setup_method(self):
        self.parser = parse(Config(rules=FULL_PRELUDE, modifiers=GROUP_MODIFIERS))

    def test_arithmetic_before_comparison(self):
        assert self.parser("1 + 1 = 2 && 3 > 2") is True

    def test_or(self):
        assert self.parser("1 > 2 || 2 > 1") is True

    def test_groups(self):
        assert self.parser("(1 + 2) * 3") == 9

    def test_boolean_groups(self):
        """Group values are substituted as text."""
        assert self.parser("(2 > 1) && (1 > 0)") is True

    def test_compound(self):
        assert self.parser("3 + 1 = (7 - 11) * -1") is True

    def test_no_prelude(self):
        assert parse({"rules": NO_PRELUDE})("1 + 1") == "1 + 1"


class TestResolveGroup:
    """Tests for the group modifier function."""

    def test_substitutes_value(self):
        config = Config(rules=ARITHMETIC_PRELUDE)
        assert resolve_group("(1 + 2)", "4 * (1 + 2)", config) == "4 * 3"

    def test_first_occurrence_only(self):
        config = Config(rules=ARITHMETIC_PRELUDE)
        assert resolve_group("(1 + 1)", "(1 + 1) * (1 + 1)", config) == "2 * (1 + 1)"
