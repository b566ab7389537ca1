"""Tests for the parse() entry point."""

import re

import pytest
from chunkparse import (
    parse, resolve, format_value, to_number, Config, Parser,
    PARENS, GROUP_MODIFIERS,
)


def greater(a, b):
    return to_number(a) > to_number(b)


def less(a, b):
    return to_number(a) < to_number(b)


def plus(a, b):
    return to_number(a) + to_number(b)


def minus(a, b):
    return to_number(a) - to_number(b)


def times(a, b):
    return to_number(a) * to_number(b)


def equal(a, b):
    return to_number(a) == to_number(b)


def both(a, b):
    return a is True and b is True


def all_true(chunks):
    return all(resolve([chunk]) is True for chunk in chunks)


def reduce_group(matched, text, config):
    """Parse the inside of a group and put the value back in its place."""
    value = parse(config)(matched[1:-1])
    return text.replace(matched, format_value(value), 1)


MINUS = re.compile(r"-(?!(\.|[0-9]))")


class TestBasicParsing:
    """Tests for single-rule parsing."""

    def test_single_comparison(self):
        """One comparison collapses to its value."""
        assert parse({"rules": {">": greater}})("1 > 0") is True

    def test_false_comparison(self):
        assert parse({"rules": {">": greater}})("0 > 1") is False

    def test_custom_result_value(self):
        """Rule functions may return anything."""
        config = {"rules": {">": lambda a, b: "Now this I can understand!"}}
        assert parse(config)("1 > 0") == "Now this I can understand!"

    def test_none_input(self):
        """None reduces to an empty sequence."""
        assert parse({"rules": {">": greater}})(None) == []

    def test_no_matches(self):
        """Text without tokens comes back unchanged."""
        assert parse({"rules": {">": greater}})("no matches found") == "no matches found"

    def test_trailing_text_is_a_fragment(self):
        """Everything between tokens is one fragment."""
        def first_word_greater(a, b):
            return int(a) > int(b.split()[0])

        parser = parse({"rules": {">": first_word_greater}})
        assert parser("1 > 0 plus all of this text too") is True

    def test_fragments_trimmed(self):
        """Rule functions see trimmed fragments."""
        seen = []

        def record(*args):
            seen.append(args)

        parse({"rules": {">": record}})("  10   >    2  ")
        assert seen == [("10", "2")]

    def test_empty_fragment_neighbor(self):
        """A token at the start has an empty fragment on its left."""
        seen = []

        def record(*args):
            seen.append(args)

        parse({"rules": {"+": record}})(" + 5 ")
        assert seen == [("", "5")]

    def test_empty_key_consumes_everything(self):
        """An empty key matches every empty fragment and prunes the rest."""
        parser = parse({"rules": {"": lambda *args: None}}, lambda chunks: chunks == [])
        assert parser(" + 5 ") is True

    def test_rule_errors_propagate(self):
        """Exceptions raised by rule functions reach the caller."""
        parser = parse({"rules": {"/": lambda a, b: int(a) / int(b)}})
        with pytest.raises(ZeroDivisionError):
            parser("1 / 0")

    def test_parser_object(self):
        """parse() returns a reusable Parser."""
        parser = parse({"rules": {">": greater}})
        assert isinstance(parser, Parser)
        assert parser("2 > 1") is True
        assert parser("1 > 2") is False


class TestRuleOrder:
    """Tests for table order as reduction priority."""

    def test_multiplication_first(self):
        parser = parse({"rules": {"*": times, "+": plus}})
        assert parser("4 + 2 * 3") == 10

    def test_addition_first(self):
        """Reversing the table reverses precedence."""
        parser = parse({"rules": {"+": plus, "*": times}})
        assert parser("4 + 2 * 3") == 18

    def test_pairs_table(self):
        """Tables may be given as sequences of pairs."""
        parser = parse({"rules": [("*", times), ("+", plus)]})
        assert parser("4 + 2 * 3") == 10

    def test_combined_operators(self):
        """Results of earlier rules feed later ones."""
        parser = parse({"rules": {">": greater, "&&": both}}, all_true)
        assert parser("2 > 1 && 1 > 0") is True

    def test_rules_added_later_apply(self):
        """A Parser reads the config tables on every call."""
        config = Config(rules={"+": plus})
        parser = parse(config)
        assert parser("2 * 3") == "2 * 3"
        config.add_rule("*", times)
        assert parser("2 * 3") == 6


class TestResolvers:
    """Tests for custom resolvers."""

    def test_all_true(self):
        parser = parse({"rules": {">": greater}}, all_true)
        assert parser("2 > 1 > 0") is True

    def test_all_true_fails(self):
        """Adjacent matches both read the shared middle operand."""
        parser = parse({"rules": {">": greater}}, all_true)
        assert parser("2 > 0 > 1") is False

    def test_resolver_sees_sequence(self):
        seen = []
        parse({"rules": {">": greater}}, seen.append)("2 > 1 > 0")
        assert len(seen[0]) == 2

    def test_default_resolver_leaves_sequences(self):
        """More than one chunk is returned as a list."""
        result = parse({"rules": {">": greater}})("2 > 1 > 0")
        assert isinstance(result, list)
        assert [chunk.result for chunk in result] == [True, True]


class TestModifiers:
    """Tests for modifier rewriting."""

    def test_xor_modifier(self):
        """A modifier may run a nested parse on its match."""
        def xor_pair(matched, text, config):
            inner = parse({"rules": config.rules})(matched)
            return text.replace(matched, inner, 1)

        config = {
            "rules": {
                "|": lambda a, b: ">" if int(a) ^ int(b) else "<",
                "<": less,
            },
            "modifiers": {re.compile(r"\d+\s?\|\s?\d+"): xor_pair},
        }
        assert parse(config)("3 0 |0 1") is False

    def test_literal_modifier_never_fires(self):
        config = {"rules": {}, "modifiers": {"a": lambda m, s, c: "b"}}
        assert parse(config)("a") == "a"

    def test_modifier_receives_config(self):
        seen = []

        def rewrite(matched, text, config):
            seen.append(config)
            return text.replace(matched, "")

        config = Config(modifiers={re.compile("x"): rewrite})
        parse(config)("x")
        assert seen == [config]

    def test_runaway_modifier(self):
        """A modifier that always matches recurses until RecursionError."""
        config = {"rules": {}, "modifiers": {re.compile("a"): lambda m, s, c: s}}
        with pytest.raises(RecursionError):
            parse(config)("a")

    def test_none_skips_modifiers(self):
        config = {"rules": {}, "modifiers": {re.compile(".*"): lambda m, s, c: s + "!"}}
        assert parse(config)(None) == []


class TestGroups:
    """Tests for parenthesised groups."""

    def setup_method(self):
        self.config = {
            "rules": {"*": times, "+": plus, "-": minus},
            "modifiers": {PARENS: reduce_group},
        }

    def test_group(self):
        assert parse(self.config)("4 + 2 * (1 + 2)") == 10

    def test_two_groups(self):
        assert parse(self.config)("(4 + 2) * (1 + 2)") == 18

    def test_nested_groups(self):
        """Innermost groups are reduced first."""
        assert parse(self.config)("8 * (3 + (1 - 3))") == 8

    def test_builtin_group_modifiers(self):
        config = dict(self.config, modifiers=GROUP_MODIFIERS)
        assert parse(config)("(4 + 2) * (1 + 2)") == 18

    def test_empty_parens_not_a_group(self):
        assert PARENS.search("()") is None


class TestNegativeNumbers:
    """Tests for minus as a pattern key."""

    def test_case_insensitive_key(self):
        """An inline-flagged key tokenizes alongside other keys."""
        config = {"rules": {">": greater, re.compile(r"(?i)and"): both}}
        assert parse(config)("2 > 1 AND 1 > 0") is True
        assert parse(config)("2 > 1 and 0 > 1") is False

    def test_double_negative(self):
        """Minus followed by a digit stays part of the number."""
        parser = parse({"rules": {MINUS: minus}})
        assert parser("-1 - -1") == 0

    def test_compound_expression(self):
        config = {
            "rules": {"*": times, "+": plus, MINUS: minus, "=": equal},
            "modifiers": {PARENS: reduce_group},
        }
        assert parse(config)("3 + 1 = (7 - 11) * -1") is True
