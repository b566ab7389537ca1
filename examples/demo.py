#!/usr/bin/env python3
"""
chunkparse Feature Demonstration

This script demonstrates the major features of the chunkparse library.
"""

import re

from chunkparse import (
    Config, parse, resolve, format_value,
    ARITHMETIC_PRELUDE, FULL_PRELUDE, GROUP_MODIFIERS,
    gt, numeric,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_basic_usage():
    """A single comparison collapses to its value."""
    section("Basic Usage")

    parser = parse({"rules": {">": gt}})

    for text in ["1 > 0", "0 > 1", "no tokens here"]:
        print(f"  {text!r} => {parser(text)!r}")


def demo_rule_order():
    """Table order is the reduction priority."""
    section("Rule Order")

    add = numeric(lambda a, b: a + b)
    multiply = numeric(lambda a, b: a * b)

    times_first = parse({"rules": {"*": multiply, "+": add}})
    plus_first = parse({"rules": {"+": add, "*": multiply}})

    text = "4 + 2 * 3"
    print(f"  {text}  [*, +] => {times_first(text)}")
    print(f"  {text}  [+, *] => {plus_first(text)}")


def demo_groups():
    """Parenthesised groups are resolved first by a modifier."""
    section("Groups")

    config = Config(rules=ARITHMETIC_PRELUDE, modifiers=GROUP_MODIFIERS)
    parser = parse(config)

    for text in ["4 + 2 * (1 + 2)", "(4 + 2) * (1 + 2)", "8 * (3 + (1 - 3))"]:
        print(f"  {text} => {format_value(parser(text))}")


def demo_custom_modifier():
    """A modifier rewrites the whole string before tokenizing."""
    section("Custom Modifier")

    def xor_pair(matched, text, config):
        inner = parse({"rules": config.rules})(matched)
        return text.replace(matched, inner, 1)

    config = Config(
        rules={
            "|": lambda a, b: ">" if int(a) ^ int(b) else "<",
            "<": numeric(lambda a, b: a < b),
        },
        modifiers={re.compile(r"\d+\s?\|\s?\d+"): xor_pair},
    )
    text = "3 0 |0 1"
    print(f"  {text} => {format_value(parse(config)(text))}")


def demo_custom_resolver():
    """A resolver summarizes whatever sequence remains."""
    section("Custom Resolver")

    def all_true(chunks):
        return all(resolve([chunk]) is True for chunk in chunks)

    parser = parse({"rules": {">": gt}}, all_true)
    for text in ["2 > 1 > 0", "2 > 0 > 1"]:
        print(f"  {text} => {parser(text)}")


def demo_tracing():
    """Trace the rewrites and reductions of a parse."""
    section("Tracing")

    config = Config(rules=FULL_PRELUDE, modifiers=GROUP_MODIFIERS)
    result, trace = parse(config)("3 + 1 = (7 - 11) * -1", trace=True)

    print("  Verbose format (default):")
    for line in str(trace).split('\n'):
        print(f"    {line}")

    print(f"\n  Compact: {trace.format('compact')}")
    print(f"  Rules: {trace.format('rules')}")
    print(f"  Summary: {trace.summary()}")


def demo_dsl():
    """Load a configuration from rules text."""
    section("Rules DSL")

    config = Config.from_dsl(r'''
        [modifiers]
        @parens: /\(([^()])+\)/ => group

        [rules]
        @times "Multiplication": * => multiply
        + => add
        /-(?![.0-9])/ => subtract
        = => eq
    ''')

    for entry in config.list_rules():
        print(f"  {entry}")
    print(f"\n  (2 + 3) * 2 = 10 => {format_value(parse(config)('(2 + 3) * 2 = 10'))}")


if __name__ == "__main__":
    demo_basic_usage()
    demo_rule_order()
    demo_groups()
    demo_custom_modifier()
    demo_custom_resolver()
    demo_tracing()
    demo_dsl()
