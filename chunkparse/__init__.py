"""
chunkparse - rule-driven string reduction

Splits a string on configured tokens and repeatedly replaces each token and
its immediate neighbors with the value of the token's rule function.

Quick Start:
    from chunkparse import parse, gt

    parse({"rules": {">": gt}})("1 > 0")  # => True

Rule order is reduction priority:
    from chunkparse import Config, parse, ARITHMETIC_PRELUDE, GROUP_MODIFIERS

    config = Config(rules=ARITHMETIC_PRELUDE, modifiers=GROUP_MODIFIERS)
    parse(config)("4 + 2 * (1 + 2)")  # => 10

Calling contracts:
    rule function      fn(*neighbor_values) -> any
                       (0, 1 or 2 values, left to right, absent ones omitted)
    modifier function  fn(matched_text, full_text, config) -> new full text
    resolver           fn(chunks) -> any

Rules file (arithmetic.rules):
    [modifiers]
    /\\(([^()])+\\)/ => group

    [rules]
    * => multiply
    + => add
"""

__version__ = "0.1.0"

# Core reducer components
from .reducer import (
    reducer,
    resolve,
    chunk_string,
    combined_pattern,
    reduce_pass,
    reduce_chunks,
    prune_chunks,
    sibling_chunks,
    apply_modifiers,
    chunk_value,
    is_reduced,
    describe_key,
    as_matcher,
    format_value,
    to_number,
    to_bool,
    # Types
    ReducedChunk,
    Literal,
    Pattern,
    KeyType,
    ChunkType,
    ReduceFn,
    RewriteFn,
    ResolverFn,
    # Reduction function builders
    binary,
    numeric,
    logical,
    special_minus,
    safe_div,
    # Built-in reduction functions
    add,
    subtract,
    multiply,
    divide,
    modulo,
    power,
    gt,
    lt,
    gte,
    lte,
    eq,
    neq,
    and_,
    or_,
    MINUS,
    # Standard preludes
    ARITHMETIC_PRELUDE,
    COMPARISON_PRELUDE,
    LOGIC_PRELUDE,
    FULL_PRELUDE,
    NO_PRELUDE,
)

# Configuration, loaders and tracing
from .engine import (
    parse,
    Parser,
    Config,
    EntryMetadata,
    ReductionStep,
    ReductionTrace,
    PARENS,
    GROUP_MODIFIERS,
    BUILTIN_FUNCTIONS,
    resolve_group,
    parse_key,
    parse_entry_line,
    load_entries_from_dsl,
    load_entries_from_file,
    load_entries_from_json,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Entry points
    "parse",
    "Parser",
    "resolve",
    "reducer",
    # Pipeline stages
    "chunk_string",
    "combined_pattern",
    "reduce_pass",
    "reduce_chunks",
    "prune_chunks",
    "sibling_chunks",
    "apply_modifiers",
    "chunk_value",
    "is_reduced",
    "describe_key",
    "as_matcher",
    "format_value",
    "to_number",
    "to_bool",
    # Types
    "ReducedChunk",
    "Literal",
    "Pattern",
    "KeyType",
    "ChunkType",
    "ReduceFn",
    "RewriteFn",
    "ResolverFn",
    # Builders
    "binary",
    "numeric",
    "logical",
    "special_minus",
    "safe_div",
    # Built-in functions
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulo",
    "power",
    "gt",
    "lt",
    "gte",
    "lte",
    "eq",
    "neq",
    "and_",
    "or_",
    "MINUS",
    # Preludes
    "ARITHMETIC_PRELUDE",
    "COMPARISON_PRELUDE",
    "LOGIC_PRELUDE",
    "FULL_PRELUDE",
    "NO_PRELUDE",
    "PARENS",
    "GROUP_MODIFIERS",
    "BUILTIN_FUNCTIONS",
    "resolve_group",
    # Configuration
    "Config",
    "EntryMetadata",
    "ReductionStep",
    "ReductionTrace",
    "parse_key",
    "parse_entry_line",
    "load_entries_from_dsl",
    "load_entries_from_file",
    "load_entries_from_json",
]
