"""
Core reduction module for rule-driven string parsing.

This module provides tokenization, sibling reduction, index pruning and
result resolution. A string is split on every configured token, and each
rule (in table order) replaces its token together with the immediate left
and right neighbors by the value its function computes.

    rules = [("*", numeric(lambda a, b: a * b)), ("+", numeric(lambda a, b: a + b))]
    process = reducer(rules)
    process("4 + 2 * 3")  # => 10
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging
import re

logger = logging.getLogger(__name__)

# Type aliases
KeyType = Union[str, re.Pattern]
ReduceFn = Callable[..., Any]
RewriteFn = Callable[[str, str, Any], str]
ResolverFn = Callable[[List], Any]
RuleTable = List[Tuple[KeyType, ReduceFn]]
ModifierTable = List[Tuple[KeyType, RewriteFn]]


# ============================================================
# Chunk Model
# ============================================================

class ReducedChunk:
    """
    The product of applying a rule function to a token and its neighbors.

    A reduced chunk remembers which rule key produced it, the original
    positions it consumed, the sibling chunks it swallowed and the value the
    rule function computed. Instances are immutable once built.

    Examples:
        chunk = ReducedChunk(">", (0, 1, 2), ("1", "0"), gt, True)
        chunk.result     # => True
        chunk.positions  # => (0, 1, 2)
    """

    __slots__ = ('_key', '_positions', '_siblings', '_fn', '_result')

    def __init__(self, key: KeyType, positions: Iterable[int],
                 siblings: Iterable, fn: Optional[ReduceFn], result: Any):
        object.__setattr__(self, '_key', key)
        object.__setattr__(self, '_positions', tuple(sorted(positions)))
        object.__setattr__(self, '_siblings', tuple(siblings))
        object.__setattr__(self, '_fn', fn)
        object.__setattr__(self, '_result', result)

    def __setattr__(self, name, value):
        raise AttributeError("ReducedChunk is immutable")

    @property
    def key(self) -> KeyType:
        """The rule key that triggered this reduction."""
        return self._key

    @property
    def positions(self) -> Tuple[int, ...]:
        """Original (pre-pruning) indices consumed, including its own."""
        return self._positions

    @property
    def siblings(self) -> Tuple:
        """The neighbor chunks this reduction consumed, left to right."""
        return self._siblings

    @property
    def fn(self) -> Optional[ReduceFn]:
        return self._fn

    @property
    def result(self) -> Any:
        return self._result

    def __repr__(self) -> str:
        return f"ReducedChunk({describe_key(self._key)} -> {self._result!r})"

    def __eq__(self, other):
        if isinstance(other, ReducedChunk):
            return (self._key == other._key
                    and self._positions == other._positions
                    and self._result == other._result)
        return False

    def __hash__(self):
        return hash((self._key, self._positions))


ChunkType = Union[str, ReducedChunk]


def is_reduced(chunk: Any) -> bool:
    """Check if a chunk has already been reduced by a rule."""
    return isinstance(chunk, ReducedChunk)


def chunk_value(chunk: ChunkType) -> Any:
    """
    Return the value a chunk contributes as a rule argument.

    Reduced chunks contribute their computed result; raw fragments
    contribute their text.
    """
    if is_reduced(chunk):
        return chunk.result
    return chunk


def describe_key(key: KeyType) -> str:
    """Render a rule key for messages: literals quoted, patterns as /source/."""
    if isinstance(key, re.Pattern):
        return f"/{key.pattern}/"
    return f'"{key}"'


# ============================================================
# Matchers - tagged wrappers around rule keys
# ============================================================

class Literal:
    """Matches a fragment whose text equals the key exactly."""

    __slots__ = ('text',)

    def __init__(self, text: str):
        self.text = text

    @property
    def key(self) -> str:
        return self.text

    @property
    def source(self) -> str:
        """Pattern source used in the combined token pattern."""
        return re.escape(self.text)

    def matches(self, chunk: ChunkType) -> bool:
        return isinstance(chunk, str) and chunk == self.text

    def __repr__(self) -> str:
        return f"Literal({self.text!r})"


# Flags that can be scoped to one alternative as (?flags:...)
_SCOPED_FLAGS = ((re.IGNORECASE, 'i'), (re.MULTILINE, 'm'), (re.DOTALL, 's'), (re.VERBOSE, 'x'))

# Leading global inline flags, e.g. "(?i)" in "(?i)and"
_GLOBAL_FLAGS = re.compile(r'^(?:\(\?[aiLmsux]+\))+')


class Pattern:
    """Matches a fragment in which the regular expression can be found."""

    __slots__ = ('regex',)

    def __init__(self, regex: re.Pattern):
        self.regex = regex

    @property
    def key(self) -> re.Pattern:
        return self.regex

    @property
    def source(self) -> str:
        """
        Pattern source for the combined token pattern.

        Global flags (compile flags or a leading "(?i)") are scoped to this
        alternative so they neither leak into other keys nor sit mid-pattern.

        Examples:
            Pattern(re.compile("x+")).source          # => "x+"
            Pattern(re.compile("(?i)and")).source     # => "(?i:and)"
            Pattern(re.compile("or", re.I)).source    # => "(?i:or)"
        """
        letters = ''.join(letter for flag, letter in _SCOPED_FLAGS if self.regex.flags & flag)
        if not letters:
            return self.regex.pattern
        body = _GLOBAL_FLAGS.sub('', self.regex.pattern)
        if self.regex.flags & re.VERBOSE:
            body += '\n'  # A trailing comment must not swallow the ")"
        return f"(?{letters}:{body})"

    def matches(self, chunk: ChunkType) -> bool:
        return isinstance(chunk, str) and self.regex.search(chunk) is not None

    def __repr__(self) -> str:
        return f"Pattern({self.regex.pattern!r})"


MatcherType = Union[Literal, Pattern]


def as_matcher(key: KeyType) -> MatcherType:
    """
    Wrap a rule key in its matcher.

    Args:
        key: A literal string or a compiled regular expression

    Returns:
        Literal for strings, Pattern for compiled expressions

    Raises:
        TypeError: If the key is neither
    """
    if isinstance(key, str):
        return Literal(key)
    if isinstance(key, re.Pattern):
        return Pattern(key)
    raise TypeError(f"Rule key must be a string or compiled pattern, got {type(key).__name__}")


# ============================================================
# Tokenizer
# ============================================================

def combined_pattern(matchers: Sequence[MatcherType]) -> re.Pattern:
    """Build the single capturing alternation of every matcher's source."""
    keys = '|'.join(m.source for m in matchers)
    return re.compile(f"({keys})")


def chunk_string(matchers: Sequence[MatcherType], text: Optional[str]) -> List[str]:
    """
    Split text on the configured tokens, keeping the tokens themselves.

    Every piece is stripped of surrounding whitespace. Pieces that come from
    groups which did not participate in a match are dropped; empty pieces are
    kept.

    Args:
        matchers: Matchers in table order (first alternative wins)
        text: String to split, or None

    Returns:
        List of fragments in left-to-right order ([] for None)

    Examples:
        chunk_string([Literal(">")], "1 > 0")  # => ["1", ">", "0"]
    """
    if text is None:
        return []
    if not matchers:
        return [text.strip()]

    pieces = combined_pattern(matchers).split(text)
    return [piece.strip() for piece in pieces if piece is not None]


# ============================================================
# Reduction
# ============================================================

def sibling_chunks(chunks: Sequence[ChunkType], i: int) -> Dict[int, ChunkType]:
    """
    Return the existing neighbors of position i, keyed by index.

    The left neighbor is absent for the first position and the right
    neighbor for the last one.
    """
    siblings = {}
    if i > 0:
        siblings[i - 1] = chunks[i - 1]
    if i < len(chunks) - 1:
        siblings[i + 1] = chunks[i + 1]
    return siblings


def prune_chunks(chunks: Sequence[ChunkType], indices: Iterable[int]) -> List[ChunkType]:
    """
    Remove the marked positions in a single filter pass.

    Out-of-range marks are ignored and duplicates collapse to one removal.
    """
    prunable = {i for i in indices if 0 <= i < len(chunks)}
    return [chunk for i, chunk in enumerate(chunks) if i not in prunable]


def reduce_pass(
    chunks: Sequence[ChunkType],
    matcher: MatcherType,
    fn: ReduceFn,
    listener: Any = None,
) -> List[ChunkType]:
    """
    Apply one rule to every matching fragment of the sequence.

    Each match is evaluated against the chunks as they were before the pass,
    so reductions made earlier in the same pass are never seen by later
    matches. Neighbors of every match are pruned together at the end.

    Args:
        chunks: Sequence before this pass
        matcher: Matcher for the rule key
        fn: Reduction function, called with the present neighbor values
        listener: Optional object whose reduced(chunk) is called per match

    Returns:
        The sequence after replacing matches and pruning neighbors
    """
    unpruned: List[ChunkType] = []
    matches = 0
    to_prune = set()

    for i, chunk in enumerate(chunks):
        if not matcher.matches(chunk):
            unpruned.append(chunk)
            continue

        siblings = sibling_chunks(chunks, i)
        values = [chunk_value(sibling) for sibling in siblings.values()]
        reduced = ReducedChunk(
            key=matcher.key,
            positions=list(siblings) + [i],
            siblings=siblings.values(),
            fn=fn,
            result=fn(*values),
        )
        to_prune.update((i - 1, i + 1))
        matches += 1
        unpruned.append(reduced)
        if listener is not None:
            listener.reduced(reduced)

    if not matches:
        return unpruned

    pruned = prune_chunks(unpruned, to_prune)
    logger.debug("rule %s matched %d times, %d chunks left",
                 describe_key(matcher.key), matches, len(pruned))
    return pruned


def reduce_chunks(
    chunks: Sequence[ChunkType],
    rules: Sequence[Tuple[MatcherType, ReduceFn]],
    listener: Any = None,
) -> List[ChunkType]:
    """Run one full pass per rule, in table order."""
    result = list(chunks)
    for matcher, fn in rules:
        result = reduce_pass(result, matcher, fn, listener)
    return result


# ============================================================
# Resolution
# ============================================================

def resolve(chunks: List[ChunkType]) -> Any:
    """
    Collapse a fully reduced sequence.

    A single remaining chunk resolves to its value (the computed result of a
    reduced chunk, or the fragment itself). Any other sequence, including an
    empty one, is returned unchanged.
    """
    if len(chunks) == 1:
        return chunk_value(chunks[0])
    return chunks


# ============================================================
# Modifiers
# ============================================================

def apply_modifiers(
    text: str,
    modifiers: Sequence[Tuple[re.Pattern, RewriteFn]],
    config: Any = None,
) -> Optional[Tuple[re.Pattern, str]]:
    """
    Try each modifier against the whole text, in order.

    Returns:
        (pattern, rewritten_text) for the first modifier that matches,
        or None if none does
    """
    for pattern, rewrite in modifiers:
        found = pattern.search(text)
        if found:
            return pattern, rewrite(found.group(0), text, config)
    return None


# ============================================================
# Reducer Factory
# ============================================================

def reducer(
    rules: RuleTable,
    modifiers: Optional[ModifierTable] = None,
    resolver: Optional[ResolverFn] = None,
    config: Any = None,
    listener: Any = None,
) -> Callable[[Optional[str]], Any]:
    """
    Create a function that reduces strings using the given tables.

    Modifiers are applied to the whole string first; when one matches, the
    rewritten string is processed again from the start. Modifiers keyed by a
    plain string never fire. There is no cycle detection: a modifier that
    keeps matching its own output recurses until RecursionError.

    Args:
        rules: Ordered (key, fn) pairs; order is reduction priority
        modifiers: Ordered (pattern, rewrite) pairs
        resolver: Summarizing function for the final sequence (default: resolve)
        config: Passed as third argument to every rewrite function
        listener: Optional object with modified(pattern, before, after) and
            reduced(chunk) methods, notified as the pipeline runs

    Returns:
        A function from text (or None) to the resolved result

    Examples:
        process = reducer([(">", lambda a, b: float(a) > float(b))])
        process("1 > 0")        # => True
        process("nothing here") # => "nothing here"
        process(None)           # => []
    """
    matchers = [(as_matcher(key), fn) for key, fn in rules]
    eligible = [(key, fn) for key, fn in (modifiers or []) if isinstance(key, re.Pattern)]
    active_resolver: ResolverFn = resolver if resolver is not None else resolve

    def process(text: Optional[str]) -> Any:
        if text is not None:
            modified = apply_modifiers(text, eligible, config)
            if modified is not None:
                pattern, rewritten = modified
                logger.debug("modifier %s rewrote %r to %r",
                             describe_key(pattern), text, rewritten)
                if listener is not None:
                    listener.modified(pattern, text, rewritten)
                return process(rewritten)

        chunks = chunk_string([m for m, _ in matchers], text)
        chunks = reduce_chunks(chunks, matchers, listener)
        return active_resolver(chunks)

    return process


# ============================================================
# Value Coercion
# ============================================================

def to_number(value: Any) -> Union[int, float]:
    """
    Convert a fragment or result to a number.

    Booleans become 0/1, numeric strings become int when integral,
    float otherwise. A blank fragment, which a token at the edge of the
    text leaves behind, reads as 0.

    Raises:
        ValueError: If the value has no numeric reading
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise ValueError(f"Not a number: {value!r}")


def to_bool(value: Any) -> bool:
    """
    Convert a fragment or result to a boolean.

    Raises:
        ValueError: If the value has no boolean reading
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        try:
            return to_number(text) != 0
        except ValueError:
            pass
    raise ValueError(f"Not a boolean: {value!r}")


def _collapse(result: Any) -> Any:
    # Preserve integer type when possible
    if isinstance(result, float) and result.is_integer():
        return int(result)
    return result


def format_value(value: Any) -> str:
    """
    Render a value as text for substitution back into a string.

    Examples:
        format_value(True)  # => "true"
        format_value(3.0)   # => "3"
        format_value(["1", ReducedChunk(...)])  # => "1 <result>"
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if is_reduced(value):
        return format_value(value.result)
    if isinstance(value, (list, tuple)):
        return " ".join(format_value(chunk_value(v)) for v in value)
    return str(value)


# ============================================================
# Reduction Function Builders
# ============================================================

def binary(op: Callable[[Any, Any], Any]) -> ReduceFn:
    """Create a two-neighbor reducer; returns None when a neighbor is missing."""
    def handler(*args):
        if len(args) != 2:
            return None  # Token at a boundary
        return op(args[0], args[1])
    return handler


def numeric(op: Callable[[Any, Any], Any]) -> ReduceFn:
    """Create a binary reducer over numeric readings of both neighbors.

    Examples:
        add = numeric(lambda a, b: a + b)
        add("1", "2")  # => 3
        add("1.5", 2)  # => 3.5
    """
    return binary(lambda a, b: _collapse(op(to_number(a), to_number(b))))


def logical(op: Callable[[bool, bool], bool]) -> ReduceFn:
    """Create a binary reducer over boolean readings of both neighbors."""
    return binary(lambda a, b: op(to_bool(a), to_bool(b)))


def special_minus() -> ReduceFn:
    """Subtraction: (- x) = -x for a leading token, (x - y) = x-y."""
    def handler(*args):
        if len(args) == 1:
            return -to_number(args[0])
        if len(args) == 2:
            return _collapse(to_number(args[0]) - to_number(args[1]))
        return None
    return handler


def safe_div() -> ReduceFn:
    """Division that yields None instead of raising on division by zero."""
    def handler(*args):
        if len(args) != 2:
            return None
        divisor = to_number(args[1])
        if divisor == 0:
            return None
        return _collapse(to_number(args[0]) / divisor)
    return handler


# ============================================================
# Standard Preludes
# ============================================================

# Minus only when not directly followed by a number, so "-1" stays a fragment
MINUS = re.compile(r"-(?![.0-9])")

add = numeric(lambda a, b: a + b)
subtract = special_minus()
multiply = numeric(lambda a, b: a * b)
divide = safe_div()
modulo = numeric(lambda a, b: a % b)
power = numeric(lambda a, b: a ** b)

gt = numeric(lambda a, b: a > b)
lt = numeric(lambda a, b: a < b)
gte = numeric(lambda a, b: a >= b)
lte = numeric(lambda a, b: a <= b)
eq = numeric(lambda a, b: a == b)
neq = numeric(lambda a, b: a != b)

and_ = logical(lambda a, b: a and b)
or_ = logical(lambda a, b: a or b)

# Arithmetic prelude: table order is the reduction priority
ARITHMETIC_PRELUDE: Dict[KeyType, ReduceFn] = {
    "^": power,
    "*": multiply,
    "/": divide,
    "%": modulo,
    "+": add,
    MINUS: subtract,
}

# Comparison prelude: two-character operators first so they win the split
COMPARISON_PRELUDE: Dict[KeyType, ReduceFn] = {
    ">=": gte,
    "<=": lte,
    "!=": neq,
    ">": gt,
    "<": lt,
    "=": eq,
}

LOGIC_PRELUDE: Dict[KeyType, ReduceFn] = {
    "&&": and_,
    "||": or_,
}

# Full prelude: arithmetic binds before comparison, comparison before logic
FULL_PRELUDE: Dict[KeyType, ReduceFn] = {
    **ARITHMETIC_PRELUDE,
    **COMPARISON_PRELUDE,
    **LOGIC_PRELUDE,
}

NO_PRELUDE: Dict[KeyType, ReduceFn] = {}
