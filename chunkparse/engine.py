"""
Parser Configuration and Loaders for chunkparse

This module provides the Config object holding the ordered rule and modifier
tables, loaders for rules files in a small DSL or JSON, tracing, and the
parse() entry point.

DSL Format (.rules files):
    # Comment
    :include other.rules
    [modifiers]
    /\\(([^()])+\\)/ => group
    [rules]
    @times "Multiplication": * => multiply
    "+" => add
    /-(?![.0-9])/ => subtract

Keys:
    "text"   - literal token (JSON string syntax, for tokens with spaces or #)
    /regex/  - regular expression token
    text     - bare literal token without whitespace

The name after => is looked up in a function registry (BUILTIN_FUNCTIONS by
default).

JSON Format:
    {
        "name": "arithmetic",
        "rules": [
            {"token": "*", "function": "multiply", "name": "times"},
            {"pattern": "-(?![.0-9])", "function": "subtract"},
            ["+", "add"]
        ],
        "modifiers": [
            {"pattern": "\\\\(([^()])+\\\\)", "function": "group"}
        ]
    }

Tracing:
    Use parse(config)(text, trace=True) to see modifiers and reductions.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .reducer import (
    reducer, format_value, describe_key, chunk_value, as_matcher,
    KeyType, ReduceFn, RewriteFn, ResolverFn, ReducedChunk,
    add, subtract, multiply, divide, modulo, power,
    gt, lt, gte, lte, eq, neq, and_, or_,
)

logger = logging.getLogger(__name__)


# ============================================================
# Grouping Modifier
# ============================================================

# Innermost parenthesised group with non-empty content
PARENS = re.compile(r"\(([^()])+\)")


def resolve_group(matched: str, text: str, config: Any) -> str:
    """
    Reduce the content of a parenthesised group and substitute its value.

    The group's inner text is parsed with the same config; the value replaces
    the first occurrence of the group in the full text.

    Example:
        resolve_group("(1 + 2)", "4 * (1 + 2)", config)  # => "4 * 3"
    """
    value = parse(config)(matched[1:-1])
    return text.replace(matched, format_value(value), 1)


GROUP_MODIFIERS: Dict[KeyType, RewriteFn] = {
    PARENS: resolve_group,
}

# Functions addressable by name from rules files
BUILTIN_FUNCTIONS: Dict[str, Callable] = {
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "divide": divide,
    "modulo": modulo,
    "power": power,
    "gt": gt,
    "lt": lt,
    "gte": gte,
    "lte": lte,
    "eq": eq,
    "neq": neq,
    "and": and_,
    "or": or_,
    "group": resolve_group,
}


def function_name(fn: Callable) -> str:
    """Name a function the way rules files refer to it."""
    for name, builtin in BUILTIN_FUNCTIONS.items():
        if builtin is fn:
            return name
    return getattr(fn, "__name__", repr(fn))


# ============================================================
# DSL Parsing
# ============================================================

class EntryMetadata:
    """Optional name and description attached to a rule or modifier."""

    def __init__(self, name: Optional[str] = None, description: Optional[str] = None):
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        if not self.name:
            return "<anonymous>"
        base = f"@{self.name}"
        if self.description:
            base += f" \"{self.description}\""
        return base


SECTIONS = ("rules", "modifiers")

_ENTRY_PREFIX = re.compile(r'@([\w-]+)(?:\s+"([^"]+)")?:\s*(.+)')


def parse_key(text: str) -> KeyType:
    """
    Parse the key part of an entry line.

    Examples:
        parse_key('"&&"')        -> "&&"
        parse_key('*')           -> "*"
        parse_key('/-(?!\\d)/')  -> re.compile('-(?!\\d)')
    """
    text = text.strip()
    if len(text) >= 2 and text.startswith('/') and text.endswith('/'):
        return re.compile(text[1:-1])
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return json.loads(text)
    if not text or any(c.isspace() for c in text):
        raise ValueError(f"Invalid token key: {text!r}")
    return text


def format_key(key: KeyType) -> str:
    """Format a key in DSL syntax."""
    if isinstance(key, re.Pattern):
        return f"/{key.pattern}/"
    return json.dumps(key)


def parse_entry_line(line: str) -> Optional[Tuple[EntryMetadata, KeyType, str]]:
    """
    Parse a single entry line.

    Formats:
        key => function
        @name: key => function
        @name "description": key => function

    Returns: (metadata, key, function_name) or None if not an entry
    """
    line = line.strip()

    # Skip empty lines and comments
    if not line or line.startswith('#'):
        return None

    metadata = EntryMetadata()
    if line.startswith('@'):
        match_obj = _ENTRY_PREFIX.match(line)
        if not match_obj:
            raise ValueError(f"Malformed entry: {line!r}")
        metadata.name = match_obj.group(1)
        metadata.description = match_obj.group(2)
        line = match_obj.group(3)

    if '=>' not in line:
        return None

    # Function names never contain =>, keys may
    key_text, fn_name = line.rsplit('=>', 1)
    fn_name = fn_name.strip()
    if not fn_name:
        raise ValueError(f"Missing function name: {line!r}")

    return metadata, parse_key(key_text), fn_name


def lookup_function(name: str, functions: Optional[Mapping[str, Callable]] = None) -> Callable:
    """Resolve a function name against a registry (default BUILTIN_FUNCTIONS)."""
    registry = BUILTIN_FUNCTIONS if functions is None else functions
    if name not in registry:
        raise ValueError(f"Unknown function: {name}")
    return registry[name]


EntryType = Tuple[str, EntryMetadata, KeyType, Callable]


def load_entries_from_dsl(
    text: str,
    functions: Optional[Mapping[str, Callable]] = None,
    base_path: Optional[Path] = None,
    _included_files: Optional[set] = None,
) -> List[EntryType]:
    """
    Load rule and modifier entries from DSL text.

    Supports:
    - Sections: [rules] (the default) and [modifiers]
    - File includes: :include path/to/file.rules

    Args:
        text: DSL text
        functions: Registry mapping function names to callables
        base_path: Base path for resolving relative :include paths
        _included_files: Internal tracking for circular include detection

    Returns:
        List of (section, metadata, key, function) tuples in file order
    """
    entries: List[EntryType] = []
    section = "rules"

    if _included_files is None:
        _included_files = set()

    for line in text.split('\n'):
        line_stripped = line.strip()

        # Section header: [rules] or [modifiers]
        if line_stripped.startswith('[') and line_stripped.endswith(']'):
            section = line_stripped[1:-1].strip().lower()
            if section not in SECTIONS:
                raise ValueError(f"Unknown section: {line_stripped}")
            continue

        if line_stripped.startswith(':include '):
            include_path_str = line_stripped[9:].strip()
            if include_path_str:
                if base_path:
                    include_path = base_path / include_path_str
                else:
                    include_path = Path(include_path_str)

                abs_path = include_path.resolve()
                if abs_path in _included_files:
                    raise ValueError(f"Circular include detected: {include_path}")

                if not include_path.exists():
                    raise FileNotFoundError(f"Include file not found: {include_path}")
                _included_files.add(abs_path)
                entries.extend(load_entries_from_file(
                    include_path,
                    functions=functions,
                    _included_files=_included_files,
                ))
            continue

        parsed = parse_entry_line(line)
        if parsed:
            metadata, key, fn_name = parsed
            entries.append((section, metadata, key, lookup_function(fn_name, functions)))

    return entries


def load_entries_from_file(
    path: Union[str, Path],
    functions: Optional[Mapping[str, Callable]] = None,
    _included_files: Optional[set] = None,
) -> List[EntryType]:
    """
    Load entries from a .rules or .json file.

    Includes in DSL files resolve relative to the containing file.
    """
    path = Path(path)
    text = path.read_text()

    if path.suffix == '.json':
        return load_entries_from_json(text, functions=functions)
    return load_entries_from_dsl(
        text,
        functions=functions,
        base_path=path.parent,
        _included_files=_included_files,
    )


def load_entries_from_json(
    text: str,
    functions: Optional[Mapping[str, Callable]] = None,
) -> List[EntryType]:
    """
    Load entries from JSON text.

    Each entry is either {"token"|"pattern": ..., "function": ...,
    "name"?: ..., "description"?: ...} or a [token, function] pair.
    """
    data = json.loads(text)
    entries: List[EntryType] = []

    for section in SECTIONS:
        for entry in data.get(section, []):
            if isinstance(entry, dict):
                metadata = EntryMetadata(
                    name=entry.get('name'),
                    description=entry.get('description'),
                )
                if 'pattern' in entry:
                    key = re.compile(entry['pattern'])
                else:
                    key = entry['token']
                fn_name = entry['function']
            else:
                metadata = EntryMetadata()
                key, fn_name = entry[0], entry[1]
            entries.append((section, metadata, key, lookup_function(fn_name, functions)))

    return entries


# ============================================================
# Configuration
# ============================================================

TableType = Union[Mapping[KeyType, Callable], Iterable[Tuple[KeyType, Callable]]]


def _pairs(table: TableType) -> List[Tuple[KeyType, Callable]]:
    """Normalize a mapping or a sequence of pairs to a list of pairs."""
    if isinstance(table, Mapping):
        return list(table.items())
    return [(key, fn) for key, fn in table]


def _same_key(a: KeyType, b: KeyType) -> bool:
    return type(a) is type(b) and a == b


class Config:
    """
    Ordered rule and modifier tables for the parser.

    Table order is significant: rules earlier in the table are applied to
    every match before later rules see the sequence. Adding a key that is
    already present replaces its function and keeps its position.

    Example:
        from chunkparse import Config, parse, ARITHMETIC_PRELUDE, GROUP_MODIFIERS

        config = Config(rules=ARITHMETIC_PRELUDE, modifiers=GROUP_MODIFIERS)
        parse(config)("4 + 2 * (1 + 2)")  # => 10

        config = (Config()
            .add_rule(">", gt, name="greater")
            .add_modifier(PARENS, resolve_group))

        config = Config.from_dsl('''
            [rules]
            * => multiply
            + => add
        ''')
    """

    def __init__(self, rules: Optional[TableType] = None,
                 modifiers: Optional[TableType] = None):
        self._rules: List[Tuple[KeyType, ReduceFn]] = []
        self._rule_metadata: List[EntryMetadata] = []
        self._modifiers: List[Tuple[KeyType, RewriteFn]] = []
        self._modifier_metadata: List[EntryMetadata] = []
        if rules:
            self.with_prelude(rules)
        if modifiers:
            self.with_modifiers(modifiers)

    @classmethod
    def coerce(cls, value: Any) -> 'Config':
        """
        Accept a Config or a mapping with "rules" and optional "modifiers".

        Raises:
            TypeError: For anything else
        """
        if isinstance(value, Config):
            return value
        if isinstance(value, Mapping) and ("rules" in value or "modifiers" in value):
            return cls(rules=value.get("rules"), modifiers=value.get("modifiers"))
        raise TypeError(f"Expected a Config or a mapping with rules, got {type(value).__name__}")

    @staticmethod
    def _set(entries: List, metadata_list: List[EntryMetadata],
             key: KeyType, fn: Callable, metadata: EntryMetadata) -> None:
        for idx, (existing, _) in enumerate(entries):
            if _same_key(existing, key):
                entries[idx] = (existing, fn)
                if metadata.name or metadata.description:
                    metadata_list[idx] = metadata
                return
        entries.append((key, fn))
        metadata_list.append(metadata)

    def add_rule(self, key: KeyType, fn: ReduceFn,
                 name: Optional[str] = None,
                 description: Optional[str] = None) -> 'Config':
        """Add a single rule with optional metadata."""
        as_matcher(key)  # Validates the key type
        self._set(self._rules, self._rule_metadata, key, fn,
                  EntryMetadata(name=name, description=description))
        return self

    def add_modifier(self, pattern: KeyType, fn: RewriteFn,
                     name: Optional[str] = None,
                     description: Optional[str] = None) -> 'Config':
        """Add a single modifier with optional metadata."""
        as_matcher(pattern)
        if isinstance(pattern, str):
            logger.warning("modifier key %r is a literal and will never fire", pattern)
        self._set(self._modifiers, self._modifier_metadata, pattern, fn,
                  EntryMetadata(name=name, description=description))
        return self

    def with_prelude(self, table: TableType) -> 'Config':
        """
        Add every rule of a token table, in its order.

        Enables fluent construction:
            config = Config().with_prelude(ARITHMETIC_PRELUDE).with_prelude(LOGIC_PRELUDE)
        """
        for key, fn in _pairs(table):
            self.add_rule(key, fn)
        return self

    def with_modifiers(self, table: TableType) -> 'Config':
        """Add every modifier of a table, in its order."""
        for key, fn in _pairs(table):
            self.add_modifier(key, fn)
        return self

    def _add_entries(self, entries: List[EntryType]) -> 'Config':
        for section, metadata, key, fn in entries:
            if section == "modifiers":
                self.add_modifier(key, fn, metadata.name, metadata.description)
            else:
                self.add_rule(key, fn, metadata.name, metadata.description)
        logger.debug("loaded %d entries (%d rules, %d modifiers)",
                     len(entries), len(self._rules), len(self._modifiers))
        return self

    def load_dsl(self, text: str, functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Load entries from DSL text."""
        return self._add_entries(load_entries_from_dsl(text, functions=functions))

    def load_file(self, path: Union[str, Path],
                  functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Load entries from a file (.rules or .json)."""
        return self._add_entries(load_entries_from_file(path, functions=functions))

    def load_json(self, text: str, functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Load entries from JSON text."""
        return self._add_entries(load_entries_from_json(text, functions=functions))

    # Class method constructors for fluent creation
    @classmethod
    def from_dsl(cls, text: str, functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Create config from DSL text."""
        return cls().load_dsl(text, functions=functions)

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Create config from a file."""
        return cls().load_file(path, functions=functions)

    @classmethod
    def from_json(cls, text: str, functions: Optional[Mapping[str, Callable]] = None) -> 'Config':
        """Create config from JSON text."""
        return cls().load_json(text, functions=functions)

    @classmethod
    def from_prelude(cls, rules: TableType, modifiers: Optional[TableType] = None) -> 'Config':
        """Create config from token tables."""
        return cls(rules=rules, modifiers=modifiers)

    @property
    def rules(self) -> List[Tuple[KeyType, ReduceFn]]:
        """Get all rules as (key, fn) pairs, in table order."""
        return self._rules.copy()

    @property
    def modifiers(self) -> List[Tuple[KeyType, RewriteFn]]:
        """Get all modifiers as (pattern, fn) pairs, in table order."""
        return self._modifiers.copy()

    def keys(self) -> List[KeyType]:
        """Rule keys in table order."""
        return [key for key, _ in self._rules]

    def _index(self, key: KeyType) -> Optional[int]:
        for idx, (existing, _) in enumerate(self._rules):
            if _same_key(existing, key):
                return idx
        return None

    def get_rule(self, key: KeyType) -> Optional[Tuple[ReduceFn, EntryMetadata]]:
        """Get a rule's function and metadata by key."""
        idx = self._index(key)
        if idx is None:
            return None
        return self._rules[idx][1], self._rule_metadata[idx]

    def label(self, key: KeyType) -> str:
        """Name of the entry for a key, or the key itself when unnamed."""
        for entries, metadata_list in ((self._rules, self._rule_metadata),
                                       (self._modifiers, self._modifier_metadata)):
            for (existing, _), meta in zip(entries, metadata_list):
                if _same_key(existing, key) and meta.name:
                    return meta.name
        return describe_key(key)

    def clear(self) -> 'Config':
        """Remove all rules and modifiers."""
        self._rules = []
        self._rule_metadata = []
        self._modifiers = []
        self._modifier_metadata = []
        return self

    def list_rules(self) -> List[str]:
        """List all entries in DSL format, modifiers first."""
        result = []
        for section, entries, metadata_list in (
            ("modifiers", self._modifiers, self._modifier_metadata),
            ("rules", self._rules, self._rule_metadata),
        ):
            for (key, fn), meta in zip(entries, metadata_list):
                if meta.name:
                    name_part = f"@{meta.name}"
                    if meta.description:
                        name_part += f" \"{meta.description}\""
                    name_part += ": "
                else:
                    name_part = ""
                entry = f"{name_part}{format_key(key)} => {function_name(fn)}"
                if section == "modifiers":
                    entry = f"[modifier] {entry}"
                result.append(entry)
        return result

    def to_dsl(self, name: Optional[str] = None) -> str:
        """
        Export entries to DSL text.

        Functions are written by their BUILTIN_FUNCTIONS name, or by their
        __name__ for anything else, so loading the text back needs a registry
        that knows those names.
        """
        lines = []
        if name:
            lines.append(f"# {name}")
            lines.append("")
        for section, entries, metadata_list in (
            ("modifiers", self._modifiers, self._modifier_metadata),
            ("rules", self._rules, self._rule_metadata),
        ):
            if not entries:
                continue
            if lines and lines[-1] != "":
                lines.append("")
            lines.append(f"[{section}]")
            for (key, fn), meta in zip(entries, metadata_list):
                prefix = f"{meta!r}: " if meta.name else ""
                lines.append(f"{prefix}{format_key(key)} => {function_name(fn)}")
        return "\n".join(lines) + "\n"

    def copy(self) -> 'Config':
        """Create a copy of this config."""
        new_config = Config()
        new_config._rules = self._rules.copy()
        new_config._rule_metadata = self._rule_metadata.copy()
        new_config._modifiers = self._modifiers.copy()
        new_config._modifier_metadata = self._modifier_metadata.copy()
        return new_config

    def __or__(self, other: 'Config') -> 'Config':
        """Union of two configs: config1 | config2."""
        result = self.copy()
        result |= other
        return result

    def __ior__(self, other: 'Config') -> 'Config':
        """In-place union: config1 |= config2."""
        for (key, fn), meta in zip(other._rules, other._rule_metadata):
            self._set(self._rules, self._rule_metadata, key, fn, meta)
        for (key, fn), meta in zip(other._modifiers, other._modifier_metadata):
            self._set(self._modifiers, self._modifier_metadata, key, fn, meta)
        return self

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        """Iterate over ((key, fn), metadata) pairs of the rules."""
        return iter(zip(self._rules, self._rule_metadata))

    def __contains__(self, key: KeyType) -> bool:
        """Check if a rule key exists: '*' in config."""
        return self._index(key) is not None

    def __repr__(self) -> str:
        return f"Config({len(self._rules)} rules, {len(self._modifiers)} modifiers)"


# ============================================================
# Tracing
# ============================================================

def _jsonable(value: Any) -> Any:
    """Render trace values as plain data; reduced chunks become dicts."""
    if isinstance(value, ReducedChunk):
        return {
            "key": describe_key(value.key),
            "positions": list(value.positions),
            "result": _jsonable(value.result),
        }
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class ReductionStep:
    """A single modifier rewrite or rule reduction."""

    def __init__(self, kind: str, key: KeyType, before: Any, after: Any,
                 positions: Optional[Tuple[int, ...]] = None,
                 label: Optional[str] = None):
        self.kind = kind
        self.key = key
        self.before = before
        self.after = after
        self.positions = positions
        self.label = label or describe_key(key)

    def __repr__(self) -> str:
        if self.kind == "modifier":
            return f"{self.label}: {self.before!r} → {self.after!r}"
        args = ", ".join(format_value(v) for v in self.before)
        return f"{self.label}({args}) → {format_value(self.after)}"

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "kind": self.kind,
            "key": describe_key(self.key),
            "label": self.label,
            "before": _jsonable(self.before),
            "after": _jsonable(self.after),
            "positions": list(self.positions) if self.positions is not None else None,
        }


class ReductionTrace:
    """
    A trace of the modifier rewrites and rule reductions of one parse.

    The trace is the reducer's listener: it receives modified() and
    reduced() callbacks as the pipeline runs. Parses started by modifier
    functions themselves are not traced.

    Formatting options:
        - Default repr / format("verbose"): multi-line with every step
        - format("compact"): single line summary
        - format("rules"): labels of the applied entries
        - to_dict(): JSON-serializable dictionary
    """

    def __init__(self, labeler: Optional[Callable[[KeyType], str]] = None):
        self.steps: List[ReductionStep] = []
        self.initial: Optional[str] = None
        self.final: Any = None
        self._labeler = labeler or describe_key

    def add_step(self, step: ReductionStep):
        self.steps.append(step)

    def modified(self, pattern: KeyType, before: str, after: str):
        self.add_step(ReductionStep("modifier", pattern, before, after,
                                    label=self._labeler(pattern)))

    def reduced(self, chunk: ReducedChunk):
        self.add_step(ReductionStep(
            "rule", chunk.key,
            [chunk_value(sibling) for sibling in chunk.siblings],
            chunk.result,
            positions=chunk.positions,
            label=self._labeler(chunk.key),
        ))

    def format(self, style: str = "verbose") -> str:
        """
        Format the trace in different styles.

        Args:
            style: One of "verbose", "compact", "rules"

        Returns:
            Formatted string representation of the trace.
        """
        if style == "compact":
            labels = self.rules_applied()
            return f"{self.initial!r} --[{', '.join(labels)}]--> {format_value(self.final)}"

        elif style == "rules":
            labels = self.rules_applied()
            return " -> ".join(labels) if labels else "(no rules applied)"

        else:  # verbose (default)
            return repr(self)

    def __repr__(self) -> str:
        lines = [f"Initial: {self.initial!r}"]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step}")
        lines.append(f"Final: {format_value(self.final)}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any modifier or rule fired."""
        return len(self.steps) > 0

    def to_dict(self) -> Dict:
        """Convert trace to dictionary for JSON serialization."""
        return {
            "initial": self.initial,
            "final": _jsonable(self.final),
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
        }

    def rule_counts(self) -> Dict[str, int]:
        """Count how many times each entry fired."""
        counts: Dict[str, int] = {}
        for step in self.steps:
            counts[step.label] = counts.get(step.label, 0) + 1
        return counts

    def rules_applied(self) -> List[str]:
        """Get entry labels in order of application."""
        return [step.label for step in self.steps]

    def summary(self) -> str:
        """Get a brief summary of the parse."""
        if not self.steps:
            return "No reductions performed"
        counts = self.rule_counts()
        most_used = max(counts.items(), key=lambda x: x[1])
        return (f"{len(self.steps)} steps using {len(counts)} unique entries. "
                f"Most used: {most_used[0]} ({most_used[1]}x)")


# ============================================================
# Parser
# ============================================================

class Parser:
    """
    A callable parser over a Config.

    Each call builds a fresh reducer from the config's current tables, so
    rules added to the config between calls take effect.

    Example:
        parser = parse({"rules": {">": gt}})
        parser("1 > 0")                      # => True
        result, trace = parser("1 > 0", trace=True)
    """

    def __init__(self, config: Any, resolver: Optional[ResolverFn] = None):
        self.config = Config.coerce(config)
        self.resolver = resolver

    def _build(self, listener: Any = None) -> Callable[[Optional[str]], Any]:
        return reducer(
            self.config.rules,
            self.config.modifiers,
            resolver=self.resolver,
            config=self.config,
            listener=listener,
        )

    def __call__(self, text: Optional[str], trace: bool = False):
        """
        Parse text.

        Args:
            text: String to reduce, or None
            trace: If True, return (result, ReductionTrace)

        Returns:
            The resolved result, or (result, trace) if trace=True
        """
        if not trace:
            return self._build()(text)

        reduction_trace = ReductionTrace(labeler=self.config.label)
        reduction_trace.initial = text
        result = self._build(reduction_trace)(text)
        reduction_trace.final = result
        return result, reduction_trace

    def __repr__(self) -> str:
        return f"Parser({self.config!r})"


def parse(config: Any, resolver: Optional[ResolverFn] = None) -> Parser:
    """
    Create a parser for a config.

    Args:
        config: Config, or a mapping {"rules": ..., "modifiers": ...} whose
            tables are mappings (insertion order) or sequences of pairs
        resolver: Summarizing function for the final chunk sequence
            (default: resolve, which collapses a single chunk to its value)

    Returns:
        A Parser; call it with a string (or None)

    Examples:
        parse({"rules": {">": gt}})("1 > 0")  # => True
        parse({"rules": {">": gt}})(None)     # => []
    """
    return Parser(config, resolver)
