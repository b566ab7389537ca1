#!/usr/bin/env python3
"""
chunkparse Command-Line Interface

Provides interactive REPL, script execution, and pipe/filter modes.

Usage:
    chunkparse                              # Start REPL
    chunkparse script.chunks                # Run script
    chunkparse -e "4 + 2 * (1 + 2)"         # Evaluate expression
    chunkparse -c calc.rules                # REPL with rules preloaded
    chunkparse -p none -c calc.rules -e "1 > 0"   # One-shot with rules only
    echo "2 > 1 && 1 > 0" | chunkparse      # Filter mode

Script Format (.chunks files):
    #!/usr/bin/env chunkparse
    :prelude arithmetic
    :load extra.rules

    [rules]
    & => and

    4 + 2 * (1 + 2)
    1 + 1 = 2

REPL Commands:
    :help              Show help
    :load FILE         Load rules from file
    :rules             List loaded rules and modifiers
    :clear             Clear all rules and modifiers
    :prelude NAME      Add prelude (arithmetic, comparison, logic, full, none, or path)
    :trace on|off      Toggle tracing
    :quit              Exit
"""

import argparse
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from . import __version__
from .engine import (
    Config, GROUP_MODIFIERS, SECTIONS,
    parse, parse_entry_line, lookup_function,
)
from .reducer import (
    ARITHMETIC_PRELUDE, COMPARISON_PRELUDE, LOGIC_PRELUDE,
    FULL_PRELUDE, NO_PRELUDE,
    format_value, chunk_value, describe_key, is_reduced,
)

logger = logging.getLogger(__name__)

# Try to import readline for better REPL experience
try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False

# Built-in preludes
BUILTIN_PRELUDES: Dict[str, Dict] = {
    "none": NO_PRELUDE,
    "arithmetic": ARITHMETIC_PRELUDE,
    "comparison": COMPARISON_PRELUDE,
    "logic": LOGIC_PRELUDE,
    "full": FULL_PRELUDE,
}

# Standard prelude search paths
PRELUDE_SEARCH_PATHS = [
    Path("./preludes"),
    Path.home() / ".config" / "chunkparse" / "preludes",
]


def load_custom_prelude(name_or_path: str) -> Optional[Dict]:
    """
    Load a custom prelude from a Python file.

    The file should define a PRELUDE table mapping tokens to functions.

    Args:
        name_or_path: Either a path to a .py file, or a name to search for

    Returns:
        The PRELUDE table from the file, or None if not found
    """
    path = Path(name_or_path)

    if path.suffix == ".py" or "/" in name_or_path or "\\" in name_or_path:
        if not path.exists():
            return None
        search_paths = [path]
    else:
        search_paths = []
        for search_dir in PRELUDE_SEARCH_PATHS:
            candidate = search_dir / f"{name_or_path}.py"
            if candidate.exists():
                search_paths.append(candidate)

    for prelude_path in search_paths:
        try:
            spec = importlib.util.spec_from_file_location("custom_prelude", prelude_path)
            if spec and spec.loader:
                module = importlib.util.module_from_spec(spec)
                spec.loader.exec_module(module)
                if hasattr(module, "PRELUDE"):
                    return module.PRELUDE
        except Exception as e:
            print(f"Error loading prelude from {prelude_path}: {e}", file=sys.stderr)

    return None


def format_result(value: Any) -> str:
    """Format a parse result for display; unresolved sequences are bracketed."""
    if isinstance(value, list):
        parts = []
        for chunk in value:
            if is_reduced(chunk):
                parts.append(format_value(chunk_value(chunk)))
            else:
                parts.append(repr(chunk))
        return "[" + ", ".join(parts) + "]"
    return format_value(value)


class ChunkparseREPL:
    """Interactive REPL for chunkparse."""

    def __init__(self, groups: bool = True):
        self.config = Config(modifiers=GROUP_MODIFIERS if groups else None)
        self.prelude: Optional[str] = None
        self.trace = False
        self.section = "rules"
        self.running = True

        if HAS_READLINE:
            self.history_file = Path.home() / ".chunkparse_history"
            try:
                readline.read_history_file(self.history_file)
            except FileNotFoundError:
                pass
            readline.set_history_length(1000)

    def save_history(self):
        """Save readline history."""
        if HAS_READLINE:
            try:
                readline.write_history_file(self.history_file)
            except OSError as e:
                logger.debug("could not save history: %s", e)

    def set_prelude(self, name: str) -> bool:
        """Add the rules of a prelude, by name or path."""
        name_lower = name.lower()

        if name_lower in BUILTIN_PRELUDES:
            self.config.with_prelude(BUILTIN_PRELUDES[name_lower])
            self.prelude = name_lower
            return True

        custom = load_custom_prelude(name)
        if custom is not None:
            self.config.with_prelude(custom)
            self.prelude = name
            return True

        return False

    def handle_command(self, line: str) -> Optional[str]:
        """
        Handle a REPL command (starts with :).

        Returns a message to print, or None.
        """
        parts = line[1:].split(None, 1)
        if not parts:
            return "Unknown command. Type :help for help."

        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        if cmd == "help":
            return self.help_text()

        elif cmd == "quit" or cmd == "exit" or cmd == "q":
            self.running = False
            return None

        elif cmd == "load":
            if not arg:
                return "Usage: :load FILENAME"
            try:
                path = Path(arg)
                self.config.load_file(path)
                return f"Loaded {len(self.config)} rules from {path}"
            except Exception as e:
                return f"Error loading {arg}: {e}"

        elif cmd == "rules":
            rules = self.config.list_rules()
            if not rules:
                return "No rules loaded"
            return "\n".join(rules)

        elif cmd == "clear":
            self.config.clear()
            return "Cleared all rules"

        elif cmd == "prelude":
            if not arg:
                available = ", ".join(BUILTIN_PRELUDES.keys())
                return f"Usage: :prelude NAME\nAvailable: {available}\nOr provide a path to a .py file"
            if self.set_prelude(arg):
                return f"Prelude added: {arg}"
            else:
                return f"Unknown prelude: {arg}"

        elif cmd == "trace":
            if arg.lower() in ("on", "true", "1"):
                self.trace = True
                return "Tracing enabled"
            elif arg.lower() in ("off", "false", "0"):
                self.trace = False
                return "Tracing disabled"
            else:
                self.trace = not self.trace
                return f"Tracing {'enabled' if self.trace else 'disabled'}"

        else:
            return f"Unknown command: {cmd}. Type :help for help."

    def help_text(self) -> str:
        """Return help text."""
        return """chunkparse REPL Commands:
  :help              Show this help
  :load FILE         Load rules from file (.rules or .json)
  :rules             List all loaded rules and modifiers
  :clear             Clear all rules and modifiers
  :prelude NAME      Add prelude (arithmetic, comparison, logic, full, none, or path.py)
  :trace on|off      Toggle tracing
  :quit              Exit

Syntax:
  [rules] / [modifiers]      Choose the table for following definitions
  token => function          Define a rule (or modifier)
  /regex/ => function        Define a pattern-keyed rule (or modifier)
  @name: token => function   Named definition
  text                       Parse text
"""

    def add_entry(self, line: str) -> str:
        """Add a rule or modifier definition to the current section."""
        parsed = parse_entry_line(line)
        if not parsed:
            return "Failed to parse rule"
        metadata, key, fn_name = parsed
        fn = lookup_function(fn_name)
        if self.section == "modifiers":
            self.config.add_modifier(key, fn, metadata.name, metadata.description)
            return f"Added modifier {describe_key(key)}"
        self.config.add_rule(key, fn, metadata.name, metadata.description)
        return f"Added rule {describe_key(key)}"

    def process_line(self, line: str) -> Optional[str]:
        """
        Process a single line of input.

        Returns the result to print, or None.
        """
        line = line.strip()

        # Empty line or comment
        if not line or line.startswith("#"):
            return None

        if line.startswith(":"):
            return self.handle_command(line)

        # Section declaration
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip().lower()
            if section not in SECTIONS:
                return f"Unknown section: {section}"
            self.section = section
            return f"Section: {section}"

        try:
            # Rule definition (has =>)
            if "=>" in line:
                return self.add_entry(line)

            parser = parse(self.config)
            if self.trace:
                result, trace = parser(line, trace=True)
                output = format_result(result)
                if trace.steps:
                    return f"{output}\n{trace.format('rules')}"
                return output
            return format_result(parser(line))

        except Exception as e:
            return f"Error: {e}"

    def run(self):
        """Run the REPL loop."""
        print("chunkparse - rule-driven string reduction")
        print("Type :help for help, :quit to exit")
        print()

        while self.running:
            try:
                line = input("chunkparse> ")
                result = self.process_line(line)
                if result:
                    print(result)
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

        self.save_history()


class ScriptRunner:
    """Runs chunkparse scripts."""

    def __init__(self, groups: bool = True):
        self.repl = ChunkparseREPL(groups=groups)

    def run_script(self, path: Path, quiet: bool = False) -> int:
        """
        Run a script file.

        Args:
            path: Path to the script
            quiet: If True, don't print results

        Returns:
            Exit code (0 for success)
        """
        try:
            lines = path.read_text().splitlines()
        except OSError as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return 1

        for lineno, line in enumerate(lines, 1):
            line = line.strip()

            # Skip empty lines, comments, and shebang
            if not line or line.startswith("#"):
                continue

            result = self.repl.process_line(line)
            if not result:
                continue

            is_definition = line.startswith((":", "[")) or "=>" in line
            failed = result.startswith("Error")
            if is_definition:
                failed = failed or result.startswith(("Unknown", "Failed"))

            if failed:
                print(f"{path}:{lineno}: {result}", file=sys.stderr)
                return 1

            # Command and definition confirmations stay silent in scripts
            if not is_definition and not quiet:
                print(result)

        return 0

    def run_expression(self, text: str) -> int:
        """
        Evaluate a single expression.

        Returns:
            Exit code (0 for success)
        """
        result = self.repl.process_line(text)
        if result:
            print(result)
            if result.startswith("Error"):
                return 1
        return 0

    def run_stdin(self) -> int:
        """
        Read expressions from stdin and evaluate them.

        Returns:
            Exit code (0 for success)
        """
        for line in sys.stdin:
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            result = self.repl.process_line(line)
            if result:
                print(result)
                if result.startswith("Error"):
                    return 1

        return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="chunkparse",
        description="chunkparse - rule-driven string reduction",
        epilog="Examples:\n"
               "  chunkparse                            Start REPL\n"
               "  chunkparse script.chunks              Run script\n"
               "  chunkparse -e '4 + 2 * (1 + 2)'       Evaluate expression\n"
               "  chunkparse -c calc.rules              REPL with rules\n"
               "  echo '1 > 0' | chunkparse             Filter mode\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "script",
        nargs="?",
        help="Script file to run"
    )

    parser.add_argument(
        "-c", "--config",
        action="append",
        default=[],
        help="Load rules from file (can be specified multiple times)"
    )

    parser.add_argument(
        "-e", "--expr",
        help="Evaluate a single expression"
    )

    parser.add_argument(
        "-p", "--prelude",
        default="full",
        help="Prelude (arithmetic, comparison, logic, full, none, or path.py)"
    )

    parser.add_argument(
        "--no-groups",
        action="store_true",
        help="Do not resolve parenthesised groups first"
    )

    parser.add_argument(
        "-t", "--trace",
        action="store_true",
        help="Enable tracing"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (suppress non-essential output)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every modifier rewrite and rule pass"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    runner = ScriptRunner(groups=not args.no_groups)

    if not runner.repl.set_prelude(args.prelude):
        print(f"Unknown prelude: {args.prelude}", file=sys.stderr)
        sys.exit(1)

    runner.repl.trace = args.trace

    for config_file in args.config:
        try:
            runner.repl.config.load_file(Path(config_file))
            if not args.quiet:
                print(f"Loaded rules from {config_file}", file=sys.stderr)
        except Exception as e:
            print(f"Error loading {config_file}: {e}", file=sys.stderr)
            sys.exit(1)

    if args.script:
        sys.exit(runner.run_script(Path(args.script), quiet=args.quiet))

    elif args.expr:
        sys.exit(runner.run_expression(args.expr))

    elif not sys.stdin.isatty():
        # Pipe/filter mode (stdin is not a terminal)
        sys.exit(runner.run_stdin())

    else:
        runner.repl.run()


if __name__ == "__main__":
    main()
