"""Command-line front end: one-shot rolls, interactive mode and help text.

    rollexpr [-v | -q] EXPR...     roll each expression and print its total
    rollexpr -i [-v | -q]          interactive mode
    rollexpr -help                 explain the expression syntax
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from rollexpr.config import settings
from rollexpr.errors import DiceError
from rollexpr.evaluator import roll_expression
from rollexpr.narration import NarrationEvent, render
from rollexpr.random_source import RandomSource, bounded, default_source

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 28
PROMPT = ">>> "

USAGE = (
    "Usage: rollexpr <flags> <expression>\n"
    " See the README for the expression grammar.\n"
    "Use rollexpr -help for a short explanation."
)

HELP_TEXT = """\
General die rolls take the form of XdY.
X is the number of dice to roll and Y is the number of sides of the die for those rolls.
Die rolls can be composed with infix arithmetic operators (+, -, *, /) and can include \
constant values (ex. 1d4+4).

-v flag: Enables verbose printing (each individual die rolled will be displayed). \
Default is to print numbered roll results for overall rolls only.

-q flag: Only print the total value of each roll, newline-delimited, and nothing else \
(quiet mode). Useful for using the tool as input to other programs.

-i flag: Interactive mode. Enter expressions separated by spaces, "set verbosity <level>" \
to change the output level, and q or exit to leave.

Die modifiers (appended to end of die rolls):
    c (Usage XdYcZ): Take only the Z highest results from the X dice rolled.
    v (Usage XdYvZ): Roll 'exploding' dice, wherein if a value at or above Z is rolled on \
a given die an extra die (of the same Y many sides) is rolled and also added to the total. \
Such extra dice can also explode given the same threshold.
    b (Usage XdYbZ): Reroll individual dice that fall below the threshold Z in value until \
they result in a value greater than Z.
    w (Usage XdYwZ): Take only the Z lowest results from the X dice rolled.

Subtraction and division chain to the right: 8-4-2 is 8-(4-2).
"""

_VERBOSITY_ALIASES: dict[str, str] = {
    "verbose": "verbose",
    "v": "verbose",
    "-v": "verbose",
    "normal": "default",
    "default": "default",
    "quiet": "quiet",
    "q": "quiet",
    "-q": "quiet",
}

_VERBOSITY_MESSAGES: dict[str, str] = {
    "verbose": "Verbosity set to verbose (-v)",
    "default": "Verbosity set to default (normal)",
    "quiet": "Verbosity set to quiet (-q)",
}


@dataclass
class Session:
    """Mutable state of one command-line or interactive run."""

    verbosity: str
    source: RandomSource
    out: TextIO

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"

    def write(self, line: str = "") -> None:
        print(line, file=self.out)

    def narrate(self, event: NarrationEvent) -> None:
        self.write(render(event))


def resolve_verbosity(verbose: bool, quiet: bool, default: str = "default") -> str:
    """Combine -v and -q; asking for both cancels both."""
    if verbose and quiet:
        return "default"
    if verbose:
        return "verbose"
    if quiet:
        return "quiet"
    return default


def run_rolls(session: Session, expressions: list[str]) -> int:
    """Roll each expression in turn, printing numbered results.

    A failing expression prints ``ERROR: <message>`` and the next one is still
    rolled.

    Returns:
        Number of expressions that failed.
    """
    failures = 0
    if session.verbose:
        session.write(SEPARATOR)
    for number, text in enumerate(expressions, start=1):
        if session.verbose:
            session.write(f"Roll {number}:")
            session.write(SEPARATOR)
        elif not session.quiet:
            print(f"Roll {number}: ", end="", file=session.out)
        limit = settings.max_expression_length
        if len(text) > limit:
            session.write(f"ERROR: Expression longer than {limit} characters.")
            failures += 1
            if session.verbose:
                session.write(SEPARATOR)
            continue
        try:
            total = roll_expression(
                text, bounded(session.source), session.verbose, session.narrate
            )
        except DiceError as exc:
            logger.debug("Roll %d (%r) failed: %s", number, text, exc.kind.value)
            session.write(f"ERROR: {exc.message}")
            failures += 1
        else:
            session.write(f"Total: {total}" if session.verbose else str(total))
        if session.verbose:
            session.write(SEPARATOR)
    return failures


def apply_set_command(session: Session, command: str) -> None:
    """Handle ``set verbosity <level>``; anything else is reported as unrecognized."""
    words = command.split()
    if len(words) != 2 or words[0] != "verbosity":
        session.write("ERROR: Unrecognized setting.")
        return
    level = _VERBOSITY_ALIASES.get(words[1])
    if level is None:
        session.write("ERROR: Unrecognized verbosity setting.")
        return
    session.verbosity = level
    session.write(_VERBOSITY_MESSAGES[level])


def is_exit_command(line: str) -> bool:
    return line.startswith(("q", "\x1b")) or line.strip() == "exit"


def handle_line(session: Session, line: str) -> None:
    """Process one line of interactive input."""
    if line.startswith("set "):
        apply_set_command(session, line[4:])
        return
    if len(line) > settings.max_expression_length:
        session.write(f"ERROR: Input longer than {settings.max_expression_length} characters.")
        return
    run_rolls(session, line.split())


def interactive_loop(session: Session, stdin: TextIO) -> None:
    """Read lines from ``stdin`` until EOF or an exit command."""
    print("rollexpr, interactive mode:", file=session.out)
    print(PROMPT, end="", file=session.out, flush=True)
    for line in stdin:
        if is_exit_command(line):
            break
        handle_line(session, line)
        print(PROMPT, end="", file=session.out, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rollexpr",
        usage="rollexpr [-v | -q] [-i] EXPR...",
        add_help=False,
        exit_on_error=False,
    )
    parser.add_argument("-help", "--help", dest="help", action="store_true")
    parser.add_argument("-v", dest="verbose", action="store_true")
    parser.add_argument("-q", dest="quiet", action="store_true")
    parser.add_argument("-i", dest="interactive", action="store_true")
    parser.add_argument("expressions", nargs="*")
    return parser


def main(
    argv: list[str] | None = None,
    source: RandomSource | None = None,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> int:
    """Entry point of the ``rollexpr`` console script.

    Unknown dash flags are ignored.

    Returns:
        Process exit status: 0 on success, 1 on usage errors or failed rolls.
    """
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.WARNING)
    out = out or sys.stdout
    try:
        args, extras = build_parser().parse_known_args(sys.argv[1:] if argv is None else argv)
    except argparse.ArgumentError as exc:
        logger.debug("Bad command line: %s", exc)
        print(USAGE, file=out)
        return 1
    for extra in extras:
        if extra.startswith("-"):
            logger.debug("Ignoring unknown flag %s", extra)
        else:
            args.expressions.append(extra)

    if args.help:
        print(HELP_TEXT, file=out)
        return 0
    if not args.interactive and not args.expressions:
        print(USAGE, file=out)
        return 1

    session = Session(
        verbosity=resolve_verbosity(args.verbose, args.quiet, settings.verbosity),
        source=source or default_source(),
        out=out,
    )
    if args.interactive:
        interactive_loop(session, stdin or sys.stdin)
        return 0
    return 1 if run_rolls(session, args.expressions) else 0


if __name__ == "__main__":
    sys.exit(main())
