# cliopts/parsing/parser.py

import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from cliopts.domain.errors import CommandLineError
from cliopts.domain.inputs import ParsedInput
from cliopts.domain.options import OptionDefinition, OptionTable
from cliopts.parsing.tokenizer import scan
from cliopts.utils.usage import format_usage

logger = logging.getLogger(__name__)


def default_prog() -> str:
    """Basename of the running script, used to prefix error messages."""
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "cliopts"


class Parser:
    """Declarative command-line option parser.

    A `Parser` owns one `OptionTable`. Options are registered up front, the
    argument vector is parsed once, then values are read back by name.

    Usage
    -----
        parser = Parser()
        parser.options(
            "-h|--help|Print usage.",
            "-o|--option=title:|A required-argument option.",
            "-t|--things=title:::|List argument.",
        )
        inputs = parser.parse(["-o", "val", "-t", "a", "b"])
        inputs.get_guessed("option")   # "val"
        inputs.get_list("things")      # ["a", "b"]

    Argument specs
    --------------
    The number of ':' after the argument name gives the arity:

    - none:  ``--flag``           value is ``"true"`` when given
    - ``:``   ``--opt=name:``     a value is required
    - ``::``  ``--opt=name::``    a value is optional
    - ``:::`` ``--opt=name:::``   one or more values, stored joined by ``|``

    Errors
    ------
    Every method raises a `CommandLineError` subclass; nothing exits the
    process except the `*_or_exit` adapters meant for scripts.
    """

    def __init__(self, prog: Optional[str] = None) -> None:
        self.prog = prog or default_prog()
        self.table = OptionTable()
        self.inputs: Optional[ParsedInput] = None

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def options(self, *lines: str) -> "Parser":
        for line in lines:
            self.table.register_spec(line)
        return self

    def add(
        self,
        short: Optional[str],
        long: Optional[str],
        description: str = "",
        arg: Optional[str] = None,
    ) -> OptionDefinition:
        return self.table.register(short, long, arg, description)

    # ------------------------------------------------------------------ #
    # Parsing
    # ------------------------------------------------------------------ #
    def parse(self, argv: Optional[Sequence[str]] = None) -> ParsedInput:
        if argv is None:
            argv = sys.argv[1:]
        self.inputs = scan(self.table, argv)
        return self.inputs

    def get(self, name: str) -> str:
        """
        Value of an option after `parse`.

        A dashed flag (``-o`` or ``--option``) is resolved through the option
        table, so an alias finds its canonical option. A bare name is looked up
        as ``--name`` then ``-name``.
        """
        inputs = self.inputs if self.inputs is not None else ParsedInput()
        if name.startswith("-"):
            return inputs.get_value(self.table.resolve_key(name))
        return inputs.get_guessed(name)

    def usage(self, width: int = 80, indent: int = 4) -> str:
        return format_usage(self.table, self.prog, width=width, indent=indent)

    # ------------------------------------------------------------------ #
    # Script adapters
    # ------------------------------------------------------------------ #
    def fail(self, error: CommandLineError) -> NoReturn:
        logger.debug("Exiting with status %d: %s", error.exit_status, error)
        print(f"{self.prog}: {error}", file=sys.stderr)
        sys.exit(int(error.exit_status))

    def parse_or_exit(self, argv: Optional[Sequence[str]] = None) -> ParsedInput:
        try:
            return self.parse(argv)
        except CommandLineError as e:
            self.fail(e)

    def get_or_exit(self, name: str) -> str:
        try:
            return self.get(name)
        except CommandLineError as e:
            self.fail(e)
