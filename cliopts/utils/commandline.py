# cliopts/utils/commandline.py

import sys
from typing import Optional, Sequence, Tuple

from cliopts.domain.errors import CommandLineError, ExitStatus
from cliopts.domain.inputs import ParsedInput
from cliopts.parsing.parser import Parser
from cliopts.utils.table_files import load_option_table

# Options of the demo tool itself.
DEMO_OPTIONS = (
    "-h|--help|Print usage.",
    "  |--debug|Enable DEBUG-level logs (more verbose).",
    "  |--json|Print the parsed options as a JSON object instead of a table.",
    "  |--table=file:|Also register the options listed in this YAML file.",
)

# Sample options showing every argument type.
SAMPLE_OPTIONS = (
    "-o|--option=title:|A required-argument option.",
    "-s|--stuff=title::|Optional argument.",
    "-t|--things=title:::|List argument.",
    "-v|--verbose|No argument.",
    "-x||Short option only.",
)


def build_parser(prog: Optional[str] = None) -> Parser:
    parser = Parser(prog)
    parser.options(*DEMO_OPTIONS)
    parser.options(*SAMPLE_OPTIONS)
    return parser


def find_table_file(argv: Sequence[str]) -> Optional[str]:
    """Value of ``--table=<file>`` (or ``--table <file>``), which must be
    loaded before parsing. The last occurrence wins, as in the parsed input."""
    found = None
    for i, token in enumerate(argv):
        if token.startswith("--table="):
            found = token.partition("=")[2] or None
        elif token == "--table" and i + 1 < len(argv):
            found = argv[i + 1]
    return found


def parse_args(
    argv: Optional[Sequence[str]] = None,
    prog: Optional[str] = None,
) -> Tuple[Parser, ParsedInput]:
    """
    Parse the demo tool's command line.

    Registers the tool options (--help, --debug, --json, --table) and the
    sample options, plus the ones listed in ``--table=<file>``, then parses
    `argv` with the library itself. Errors print ``<prog>: <message>`` on
    stderr and exit with the error's status.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser(prog)

    table_file = find_table_file(argv)
    if table_file:
        try:
            load_option_table(table_file, parser.table)
        except OSError as e:
            print(f"{parser.prog}: Cannot read option table '{table_file}': {e}", file=sys.stderr)
            sys.exit(int(ExitStatus.INVALID_OPTION))
        except CommandLineError as e:
            parser.fail(e)

    inputs = parser.parse_or_exit(argv)
    return parser, inputs
