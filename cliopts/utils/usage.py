# cliopts/utils/usage.py

import textwrap
from typing import Iterable

from cliopts.domain.options import OptionDefinition


def format_option_line(definition: OptionDefinition) -> str:
    """
    Heading line of one option in the usage message.

    ``-o, --option=<title>``, ``--flag``, or ``-x=<file>`` for a short-only
    option.
    """
    line = f"{definition.alias}, {definition.key}" if definition.alias else definition.key
    if definition.takes_argument and definition.arg_name:
        line += f"=<{definition.arg_name}>"
    return line


def format_usage(
    definitions: Iterable[OptionDefinition],
    prog: str,
    width: int = 80,
    indent: int = 4,
) -> str:
    """
    Render the usage message: a header, then for every option (sorted by key)
    its heading line, its wrapped description and a blank line.
    """
    lines = [f"Usage: {prog} [options]", "", "Options:"]

    option_indent = " " * indent
    desc_indent = " " * (indent * 2)
    for definition in sorted(definitions, key=lambda d: d.key):
        lines.append(option_indent + format_option_line(definition))
        if definition.description:
            lines.extend(
                textwrap.wrap(
                    definition.description,
                    width=width,
                    initial_indent=desc_indent,
                    subsequent_indent=desc_indent,
                )
            )
        lines.append("")

    return "\n".join(lines) + "\n"
