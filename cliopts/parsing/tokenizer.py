# cliopts/parsing/tokenizer.py

import logging
from typing import Dict, Sequence

from cliopts.domain.arity import consume
from cliopts.domain.errors import OptionNotFoundError, UnknownOptionError
from cliopts.domain.inputs import ParsedInput
from cliopts.domain.options import OptionTable

logger = logging.getLogger(__name__)


def scan(table: OptionTable, args: Sequence[str]) -> ParsedInput:
    """
    Walk `args` once and resolve every option against `table`.

    Every token at the cursor must be a registered option (or alias); its arity
    decides how many of the following tokens are taken as its value. Those
    tokens are never looked at again as options. A later occurrence of an
    option replaces the earlier value.

    Raises the first error met (`UnknownOptionError`, `MissingArgumentError`,
    ...); nothing is returned for a failed scan.
    """
    args = list(args)
    values: Dict[str, str] = {}
    cursor = 0

    while cursor < len(args):
        token = args[cursor]
        try:
            definition = table.lookup(token)
        except OptionNotFoundError:
            raise UnknownOptionError(token) from None

        result = consume(definition, token, args[cursor + 1:], table.is_option)
        if definition.key in values:
            logger.debug("Option %s given again; last value wins.", definition.key)
        values[definition.key] = result.value

        cursor += 1 + result.consumed

    logger.debug("Parsed %d option(s) from %d token(s).", len(values), len(args))
    return ParsedInput(values)
