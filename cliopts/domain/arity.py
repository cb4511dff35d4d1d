# cliopts/domain/arity.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple

from cliopts.domain.errors import (
    InvalidArityError,
    MissingArgumentError,
    UnexpectedArgumentError,
)

if TYPE_CHECKING:
    from cliopts.domain.options import OptionDefinition

logger = logging.getLogger(__name__)

# Value stored for an option that was given without an argument.
SET_MARKER = "true"

# Separator used to store the values of a LIST option in a single string.
LIST_SEPARATOR = "|"

ARITY_MARKER = ":"


class Arity(IntEnum):
    """Number of arguments an option takes.

    The integer value is the number of trailing ':' in the textual argument
    spec (``title:`` is REQUIRED, ``title:::`` is LIST).
    """

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2
    LIST = 3


@dataclass(frozen=True)
class Consumption:
    """Result of applying an arity rule: the value to store and how many
    tokens after the option token were used to build it."""

    value: str
    consumed: int = 0


# Predicate telling whether a token names a registered option.
IsOption = Callable[[str], bool]


def classify(colon_count: int, arg_spec: str = "") -> Arity:
    try:
        return Arity(colon_count)
    except ValueError:
        raise InvalidArityError(arg_spec or ARITY_MARKER * colon_count) from None


def split_arg_spec(arg_spec: Optional[str]) -> Tuple[Optional[str], Arity]:
    """
    Split an argument spec such as ``"title::"`` into its placeholder name and
    its arity.

    Only the trailing run of ':' counts; a ':' anywhere else is rejected the
    same way as a bad colon count.
    """
    spec = (arg_spec or "").replace(" ", "")
    name = spec.rstrip(ARITY_MARKER)
    if ARITY_MARKER in name:
        raise InvalidArityError(spec)

    arity = classify(len(spec) - len(name), spec)
    return (name or None), arity


def split_long_token(token: str) -> Tuple[str, Optional[str]]:
    """
    Split ``--name=value`` into ``("--name", "value")``.

    Returns ``(token, None)`` when no '=' is present. Only the first '=' splits,
    so ``--define=a=b`` keeps ``a=b`` as its value.
    """
    flag, sep, value = token.partition("=")
    if not sep:
        return token, None
    return flag, value


def is_long_token(token: str) -> bool:
    return token.startswith("--")


# ---------------------------------------------------------------------- #
# Consumption rules
# ---------------------------------------------------------------------- #
def _consume_none(
    definition: "OptionDefinition",
    token: str,
    embedded: Optional[str],
    remaining: Sequence[str],
    is_option: IsOption,
) -> Consumption:
    if embedded is not None:
        raise UnexpectedArgumentError(token.partition("=")[0], embedded)
    return Consumption(SET_MARKER)


def _consume_required(
    definition: "OptionDefinition",
    token: str,
    embedded: Optional[str],
    remaining: Sequence[str],
    is_option: IsOption,
) -> Consumption:
    if embedded is not None:
        if embedded == "":
            raise MissingArgumentError(token.partition("=")[0])
        return Consumption(embedded)

    if not remaining or remaining[0] == "" or is_option(remaining[0]):
        raise MissingArgumentError(token)
    return Consumption(remaining[0], 1)


def _consume_optional(
    definition: "OptionDefinition",
    token: str,
    embedded: Optional[str],
    remaining: Sequence[str],
    is_option: IsOption,
) -> Consumption:
    if is_long_token(token):
        return Consumption(embedded or SET_MARKER)

    if not remaining or remaining[0] == "" or is_option(remaining[0]):
        return Consumption(SET_MARKER)
    return Consumption(remaining[0], 1)


def _consume_list(
    definition: "OptionDefinition",
    token: str,
    embedded: Optional[str],
    remaining: Sequence[str],
    is_option: IsOption,
) -> Consumption:
    if is_long_token(token):
        # Long options are self-delimiting: exactly one value, after '='.
        if not embedded:
            raise MissingArgumentError(token.partition("=")[0])
        return Consumption(embedded)

    values = []
    for candidate in remaining:
        if is_option(candidate):
            break
        values.append(candidate)

    if not values:
        raise MissingArgumentError(token)
    return Consumption(LIST_SEPARATOR.join(values), len(values))


_RULES: Dict[Arity, Callable[..., Consumption]] = {
    Arity.NONE: _consume_none,
    Arity.REQUIRED: _consume_required,
    Arity.OPTIONAL: _consume_optional,
    Arity.LIST: _consume_list,
}


def consume(
    definition: "OptionDefinition",
    token: str,
    remaining: Sequence[str],
    is_option: IsOption,
) -> Consumption:
    """
    Apply the arity rule of `definition` to the option `token`.

    `remaining` holds the tokens that follow `token` in the argument vector and
    `is_option` tells whether one of them names a registered option. Long
    tokens take their value from an embedded ``=value``; short tokens look at
    `remaining`.
    """
    embedded: Optional[str] = None
    if is_long_token(token):
        _, embedded = split_long_token(token)

    result = _RULES[definition.arity](definition, token, embedded, remaining, is_option)
    logger.debug(
        "Option %s (%s): value=%r, consumed=%d",
        token,
        definition.arity.name,
        result.value,
        result.consumed,
    )
    return result
