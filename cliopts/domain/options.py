# cliopts/domain/options.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from cliopts.domain.arity import Arity, is_long_token, split_arg_spec, split_long_token
from cliopts.domain.errors import (
    InvalidOptionSpecError,
    OptionCollisionError,
    OptionNotFoundError,
)

logger = logging.getLogger(__name__)

SPEC_FIELD_SEPARATOR = "|"


@dataclass(frozen=True)
class OptionDefinition:
    """One registered option.

    `key` is the canonical flag text, dashes included: the long flag when there
    is one (``--option``), otherwise the short flag (``-o``). `alias` is the
    short flag of an option whose key is its long flag.
    """

    key: str
    alias: Optional[str] = None
    arg_name: Optional[str] = None
    arity: Arity = Arity.NONE
    description: str = ""

    @property
    def name(self) -> str:
        """Key without its leading dashes (``option`` for ``--option``)."""
        return self.key.lstrip("-")

    @property
    def is_long(self) -> bool:
        return is_long_token(self.key)

    @property
    def takes_argument(self) -> bool:
        return self.arity is not Arity.NONE

    def flags(self) -> List[str]:
        return [self.alias, self.key] if self.alias else [self.key]


def _clean_flag(flag: Optional[str]) -> Optional[str]:
    cleaned = (flag or "").replace(" ", "")
    return cleaned or None


def _check_short(flag: str) -> None:
    if not flag.startswith("-") or flag.startswith("--") or len(flag) < 2:
        raise InvalidOptionSpecError(f"Invalid short option '{flag}'.", flag)


def _check_long(flag: str) -> None:
    if not flag.startswith("--") or len(flag) < 3:
        raise InvalidOptionSpecError(f"Invalid long option '{flag}'.", flag)


class OptionTable:
    """
    Registered option definitions, keyed by canonical flag, plus the index that
    maps short aliases to their canonical flag.

    Lookups take exact flag text (``--option``, ``-o``); a long token carrying an
    embedded value (``--option=value``) is looked up by its flag part.
    """

    def __init__(self) -> None:
        self._options: Dict[str, OptionDefinition] = {}
        self._aliases: Dict[str, str] = {}

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def register(
        self,
        short: Optional[str],
        long: Optional[str],
        arg_spec: Optional[str] = None,
        description: str = "",
    ) -> OptionDefinition:
        """
        Register an option and return its definition.

        The long flag may embed its argument spec (``--option=title:``); the
        number of trailing ':' gives the arity. Without a long flag the short
        flag becomes the key and may embed the argument spec the same way.
        """
        short = _clean_flag(short)
        long = _clean_flag(long)

        if long is not None:
            key, embedded = split_long_token(long)
            alias = short
        elif short is not None:
            key, embedded = split_long_token(short)
            alias = None
        else:
            raise InvalidOptionSpecError("An option needs a short or a long flag.")

        if embedded is not None:
            if arg_spec:
                raise InvalidOptionSpecError(
                    f"Option '{key}' has both an embedded and an explicit argument spec.",
                    key,
                )
            arg_spec = embedded

        if long is not None:
            _check_long(key)
        else:
            _check_short(key)
        if alias is not None:
            _check_short(alias)

        arg_name, arity = split_arg_spec(arg_spec)
        definition = OptionDefinition(
            key=key,
            alias=alias,
            arg_name=arg_name,
            arity=arity,
            description=(description or "").strip(),
        )
        self._add(definition)
        return definition

    def register_spec(self, line: str) -> OptionDefinition:
        """
        Register an option from its one-line form::

            "-o|--option=title:|A required-argument option."
            "  |--flag|No short form."
        """
        fields = line.split(SPEC_FIELD_SEPARATOR, 2)
        if len(fields) < 2:
            raise InvalidOptionSpecError(f"Invalid option spec '{line}'.")
        short, long = fields[0], fields[1]
        description = fields[2] if len(fields) == 3 else ""
        return self.register(short, long, description=description)

    def _add(self, definition: OptionDefinition) -> None:
        key, alias = definition.key, definition.alias

        owner = self._aliases.get(key)
        if owner is not None and owner != key:
            raise OptionCollisionError(key, owner)
        if alias is not None:
            if alias in self._options:
                raise OptionCollisionError(alias, alias)
            owner = self._aliases.get(alias)
            if owner is not None and owner != key:
                raise OptionCollisionError(alias, owner)

        previous = self._options.get(key)
        if previous is not None:
            logger.warning("Option %s registered twice; keeping the last definition.", key)
            if previous.alias is not None:
                self._aliases.pop(previous.alias, None)

        self._options[key] = definition
        if alias is not None:
            self._aliases[alias] = key

        logger.debug(
            "Registered option %s (alias=%s, arg=%s, arity=%s)",
            key,
            alias,
            definition.arg_name,
            definition.arity.name,
        )

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #
    def find(self, token: str) -> Optional[OptionDefinition]:
        if not token:
            return None
        flag = split_long_token(token)[0] if is_long_token(token) else token

        definition = self._options.get(flag)
        if definition is None:
            key = self._aliases.get(flag)
            if key is not None:
                definition = self._options.get(key)
        return definition

    def lookup(self, token: str) -> OptionDefinition:
        definition = self.find(token)
        if definition is None:
            raise OptionNotFoundError(token)
        return definition

    def is_option(self, token: str) -> bool:
        return self.find(token) is not None

    def resolve_key(self, token: str) -> str:
        """Canonical key for a flag or alias."""
        return self.lookup(token).key

    # ------------------------------------------------------------------ #
    # Listing
    # ------------------------------------------------------------------ #
    def keys(self) -> List[str]:
        return list(self._options)

    def sorted(self) -> List[OptionDefinition]:
        return [self._options[key] for key in sorted(self._options)]

    def __iter__(self) -> Iterator[OptionDefinition]:
        return iter(list(self._options.values()))

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.is_option(token)
