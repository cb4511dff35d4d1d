# cliopts/domain/inputs.py

from __future__ import annotations

import json
import os
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from cliopts.domain.arity import LIST_SEPARATOR, SET_MARKER
from cliopts.domain.errors import InvalidQueryError, NotFoundError


class ParsedInput(Mapping[str, str]):
    """
    Options given on the command line, keyed by canonical flag (``--option``,
    or ``-o`` for an option without long form), with their resolved value.

    Values are strings: ``"true"`` for a flag given without argument, the
    argument itself otherwise, and ``"a|b|c"`` for a LIST option. Instances are
    read-only; parsing again yields a new instance.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    # ------------------------------------------------------------------ #
    # Mapping protocol
    # ------------------------------------------------------------------ #
    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParsedInput({dict(self._values)!r})"

    # ------------------------------------------------------------------ #
    # Retrieval
    # ------------------------------------------------------------------ #
    def get_value(self, key: str) -> str:
        """Value stored under the exact canonical flag `key`."""
        try:
            return self._values[key]
        except KeyError:
            raise NotFoundError(key) from None

    def get_guessed(self, name: str) -> str:
        """
        Value for an undashed option name.

        Tries ``--name`` then ``-name``, so `name` is the long option's name, or
        the short option's name when the option has no long form.
        """
        if name.startswith("-"):
            raise InvalidQueryError(name)

        for key in (f"--{name}", f"-{name}"):
            if key in self._values:
                return self._values[key]
        raise NotFoundError(name)

    def is_set(self, name: str) -> bool:
        try:
            self.get_guessed(name)
        except NotFoundError:
            return False
        return True

    def get_list(self, name: str) -> List[str]:
        """Values of a LIST option, split on the list separator."""
        return self.get_guessed(name).split(LIST_SEPARATOR)

    def get_flag(self, name: str) -> bool:
        """True when the option was given without argument."""
        return self.is_set(name) and self.get_guessed(name) == SET_MARKER

    # ------------------------------------------------------------------ #
    # Output
    # ------------------------------------------------------------------ #
    def report(self) -> List[str]:
        """
        One line per given option, keys right-aligned::

            Key:   --option | Value: val
        """
        if not self._values:
            return []
        width = max(len(key) for key in self._values)
        return [f"Key: {key:>{width}} | Value: {value}" for key, value in self._values.items()]

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedInput":
        return cls({str(k): str(v) for k, v in data.items()})

    def save_json(self, path: str, indent: int = 2) -> str:
        """
        Write the parsed input as a JSON object.
        Returns the path written.
        """
        if not path:
            raise ValueError("No output path given for the parsed input.")

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=indent)

        return path

    @classmethod
    def load_json(cls, path: str) -> "ParsedInput":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)
