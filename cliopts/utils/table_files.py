# cliopts/utils/table_files.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from cliopts.domain.errors import InvalidOptionSpecError
from cliopts.domain.options import OptionDefinition, OptionTable

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _arg_spec(definition: OptionDefinition) -> str:
    return (definition.arg_name or "") + ":" * int(definition.arity)


def definition_to_dict(definition: OptionDefinition) -> Dict[str, str]:
    data = {
        "short": definition.alias if definition.is_long else definition.key,
        "long": definition.key if definition.is_long else None,
        "arg": _arg_spec(definition),
        "description": definition.description,
    }
    return {k: v for k, v in data.items() if v}


def register_entry(table: OptionTable, entry: Any) -> OptionDefinition:
    """
    Register one entry of an option table file.

    An entry is either a one-line spec (``"-o|--option=title:|Desc."``) or a
    mapping with ``short``, ``long``, ``arg`` and ``description`` keys.
    """
    if isinstance(entry, str):
        return table.register_spec(entry)
    if isinstance(entry, dict):
        unknown = set(entry) - {"short", "long", "arg", "description"}
        if unknown:
            raise InvalidOptionSpecError(
                f"Unknown option table field(s): {', '.join(sorted(unknown))}."
            )
        for field in ("short", "long", "arg"):
            value = entry.get(field)
            if value is not None and not isinstance(value, str):
                raise InvalidOptionSpecError(
                    f"Option table field '{field}' must be a string, got {value!r}."
                )
        return table.register(
            entry.get("short"),
            entry.get("long"),
            entry.get("arg"),
            str(entry.get("description") or ""),
        )
    raise InvalidOptionSpecError(f"Invalid option table entry: {entry!r}.")


def load_option_table(path: PathLike, table: OptionTable | None = None) -> OptionTable:
    """
    Load option definitions from a YAML file into `table` (a new table when
    omitted).

    The file holds a list of entries, or a mapping with an ``options`` list.
    """
    table = table if table is not None else OptionTable()
    file = Path(path)

    try:
        data = yaml.safe_load(file.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidOptionSpecError(f"Option table {file} is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidOptionSpecError(f"Invalid YAML in option table {file}: {e}") from e

    if isinstance(data, dict):
        data = data.get("options")
    if not isinstance(data, list):
        raise InvalidOptionSpecError(
            f"Option table {file} must contain a list of options, got {type(data).__name__}."
        )

    for entry in data:
        register_entry(table, entry)

    logger.debug("Loaded %d option(s) from %s.", len(data), file)
    return table


def save_option_table(table: OptionTable, path: PathLike) -> Path:
    """Write the definitions of `table` to a YAML file and return its path."""
    file = Path(path)
    file.parent.mkdir(parents=True, exist_ok=True)

    entries: List[Dict[str, str]] = [definition_to_dict(d) for d in table]
    with open(file, "w", encoding="utf-8") as f:
        yaml.dump(
            {"options": entries},
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
    logger.info("Option table saved to %s", file)
    return file
