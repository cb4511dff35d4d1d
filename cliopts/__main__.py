# cliopts/__main__.py

import json
import logging
from typing import Optional, Sequence

from cliopts.config.logging_config import configure_logging
from cliopts.config.settings import Settings
from cliopts.domain.inputs import ParsedInput
from cliopts.utils.commandline import parse_args

logger = logging.getLogger(__name__)

# Options of the tool itself, left out of the printed report.
TOOL_KEYS = ("--help", "--debug", "--json", "--table")


def main(argv: Optional[Sequence[str]] = None) -> int:
    # ------------------------------------------------------------------ #
    # 1. CLI arguments & Settings
    # ------------------------------------------------------------------ #
    parser, inputs = parse_args(argv)

    settings = Settings()
    if inputs.is_set("debug"):
        # --debug on the command line wins over the environment
        settings.debug = True

    # ------------------------------------------------------------------ #
    # 2. Logging
    # ------------------------------------------------------------------ #
    configure_logging(settings)
    logger.debug("Parsed input: %r", inputs)

    # ------------------------------------------------------------------ #
    # 3. Usage
    # ------------------------------------------------------------------ #
    if inputs.is_set("help"):
        print(parser.usage(width=settings.usage_width, indent=settings.usage_indent), end="")
        return 0

    # ------------------------------------------------------------------ #
    # 4. Report
    # ------------------------------------------------------------------ #
    given = {k: v for k, v in inputs.items() if k not in TOOL_KEYS}
    if inputs.is_set("json"):
        print(json.dumps(given, ensure_ascii=False, indent=2))
    else:
        for line in ParsedInput(given).report():
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
