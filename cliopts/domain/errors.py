# cliopts/domain/errors.py

from enum import IntEnum
from typing import Optional


class ExitStatus(IntEnum):
    """Process exit statuses used by the command-line adapters."""

    OK = 0
    INVALID_ARGUMENT_TYPE = 1
    INVALID_OPTION = 2
    INVALID_ARGUMENT = 3
    OPTION_NOT_FOUND = 4
    INDEX_NOT_FOUND = 5
    OPTION_LENGTH_ZERO = 6
    INPUT_LENGTH_ZERO = 7
    INVALID_FIELD = 8
    INVALID_GET_OPTION = 9
    INVALID_GET_KEY = 10
    GET_OPTION_NOT_FOUND = 11
    OPTION_COLLISION = 12


class CommandLineError(Exception):
    """Base class for every error raised by cliopts.

    Each subclass maps to one `ExitStatus`, so a thin CLI wrapper can turn the
    error into the matching process exit code.
    """

    exit_status: ExitStatus = ExitStatus.INVALID_OPTION

    def __init__(self, message: str, option: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.option = option

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------- #
# Registration
# ---------------------------------------------------------------------- #
class RegistrationError(CommandLineError):
    exit_status = ExitStatus.INVALID_OPTION


class InvalidArityError(RegistrationError):
    exit_status = ExitStatus.INVALID_ARGUMENT_TYPE

    def __init__(self, arg_spec: str, option: Optional[str] = None) -> None:
        super().__init__(f"Error adding argument '{arg_spec}'.", option)
        self.arg_spec = arg_spec


class InvalidOptionSpecError(RegistrationError):
    exit_status = ExitStatus.INVALID_OPTION


class OptionCollisionError(RegistrationError):
    exit_status = ExitStatus.OPTION_COLLISION

    def __init__(self, option: str, existing: str) -> None:
        super().__init__(
            f"Option '{option}' collides with already registered option '{existing}'.",
            option,
        )
        self.existing = existing


# ---------------------------------------------------------------------- #
# Parsing
# ---------------------------------------------------------------------- #
class UnknownOptionError(CommandLineError):
    exit_status = ExitStatus.INVALID_OPTION

    def __init__(self, option: str) -> None:
        super().__init__(f"Invalid option '{option}'.", option)


class MissingArgumentError(CommandLineError):
    exit_status = ExitStatus.INVALID_ARGUMENT

    def __init__(self, option: str) -> None:
        super().__init__(f"An argument must be given for option '{option}'.", option)


class UnexpectedArgumentError(CommandLineError):
    exit_status = ExitStatus.INVALID_ARGUMENT

    def __init__(self, option: str, argument: str) -> None:
        super().__init__(
            f"Option '{option}' does not take an argument, but '{argument}' was given.",
            option,
        )
        self.argument = argument


# ---------------------------------------------------------------------- #
# Lookup / retrieval
# ---------------------------------------------------------------------- #
class OptionNotFoundError(CommandLineError, KeyError):
    exit_status = ExitStatus.OPTION_NOT_FOUND

    def __init__(self, option: str) -> None:
        super().__init__(f"Option '{option}' is not registered.", option)


class InvalidQueryError(CommandLineError, ValueError):
    exit_status = ExitStatus.INVALID_GET_OPTION

    def __init__(self, option: str) -> None:
        super().__init__(
            "Invalid option to retrieve. Do not use dashes when specifying the option.",
            option,
        )


class NotFoundError(CommandLineError, KeyError):
    exit_status = ExitStatus.GET_OPTION_NOT_FOUND

    def __init__(self, option: str) -> None:
        super().__init__(f"Option '{option}' was not given on the command line.", option)
