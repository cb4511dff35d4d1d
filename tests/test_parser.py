# tests/test_parser.py

"""Tests for cliopts/parsing/parser.py"""

import sys

import pytest

from cliopts.domain.arity import Arity
from cliopts.domain.errors import (
    ExitStatus,
    InvalidArityError,
    InvalidQueryError,
    NotFoundError,
    OptionNotFoundError,
    UnknownOptionError,
)
from cliopts.parsing.parser import Parser, default_prog


@pytest.fixture
def parser():
    p = Parser(prog="prog")
    p.options(
        "-h|--help|Print usage.",
        "-o|--option=title:|A required-argument option.",
        "  |--flag|No short form.",
        "-s|--stuff=title::|Optional argument.",
        "-t|--things=title:::|List argument.",
        "-v|--verbose|Verbose.",
    )
    return p


# =============================================================================
# Registration
# =============================================================================
class TestRegistration:
    def test_options_returns_parser(self):
        p = Parser(prog="prog")

        assert p.options("-h|--help|Help.") is p

    def test_add_structured(self):
        p = Parser(prog="prog")
        definition = p.add("-n", "--name", "Your name.", arg="name:")

        assert definition.arity is Arity.REQUIRED
        assert p.table.lookup("-n") is definition

    def test_invalid_arity_aborts(self):
        p = Parser(prog="prog")
        with pytest.raises(InvalidArityError) as exc_info:
            p.options("-o|--ok|Fine.", "-b|--bad=x::::|Bad.", "-l|--later|Never added.")

        assert exc_info.value.exit_status == ExitStatus.INVALID_ARGUMENT_TYPE
        assert "--later" not in p.table

    def test_default_prog_is_script_name(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["/usr/local/bin/mytool", "-h"])

        assert default_prog() == "mytool"
        assert Parser().prog == "mytool"


# =============================================================================
# Parsing and retrieval
# =============================================================================
class TestParse:
    def test_parse_keeps_inputs(self, parser):
        inputs = parser.parse(["-o", "val"])

        assert parser.inputs is inputs

    def test_parse_defaults_to_sys_argv(self, parser, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["prog", "-v"])

        assert parser.parse().is_set("verbose")

    def test_reparse_does_not_merge(self, parser):
        parser.parse(["-v"])
        inputs = parser.parse(["-o", "val"])

        assert not inputs.is_set("verbose")

    def test_get_by_name_and_alias(self, parser):
        """'-o val' is found by name, by long flag and by alias."""
        parser.parse(["-o", "val"])

        assert parser.get("option") == "val"
        assert parser.get("--option") == "val"
        assert parser.get("-o") == "val"

    def test_get_idempotent(self, parser):
        parser.parse(["-t", "a", "b"])

        assert parser.get("things") == parser.get("things") == "a|b"

    def test_get_not_given(self, parser):
        parser.parse(["-v"])
        with pytest.raises(NotFoundError):
            parser.get("option")

    def test_get_unregistered_flag(self, parser):
        parser.parse([])
        with pytest.raises(OptionNotFoundError):
            parser.get("--nope")

    def test_get_before_parse(self, parser):
        with pytest.raises(NotFoundError):
            parser.get("option")

    def test_unknown_option(self, parser):
        with pytest.raises(UnknownOptionError):
            parser.parse(["--nope"])

    def test_failed_parse_keeps_previous_inputs(self, parser):
        previous = parser.parse(["-v"])
        with pytest.raises(UnknownOptionError):
            parser.parse(["--nope"])

        assert parser.inputs is previous


# =============================================================================
# Script adapters
# =============================================================================
class TestExitAdapters:
    def test_parse_or_exit_success(self, parser):
        assert parser.parse_or_exit(["-v"]).is_set("verbose")

    def test_parse_or_exit_unknown_option(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_or_exit(["--nope"])

        assert exc_info.value.code == ExitStatus.INVALID_OPTION
        assert capsys.readouterr().err == "prog: Invalid option '--nope'.\n"

    def test_parse_or_exit_missing_argument(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_or_exit(["-o"])

        assert exc_info.value.code == ExitStatus.INVALID_ARGUMENT
        assert "An argument must be given for option '-o'." in capsys.readouterr().err

    def test_get_or_exit_unregistered_flag(self, parser):
        parser.parse(["-v"])
        with pytest.raises(SystemExit) as exc_info:
            parser.get_or_exit("--nope")

        assert exc_info.value.code == ExitStatus.OPTION_NOT_FOUND

    def test_get_or_exit_not_found(self, parser):
        parser.parse(["-v"])
        with pytest.raises(SystemExit) as exc_info:
            parser.get_or_exit("option")

        assert exc_info.value.code == ExitStatus.GET_OPTION_NOT_FOUND

    def test_invalid_query_status(self):
        assert InvalidQueryError("-x").exit_status == ExitStatus.INVALID_GET_OPTION


# =============================================================================
# Usage
# =============================================================================
class TestUsage:
    def test_usage_header(self, parser):
        text = parser.usage()

        assert text.startswith("Usage: prog [options]\n\nOptions:\n")
        assert "    -o, --option=<title>\n        A required-argument option.\n" in text
