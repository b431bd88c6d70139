"""Tests for the command-line interface."""

import json
import logging

import pytest

from implicalc_pkg.autocomplete import AutoComplete
from implicalc_pkg.cli import main_entry, make_completer
from implicalc_pkg.config import VERSION
from implicalc_pkg.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def run_json(capsys, *args):
    code = main_entry([*args, "--format", "json"])
    return code, json.loads(capsys.readouterr().out)


class TestSplitCommand:
    def test_split(self, capsys):
        code, data = run_json(capsys, "--split", "2sin(x)cos(x)")
        assert code == 0
        assert data == {"tokens": ["2", "sin(x)", "cos(x)"]}

    def test_split_term(self, capsys):
        code, data = run_json(capsys, "--split", "cos(sin(x)cos(x))", "--term")
        assert code == 0
        assert data["tokens"] == ["cos(", "sin(", "x)", "cos(", "x))"]

    def test_split_join(self, capsys):
        code, data = run_json(capsys, "-s", "(x+1)(x-3)", "--join")
        assert code == 0
        assert data == {"processed": "(x+1)*(x-3)"}

    def test_join_rejects_term(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main_entry(["--split", "2x", "--join", "--term"])
        assert exc_info.value.code == 2
        assert "--join cannot be combined with --term" in capsys.readouterr().err

    def test_human_output(self, capsys):
        assert main_entry(["--split", "2x", "--join"]) == 0
        assert capsys.readouterr().out.strip() == "processed: 2*x"


class TestHintCommand:
    def test_many(self, capsys):
        code, data = run_json(capsys, "--hint", "si")
        assert code == 0
        assert data == {"type": "many", "hints": ["n(", "nh(", "gnum("]}

    def test_empty(self, capsys):
        code, data = run_json(capsys, "--hint", "")
        assert data == {"type": "single", "hint": "x^2"}

    def test_none(self, capsys):
        code, data = run_json(capsys, "--hint", "sin(x)")
        assert data == {"type": "none"}


class TestTableCommand:
    def test_custom_functions(self, capsys):
        code = main_entry(["--table", "--functions", "time,text,test"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert list(data) == ["t", "ti", "tim", "time", "te", "tex", "text", "tes", "test"]
        assert data["t"] == {"type": "many", "hints": ["ime(", "ext(", "est("]}

    def test_supported_functions(self, capsys):
        assert main_entry(["--table"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["log"] == {"type": "many", "hints": ["2(", "10("]}

    def test_invalid_function_name(self, capsys):
        code, data = run_json(capsys, "--table", "--functions", "sin(")
        assert code == 1
        assert data["code"] == "INVALID_FUNCTION_NAME"


class TestCheckCommand:
    def test_valid(self, capsys):
        code, data = run_json(capsys, "--check", "2x")
        assert code == 0
        assert data == {"ok": True, "processed": "2*x", "expression": "2*x"}

    def test_invalid_variable(self, capsys):
        code, data = run_json(capsys, "-c", "a")
        assert code == 1
        assert data == {"ok": False, "error": "invalid variable: a", "code": "INVALID_VARIABLE"}

    def test_human_error(self, capsys):
        assert main_entry(["--check", "log10(x"]) == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestMisc:
    def test_version(self, capsys):
        assert main_entry(["--version"]) == 0
        assert capsys.readouterr().out.strip() == VERSION

    def test_health_check(self, capsys):
        assert main_entry(["--health-check"]) == 0
        assert "All health checks passed" in capsys.readouterr().out


class TestCompleter:
    def test_offers_extended_lines(self):
        complete = make_completer(AutoComplete())
        assert complete("si", 0) == "sin("
        assert complete("si", 1) == "sinh("
        assert complete("si", 2) == "signum("
        assert complete("si", 3) is None

    def test_no_candidates(self):
        complete = make_completer(AutoComplete())
        assert complete("ln(x)", 0) is None
