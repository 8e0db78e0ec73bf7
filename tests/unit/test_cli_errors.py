"""Unit tests for req2uml.cli.errors."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from rich.panel import Panel

from req2uml.cli.errors import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERAL_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    CLIError,
    ConfigError,
    describe_error,
    error_handler,
)
from req2uml.llm.exceptions import ConfigurationError
from req2uml.repair.exceptions import RepairFailure


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TestCLIError:
    def test_default_exit_code(self) -> None:
        err = CLIError("something broke")
        assert err.message == "something broke"
        assert err.exit_code == EXIT_GENERAL_ERROR
        assert str(err) == "something broke"

    def test_custom_exit_code(self) -> None:
        assert CLIError("bad", exit_code=EXIT_CONFIG_ERROR).exit_code == EXIT_CONFIG_ERROR


class TestConfigError:
    def test_exit_code_is_config(self) -> None:
        err = ConfigError("missing key")
        assert err.exit_code == EXIT_CONFIG_ERROR
        assert isinstance(err, CLIError)


class TestExitCodes:
    def test_values(self) -> None:
        assert (EXIT_SUCCESS, EXIT_GENERAL_ERROR, EXIT_CONFIG_ERROR, EXIT_INTERRUPTED) == (
            0,
            1,
            2,
            130,
        )


# ---------------------------------------------------------------------------
# error_handler
# ---------------------------------------------------------------------------


class TestErrorHandler:
    def test_no_exception_passes_through(self) -> None:
        console = MagicMock()
        with error_handler(console=console):
            pass
        console.print.assert_not_called()

    def test_cli_error_exits_with_code(self) -> None:
        console = MagicMock()
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console=console):
                raise CLIError("boom", exit_code=2)
        assert exc_info.value.code == 2
        assert isinstance(console.print.call_args[0][0], Panel)

    def test_gateway_configuration_error_is_config_exit(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console=MagicMock()):
                raise ConfigurationError("No generation model configured")
        assert exc_info.value.code == EXIT_CONFIG_ERROR

    def test_repair_failure_is_general_exit(self) -> None:
        console = MagicMock()
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console=console):
                raise RepairFailure("Invalid JSON format", preview="oops")
        assert exc_info.value.code == EXIT_GENERAL_ERROR
        console.print.assert_called_once()

    def test_generic_exception_exits_with_1(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console=MagicMock()):
                raise RuntimeError("unexpected")
        assert exc_info.value.code == EXIT_GENERAL_ERROR

    def test_keyboard_interrupt_exits_130(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console=MagicMock()):
                raise KeyboardInterrupt()
        assert exc_info.value.code == 130


class TestDescribeError:
    def test_cli_error(self) -> None:
        assert describe_error(ConfigError("bad")) == ("Error", "bad", EXIT_CONFIG_ERROR)

    def test_repair_failure(self) -> None:
        title, message, code = describe_error(RepairFailure("Invalid JSON format"))
        assert title == "Unreadable Model Output"
        assert message == "Invalid JSON format"
        assert code == EXIT_GENERAL_ERROR

    def test_messageless_exception_uses_type_name(self) -> None:
        assert describe_error(ValueError())[1] == "ValueError"
