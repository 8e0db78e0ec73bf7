"""CLI error reporting.

Every command body runs inside :func:`error_handler`, which turns an
exception into a Rich panel on stderr and a process exit code:

    0   - success
    1   - general failure (including unreadable model output)
    2   - configuration problem
    130 - interrupted
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Generator

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from req2uml.llm.exceptions import ConfigurationError
from req2uml.repair.exceptions import RepairFailure

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """An error the CLI reports as-is.

    Parameters
    ----------
    message:
        Text shown in the error panel.
    exit_code:
        Process exit code (default :data:`EXIT_GENERAL_ERROR`).
    """

    def __init__(self, message: str, exit_code: int = EXIT_GENERAL_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(CLIError):
    """Configuration file or environment value is unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, exit_code=EXIT_CONFIG_ERROR)


# Panel title and exit code per library exception; first match wins.
_KNOWN_ERRORS: tuple[tuple[type[Exception], str, int], ...] = (
    (ConfigurationError, "Configuration Error", EXIT_CONFIG_ERROR),
    (RepairFailure, "Unreadable Model Output", EXIT_GENERAL_ERROR),
)

_stderr = Console(stderr=True)


def describe_error(exc: Exception) -> tuple[str, str, int]:
    """Return ``(title, message, exit_code)`` for *exc*."""
    if isinstance(exc, CLIError):
        return "Error", exc.message, exc.exit_code
    for error_type, title, code in _KNOWN_ERRORS:
        if isinstance(exc, error_type):
            return title, str(exc), code
    return "Unexpected Error", str(exc) or type(exc).__name__, EXIT_GENERAL_ERROR


@contextmanager
def error_handler(console: Console | None = None) -> Generator[None, None, None]:
    """Report any exception raised in the block and exit.

    Raises
    ------
    SystemExit
        Whenever the block raises, with the code from :func:`describe_error`
        (or :data:`EXIT_INTERRUPTED` on Ctrl-C).
    """
    out = console or _stderr
    try:
        yield
    except KeyboardInterrupt:
        out.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        title, message, code = describe_error(exc)
        out.print(
            Panel(
                Text(message, style="bold red"),
                title=f"[red]{title}[/red]",
                border_style="red",
            )
        )
        sys.exit(code)
