"""Rich-based logging helpers for the stmt-normalize CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "success": "bold green",
        "debug": "dim",
    }
)

# Log chatter goes to stderr so CSV written to stdout stays clean.
# Highlighting is off so header names and amounts print without injected ANSI styles.
_stderr_console = Console(stderr=True, theme=_THEME, highlight=False)


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by a Rich console."""

    verbose: bool = False

    def info(self, message: str) -> None:
        _stderr_console.print(message, style="info", markup=False)

    def success(self, message: str) -> None:
        _stderr_console.print(message, style="success", markup=False)

    def warning(self, message: str) -> None:
        _stderr_console.print(message, style="warning", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            _stderr_console.print(message, style="debug", markup=False)


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)


_LIBRARY_LOGGER = "stmt_cli"
_library_handler = RichHandler(
    console=_stderr_console,
    show_time=False,
    show_path=False,
    markup=False,
)


def route_library_logging(verbose: bool) -> None:
    """Send ``stmt_cli.*`` debug records to the stderr console when verbose."""
    library_logger = logging.getLogger(_LIBRARY_LOGGER)
    if verbose:
        if _library_handler not in library_logger.handlers:
            library_logger.addHandler(_library_handler)
        library_logger.setLevel(logging.DEBUG)
    else:
        library_logger.removeHandler(_library_handler)
        library_logger.setLevel(logging.NOTSET)
