"""Rich console and logging helpers for terminal output."""

import logging
from typing import Any

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.status import Status


class Console:
    """Wrapper around rich.Console with a JSON mode for machine output."""

    def __init__(self) -> None:
        self._console = RichConsole()
        self._err_console = RichConsole(stderr=True)
        self._json_mode = False

    def set_json_mode(self, enabled: bool) -> None:
        """Enable or disable JSON mode (suppresses rich output)."""
        self._json_mode = enabled

    @property
    def json_mode(self) -> bool:
        """Check if JSON mode is enabled."""
        return self._json_mode

    @property
    def err_console(self) -> RichConsole:
        """Console writing to stderr (errors and logs)."""
        return self._err_console

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (suppressed in JSON mode)."""
        if not self._json_mode:
            self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print an error message in red to stderr (shown in JSON mode too)."""
        self._err_console.print(f"[red]✗[/red] {message}", highlight=False)

    def print_warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        if not self._json_mode:
            self._console.print(f"[yellow]⚠[/yellow] {message}")

    def status(self, message: str) -> Status:
        """Create a status spinner context manager."""
        return self._console.status(message)


def setup_logging(verbose: bool) -> None:
    """Route apkstack logs through rich; DEBUG when verbose, WARNING otherwise."""
    logger = logging.getLogger("apkstack")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(console=console.err_console, show_path=False)
        )


# Global console instance
console = Console()
