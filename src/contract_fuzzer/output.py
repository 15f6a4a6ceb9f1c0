"""Output management for the contract fuzzer."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import OutputMode


class OutputManager:
    """Manages terminal output based on configured output mode."""

    def __init__(self, output_mode: OutputMode):
        self.output_mode = output_mode
        self.console = Console()

    def configure_logging(self, level: int = logging.INFO) -> None:
        """Route the package's log records through the rich console."""
        logger = logging.getLogger("contract_fuzzer")
        logger.setLevel(logging.DEBUG if self.output_mode == OutputMode.VERBOSE else level)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.addHandler(RichHandler(console=self.console, show_path=False))

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print output if not in quiet mode."""
        if self.output_mode != OutputMode.QUIET:
            self.console.print(*args, **kwargs)

    def print_verbose(self, *args: Any, **kwargs: Any) -> None:
        """Print output only in verbose mode."""
        if self.output_mode == OutputMode.VERBOSE:
            self.console.print(*args, **kwargs)

    def display_scenario(self, description: str, method: str, path: str) -> None:
        """Display the scenario about to be executed."""
        if self.output_mode == OutputMode.VERBOSE:
            wrapped_text = Text(description, style="cyan", overflow="fold")
            self.console.print(
                Panel(
                    wrapped_text,
                    title=f"[bold cyan]{method} {path}[/bold cyan] - Scenario",
                    border_style="cyan",
                    expand=False,
                )
            )

    def display_response(self, status_code: int, body: str) -> None:
        """Display the target's response."""
        if self.output_mode == OutputMode.VERBOSE:
            wrapped_text = Text(body, style="green", overflow="fold")
            self.console.print(
                Panel(
                    wrapped_text,
                    title=f"[bold green]HTTP {status_code}[/bold green] - Response",
                    border_style="green",
                    expand=False,
                )
            )

    def display_status(self, message: str, style: str = "yellow") -> None:
        """Display a status message in standard and verbose modes."""
        if self.output_mode != OutputMode.QUIET:
            self.console.print(f"[{style}]{message}[/{style}]")

    def display_table(self, table: Table) -> None:
        """Display a rich table in standard and verbose modes."""
        if self.output_mode != OutputMode.QUIET:
            self.console.print(table)
