"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from trx_tools.models import TestOutcome
from trx_tools.parsing.timestamps import format_timespan

if TYPE_CHECKING:
    from trx_tools.models import TestRun

console = Console()

_PERFECT_RATE = 100.0
_GOOD_RATE = 80.0

_OUTCOME_COLORS = {
    TestOutcome.PASSED: "green",
    TestOutcome.FAILED: "red",
    TestOutcome.ERROR: "red",
    TestOutcome.TIMEOUT: "red",
    TestOutcome.ABORTED: "red",
    TestOutcome.NOT_EXECUTED: "yellow",
    TestOutcome.INCONCLUSIVE: "yellow",
    TestOutcome.WARNING: "yellow",
}

_MAX_MESSAGE_LENGTH = 80


def _pass_rate_color(rate: float) -> str:
    """Return a Rich color name for a given pass-rate percentage."""
    if rate >= _PERFECT_RATE:
        return "green"
    if rate >= _GOOD_RATE:
        return "yellow"
    return "red"


class CLIReporter:
    """Rich terminal output for test runs and CLI status messages."""

    def __init__(self, output: Console | None = None) -> None:
        """Initialize the CLI reporter."""
        self.console = output or console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_test_run_summary(self, test_run: TestRun) -> None:
        """Print a run header, an outcome table and the failing tests."""
        total = len(test_run.results)
        self.console.print()
        self.console.print(
            Panel(
                f"[bold white]{escape(test_run.name)}[/bold white]",
                border_style="cyan",
                padding=(0, 2),
            )
        )

        if total == 0:
            self.console.print("  [dim]No tests executed[/dim]")
            return

        counts = test_run.outcome_counts()
        table = Table(title="Outcomes", title_style="bold cyan")
        table.add_column("Outcome", style="bold")
        table.add_column("Tests", justify="right")
        for outcome, count in counts.items():
            color = _OUTCOME_COLORS.get(outcome, "white")
            table.add_row(f"[{color}]{outcome.value}[/{color}]", str(count))
        self.console.print(table)

        pass_rate = counts.get(TestOutcome.PASSED, 0) / total * 100
        rate_color = _pass_rate_color(pass_rate)
        self.console.print(
            f"  [bold]{total}[/bold] tests  "
            f"[bold {rate_color}]{pass_rate:.0f}%[/bold {rate_color}] pass rate  "
            f"[dim]⏱ {format_timespan(test_run.total_duration)}[/dim]"
        )

        failures = test_run.failed_results
        if not failures:
            return

        failures_table = Table(title=f"Failures ({len(failures)})", title_style="bold red")
        failures_table.add_column("Test", style="bold")
        failures_table.add_column("Message")
        for result in failures:
            message = result.error_info.message if result.error_info else ""
            first_line = message.strip().splitlines()[0] if message.strip() else ""
            if len(first_line) > _MAX_MESSAGE_LENGTH:
                first_line = first_line[: _MAX_MESSAGE_LENGTH - 3] + "..."
            failures_table.add_row(escape(result.test_name), escape(first_line))
        self.console.print(failures_table)


reporter = CLIReporter()
