"""Console reporter for stest output using Rich."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.traceback import Traceback

from stest.reports.base import Reporter


if TYPE_CHECKING:
    from stest.assertions.base import AssertionResult
    from stest.config import StestSettings
    from stest.testing.case import TestCase
    from stest.testing.models import RunResult
    from stest.testing.runner import Runner
    from stest.testing.suite import Suite


_LABEL_COLOR = {
    True: "green",
    False: "red",
}


class ConsoleReporter(Reporter):
    """Reporter that prints one line per assertion and a closing summary."""

    def __init__(self, console: Console | None = None, *, report_passes: bool = True) -> None:
        self.console = console or Console()
        self.report_passes = report_passes

    @classmethod
    def from_settings(cls, settings: StestSettings, console: Console | None = None) -> ConsoleReporter:
        console = console or Console(no_color=not settings.color)
        return cls(console, report_passes=settings.report_passes)

    def _print_section_header(self, title: str) -> None:
        width = self.console.width
        header_title = f" {title} "
        fill = max(width - len(header_title), 0)
        left = fill // 2
        right = fill - left
        self.console.print("=" * left + header_title + "=" * right)

    def on_run_start(self, runner: Runner) -> None:
        suites = runner.suites
        tests = sum(len(suite) for suite in suites)
        self._print_section_header("STEST RUN STARTS")
        self.console.print(f"collected {tests} tests in {len(suites)} suites")
        self.console.print()

    def on_suite_start(self, suite: Suite) -> None:
        self.console.print(f"• {escape(suite.name)}")

    def on_assertion(self, result: AssertionResult) -> None:
        if result.passed and not self.report_passes:
            return
        color = _LABEL_COLOR[result.passed]
        location = result.location
        self.console.print(
            f"  [{color}]{result.label}[/{color}] {escape(str(location))} "
            f"in {escape(location.function)}(): {escape(result.expression)}",
            soft_wrap=True,
        )
        if not result.passed and result.message:
            self.console.print(f"       [red]{escape(result.message)}[/red]", soft_wrap=True)

    def on_test_error(self, suite: Suite, test: TestCase, error: Exception) -> None:
        content: Traceback | str
        if error.__traceback__:
            content = Traceback.from_exception(
                type(error),
                error,
                error.__traceback__,
                suppress=[__import__("stest")],
            )
        else:
            content = escape(f"{type(error).__name__}: {error}")
        self.console.print(
            Panel(
                content,
                title=f"ERROR {escape(suite.name)}::{escape(test.name)}",
                title_align="left",
                border_style="yellow",
                expand=True,
                padding=(1, 1),
            )
        )

    def on_run_complete(self, result: RunResult) -> None:
        self.console.print()
        passed_color = "green" if result.passed else "dim"
        failed_color = "red" if result.failed else "dim"
        parts = [
            f"[{passed_color}]{result.passed} passed[/{passed_color}]",
            f"[{failed_color}]{result.failed} failed[/{failed_color}]",
        ]
        if result.errors:
            parts.append(f"[yellow]{result.errors} errors[/yellow]")
        self.console.print(f"[bold]{', '.join(parts)}[/bold] in {result.total_duration_ms:.0f}ms")
