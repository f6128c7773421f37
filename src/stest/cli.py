"""Command-line entry point: load one test module and run its runner."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.traceback import Traceback

from stest.config import StestSettings
from stest.core import load_test_module
from stest.errors import ConfigurationError
from stest.reports.console import ConsoleReporter
from stest.testing.runner import Runner


EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2

DEFAULT_ATTRIBUTE = "runner"


class CLIApplication:
    """Top-level command router."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console
        self.error_console = error_console or Console(stderr=True)
        self.parser = argparse.ArgumentParser(
            prog="stest",
            description="Run stest suites and report every assertion.",
        )
        subparsers = self.parser.add_subparsers(dest="command", required=True)
        run = subparsers.add_parser(
            "run",
            help="Load a test module and run the runner it defines.",
        )
        run.add_argument(
            "target",
            help=(
                "path/to/file.py[:attr]. attr names a Runner, or a zero-argument callable "
                f"returning one (default: {DEFAULT_ATTRIBUTE})."
            ),
        )
        run.add_argument(
            "--no-color",
            dest="color",
            action="store_false",
            default=None,
            help="Disable colored output (STEST_COLOR).",
        )
        run.add_argument(
            "--failures-only",
            dest="report_passes",
            action="store_false",
            default=None,
            help="Only print diagnostics for failing assertions (STEST_REPORT_PASSES).",
        )
        run.add_argument(
            "--log-level",
            dest="log_level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Level for stest log messages (STEST_LOG_LEVEL).",
        )

    def run(self, argv: Sequence[str] | None = None) -> int:
        load_dotenv(Path.cwd() / ".env")
        args = self.parser.parse_args(argv)
        try:
            command = RunCommand(self.console, self.error_console, args)
        except ValidationError as e:
            self.error_console.print(f"[red]error:[/red] invalid settings\n{escape(str(e))}")
            return EXIT_CONFIG_ERROR
        return command.run()


class RunCommand:
    """Driver for `stest run`."""

    def __init__(self, console: Console | None, error_console: Console, args: argparse.Namespace) -> None:
        overrides = {
            key: value
            for key in ("color", "report_passes", "log_level")
            if (value := getattr(args, key)) is not None
        }
        self.settings = StestSettings(**overrides)
        self.console = console
        self.error_console = error_console
        self.path, self.attribute = parse_target(args.target)

    def run(self) -> int:
        configure_logging(self.settings.log_level, self.error_console)

        try:
            runner = self._load_runner()
        except ConfigurationError as e:
            self.error_console.print(f"[red]error:[/red] {escape(str(e))}")
            return EXIT_CONFIG_ERROR
        except Exception as e:
            self.error_console.print(f"[red]error:[/red] could not load {escape(str(self.path))}")
            self.error_console.print(Traceback.from_exception(type(e), e, e.__traceback__))
            return EXIT_CONFIG_ERROR

        reporter = ConsoleReporter.from_settings(self.settings, console=self.console)
        runner.reporters = [reporter] + [r for r in runner.reporters if not isinstance(r, ConsoleReporter)]

        with runner:
            result = runner.run()
        return EXIT_OK if result.ok else EXIT_FAILURES

    def _load_runner(self) -> Runner:
        if not self.path.is_file():
            msg = f"No such test file: {self.path}"
            raise ConfigurationError(msg)

        module = load_test_module(self.path)
        target = getattr(module, self.attribute, None)
        if target is None:
            msg = f"{self.path} has no attribute {self.attribute!r}"
            raise ConfigurationError(msg)
        if not isinstance(target, Runner) and callable(target):
            target = target()
        if not isinstance(target, Runner):
            msg = f"{self.path}:{self.attribute} is not a Runner (got {type(target).__name__})"
            raise ConfigurationError(msg)
        return target


def parse_target(target: str) -> tuple[Path, str]:
    """Split ``path[:attr]`` into a path and an attribute name."""
    head, sep, tail = target.rpartition(":")
    if sep and head and tail.isidentifier():
        return Path(head).expanduser(), tail
    return Path(target).expanduser(), DEFAULT_ATTRIBUTE


def configure_logging(level: str, console: Console) -> None:
    """Send ``stest`` log records to ``console`` through Rich."""
    logger = logging.getLogger("stest")
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def main(argv: Sequence[str] | None = None) -> int:
    return CLIApplication().run(argv)
