"""Reporter interface for run events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from stest.assertions.base import AssertionResult
    from stest.testing.case import TestCase
    from stest.testing.models import RunResult, TestExecution
    from stest.testing.runner import Runner
    from stest.testing.suite import Suite


class Reporter(ABC):
    """Receives run events as they happen.

    Hooks are called synchronously from the runner, in execution order.
    Only the assertion and end-of-run hooks are required; the others
    default to doing nothing.
    """

    def on_run_start(self, runner: Runner) -> None:
        """Called once before the first suite runs."""

    def on_suite_start(self, suite: Suite) -> None:
        """Called before the first test of ``suite`` runs."""

    def on_test_start(self, suite: Suite, test: TestCase) -> None:
        """Called right before a test entry is invoked."""

    @abstractmethod
    def on_assertion(self, result: AssertionResult) -> None:
        """Called for every recorded assertion, pass or fail."""

    def on_test_error(self, suite: Suite, test: TestCase, error: Exception) -> None:
        """Called when a test entry raised something other than an assertion failure."""

    def on_test_complete(self, execution: TestExecution) -> None:
        """Called after a test entry returned or raised."""

    @abstractmethod
    def on_run_complete(self, result: RunResult) -> None:
        """Called once after the last test with the aggregated result."""
