from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from stest.assertions.base import AssertionResult
    from stest.reports.base import Reporter


@dataclass(frozen=True, slots=True)
class TestContext:
    """Identity of the test entry currently executing.

    Attributes:
    ----------
    suite_name : str
        Name of the suite that owns the running test.
    test_name : str
        Name of the running test.
    assertion_results : list[AssertionResult]
        Assertion results recorded while the entry runs.
    """

    __test__ = False  # Prevent pytest from collecting this as a test class

    suite_name: str
    test_name: str
    assertion_results: list[AssertionResult] = field(default_factory=list)


@dataclass(slots=True)
class ExecutionContext:
    """Run-scoped pass/fail counters consulted by every assertion.

    A fresh instance is bound for each ``Runner.run`` call, so counters
    start at zero on every run and never leak between runners.

    Attributes:
    ----------
    reporters : list[Reporter]
        Receivers of one diagnostic per recorded assertion.
    passed : int
        Number of assertions that held.
    failed : int
        Number of assertions that did not hold.
    """

    reporters: list[Reporter] = field(default_factory=list)
    passed: int = 0
    failed: int = 0

    def record(self, result: AssertionResult) -> None:
        """Count ``result`` and forward it to every reporter."""
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1
        for reporter in self.reporters:
            reporter.on_assertion(result)

    @property
    def total(self) -> int:
        return self.passed + self.failed


TEST_CONTEXT: ContextVar[TestContext | None] = ContextVar("test_context", default=None)
EXECUTION_CONTEXT: ContextVar[ExecutionContext | None] = ContextVar("execution_context", default=None)


def get_test_context() -> TestContext | None:
    """Get the current test context, or None if no test entry is running."""
    return TEST_CONTEXT.get()


def get_execution_context() -> ExecutionContext | None:
    """Get the current execution context, or None if not in a run."""
    return EXECUTION_CONTEXT.get()


@contextmanager
def test_context_scope(ctx: TestContext) -> Iterator[None]:
    """Temporarily set `TEST_CONTEXT` for the duration of the ``with`` block.

    Parameters
    ----------
    ctx : TestContext
        The context to bind as the current test context.
    """
    token = TEST_CONTEXT.set(ctx)
    try:
        yield
    finally:
        TEST_CONTEXT.reset(token)


@contextmanager
def execution_scope(ctx: ExecutionContext) -> Iterator[None]:
    """Temporarily set `EXECUTION_CONTEXT` for the duration of the ``with`` block."""
    token = EXECUTION_CONTEXT.set(ctx)
    try:
        yield
    finally:
        EXECUTION_CONTEXT.reset(token)
