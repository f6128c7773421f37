"""Test runner for executing registered suites."""

from __future__ import annotations

import linecache
import logging
import time
from collections.abc import Iterable
from types import TracebackType

from stest.assertions.callsite import UNKNOWN, locate_assert
from stest.assertions.recorder import record_condition
from stest.config import StestSettings
from stest.context import ExecutionContext, TestContext, execution_scope, test_context_scope
from stest.errors import ConfigurationError, OwnershipError, RegistrationError, ReleasedError
from stest.reports.base import Reporter
from stest.reports.console import ConsoleReporter
from stest.testing.case import TestCase
from stest.testing.models import RunResult, TestExecution, TestResult, TestStatus
from stest.testing.suite import Suite


logger = logging.getLogger(__name__)


class Runner:
    """Owns registered suites and runs their tests in registration order.

    Registering a suite moves it into the runner; closing the runner
    releases every suite and test it owns.

    Examples:
        runner = Runner()
        runner.add_suite(math_suite)
        result = runner.run()
        runner.close()

        # Or let a with-block close it
        with Runner(reporters=[]) as runner:
            runner.add_suites([math_suite, string_suite])
            result = runner.run()
    """

    def __init__(
        self,
        reporters: list[Reporter] | None = None,
        *,
        settings: StestSettings | None = None,
    ) -> None:
        if reporters is None:
            reporters = [ConsoleReporter.from_settings(settings or StestSettings())]
        self.reporters = list(reporters)
        self._suites: list[Suite] = []
        self._closed = False

    @property
    def suites(self) -> tuple[Suite, ...]:
        return tuple(self._suites)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._suites)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Runner(suites={len(self._suites)}, {state})"

    def __enter__(self) -> Runner:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def add_suite(self, suite: Suite) -> None:
        """Register ``suite`` at the end of the runner, taking ownership of it.

        Raises:
            OwnershipError: The suite is already registered with a runner.
            ReleasedError: The suite or this runner has been released.
            RegistrationError: Storage could not grow; nothing was registered.
        """
        self._ensure_open()
        self._check_transferable(suite)
        self._append([suite])

    def add_suites(self, suites: Iterable[Suite]) -> None:
        """Register several suites in order.

        The whole batch is validated before anything is registered, so
        either every suite is added or none is.
        """
        self._ensure_open()
        batch = list(suites)
        seen: set[int] = set()
        for suite in batch:
            self._check_transferable(suite)
            if id(suite) in seen:
                msg = f"Suite {suite.name!r} appears more than once in the batch"
                raise OwnershipError(msg)
            seen.add(id(suite))
        self._append(batch)

    def run(self) -> RunResult:
        """Run every test of every suite and return the aggregated result.

        Counters start from zero on each call, so running twice reproduces
        the same totals.
        """
        self._ensure_open()
        run_result = RunResult()
        ctx = ExecutionContext(reporters=list(self.reporters))

        logger.debug("Starting run of %d suite(s)", len(self._suites))
        start = time.perf_counter()

        with execution_scope(ctx):
            for reporter in self.reporters:
                reporter.on_run_start(self)
            for suite in self._suites:
                for reporter in self.reporters:
                    reporter.on_suite_start(suite)
                for case in suite:
                    run_result.executions.append(self._run_test(suite, case))

        run_result.passed = ctx.passed
        run_result.failed = ctx.failed
        run_result.total_duration_ms = (time.perf_counter() - start) * 1000

        for reporter in self.reporters:
            reporter.on_run_complete(run_result)
        logger.debug("Run finished: %s", run_result.summary)
        return run_result

    def close(self) -> None:
        """Release every owned suite and test. Calling it again does nothing."""
        if self._closed:
            return
        for suite in self._suites:
            suite._release()
        self._suites.clear()
        self._closed = True
        logger.debug("Runner released")

    def _run_test(self, suite: Suite, case: TestCase) -> TestExecution:
        """Execute a single test entry inside its own test context."""
        for reporter in self.reporters:
            reporter.on_test_start(suite, case)

        test_ctx = TestContext(suite_name=suite.name, test_name=case.name)
        error: Exception | None = None
        start = time.perf_counter()

        with test_context_scope(test_ctx):
            try:
                case()
            except AssertionError as e:
                _record_raised_assertion(e)
            except Exception as e:
                error = e
                logger.debug("Test %s::%s raised %s", suite.name, case.name, type(e).__name__, exc_info=e)
                for reporter in self.reporters:
                    reporter.on_test_error(suite, case, e)

        duration = (time.perf_counter() - start) * 1000
        assertion_results = list(test_ctx.assertion_results)

        if error is not None:
            status = TestStatus.ERROR
        elif any(not r.passed for r in assertion_results):
            status = TestStatus.FAILED
        else:
            status = TestStatus.PASSED

        execution = TestExecution(
            suite_name=suite.name,
            test_name=case.name,
            result=TestResult(
                status=status,
                duration_ms=duration,
                error=error,
                assertion_results=assertion_results,
            ),
        )
        for reporter in self.reporters:
            reporter.on_test_complete(execution)
        return execution

    def _check_transferable(self, suite: Suite) -> None:
        if not isinstance(suite, Suite):
            msg = f"Expected a Suite, got {type(suite).__name__}"
            raise ConfigurationError(msg)
        if suite.released:
            msg = f"Suite {suite.name!r} has been released"
            raise ReleasedError(msg)
        if suite.owner is self:
            msg = f"Suite {suite.name!r} is already registered with this runner"
            raise OwnershipError(msg)
        if suite.owner is not None:
            msg = f"Suite {suite.name!r} is owned by another runner"
            raise OwnershipError(msg)

    def _append(self, batch: list[Suite]) -> None:
        try:
            self._suites.extend(batch)
        except MemoryError as e:
            msg = f"Out of memory while registering {len(batch)} suite(s)"
            raise RegistrationError(msg) from e
        for suite in batch:
            suite._transfer_to(self)
        logger.debug("Registered %d suite(s), %d total", len(batch), len(self._suites))

    def _ensure_open(self) -> None:
        if self._closed:
            raise ReleasedError("Runner has been released")


def _record_raised_assertion(error: AssertionError) -> None:
    """Record a plain ``assert`` that escaped a test body as one failed condition."""
    message = str(error) or None
    tb = error.__traceback__
    if tb is None:
        record_condition(False, "<assertion>", UNKNOWN, 0, UNKNOWN, message=message)
        return

    while tb.tb_next is not None:
        tb = tb.tb_next
    code = tb.tb_frame.f_code
    lineno = tb.tb_lineno or 0
    found = locate_assert(code.co_filename, lineno, tb.tb_frame.f_globals)
    if found is not None:
        lineno, text = found
    else:
        text = linecache.getline(code.co_filename, lineno, tb.tb_frame.f_globals).strip() or "<assertion>"

    record_condition(False, text, code.co_filename, lineno, code.co_name, message=message)


def run(*suites: Suite, reporters: list[Reporter] | None = None) -> RunResult:
    """Run ``suites`` once with a temporary runner (convenience wrapper).

    The suites are moved into the runner and released with it.

    Returns:
        RunResult with all test outcomes.
    """
    with Runner(reporters=reporters) as runner:
        runner.add_suites(suites)
        return runner.run()
