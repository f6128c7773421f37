"""stest - a small unit-testing harness: suites, a runner, non-fatal assertions."""

from .assertions import (
    AssertionResult,
    assert_eq,
    assert_neq,
    assert_str_eq,
    assert_str_neq,
    assert_true,
    record_condition,
    record_equality,
)
from .config import StestSettings
from .core import load_test_module
from .errors import (
    ConfigurationError,
    InvalidSuiteNameError,
    InvalidTestError,
    OwnershipError,
    RegistrationError,
    ReleasedError,
    StestError,
)
from .reports import ConsoleReporter, Reporter
from .testing import Runner, RunResult, Suite, TestCase, TestStatus, run, test
from .version import __version__


__all__ = [
    # Core testing
    "Runner",
    "Suite",
    "TestCase",
    "test",
    "run",
    "RunResult",
    "TestStatus",
    "load_test_module",
    # Assertions
    "AssertionResult",
    "assert_eq",
    "assert_neq",
    "assert_true",
    "assert_str_eq",
    "assert_str_neq",
    "record_condition",
    "record_equality",
    # Reporting and configuration
    "Reporter",
    "ConsoleReporter",
    "StestSettings",
    # Errors
    "StestError",
    "ConfigurationError",
    "InvalidSuiteNameError",
    "InvalidTestError",
    "OwnershipError",
    "RegistrationError",
    "ReleasedError",
    "__version__",
]
