"""Suites, test cases and the runner that executes them."""

from .case import TestCase, test
from .models import RunResult, TestExecution, TestResult, TestStatus
from .runner import Runner, run
from .suite import Suite


__all__ = [
    "RunResult",
    "Runner",
    "Suite",
    "TestCase",
    "TestExecution",
    "TestResult",
    "TestStatus",
    "run",
    "test",
]
