"""Assertion recording and the assertion helpers used in test bodies."""

from stest.assertions.base import AssertionKind, AssertionResult, SourceLocation
from stest.assertions.checks import (
    assert_eq,
    assert_neq,
    assert_str_eq,
    assert_str_neq,
    assert_true,
)
from stest.assertions.recorder import record_condition, record_equality

__all__ = [
    "AssertionKind",
    "AssertionResult",
    "SourceLocation",
    "assert_eq",
    "assert_neq",
    "assert_str_eq",
    "assert_str_neq",
    "assert_true",
    "record_condition",
    "record_equality",
]
