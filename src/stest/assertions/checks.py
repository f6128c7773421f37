"""Assertion helpers for test bodies.

Each helper evaluates its claim, captures where it was called from and how
its operands were spelled, and hands everything to the recorder. A failing
check is recorded and reported; it does not stop the test.

Example::

    def test_addition():
        assert_eq(2 + 2, 4)
        assert_str_eq(greet("bob"), "hello bob")
"""

from __future__ import annotations

from typing import Any

from stest.assertions.base import AssertionResult
from stest.assertions.recorder import record_condition, record_equality
from stest.assertions.callsite import capture_call_site


def assert_eq(left: Any, right: Any) -> AssertionResult:
    """Assert ``left == right``."""
    return _equality(left == right, left, right, "==")


def assert_neq(left: Any, right: Any) -> AssertionResult:
    """Assert ``left != right``."""
    return _equality(left != right, left, right, "!=")


def assert_true(condition: Any) -> AssertionResult:
    """Assert that ``condition`` is truthy."""
    site = capture_call_site(depth=1)
    (text,) = site.argument_texts(("condition",))
    return record_condition(
        bool(condition),
        text if text is not None else repr(condition),
        site.file,
        site.line,
        site.function,
    )


def assert_str_eq(left: str | bytes, right: str | bytes) -> AssertionResult:
    """Assert two strings have the same content.

    Raises
    ------
    TypeError
        If the operands are not both ``str`` or both ``bytes``.
    """
    _check_strings(left, right)
    return _equality(left == right, left, right, "==")


def assert_str_neq(left: str | bytes, right: str | bytes) -> AssertionResult:
    """Assert two strings differ in content.

    Raises
    ------
    TypeError
        If the operands are not both ``str`` or both ``bytes``.
    """
    _check_strings(left, right)
    return _equality(left != right, left, right, "!=")


def _equality(result: Any, left: Any, right: Any, operator: str) -> AssertionResult:
    # Two frames up: past this helper and the public assert_* function.
    site = capture_call_site(depth=2)
    left_text, right_text = site.argument_texts(("left", "right"))
    return record_equality(
        bool(result),
        left_text if left_text is not None else repr(left),
        right_text if right_text is not None else repr(right),
        site.file,
        site.line,
        site.function,
        operator=operator,
    )


def _check_strings(left: Any, right: Any) -> None:
    if isinstance(left, str) and isinstance(right, str):
        return
    if isinstance(left, bytes) and isinstance(right, bytes):
        return
    msg = f"String assertion needs two str or two bytes operands, got {type(left).__name__} and {type(right).__name__}"
    raise TypeError(msg)
