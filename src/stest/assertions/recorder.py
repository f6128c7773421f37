"""Record evaluated assertions into the active run.

These two functions are the only way assertion outcomes enter a run. They
never evaluate user expressions and never raise on a false result: the claim
is counted, reported, and the calling test body carries on.
"""

from __future__ import annotations

import logging

from stest.assertions.base import AssertionKind, AssertionResult, SourceLocation
from stest.context import get_execution_context, get_test_context


logger = logging.getLogger(__name__)


def record_equality(
    result: bool,
    left_expr: str,
    right_expr: str,
    file: str,
    line: int,
    fn_name: str,
    *,
    operator: str = "==",
    message: str | None = None,
) -> AssertionResult:
    """Record an already evaluated comparison of two operands.

    Parameters
    ----------
    result : bool
        Outcome of ``left == right`` (or ``left != right``) computed by the caller.
    left_expr, right_expr : str
        Source text of the two operands, used only for diagnostics.
    file, line, fn_name
        Location of the assertion call.
    operator : str
        Comparison operator rendered between the operands.
    message : str or None
        Optional explanation kept with the result.

    Returns
    -------
    AssertionResult
        The recorded result.
    """
    return _record(
        kind=AssertionKind.EQUALITY,
        passed=bool(result),
        expression=f"{left_expr} {operator} {right_expr}",
        left=left_expr,
        right=right_expr,
        operator=operator,
        location=SourceLocation(file=file, line=line, function=fn_name),
        message=message,
    )


def record_condition(
    result: bool,
    expr_text: str,
    file: str,
    line: int,
    fn_name: str,
    *,
    message: str | None = None,
) -> AssertionResult:
    """Record an already evaluated boolean condition.

    Parameters
    ----------
    result : bool
        Outcome of the condition computed by the caller.
    expr_text : str
        Source text of the condition, used only for diagnostics.
    file, line, fn_name
        Location of the assertion call.
    message : str or None
        Optional explanation kept with the result.

    Returns
    -------
    AssertionResult
        The recorded result.
    """
    return _record(
        kind=AssertionKind.CONDITION,
        passed=bool(result),
        expression=expr_text,
        location=SourceLocation(file=file, line=line, function=fn_name),
        message=message,
    )


def _record(**fields) -> AssertionResult:
    test_ctx = get_test_context()
    if test_ctx is not None:
        fields["suite_name"] = test_ctx.suite_name
        fields["test_name"] = test_ctx.test_name
    assertion = AssertionResult(**fields)

    execution_ctx = get_execution_context()
    if execution_ctx is None:
        logger.warning(
            "Assertion %r at %s evaluated outside of a run; it is not counted",
            assertion.expression,
            assertion.location,
        )
        return assertion

    if test_ctx is not None:
        test_ctx.assertion_results.append(assertion)
    execution_ctx.record(assertion)
    return assertion
