from .context import (
    EXECUTION_CONTEXT,
    TEST_CONTEXT,
    ExecutionContext,
    TestContext,
    execution_scope,
    get_execution_context,
    get_test_context,
    test_context_scope,
)

__all__ = [
    "ExecutionContext",
    "TestContext",
    "EXECUTION_CONTEXT",
    "TEST_CONTEXT",
    "execution_scope",
    "get_execution_context",
    "get_test_context",
    "test_context_scope",
]
