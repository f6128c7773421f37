"""AST rewriting for `assert` statements in stest test modules.

Test modules loaded through :func:`stest.core.module_loader.load_test_module`
have their `assert` statements rewritten so they **do not raise**. Instead each
assert is recorded through the assertion recorder:

- ``assert a == b`` and ``assert a != b`` become equality records carrying the
  source text of both operands.
- Every other ``assert cond, msg`` becomes a condition record; ``msg`` is only
  evaluated when the condition is false.

The recorded location is the file, the line of the statement and the name of
the innermost enclosing function (``<module>`` at top level).
"""

from __future__ import annotations

import ast
from typing import Any

from stest.assertions.recorder import record_condition, record_equality


RECORD_EQUALITY = "_stest_record_equality"
RECORD_CONDITION = "_stest_record_condition"
PASSED = "_stest_passed"
MODULE_SCOPE = "<module>"


def build_injected_globals() -> dict[str, Any]:
    """Build the globals mapping injected into rewritten modules.

    Transformed code references these names directly, so they must exist in
    the module's globals before it executes.
    """
    return {
        RECORD_EQUALITY: record_equality,
        RECORD_CONDITION: record_condition,
    }


class AssertRewriteTransformer(ast.NodeTransformer):
    """Rewrite `assert` statements to record assertion results instead of raising."""

    def __init__(self, source: str, *, filename: str) -> None:
        self._source = source
        self._filename = filename
        self._functions: list[str] = []

    def visit_FunctionDef(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> ast.AST:  # noqa: N802 - ast API
        self._functions.append(node.name)
        try:
            self.generic_visit(node)
        finally:
            self._functions.pop()
        return node

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_Assert(self, node: ast.Assert) -> list[ast.stmt]:  # noqa: N802 - ast API
        fn_name = self._functions[-1] if self._functions else MODULE_SCOPE
        location = [
            ast.Constant(self._filename),
            ast.Constant(node.lineno),
            ast.Constant(fn_name),
        ]
        message = ast.keyword(arg="message", value=self._lazy_message(node.msg))

        passed_assign = ast.Assign(
            targets=[ast.Name(id=PASSED, ctx=ast.Store())],
            value=ast.Call(func=ast.Name(id="bool", ctx=ast.Load()), args=[node.test], keywords=[]),
        )

        test = node.test
        if isinstance(test, ast.Compare) and len(test.ops) == 1 and isinstance(test.ops[0], (ast.Eq, ast.NotEq)):
            operator = "==" if isinstance(test.ops[0], ast.Eq) else "!="
            record = ast.Call(
                func=ast.Name(id=RECORD_EQUALITY, ctx=ast.Load()),
                args=[
                    ast.Name(id=PASSED, ctx=ast.Load()),
                    ast.Constant(self._text(test.left)),
                    ast.Constant(self._text(test.comparators[0])),
                    *location,
                ],
                keywords=[ast.keyword(arg="operator", value=ast.Constant(operator)), message],
            )
        else:
            record = ast.Call(
                func=ast.Name(id=RECORD_CONDITION, ctx=ast.Load()),
                args=[ast.Name(id=PASSED, ctx=ast.Load()), ast.Constant(self._text(test)), *location],
                keywords=[message],
            )

        block: list[ast.stmt] = [passed_assign, ast.Expr(value=record)]

        # Preserve useful locations for debugging.
        for stmt in block:
            ast.copy_location(stmt, node)

        return block

    def _lazy_message(self, msg: ast.expr | None) -> ast.expr:
        if msg is None:
            return ast.Constant(None)
        return ast.IfExp(
            test=ast.UnaryOp(op=ast.Not(), operand=ast.Name(id=PASSED, ctx=ast.Load())),
            body=ast.Call(func=ast.Name(id="str", ctx=ast.Load()), args=[msg], keywords=[]),
            orelse=ast.Constant(None),
        )

    def _text(self, node: ast.expr) -> str:
        text = ast.get_source_segment(self._source, node)
        if text is not None:
            return text
        try:
            return ast.unparse(node)
        except Exception:
            return "<assertion>"
