"""Capture the location and argument source text of an assertion call.

The assertion helpers need the literal text of their operands, exactly as it
was written by the test author. The caller's frame tells us which instruction
is running; its position is matched against the parsed source file to find the
call expression, and the argument nodes are turned back into source segments.
"""

from __future__ import annotations

import ast
import inspect
import linecache
from collections.abc import Sequence
from dataclasses import dataclass
from types import FrameType


UNKNOWN = "<unknown>"


@dataclass(frozen=True, slots=True)
class CallSite:
    """File, line and function of a call plus its parsed call expression.

    Attributes
    ----------
    file : str
        Filename of the calling code.
    line : int
        Line of the call being executed.
    function : str
        Name of the function containing the call.
    call : ast.Call or None
        The call expression, when the source could be located.
    source : str or None
        Full source of ``file``, when available.
    """

    file: str
    line: int
    function: str
    call: ast.Call | None = None
    source: str | None = None

    def argument_texts(self, names: Sequence[str]) -> tuple[str | None, ...]:
        """Source text for each parameter in ``names``, ``None`` where unknown.

        Positional arguments map onto ``names`` in order, keyword arguments by
        name. Star-args make the mapping ambiguous and yield all ``None``.
        """
        unknown: tuple[str | None, ...] = (None,) * len(names)
        if self.call is None or self.source is None:
            return unknown

        texts: list[str | None] = list(unknown)
        for index, arg in enumerate(self.call.args):
            if isinstance(arg, ast.Starred):
                return unknown
            if index < len(names):
                texts[index] = _segment(self.source, arg)
        for keyword in self.call.keywords:
            if keyword.arg is None:
                return unknown
            if keyword.arg in names:
                texts[names.index(keyword.arg)] = _segment(self.source, keyword.value)
        return tuple(texts)


def capture_call_site(depth: int = 1) -> CallSite:
    """Describe the call being executed ``depth`` frames above our caller.

    ``depth=1`` returns the site that called the function which called
    ``capture_call_site``.
    """
    frame = inspect.currentframe()
    target: FrameType | None = frame.f_back if frame else None
    try:
        for _ in range(depth):
            target = target.f_back if target else None
        if target is None:
            return CallSite(file=UNKNOWN, line=0, function=UNKNOWN)

        info = inspect.getframeinfo(target, context=0)
        source, call = _locate_call(info.filename, info.positions, target.f_globals)
        return CallSite(
            file=info.filename,
            line=info.lineno,
            function=info.function,
            call=call,
            source=source,
        )
    finally:
        del frame, target


def locate_assert(filename: str, lineno: int, module_globals=None) -> tuple[int, str] | None:
    """Find the ``assert`` statement spanning ``lineno`` in ``filename``.

    Returns the statement's first line and the source text of its test, or
    ``None`` when the source is unavailable or no assert covers that line.
    """
    index = _source_index(filename, module_globals)
    if index is None:
        return None
    for node in index.asserts:
        if node.lineno <= lineno <= (node.end_lineno or node.lineno):
            return node.lineno, _segment(index.source, node.test)
    return None


@dataclass(frozen=True, slots=True)
class _SourceIndex:
    lines: list[str]
    source: str
    calls: dict[tuple[int, int], ast.Call]
    asserts: list[ast.Assert]


# Keyed by filename. An entry is reused while linecache hands back the same
# list object, i.e. until the file is reloaded.
_INDEXES: dict[str, _SourceIndex] = {}


def _source_index(filename: str, module_globals) -> _SourceIndex | None:
    lines = linecache.getlines(filename, module_globals)
    if not lines:
        return None
    index = _INDEXES.get(filename)
    if index is None or index.lines is not lines:
        index = _build_index(lines)
        _INDEXES[filename] = index
    return index


def _build_index(lines: list[str]) -> _SourceIndex:
    source = "".join(lines)
    calls: dict[tuple[int, int], ast.Call] = {}
    asserts: list[ast.Assert] = []
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return _SourceIndex(lines, source, calls, asserts)

    for node in ast.walk(tree):
        if isinstance(node, ast.Call) and node.end_lineno is not None and node.end_col_offset is not None:
            calls.setdefault((node.end_lineno, node.end_col_offset), node)
        elif isinstance(node, ast.Assert):
            asserts.append(node)
    return _SourceIndex(lines, source, calls, asserts)


def _locate_call(filename: str, positions, module_globals) -> tuple[str | None, ast.Call | None]:
    if positions is None or positions.end_lineno is None or positions.end_col_offset is None:
        return None, None

    index = _source_index(filename, module_globals)
    if index is None:
        return None, None
    # The instruction start may point at the attribute of a method call,
    # but the end always matches the closing parenthesis.
    return index.source, index.calls.get((positions.end_lineno, positions.end_col_offset))


def _segment(source: str, node: ast.expr) -> str:
    text = ast.get_source_segment(source, node)
    if text is None:
        return ast.unparse(node)
    return text
