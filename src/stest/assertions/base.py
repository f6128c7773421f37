"""Assertion result types."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AssertionKind(str, Enum):
    """Which recorder produced an assertion result."""

    EQUALITY = "equality"
    CONDITION = "condition"


class SourceLocation(BaseModel):
    """Where an assertion was written.

    Attributes
    ----------
    file : str
        Path of the source file containing the assertion.
    line : int
        Line number of the assertion call.
    function : str
        Name of the function enclosing the assertion call.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    function: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class AssertionResult(BaseModel):
    """Outcome of one evaluated assertion plus its diagnostic context.

    Attributes
    ----------
    kind : AssertionKind
        Equality check or plain condition.
    passed : bool
        Whether the asserted claim held.
    expression : str
        Rendered source text of the claim (e.g. ``"2 + 2 == 4"``).
    left, right : str or None
        Source text of the compared operands, equality assertions only.
    operator : str or None
        ``"=="`` or ``"!="``, equality assertions only.
    location : SourceLocation
        File, line and enclosing function of the assertion call.
    suite_name, test_name : str or None
        Test the assertion was attributed to; ``None`` outside a run.
    message : str or None
        Optional explanation attached to a failure.
    timestamp : datetime
        UTC time when the assertion was recorded.
    """

    model_config = ConfigDict(frozen=True)

    kind: AssertionKind
    passed: bool
    expression: str
    left: str | None = None
    right: str | None = None
    operator: str | None = None
    location: SourceLocation
    suite_name: str | None = None
    test_name: str | None = None
    message: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def label(self) -> str:
        return "PASS" if self.passed else "FAIL"
