from .result import RunResult, TestExecution, TestResult, TestStatus

__all__ = [
    "RunResult",
    "TestExecution",
    "TestResult",
    "TestStatus",
]
