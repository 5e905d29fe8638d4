"""Data models for trx-tools."""

from trx_tools.models.test_run import (
    Counters,
    ErrorInfo,
    ResultOutput,
    ResultSummary,
    RunTimes,
    TestDefinition,
    TestEntry,
    TestList,
    TestMethod,
    TestOutcome,
    TestRun,
    UnitTestResult,
)
from trx_tools.parsing.timestamps import TimeSpan, Timestamp

__all__ = [
    "Counters",
    "ErrorInfo",
    "ResultOutput",
    "ResultSummary",
    "RunTimes",
    "TestDefinition",
    "TestEntry",
    "TestList",
    "TestMethod",
    "TestOutcome",
    "TestRun",
    "TimeSpan",
    "Timestamp",
    "UnitTestResult",
]
