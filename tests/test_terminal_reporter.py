"""Tests for the rich terminal reporter."""

from __future__ import annotations

from rich.console import Console

from trx_tools.models import ErrorInfo, ResultOutput, TestOutcome, TestRun, UnitTestResult
from trx_tools.reporters.terminal import CLIReporter


def _reporter() -> tuple[CLIReporter, Console]:
    output = Console(record=True, width=120, force_terminal=False)
    return CLIReporter(output), output


def test_status_messages() -> None:
    reporter, output = _reporter()

    reporter.print_success("done")
    reporter.print_error("broken")
    reporter.print_warning("careful")
    reporter.print_info("fyi")

    text = output.export_text()
    assert "✓ done" in text
    assert "✗ broken" in text
    assert "⚠ careful" in text
    assert "fyi" in text


def test_summary_of_empty_run() -> None:
    reporter, output = _reporter()

    reporter.print_test_run_summary(TestRun(name="empty run"))

    text = output.export_text()
    assert "empty run" in text
    assert "No tests executed" in text


def test_summary_with_failures() -> None:
    reporter, output = _reporter()
    run = TestRun(
        name="run [main]",
        results=(
            UnitTestResult(test_id="a", test_name="Adds", outcome=TestOutcome.PASSED),
            UnitTestResult(
                test_id="b",
                test_name="Divides",
                outcome=TestOutcome.FAILED,
                output=ResultOutput(error_info=ErrorInfo(message="boom\nsecond line")),
            ),
        ),
    )

    reporter.print_test_run_summary(run)

    text = output.export_text()
    assert "run [main]" in text
    assert "Outcomes" in text
    assert "50% pass rate" in text
    assert "Failures (1)" in text
    assert "Divides" in text
    assert "boom" in text
    assert "second line" not in text


def test_summary_without_failures_omits_table() -> None:
    reporter, output = _reporter()
    run = TestRun(
        name="green",
        results=(UnitTestResult(test_id="a", test_name="Adds", outcome=TestOutcome.PASSED),),
    )

    reporter.print_test_run_summary(run)

    text = output.export_text()
    assert "100% pass rate" in text
    assert "Failures" not in text
