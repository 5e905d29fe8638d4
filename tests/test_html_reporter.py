"""Tests for the HTML reporter."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

from trx_tools.models import (
    ErrorInfo,
    ResultOutput,
    TestDefinition,
    TestMethod,
    TestOutcome,
    TestRun,
    TimeSpan,
    UnitTestResult,
)
from trx_tools.reporters.html import HTMLReporter
from trx_tools.services import TrxFileService

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def test_run() -> TestRun:
    return TestRun(
        name="nightly <main>",
        run_user="builder",
        results=(
            UnitTestResult(
                test_id="t1",
                test_name="Adds",
                outcome=TestOutcome.PASSED,
                duration=TimeSpan(50_000),
            ),
            UnitTestResult(
                test_id="t2",
                test_name="Divides",
                outcome=TestOutcome.FAILED,
                output=ResultOutput(
                    error_info=ErrorInfo(
                        message="Expected <1> but was <2>",
                        stack_trace="at Calc.Tests.Divides() in Calc.cs:line 7",
                    )
                ),
            ),
        ),
        test_definitions=(
            TestDefinition(
                id="t1",
                name="Adds",
                test_method=TestMethod(class_name="Calc.Tests", name="Adds"),
            ),
        ),
    )


class TestRender:
    def test_is_complete_document(self, test_run: TestRun) -> None:
        html = HTMLReporter().render(test_run)
        assert html.startswith("<!DOCTYPE html>")
        assert html.rstrip().endswith("</html>")

    def test_escapes_run_name(self, test_run: TestRun) -> None:
        html = HTMLReporter(title="CI").render(test_run)
        assert "<title>CI - nightly &lt;main&gt;</title>" in html
        assert "nightly <main>" not in html

    def test_counts_and_rate(self, test_run: TestRun) -> None:
        html = HTMLReporter().render(test_run)
        assert ">2</span>" in html
        assert "50.0%" in html
        assert "Passed" in html
        assert "Failed" in html

    def test_results_table(self, test_run: TestRun) -> None:
        html = HTMLReporter().render(test_run)
        assert "<td>Adds</td><td>Calc.Tests</td>" in html
        assert "<td>00:00:00.0050000</td>" in html

    def test_failure_details(self, test_run: TestRun) -> None:
        html = HTMLReporter().render(test_run)
        assert "Expected &lt;1&gt; but was &lt;2&gt;" in html
        assert "Calc.cs:line 7" in html
        assert "No failures" not in html

    def test_empty_run(self) -> None:
        html = HTMLReporter().render(TestRun(name="empty"))
        assert "No results" in html
        assert "No failures" in html
        assert "0.0%" in html

    def test_deterministic(self, test_run: TestRun) -> None:
        reporter = HTMLReporter()
        assert reporter.render(test_run) == reporter.render(test_run)


class TestWrite:
    @pytest.mark.asyncio
    async def test_delegates_to_service(self, test_run: TestRun, tmp_path: Path) -> None:
        service = MagicMock(spec=TrxFileService)
        service.write_html_report = AsyncMock()
        reporter = HTMLReporter(service=service)
        target = tmp_path / "report.html"

        result = await reporter.write(test_run, target)

        assert result == target
        service.write_html_report.assert_awaited_once_with(target, reporter.render(test_run))

    @pytest.mark.asyncio
    async def test_writes_file(self, test_run: TestRun, tmp_path: Path) -> None:
        reporter = HTMLReporter()
        target = tmp_path / "report.html"

        await reporter.write(test_run, str(target))

        assert target.read_text(encoding="utf-8") == reporter.render(test_run)
