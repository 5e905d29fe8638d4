"""HTML reporter for rendering a test run as a self-contained HTML page."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING

from trx_tools.models import TestOutcome
from trx_tools.parsing.timestamps import format_timespan, format_timestamp
from trx_tools.services.trx_file_service import TrxFileService

if TYPE_CHECKING:
    from trx_tools.models import TestDefinition, TestRun, UnitTestResult
    from trx_tools.parsing.timestamps import TimeSpan, Timestamp

logger = logging.getLogger(__name__)

# Pass-rate thresholds
_PASS_RATE_THRESHOLD_SUCCESS = 100
_PASS_RATE_THRESHOLD_WARNING = 80

_OUTCOME_CSS_CLASSES = {
    "Passed": "success",
    "Failed": "error",
    "Error": "error",
    "Timeout": "error",
    "Aborted": "error",
    "NotExecuted": "warning",
    "Inconclusive": "warning",
    "Warning": "warning",
}


def _fmt_time(value: Timestamp | None) -> str:
    return format_timestamp(value) if value is not None else "-"


def _fmt_span(value: TimeSpan | None) -> str:
    return format_timespan(value) if value is not None else "-"


class HTMLReporter:
    """Reporter that renders a ``TestRun`` as HTML and writes it to disk.

    The page contains:
    - Run header (name, user, start/finish)
    - Summary counters and per-outcome counts
    - Results table
    - Failure details with message and stack trace
    """

    def __init__(
        self,
        *,
        title: str = "Test Results",
        service: TrxFileService | None = None,
    ) -> None:
        """Initialize the HTML reporter.

        Args:
            title: Page title prefix.
            service: Service used for writing files (default: a new one).
        """
        self._title = title
        self._service = service or TrxFileService()

    def render(self, test_run: TestRun) -> str:
        """Render *test_run* as a complete HTML document."""
        total = len(test_run.results)
        counts = test_run.outcome_counts()
        passed = counts.get(TestOutcome.PASSED, 0)
        pass_rate = passed / total * 100 if total else 0.0

        if pass_rate >= _PASS_RATE_THRESHOLD_SUCCESS:
            rate_css_class = "success"
        elif pass_rate >= _PASS_RATE_THRESHOLD_WARNING:
            rate_css_class = "warning"
        else:
            rate_css_class = "error"

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(self._title)} - {escape(test_run.name)}</title>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #0d1117;
            color: #c9d1d9;
            padding: 2rem;
            line-height: 1.6;
        }}
        .container {{ max-width: 1400px; margin: 0 auto; }}
        h1 {{ font-size: 2rem; margin-bottom: 0.5rem; color: #58a6ff; }}
        h2 {{
            font-size: 1.25rem;
            margin-bottom: 1rem;
            color: #58a6ff;
            border-bottom: 1px solid #30363d;
            padding-bottom: 0.5rem;
        }}
        .subtitle {{ color: #8b949e; margin-bottom: 2rem; }}
        .grid {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
            gap: 1.5rem;
            margin-bottom: 2rem;
        }}
        .card {{
            background: #161b22;
            border: 1px solid #30363d;
            border-radius: 6px;
            padding: 1.5rem;
            margin-bottom: 2rem;
        }}
        .metric {{
            display: flex;
            justify-content: space-between;
            padding: 0.75rem 0;
            border-bottom: 1px solid #21262d;
        }}
        .metric:last-child {{ border-bottom: none; }}
        .metric-label {{ color: #8b949e; }}
        .metric-value {{ font-weight: 600; color: #58a6ff; }}
        .success {{ color: #3fb950; }}
        .warning {{ color: #d29922; }}
        .error {{ color: #f85149; }}
        table {{ width: 100%; border-collapse: collapse; }}
        th, td {{ text-align: left; padding: 0.5rem; border-bottom: 1px solid #21262d; }}
        th {{ color: #8b949e; }}
        pre {{
            white-space: pre-wrap;
            background: #0d1117;
            padding: 0.75rem;
            border-radius: 6px;
            margin-top: 0.5rem;
        }}
        .empty-state {{
            color: #8b949e;
            font-style: italic;
            text-align: center;
            padding: 2rem;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{escape(test_run.name)}</h1>
        <p class="subtitle">
            {escape(self._title)} |
            User: {escape(test_run.run_user or '-')} |
            Started: {_fmt_time(test_run.times.start)} |
            Finished: {_fmt_time(test_run.times.finish)}
        </p>

        <div class="grid">
            <div class="card">
                <h2>Summary</h2>
                <div class="metric">
                    <span class="metric-label">Total Tests</span>
                    <span class="metric-value">{total}</span>
                </div>
                <div class="metric">
                    <span class="metric-label">Pass Rate</span>
                    <span class="metric-value {rate_css_class}">{pass_rate:.1f}%</span>
                </div>
                <div class="metric">
                    <span class="metric-label">Duration</span>
                    <span class="metric-value">{format_timespan(test_run.total_duration)}</span>
                </div>
                <div class="metric">
                    <span class="metric-label">Run Outcome</span>
                    <span class="metric-value">{escape(test_run.result_summary.outcome or '-')}</span>
                </div>
            </div>

            <div class="card">
                <h2>Outcomes</h2>
                {self._render_outcomes(test_run)}
            </div>
        </div>

        <div class="card">
            <h2>Results</h2>
            {self._render_results_table(test_run)}
        </div>

        <div class="card">
            <h2>Failures</h2>
            {self._render_failures(test_run)}
        </div>
    </div>
</body>
</html>"""

    async def write(self, test_run: TestRun, output_path: str | Path) -> Path:
        """Render *test_run* and write it to *output_path*.

        Returns:
            The path of the written report.
        """
        html = self.render(test_run)
        target = Path(output_path)
        await self._service.write_html_report(target, html)
        logger.info("HTML report for %r written to %s", test_run.name, target)
        return target

    def _render_outcomes(self, test_run: TestRun) -> str:
        """Render per-outcome counts."""
        counts = test_run.outcome_counts()
        if not counts:
            return '<p class="empty-state">No results</p>'

        return "\n".join(f"""
                <div class="metric">
                    <span class="metric-label">{outcome.value}</span>
                    <span class="metric-value {_OUTCOME_CSS_CLASSES.get(outcome.value, '')}">{count}</span>
                </div>""" for outcome, count in counts.items())

    def _render_results_table(self, test_run: TestRun) -> str:
        """Render the results table in document order."""
        if not test_run.results:
            return '<p class="empty-state">No results</p>'

        definitions = {d.id: d for d in test_run.test_definitions}
        rows = "\n".join(
            self._render_result_row(result, definitions.get(result.test_id))
            for result in test_run.results
        )
        return f"""
            <table>
                <thead>
                    <tr><th>Test</th><th>Class</th><th>Outcome</th><th>Duration</th></tr>
                </thead>
                <tbody>
{rows}
                </tbody>
            </table>"""

    def _render_result_row(
        self, result: UnitTestResult, definition: TestDefinition | None
    ) -> str:
        outcome = result.outcome.value if result.outcome else "-"
        class_name = ""
        if definition is not None and definition.test_method is not None:
            class_name = definition.test_method.class_name
        css_class = _OUTCOME_CSS_CLASSES.get(outcome, "")
        return (
            f"                    <tr><td>{escape(result.test_name)}</td>"
            f"<td>{escape(class_name)}</td>"
            f'<td class="{css_class}">{outcome}</td>'
            f"<td>{_fmt_span(result.duration)}</td></tr>"
        )

    def _render_failures(self, test_run: TestRun) -> str:
        """Render failure details for failing results."""
        failures = test_run.failed_results
        if not failures:
            return '<p class="empty-state">No failures</p>'

        blocks = []
        for result in failures:
            error = result.error_info
            message = escape(error.message) if error else ""
            stack = escape(error.stack_trace) if error else ""
            blocks.append(f"""
            <div class="metric" style="display: block;">
                <strong class="error">{escape(result.test_name)}</strong>
                <pre>{message}</pre>
                <pre>{stack}</pre>
            </div>""")
        return "\n".join(blocks)
