"""Reporters for rendering parsed test runs."""

from __future__ import annotations

from trx_tools.reporters.html import HTMLReporter
from trx_tools.reporters.json_reporter import JSONReporter
from trx_tools.reporters.terminal import CLIReporter, reporter

__all__ = [
    "CLIReporter",
    "HTMLReporter",
    "JSONReporter",
    "reporter",
]
