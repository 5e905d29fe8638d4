"""JSON reporter: canonical JSON snapshots of a test run.

The output is ``TestRun.to_dict()`` dumped with two-space indentation.
Timestamps are always UTC (``...Z``), so snapshots taken on machines in
different time zones compare equal.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from trx_tools.models import TestRun

logger = logging.getLogger(__name__)


class JSONReporter:
    """Serialize a ``TestRun`` into its canonical JSON form."""

    def generate(self, test_run: TestRun, output_path: Path) -> Path:
        """Write a JSON snapshot file.

        Args:
            test_run: Parsed test run.
            output_path: Path to write the JSON file.

        Returns:
            The path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generate_string(test_run) + "\n", encoding="utf-8")
        logger.info("JSON snapshot written to %s", output_path)
        return output_path

    def generate_string(self, test_run: TestRun) -> str:
        """Return the JSON snapshot as a string (no trailing newline)."""
        return json.dumps(test_run.to_dict(), indent=2, ensure_ascii=False)
