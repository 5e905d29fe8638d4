"""TRX file service: read test runs, find TRX files, write HTML reports."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from trx_tools.parsing.loader import load_document
from trx_tools.parsing.mapper import map_test_run

if TYPE_CHECKING:
    from datetime import tzinfo

    from trx_tools.models import TestRun

TRX_EXTENSION = ".trx"

_default_logger = logging.getLogger(__name__)


class TrxFileService:
    """Compose the XML loader and the domain mapper behind file-level operations.

    Every call is independent: the service holds no cache and no mutable
    state, so one instance can be shared between threads.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        naive_timezone: tzinfo | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            logger: Logger used for progress messages (default: module logger).
            naive_timezone: Zone for TRX timestamps without a UTC offset.
                ``None`` rejects such files.
        """
        self._logger = logger or _default_logger
        self._naive_timezone = naive_timezone

    def read_test_run(self, path: str | Path) -> TestRun:
        """Load and map the TRX file at *path*.

        Errors from the loader and the mapper propagate unchanged.
        """
        self._logger.info("Reading TRX file %s", path)
        document = load_document(path)
        test_run = map_test_run(document, naive_timezone=self._naive_timezone)
        self._logger.info(
            "Read test run %r from %s: %d results, %d test lists",
            test_run.name,
            path,
            len(test_run.results),
            len(test_run.test_lists),
        )
        return test_run

    def find_trx_files_in_directory(self, directory: str | Path) -> list[Path]:
        """Return the TRX files directly inside *directory*, in listing order.

        Raises:
            FileNotFoundError: If *directory* does not exist.
            NotADirectoryError: If *directory* is not a directory.
        """
        root = Path(directory)
        if not root.exists():
            raise FileNotFoundError(f"Directory does not exist: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        files = [path for path in root.glob(f"*{TRX_EXTENSION}") if path.is_file()]
        self._logger.debug("Found %d TRX files in %s", len(files), root)
        return files

    async def write_html_report(self, path: str | Path, html: str) -> None:
        """Write *html* to *path* verbatim, overwriting any existing file.

        The parent directory must already exist; ``OSError`` propagates.
        """
        target = Path(path)
        self._logger.info("Writing HTML report to %s", target)
        await asyncio.to_thread(target.write_text, html, encoding="utf-8", newline="")
        self._logger.debug("Wrote %d characters to %s", len(html), target)
