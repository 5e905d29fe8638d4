"""Error taxonomy for reading TRX files.

``MalformedTrxDocumentError`` and ``MissingRootElementError`` both derive
from the generic ``InvalidTrxDocumentError`` so callers that only care about
"something is there but it is not a usable TRX document" can catch one type,
while a missing file stays a separate ``FileNotFoundError``.
"""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class TrxError(Exception):
    """Base exception for TRX reading errors."""


class TrxFileDoesNotExistError(TrxError, FileNotFoundError):
    """Raised when no TRX file exists at the requested path."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(errno.ENOENT, "TRX file does not exist", str(path))


class InvalidTrxDocumentError(TrxError):
    """Raised when a file exists but cannot be used as a TRX document."""


class MalformedTrxDocumentError(InvalidTrxDocumentError):
    """Raised when content is not well-formed XML or lacks a required field."""


class MissingRootElementError(InvalidTrxDocumentError):
    """Raised when well-formed XML has no TeamTest ``TestRun`` root element."""
