"""XML loader for TRX files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import DefusedXmlException, ElementTree
from defusedxml.ElementTree import ParseError as DefusedParseError

from trx_tools.exceptions import (
    InvalidTrxDocumentError,
    MalformedTrxDocumentError,
    TrxFileDoesNotExistError,
)

if TYPE_CHECKING:
    from xml.etree.ElementTree import ElementTree as XmlDocument


def load_document(path: str | Path) -> XmlDocument:
    """Read *path* into a fully parsed XML document.

    Raises:
        ValueError: If *path* is empty.
        TrxFileDoesNotExistError: If no file exists at *path*.
        MalformedTrxDocumentError: If the content is not well-formed XML.
        InvalidTrxDocumentError: If the document uses constructs rejected
            by defusedxml (DTDs, entity expansion, external references).
    """
    if not str(path):
        raise ValueError("TRX path must not be empty")

    trx_path = Path(path)
    if not trx_path.is_file():
        raise TrxFileDoesNotExistError(trx_path)

    try:
        return ElementTree.parse(trx_path)
    except DefusedParseError as exc:
        raise MalformedTrxDocumentError(f"{trx_path} is not well-formed XML: {exc}") from exc
    except DefusedXmlException as exc:
        raise InvalidTrxDocumentError(f"{trx_path} uses forbidden XML constructs: {exc}") from exc
