"""Tests for parsing/loader.py: reading TRX files into XML trees."""

from __future__ import annotations

from pathlib import Path

import pytest

from trx_tools.exceptions import (
    InvalidTrxDocumentError,
    MalformedTrxDocumentError,
    TrxFileDoesNotExistError,
)
from trx_tools.parsing.loader import load_document


def test_loads_well_formed_document(sample_trx: Path) -> None:
    document = load_document(sample_trx)
    root = document.getroot()
    assert root.tag.endswith("TestRun")
    assert root.get("name") == "test 2025-02-11 17:41:50"


def test_accepts_string_path(sample_trx: Path) -> None:
    assert load_document(str(sample_trx)).getroot() is not None


def test_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "non_existent_file.trx"
    with pytest.raises(TrxFileDoesNotExistError) as exc_info:
        load_document(missing)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.filename == str(missing)


def test_directory_is_not_a_file(tmp_path: Path) -> None:
    with pytest.raises(TrxFileDoesNotExistError):
        load_document(tmp_path)


def test_empty_path_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        load_document("")


def test_plain_text_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "invalid_file.trx"
    path.write_text("invalid content", encoding="utf-8")
    with pytest.raises(MalformedTrxDocumentError):
        load_document(path)


def test_unclosed_tag_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "broken.trx"
    path.write_text("<TestRun><Results></TestRun>", encoding="utf-8")
    with pytest.raises(MalformedTrxDocumentError, match="not well-formed"):
        load_document(path)


def test_empty_file_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "empty.trx"
    path.write_bytes(b"")
    with pytest.raises(MalformedTrxDocumentError):
        load_document(path)


def test_entity_declarations_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bomb.trx"
    path.write_text(
        '<?xml version="1.0"?>\n'
        '<!DOCTYPE TestRun [<!ENTITY lol "lol">]>\n'
        "<TestRun>&lol;</TestRun>\n",
        encoding="utf-8",
    )
    with pytest.raises(InvalidTrxDocumentError) as exc_info:
        load_document(path)
    assert not isinstance(exc_info.value, MalformedTrxDocumentError)
