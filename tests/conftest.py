"""Shared fixtures for trx-tools tests."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TRX_NS = "http://microsoft.com/schemas/VisualStudio/TeamTest/2010"
_UNIT_TEST_TYPE = "13cdc9d9-ddb5-4fa4-a97d-d965ccfc6d4b"
_NOT_IN_A_LIST = "8c84fa94-04c1-424b-9868-57a2d4851a1d"
_ALL_LOADED = "19431567-8539-422a-85d7-44ee4e166bda"


def _test_id(index: int) -> str:
    return f"00000000-0000-4000-8000-{index:012d}"


def _execution_id(index: int) -> str:
    return f"11111111-0000-4000-8000-{index:012d}"


def make_trx(count: int, *, name: str = "generated run") -> str:
    """Build a TRX document with *count* tests (every 7th failing) and two lists."""
    results: list[str] = []
    definitions: list[str] = []
    entries: list[str] = []
    for index in range(count):
        outcome = "Failed" if index % 7 == 6 else "Passed"
        output = ""
        if outcome == "Failed":
            output = (
                "<Output><ErrorInfo>"
                f"<Message>Test_{index} failed</Message>"
                f"<StackTrace>at Generated.Tests.Test_{index}()</StackTrace>"
                "</ErrorInfo></Output>"
            )
        results.append(
            f'<UnitTestResult executionId="{_execution_id(index)}" testId="{_test_id(index)}" '
            f'testName="Test_{index}" computerName="agent" duration="00:00:00.0010000" '
            f'startTime="2025-02-11T17:41:50.0000000+01:00" '
            f'endTime="2025-02-11T17:41:50.0010000+01:00" testType="{_UNIT_TEST_TYPE}" '
            f'outcome="{outcome}" testListId="{_NOT_IN_A_LIST}">{output}</UnitTestResult>'
        )
        definitions.append(
            f'<UnitTest name="Test_{index}" storage="generated.dll" id="{_test_id(index)}">'
            f'<Execution id="{_execution_id(index)}" />'
            f'<TestMethod codeBase="generated.dll" className="Generated.Tests" name="Test_{index}" />'
            "</UnitTest>"
        )
        entries.append(
            f'<TestEntry testId="{_test_id(index)}" executionId="{_execution_id(index)}" '
            f'testListId="{_NOT_IN_A_LIST}" />'
        )

    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<TestRun id="22222222-0000-4000-8000-000000000000" name="{name}" '
        f'runUser="generator" xmlns="{TRX_NS}">'
        '<Times creation="2025-02-11T17:41:50.0000000+01:00" '
        'start="2025-02-11T17:41:50.0000000+01:00" finish="2025-02-11T17:41:51.0000000+01:00" />'
        f"<Results>{''.join(results)}</Results>"
        f"<TestDefinitions>{''.join(definitions)}</TestDefinitions>"
        f"<TestEntries>{''.join(entries)}</TestEntries>"
        "<TestLists>"
        f'<TestList name="Results Not in a List" id="{_NOT_IN_A_LIST}" />'
        f'<TestList name="All Loaded Results" id="{_ALL_LOADED}" />'
        "</TestLists>"
        "</TestRun>\n"
    )


@pytest.fixture
def sample_trx() -> Path:
    return FIXTURES_DIR / "sample.trx"


@pytest.fixture
def sample_json() -> Path:
    return FIXTURES_DIR / "sample.json"


@pytest.fixture
def large_trx(tmp_path: Path) -> Path:
    path = tmp_path / "test_2025-02-11_17_41_50.trx"
    path.write_text(make_trx(215, name="test 2025-02-11 17:41:50"), encoding="utf-8")
    return path


@pytest.fixture
def trx_directory(tmp_path: Path) -> Path:
    """Directory with five TRX files and some unrelated files."""
    directory = tmp_path / "TestResults"
    directory.mkdir()
    for index in range(5):
        (directory / f"run_{index}.trx").write_text(
            make_trx(index + 1, name=f"run {index}"), encoding="utf-8"
        )
    (directory / "notes.txt").write_text("not a trx file", encoding="utf-8")
    (directory / "run_0.trx.bak").write_text("backup", encoding="utf-8")
    (directory / "report.html").write_text("<html></html>", encoding="utf-8")
    (directory / "nested").mkdir()
    (directory / "nested" / "inner.trx").write_text(make_trx(1), encoding="utf-8")
    return directory
