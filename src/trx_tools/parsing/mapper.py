"""Map a parsed TRX document into the ``TestRun`` domain model.

Each TRX element is read by a dedicated function against the fixed
TeamTest 2010 vocabulary. Missing optional attributes become ``""``,
``None`` or ``0``; a missing join key (result/entry ``testId``, definition
or list ``id``) and any present-but-unparseable value fail the whole mapping.
The mapper is pure: no I/O, no logging, no shared state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import ElementTree as XmlDocument

from trx_tools.exceptions import MalformedTrxDocumentError, MissingRootElementError
from trx_tools.models import (
    Counters,
    ErrorInfo,
    ResultOutput,
    ResultSummary,
    RunTimes,
    TestDefinition,
    TestEntry,
    TestList,
    TestMethod,
    TestOutcome,
    TestRun,
    UnitTestResult,
)
from trx_tools.parsing.timestamps import parse_timespan, parse_timestamp

if TYPE_CHECKING:
    from datetime import tzinfo
    from xml.etree.ElementTree import Element as XmlElement

    from trx_tools.parsing.timestamps import TimeSpan, Timestamp

TRX_NAMESPACE = "http://microsoft.com/schemas/VisualStudio/TeamTest/2010"
_NS = {"t": TRX_NAMESPACE}
_ROOT_TAG = f"{{{TRX_NAMESPACE}}}TestRun"

# Counters field -> TRX attribute
_COUNTER_ATTRIBUTES = {
    "total": "total",
    "executed": "executed",
    "passed": "passed",
    "failed": "failed",
    "error": "error",
    "timeout": "timeout",
    "aborted": "aborted",
    "inconclusive": "inconclusive",
    "passed_but_run_aborted": "passedButRunAborted",
    "not_runnable": "notRunnable",
    "not_executed": "notExecuted",
    "disconnected": "disconnected",
    "warning": "warning",
    "completed": "completed",
    "in_progress": "inProgress",
    "pending": "pending",
}


def _local_tag(elem: XmlElement) -> str:
    return elem.tag.split("}")[-1] if "}" in elem.tag else elem.tag


def _required(elem: XmlElement, attribute: str) -> str:
    value = elem.get(attribute)
    if not value:
        raise MalformedTrxDocumentError(
            f"<{_local_tag(elem)}> is missing required attribute {attribute!r}"
        )
    return value


def _timestamp(
    elem: XmlElement, attribute: str, naive_timezone: tzinfo | None
) -> Timestamp | None:
    raw = elem.get(attribute)
    if not raw:
        return None
    try:
        return parse_timestamp(raw, naive_timezone=naive_timezone)
    except ValueError as exc:
        raise MalformedTrxDocumentError(f"<{_local_tag(elem)} {attribute}>: {exc}") from exc


def _timespan(elem: XmlElement, attribute: str) -> TimeSpan | None:
    raw = elem.get(attribute)
    if not raw:
        return None
    try:
        return parse_timespan(raw)
    except ValueError as exc:
        raise MalformedTrxDocumentError(f"<{_local_tag(elem)} {attribute}>: {exc}") from exc


def _integer(elem: XmlElement, attribute: str) -> int:
    raw = elem.get(attribute)
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedTrxDocumentError(
            f"<{_local_tag(elem)} {attribute}>: invalid integer {raw!r}"
        ) from exc


def _outcome(elem: XmlElement) -> TestOutcome | None:
    raw = elem.get("outcome")
    if not raw:
        return None
    try:
        return TestOutcome(raw)
    except ValueError as exc:
        raise MalformedTrxDocumentError(
            f"<{_local_tag(elem)}> has unknown outcome {raw!r}"
        ) from exc


def _text(elem: XmlElement, path: str) -> str:
    node = elem.find(path, _NS)
    if node is None or node.text is None:
        return ""
    return node.text


def _map_times(elem: XmlElement | None, naive_timezone: tzinfo | None) -> RunTimes:
    if elem is None:
        return RunTimes()
    return RunTimes(
        creation=_timestamp(elem, "creation", naive_timezone),
        queuing=_timestamp(elem, "queuing", naive_timezone),
        start=_timestamp(elem, "start", naive_timezone),
        finish=_timestamp(elem, "finish", naive_timezone),
    )


def _map_output(elem: XmlElement | None) -> ResultOutput | None:
    if elem is None:
        return None

    error_elem = elem.find("t:ErrorInfo", _NS)
    error_info = None
    if error_elem is not None:
        error_info = ErrorInfo(
            message=_text(error_elem, "t:Message"),
            stack_trace=_text(error_elem, "t:StackTrace"),
        )
    return ResultOutput(
        std_out=_text(elem, "t:StdOut"),
        std_err=_text(elem, "t:StdErr"),
        error_info=error_info,
    )


def _map_result(elem: XmlElement, naive_timezone: tzinfo | None) -> UnitTestResult:
    return UnitTestResult(
        test_id=_required(elem, "testId"),
        execution_id=elem.get("executionId", ""),
        test_name=elem.get("testName", ""),
        computer_name=elem.get("computerName", ""),
        outcome=_outcome(elem),
        duration=_timespan(elem, "duration"),
        start_time=_timestamp(elem, "startTime", naive_timezone),
        end_time=_timestamp(elem, "endTime", naive_timezone),
        test_type=elem.get("testType", ""),
        test_list_id=elem.get("testListId", ""),
        relative_results_directory=elem.get("relativeResultsDirectory", ""),
        output=_map_output(elem.find("t:Output", _NS)),
    )


def _map_definition(elem: XmlElement) -> TestDefinition:
    execution = elem.find("t:Execution", _NS)
    method = elem.find("t:TestMethod", _NS)
    test_method = None
    if method is not None:
        test_method = TestMethod(
            code_base=method.get("codeBase", ""),
            adapter_type_name=method.get("adapterTypeName", ""),
            class_name=method.get("className", ""),
            name=method.get("name", ""),
        )

    categories = tuple(
        item.get("TestCategory", "")
        for item in elem.iterfind("t:TestCategory/t:TestCategoryItem", _NS)
        if item.get("TestCategory")
    )
    return TestDefinition(
        id=_required(elem, "id"),
        name=elem.get("name", ""),
        storage=elem.get("storage", ""),
        execution_id=execution.get("id", "") if execution is not None else "",
        test_method=test_method,
        categories=categories,
    )


def _map_entry(elem: XmlElement) -> TestEntry:
    return TestEntry(
        test_id=_required(elem, "testId"),
        execution_id=elem.get("executionId", ""),
        test_list_id=elem.get("testListId", ""),
    )


def _map_test_list(elem: XmlElement) -> TestList:
    return TestList(id=_required(elem, "id"), name=elem.get("name", ""))


def _map_summary(elem: XmlElement | None) -> ResultSummary:
    if elem is None:
        return ResultSummary()
    counters_elem = elem.find("t:Counters", _NS)
    counters = Counters()
    if counters_elem is not None:
        counters = Counters(
            **{
                name: _integer(counters_elem, attribute)
                for name, attribute in _COUNTER_ATTRIBUTES.items()
            }
        )
    return ResultSummary(outcome=elem.get("outcome", ""), counters=counters)


def map_test_run(
    document: XmlDocument | XmlElement,
    *,
    naive_timezone: tzinfo | None = None,
) -> TestRun:
    """Build a ``TestRun`` from a parsed TRX document.

    Args:
        document: Parsed document (or its root element).
        naive_timezone: Zone used for timestamps without a UTC offset.
            When ``None`` such timestamps raise ``MalformedTrxDocumentError``.

    Raises:
        MissingRootElementError: If the root is not a TeamTest ``TestRun``.
        MalformedTrxDocumentError: If a required attribute is missing or a
            value cannot be parsed.
    """
    root = document.getroot() if isinstance(document, XmlDocument) else document
    if root is None or root.tag != _ROOT_TAG:
        found = root.tag if root is not None else None
        raise MissingRootElementError(f"Expected root element {_ROOT_TAG}, found {found!r}")

    return TestRun(
        id=root.get("id", ""),
        name=root.get("name", ""),
        run_user=root.get("runUser", ""),
        times=_map_times(root.find("t:Times", _NS), naive_timezone),
        results=tuple(
            _map_result(elem, naive_timezone)
            for elem in root.iterfind("t:Results/t:UnitTestResult", _NS)
        ),
        test_definitions=tuple(
            _map_definition(elem) for elem in root.iterfind("t:TestDefinitions/t:UnitTest", _NS)
        ),
        test_entries=tuple(
            _map_entry(elem) for elem in root.iterfind("t:TestEntries/t:TestEntry", _NS)
        ),
        test_lists=tuple(
            _map_test_list(elem) for elem in root.iterfind("t:TestLists/t:TestList", _NS)
        ),
        result_summary=_map_summary(root.find("t:ResultSummary", _NS)),
    )
