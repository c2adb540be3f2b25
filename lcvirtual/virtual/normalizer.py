"""Normalization of judge check responses into ResultRecord values.

The judge answers a test run with one payload on leetcode.com and with two
on leetcode.cn, where the expected answer comes back as a separate check.
It also reports ``"Accepted"`` for test runs whose output is wrong, so a
record's ``ok`` flag is the only thing that says whether it passed.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..client.models import JudgePayload, PayloadKind, ResultRecord
from .errors import RemoteError


def wrap_text(text: str) -> str:
    """Quote a judge string the way it is shown in raw records."""
    return "'" + text.replace("\n", "\\n") + "'"


def unwrap_text(text: Optional[str]) -> Optional[str]:
    """Strip the one-character wrapper and turn literal ``\\n`` into newlines."""
    if text is None:
        return None
    return text[1:-1].replace("\\n", "\n")


def _percentile(value: Any) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def record_from_payload(body: Dict[str, Any], testing: bool) -> ResultRecord:
    """Convert one raw check body into a ResultRecord.

    ``ok`` requires every case to pass and no error output. A test run
    also fails when the judge marks its answer incorrect; a submission
    also needs an ``Accepted`` status.
    """
    errors = [
        str(v) for k, v in body.items() if k.endswith("_error") and v
    ]
    record = ResultRecord(
        ok=bool(body.get("run_success")),
        lang=body.get("lang"),
        runtime=body.get("status_runtime") or None,
        runtime_percentile=_percentile(body.get("runtime_percentile")),
        memory=body.get("status_memory") or None,
        memory_percentile=_percentile(body.get("memory_percentile")),
        state=body.get("status_msg"),
        testcase=wrap_text(body.get("input") or body.get("last_testcase") or ""),
        passed=body.get("total_correct") or 0,
        total=body.get("total_testcases") or 0,
        error=errors,
    )

    if testing:
        output = body.get("code_output") or []
        if isinstance(output, list):
            output = "\n".join(str(line) for line in output)
        record.stdout = wrap_text(output)
        record.answer = body.get("code_answer")
        record.expected_answer = body.get("expected_code_answer")
        if body.get("correct_answer") is False:
            record.ok = False
    else:
        record.answer = body.get("code_output")
        record.expected_answer = body.get("expected_output")
        record.stdout = body.get("std_output")
        if record.state != "Accepted":
            record.ok = False

    if record.passed != record.total:
        record.ok = False
    if record.error:
        record.ok = False

    return record


def select_payloads(
    payloads: Sequence[JudgePayload],
) -> Tuple[JudgePayload, Optional[JudgePayload]]:
    """Return the primary payload and the expected-answer payload, if any."""
    if not payloads:
        raise RemoteError("Judge returned no result")

    ordered = sorted(payloads, key=lambda p: p.kind.value)
    primary = next((p for p in ordered if p.kind is PayloadKind.ACTUAL), ordered[0])
    expected = next(
        (p for p in ordered if p.kind is PayloadKind.EXPECTED and p is not primary),
        None,
    )
    return primary, expected


def correct_mislabel(state: Optional[str]) -> Optional[str]:
    """A passing test run is finished, not accepted."""
    if state == "Accepted":
        return "Finished"
    return state


def build_test_result(payloads: Sequence[JudgePayload], testcase: str) -> ResultRecord:
    primary, expected = select_payloads(payloads)

    record = record_from_payload(primary.body, testing=True)
    record.state = correct_mislabel(record.state)
    record.your_input = testcase
    record.output = record.answer
    if expected is not None:
        record.expected_answer = record_from_payload(expected.body, testing=True).answer
    record.stdout = unwrap_text(record.stdout)
    return record


def build_submit_result(payloads: Sequence[JudgePayload]) -> ResultRecord:
    if not payloads:
        raise RemoteError("Judge returned no result")
    return record_from_payload(payloads[0].body, testing=False)


def field_label(name: str) -> str:
    """``expected_answer`` -> ``Expected Answer``."""
    return " ".join(part.capitalize() for part in name.split("_"))


def present_fields(
    record: ResultRecord, names: Iterable[str]
) -> List[Tuple[str, List[str]]]:
    """Pick the fields of ``record`` that carry a value, in the given order.

    A ``state`` of ``"Accepted"`` is skipped: on its own it says nothing
    about success.
    """
    fields = []
    for name in names:
        value = getattr(record, name, None)
        if value is None or value == "" or value == []:
            continue
        if name == "state" and value == "Accepted":
            continue
        lines = value if isinstance(value, list) else [value]
        fields.append((name, [str(line) for line in lines]))
    return fields
