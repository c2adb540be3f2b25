from pathlib import Path
from unittest.mock import patch

import pytest

from lcvirtual.client.models import PayloadKind
from lcvirtual.virtual.errors import FileNotFound, MissingTestCase, NotTestable
from lcvirtual.virtual.runners import SubmitRunner, TestRunner, attach_source

from .conftest import FakeClient, make_problem, output_of, payload


@pytest.fixture
def source(tmp_path: Path) -> str:
    path = tmp_path / "1346.two-sum.cpp"
    path.write_text("class Solution {};\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def problem():
    return make_problem(1346, "two-sum", "Two Sum")


def test_attach_source_returns_new_problem(problem) -> None:
    bound = attach_source(problem, "a.cpp", "cpp", "weekly-contest-175", "1")

    assert bound is not problem
    assert (bound.file, bound.lang, bound.contest, bound.testcase) == (
        "a.cpp",
        "cpp",
        "weekly-contest-175",
        "1",
    )
    assert problem.file is None


def test_test_missing_file_is_fatal(make_session, problem) -> None:
    client = FakeClient()

    with pytest.raises(FileNotFound) as excinfo:
        TestRunner(client, make_session()).run(problem, "nope.two-sum.cpp")

    assert excinfo.value.fatal is True
    assert client.tested is None


def test_test_not_testable(make_session, problem, source) -> None:
    problem.testable = False

    with pytest.raises(NotTestable):
        TestRunner(FakeClient(), make_session()).run(problem, source)


def test_test_missing_testcase(make_session, problem, source) -> None:
    problem.testcase = ""

    with pytest.raises(MissingTestCase):
        TestRunner(FakeClient(), make_session()).run(problem, source)


def test_test_override_unescapes_newlines(make_session, problem, source) -> None:
    client = FakeClient(test_payloads=[payload(status_msg="Accepted", run_success=True)])

    record = TestRunner(client, make_session()).run(problem, source, "[3,3]\\n6")

    assert client.tested.testcase == "[3,3]\n6"
    assert client.tested.lang == "cpp"
    assert client.tested.contest == "weekly-contest-175"
    assert record.your_input == "[3,3]\n6"
    assert problem.testcase == "[1,2]\n3"


def test_test_prints_fields_in_order(make_session, problem, source) -> None:
    session = make_session()
    client = FakeClient(
        test_payloads=[
            payload(
                PayloadKind.EXPECTED,
                status_msg="Accepted",
                run_success=True,
                code_answer=["[0,1]"],
            ),
            payload(
                status_msg="Accepted",
                run_success=True,
                code_answer=["[1,0]"],
                code_output=["debug"],
                status_runtime="4 ms",
            ),
        ]
    )

    record = TestRunner(client, session).run(problem, source)
    out = output_of(session.console)

    assert record.state == "Finished"
    assert "Accepted" not in out
    positions = [
        out.index("Finished"),
        out.index("Your Input: [1,2]"),
        out.index("Output (4 ms): [1,0]"),
        out.index("Expected Answer: [0,1]"),
        out.index("Stdout: debug"),
    ]
    assert positions == sorted(positions)
    assert "Error" not in out


def test_test_wrong_answer_renders_as_failure(make_session, problem, source) -> None:
    session = make_session()
    client = FakeClient(
        test_payloads=[
            payload(
                status_msg="Accepted",
                run_success=True,
                correct_answer=False,
                total_correct=0,
                total_testcases=1,
                code_answer=["[1,0]"],
                expected_code_answer=["[0,1]"],
            )
        ]
    )

    record = TestRunner(client, session).run(problem, source)
    out = output_of(session.console)

    assert record.ok is False
    assert "✘  Finished" in out
    assert "✔" not in out
    assert "Expected Answer: [0,1]" in out


def test_test_unknown_extension_uses_session_lang(make_session, problem, tmp_path) -> None:
    path = tmp_path / "1346.two-sum.txt"
    path.write_text("class Solution {};\n", encoding="utf-8")
    client = FakeClient(test_payloads=[payload(status_msg="Accepted", run_success=True)])

    TestRunner(client, make_session(lang="java")).run(problem, str(path))

    assert client.tested.lang == "java"


def test_submit_success_updates_stats_and_cache_once(make_session, problem, source) -> None:
    session = make_session(submit=True)
    client = FakeClient(
        submit_payloads=[
            payload(
                status_msg="Accepted",
                run_success=True,
                total_correct=10,
                total_testcases=10,
                status_runtime="8 ms",
                runtime_percentile=95.4321,
                status_memory="6.1 MB",
                memory_percentile=80,
                lang="cpp",
            )
        ]
    )

    with patch.object(
        session.tracker, "update_problem", wraps=session.tracker.update_problem
    ) as update:
        record = SubmitRunner(client, session).run(problem, source)

    update.assert_called_once_with(problem, "ac")
    assert record.ok is True
    assert session.accepted == 1
    assert session.accepted_ids == {"1346"}
    assert session.tracker.state_of("1346") == "ac"
    assert problem.state == "ac"

    out = output_of(session.console)
    assert "10/10 cases passed (8 ms)" in out
    assert "Your runtime beats 95.43 % of cpp submissions" in out
    assert "Your memory usage beats 80.00 % of cpp submissions (6.1 MB)" in out


def test_submit_missing_runtime_percentile_keeps_memory_line(
    make_session, problem, source
) -> None:
    session = make_session(submit=True)
    client = FakeClient(
        submit_payloads=[
            payload(
                status_msg="Accepted",
                run_success=True,
                total_correct=2,
                total_testcases=2,
                status_memory="6.1 MB",
                memory_percentile=12.5,
                lang="cpp",
            )
        ]
    )

    SubmitRunner(client, session).run(problem, source)
    out = output_of(session.console)

    assert "Failed to get runtime percentile." in out
    assert "Your memory usage beats 12.50 %" in out
    assert "Failed to get memory percentile." not in out


def test_submit_failure_prints_details_and_writes_notac(
    make_session, problem, source
) -> None:
    session = make_session(submit=True)
    client = FakeClient(
        submit_payloads=[
            payload(
                status_msg="Wrong Answer",
                run_success=True,
                total_correct=3,
                total_testcases=10,
                last_testcase="[2,2]\n4",
                code_output="[1,1]",
                expected_output="[0,1]",
                std_output="hello",
            )
        ]
    )

    with patch.object(
        session.tracker, "update_problem", wraps=session.tracker.update_problem
    ) as update:
        record = SubmitRunner(client, session).run(problem, source)

    update.assert_called_once_with(problem, "notac")
    assert record.ok is False
    assert record.testcase == "[2,2]\n4"
    assert session.accepted == 0
    assert session.tracker.state_of("1346") == "notac"

    out = output_of(session.console)
    positions = [
        out.index("Wrong Answer"),
        out.index("3/10 cases passed"),
        out.index("Testcase: [2,2]"),
        out.index("Answer: [1,1]"),
        out.index("Expected Answer: [0,1]"),
        out.index("Stdout: hello"),
    ]
    assert positions == sorted(positions)


def test_submit_accepted_label_with_failed_cases_renders_as_failure(
    make_session, problem, source
) -> None:
    session = make_session(submit=True)
    client = FakeClient(
        submit_payloads=[
            payload(
                status_msg="Accepted",
                run_success=True,
                total_correct=9,
                total_testcases=10,
            )
        ]
    )

    record = SubmitRunner(client, session).run(problem, source)
    out = output_of(session.console)

    assert record.ok is False
    assert "✘" in out
    assert "✔" not in out
    assert "Accepted" not in out
    assert session.tracker.state_of("1346") == "notac"


def test_submit_missing_file_writes_nothing(make_session, problem) -> None:
    session = make_session(submit=True)

    with pytest.raises(FileNotFound):
        SubmitRunner(FakeClient(), session).run(problem, "missing.two-sum.cpp")

    assert session.tracker.state_of("1346") is None
