"""Test and submit runners for a single contest problem."""

import dataclasses
from typing import Dict, List, Optional

from ..client.models import Problem, ResultRecord
from ..utils import files
from ..utils.terminal import pretty_text
from .errors import FileNotFound, MissingTestCase, NotTestable
from .normalizer import (
    build_submit_result,
    build_test_result,
    field_label,
    present_fields,
    unwrap_text,
)
from .session import VirtualSession


def attach_source(
    problem: Problem,
    filename: str,
    lang: Optional[str],
    contest: str,
    testcase: Optional[str] = None,
) -> Problem:
    """Return a copy of ``problem`` bound to a source file for one judge call."""
    changes = {"file": filename, "lang": lang, "contest": contest}
    if testcase is not None:
        changes["testcase"] = testcase
    return dataclasses.replace(problem, **changes)


class _Runner:
    def __init__(self, client, session: VirtualSession):
        self.client = client
        self.session = session
        self.console = session.console

    def _check_file(self, filename: str) -> Dict[str, Optional[str]]:
        if not files.exists(filename):
            raise FileNotFound(filename)
        meta = files.meta(filename)
        if not meta["lang"]:
            meta["lang"] = self.session.intent.lang
        return meta

    def print_fields(
        self,
        record: ResultRecord,
        names: List[str],
        extras: Optional[Dict[str, str]] = None,
    ) -> None:
        """Print each present field of ``record``, colored by ``record.ok``."""
        extras = extras or {}
        for name, lines in present_fields(record, names):
            extra = f" ({extras[name]})" if extras.get(name) else ""
            for line in lines:
                if name != "state":
                    line = f"{field_label(name)}{extra}: {line}"
                self.print_line(record, line)

    def print_line(self, record: ResultRecord, line: str) -> None:
        self.console.print("  " + pretty_text(" " + line, record.ok))


class TestRunner(_Runner):
    """Runs a source file against a single testcase."""

    __test__ = False

    def run(self, problem: Problem, filename: str, testcase: str = "") -> ResultRecord:
        meta = self._check_file(filename)

        if not problem.testable:
            raise NotTestable()

        if testcase:
            testcase = testcase.replace("\\n", "\n")
        else:
            testcase = problem.testcase
        if not testcase:
            raise MissingTestCase()

        target = attach_source(
            problem, filename, meta["lang"], self.session.intent.contest, testcase
        )
        self.session.log_debug(f"Testing {target.slug} as {target.lang}")
        record = build_test_result(self.client.test_problem(target), testcase)

        self.print_fields(
            record,
            ["state", "error", "your_input", "output", "expected_answer", "stdout"],
            extras={"output": record.runtime},
        )
        return record


class SubmitRunner(_Runner):
    """Submits a source file and records the outcome locally."""

    def run(self, problem: Problem, filename: str) -> ResultRecord:
        meta = self._check_file(filename)

        target = attach_source(
            problem, filename, meta["lang"], self.session.intent.contest
        )
        self.session.log_debug(f"Submitting {target.slug} as {target.lang}")
        record = build_submit_result(self.client.submit_problem(target))

        self.print_fields(record, ["state"])
        self.print_line(
            record,
            f"{record.passed}/{record.total} cases passed ({record.runtime or ''})",
        )

        if record.ok:
            self.session.update_stat("ac", 1)
            self.session.update_stat("ac.set", problem.fid)
            self._print_percentiles(record)
        else:
            record.testcase = unwrap_text(record.testcase)
            self.print_fields(
                record, ["error", "testcase", "answer", "expected_answer", "stdout"]
            )

        state = "ac" if record.ok else "notac"
        problem.state = state
        self.session.tracker.update_problem(problem, state)
        return record

    def _print_percentiles(self, record: ResultRecord) -> None:
        if record.runtime_percentile:
            self.print_line(
                record,
                f"Your runtime beats {record.runtime_percentile:.2f} % "
                f"of {record.lang} submissions",
            )
        else:
            self.console.print("[yellow]Failed to get runtime percentile.[/yellow]")

        if record.memory and record.memory_percentile:
            self.print_line(
                record,
                f"Your memory usage beats {record.memory_percentile:.2f} % "
                f"of {record.lang} submissions ({record.memory})",
            )
        else:
            self.console.print("[yellow]Failed to get memory percentile.[/yellow]")
