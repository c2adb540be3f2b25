import copy
import io
from pathlib import Path

import pytest
from rich.console import Console

from lcvirtual.client.models import JudgePayload, PayloadKind, Problem
from lcvirtual.virtual.errors import RemoteError
from lcvirtual.virtual.progress import ProgressTracker
from lcvirtual.virtual.session import VirtualIntent, VirtualSession


CONTEST = "weekly-contest-175"

QUESTIONS = [
    {"question_id": 1346, "credit": 3, "title_slug": "two-sum", "title": "Two Sum"},
    {"question_id": 1347, "credit": 4, "title_slug": "min-steps", "title": "Min Steps"},
    {"question_id": 1348, "credit": 5, "title_slug": "tweet-counts", "title": "Tweet Counts"},
    {"question_id": 1349, "credit": 7, "title_slug": "max-students", "title": "Max Students"},
]


def make_problem(fid, slug, name, **kwargs) -> Problem:
    values = dict(
        fid=str(fid),
        id=str(fid),
        name=name,
        slug=slug,
        level="Easy",
        testable=True,
        testcase="[1,2]\n3",
        percent=51.5,
        desc="<p>Find the <code>answer</code>.</p>",
        templates={"cpp": "class Solution {\n};", "python3": "class Solution:\n    pass"},
    )
    values.update(kwargs)
    return Problem(**values)


def payload(kind=PayloadKind.ACTUAL, **body) -> JudgePayload:
    body.setdefault("state", "SUCCESS")
    return JudgePayload(kind=kind, body=body)


class FakeClient:
    """Stands in for LeetCodeClient, recording every call in order."""

    def __init__(
        self,
        questions=None,
        problems=None,
        test_payloads=None,
        submit_payloads=None,
        fail_on=None,
        status_code=204,
        rank=None,
    ):
        self.questions = QUESTIONS if questions is None else questions
        if problems is None:
            problems = {
                q["title_slug"]: make_problem(q["question_id"], q["title_slug"], q["title"])
                for q in self.questions
            }
        self.problems = problems
        self.test_payloads = test_payloads or []
        self.submit_payloads = submit_payloads or []
        self.fail_on = fail_on
        self.status_code = status_code
        self.rank = rank if rank is not None else {"my_rank": 12}
        self.calls = []
        self.tested = None
        self.submitted = None

    def has_session(self):
        return True

    def url(self, name, **params):
        return f"https://leetcode.com/problems/{params.get('slug')}/description/"

    def get_contest(self, contest):
        self.calls.append(("contest", contest))
        return {"questions": self.questions}

    def get_problem(self, slug, contest=None):
        self.calls.append(("problem", slug))
        if slug == self.fail_on:
            raise RemoteError(f"Problem {slug} not found")
        return copy.deepcopy(self.problems[slug])

    def test_problem(self, problem):
        self.calls.append(("test", problem.slug))
        self.tested = problem
        return self.test_payloads

    def submit_problem(self, problem):
        self.calls.append(("submit", problem.slug))
        self.submitted = problem
        return self.submit_payloads

    def start_contest(self, contest):
        self.calls.append(("start", contest))
        return self.status_code

    def end_contest(self, contest):
        self.calls.append(("end", contest))
        return self.status_code

    def get_rank(self, contest):
        self.calls.append(("rank", contest))
        return self.rank


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def tracker(tmp_path: Path) -> ProgressTracker:
    return ProgressTracker(tmp_path / "progress.json")


@pytest.fixture
def make_session(console, tracker):
    def _make(**flags) -> VirtualSession:
        flags.setdefault("contest", CONTEST)
        return VirtualSession(intent=VirtualIntent(**flags), tracker=tracker, console=console)

    return _make


def output_of(console: Console) -> str:
    return console.file.getvalue()
