"""Main LeetCode HTTP client used by virtual contest commands."""

import json
import time
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

import requests
from rich.console import Console
from rich.markup import escape

from .models import JudgePayload, PayloadKind, Problem
from ..config.global_config import GlobalConfig
from ..virtual.errors import RemoteError


console = Console()


PROBLEM_QUERY = """
query getQuestionDetail($titleSlug: String!) {
  question(titleSlug: $titleSlug) {
    questionId
    questionFrontendId
    title
    titleSlug
    content
    difficulty
    stats
    likes
    dislikes
    isPaidOnly
    isLiked
    status
    sampleTestCase
    enableRunCode
    codeSnippets {
      langSlug
      code
    }
  }
}
"""


class LeetCodeClient:
    """HTTP client for the LeetCode contest and judge endpoints."""

    URLS = {
        "graphql": "$base/graphql",
        "problem": "$base/problems/$slug/description/",
        "contest": "$base/contest/api/info/$contest/",
        "contest_page": "$base/contest/$contest/",
        "test": "$base/contest/$contest/problems/$slug/interpret_solution/",
        "submit": "$base/contest/$contest/problems/$slug/submit/",
        "check": "$base/submissions/detail/$id/check/",
        "participate": "$base/contest/api/$contest/virtual/",
        "myrank": "$base/contest/api/myranking/$contest/",
        "register": "$base/contest/api/$contest/register",
    }
    MAX_POLLS = 60

    def __init__(
        self,
        config_path: Optional[Path] = None,
        cookies_path: Optional[Path] = None,
        debug: bool = False,
    ):
        """Initialize the client."""
        self.config_path = config_path or Path.home() / ".lcvirtual.global"
        self.cookies_path = cookies_path or Path.home() / ".lcvirtual.cookies"
        self.session = requests.Session()
        self.config = GlobalConfig.load(self.config_path)
        self.debug = debug

        # Restore cookies from pickle file
        saved_cookies = GlobalConfig.load_cookies(self.cookies_path)
        if saved_cookies:
            self.session.cookies = saved_cookies

    def _save_config(self):
        """Save current config and cookies to disk."""
        self.config.save(self.config_path)
        GlobalConfig.save_cookies(self.session.cookies, self.cookies_path)

    def _debug(self, message: str):
        if self.debug:
            console.print(f"[cyan]DEBUG: {escape(message)}[/cyan]")

    def url(self, name: str, **params: Any) -> str:
        """Expand one of the URL templates for the configured site."""
        return Template(self.URLS[name]).substitute(base=self.config.base_url, **params)

    def contest_page(self, contest: str) -> str:
        return self.url("contest_page", contest=contest)

    @property
    def domain(self) -> str:
        return self.config.base_url.split("//", 1)[1]

    def _cookie(self, name: str) -> Optional[str]:
        """Cookie value, preferring the one set for the configured site.

        The jar can hold the same name for ``leetcode.com`` and
        ``.leetcode.com``, where ``cookies.get`` raises CookieConflictError.
        """
        values = {c.domain: c.value for c in self.session.cookies if c.name == name}
        for domain in (self.domain, "." + self.domain):
            if domain in values:
                return values[domain]
        return next(iter(values.values()), None)

    def _headers(self, referer: str) -> Dict[str, str]:
        headers = {
            "Referer": referer,
            "Origin": self.config.base_url,
            "X-Requested-With": "XMLHttpRequest",
        }
        csrftoken = self._cookie("csrftoken")
        if csrftoken:
            headers["X-CSRFToken"] = csrftoken
        return headers

    def _request(
        self, method: str, url: str, referer: str, check: bool = True, **kwargs
    ) -> requests.Response:
        """Make one HTTP request; transport errors become RemoteError."""
        self._debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, headers=self._headers(referer), **kwargs
            )
        except requests.RequestException as e:
            raise RemoteError(f"{method} {url} failed: {e}") from e

        self._debug(f"{method} {url} -> {response.status_code}")
        if check and not response.ok:
            raise RemoteError(f"{method} {url} returned HTTP {response.status_code}")
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from {response.url}") from e

    def login(self, session_cookie: str, csrftoken: str, user: str = "") -> None:
        """Store browser session cookies for future requests."""
        self.session.cookies.clear()
        self.session.cookies.set("LEETCODE_SESSION", session_cookie, domain=self.domain)
        self.session.cookies.set("csrftoken", csrftoken, domain=self.domain)
        self.config.user = user
        self._save_config()

    def has_session(self) -> bool:
        """Check if session cookies are stored."""
        return bool(self._cookie("LEETCODE_SESSION"))

    def get_contest(self, contest: str) -> Dict[str, Any]:
        """Fetch contest metadata, including its ordered question list."""
        response = self._request(
            "GET", self.url("contest", contest=contest), self.contest_page(contest)
        )
        return self._json(response)

    def get_problem(self, slug: str, contest: Optional[str] = None) -> Problem:
        """Fetch full problem details by slug."""
        referer = (
            self.contest_page(contest) if contest else self.url("problem", slug=slug)
        )
        response = self._request(
            "POST",
            self.url("graphql"),
            referer,
            json={
                "operationName": "getQuestionDetail",
                "query": PROBLEM_QUERY,
                "variables": {"titleSlug": slug},
            },
        )
        data = self._json(response).get("data") or {}
        question = data.get("question")
        if not question:
            raise RemoteError(f"Problem {slug} not found")
        return parse_problem(question)

    def test_problem(self, problem: Problem) -> List[JudgePayload]:
        """Run the problem's source file against its testcase."""
        referer = self.contest_page(problem.contest)
        response = self._request(
            "POST",
            self.url("test", contest=problem.contest, slug=problem.slug),
            referer,
            json={
                "data_input": problem.testcase,
                "judge_type": "large",
                "lang": problem.lang,
                "question_id": problem.question_id or problem.id,
                "test_mode": False,
                "typed_code": _read_code(problem.file),
            },
        )
        body = self._json(response)
        if body.get("error"):
            raise RemoteError(body["error"])

        results = [self._verify(body["interpret_id"], PayloadKind.ACTUAL, referer)]
        # leetcode.cn checks the expected answer separately
        if body.get("interpret_expected_id"):
            results.append(
                self._verify(body["interpret_expected_id"], PayloadKind.EXPECTED, referer)
            )
        return results

    def submit_problem(self, problem: Problem) -> List[JudgePayload]:
        """Submit the problem's source file for judging."""
        referer = self.contest_page(problem.contest)
        response = self._request(
            "POST",
            self.url("submit", contest=problem.contest, slug=problem.slug),
            referer,
            json={
                "judge_type": "large",
                "lang": problem.lang,
                "question_id": problem.question_id or problem.id,
                "test_mode": False,
                "typed_code": _read_code(problem.file),
            },
        )
        body = self._json(response)
        if body.get("error"):
            raise RemoteError(body["error"])

        return [self._verify(body["submission_id"], PayloadKind.ACTUAL, referer)]

    def _verify(self, check_id: Any, kind: PayloadKind, referer: str) -> JudgePayload:
        """Poll the check endpoint until judging is complete."""
        url = self.url("check", id=check_id)
        for _ in range(self.MAX_POLLS):
            body = self._json(self._request("GET", url, referer))
            if body.get("state") == "SUCCESS":
                return JudgePayload(kind=kind, body=body)
            time.sleep(self.config.poll_interval)

        raise RemoteError(f"Timed out waiting for result {check_id}")

    def start_contest(self, contest: str) -> int:
        """Start virtual participation; returns the raw status code."""
        response = self._request(
            "POST",
            self.url("participate", contest=contest),
            self.contest_page(contest),
            check=False,
        )
        return response.status_code

    def end_contest(self, contest: str) -> int:
        """End virtual participation; returns the raw status code."""
        response = self._request(
            "DELETE",
            self.url("participate", contest=contest),
            self.contest_page(contest),
            check=False,
        )
        return response.status_code

    def register_contest(self, contest: str, flag: bool) -> requests.Response:
        """Register (``flag``) or unregister for a contest."""
        return self._request(
            "POST" if flag else "DELETE",
            self.url("register", contest=contest),
            self.contest_page(contest),
            check=False,
            allow_redirects=False,
        )

    def get_rank(self, contest: str) -> Any:
        """Fetch the current user's ranking in a contest."""
        response = self._request(
            "GET", self.url("myrank", contest=contest), self.contest_page(contest)
        )
        return self._json(response)


def _read_code(filename: Optional[str]) -> str:
    with open(filename, "r", encoding="utf-8") as f:
        return f.read()


def parse_problem(question: Dict[str, Any]) -> Problem:
    """Build a Problem from the GraphQL ``question`` object."""
    try:
        stats = json.loads(question.get("stats") or "{}")
    except ValueError:
        stats = {}
    try:
        percent = float(str(stats.get("acRate", "0")).rstrip("%"))
    except ValueError:
        percent = 0.0

    return Problem(
        fid=str(question.get("questionFrontendId") or question.get("questionId")),
        id=str(question.get("questionId")),
        name=question.get("title", ""),
        slug=question.get("titleSlug", ""),
        level=question.get("difficulty") or "",
        state=question.get("status"),
        starred=bool(question.get("isLiked")),
        locked=bool(question.get("isPaidOnly")),
        testable=bool(question.get("enableRunCode")),
        testcase=question.get("sampleTestCase") or "",
        percent=percent,
        likes=question.get("likes") or 0,
        dislikes=question.get("dislikes") or 0,
        desc=question.get("content") or "",
        templates={
            s["langSlug"]: s["code"] for s in question.get("codeSnippets") or []
        },
    )
