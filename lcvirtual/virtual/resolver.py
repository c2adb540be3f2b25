"""Resolution of a contest slug into its ordered, hydrated problem list."""

from typing import Any, Dict, List

from ..client.models import ContestRef, VirtualProblemEntry
from .session import VirtualSession


def entries_from_questions(questions: List[Dict[str, Any]]) -> List[VirtualProblemEntry]:
    """One entry per contest question, keeping the contest's order."""
    return [
        VirtualProblemEntry(
            question_id=str(q["question_id"]),
            credit=q.get("credit", 0),
            title_slug=q["title_slug"],
        )
        for q in questions
    ]


class ContestResolver:
    """
    Fetches a contest's question list, then each problem one at a time.
    Any RemoteError aborts the whole resolution; nothing partial is returned.
    """

    def __init__(self, client, session: VirtualSession):
        self.client = client
        self.session = session

    def resolve(self, contest: ContestRef) -> List[VirtualProblemEntry]:
        self.session.log_debug("Virtual: Fetching problems")
        metadata = self.client.get_contest(contest.slug)
        entries = entries_from_questions(metadata.get("questions") or [])

        for entry in entries:
            problem = self.client.get_problem(entry.title_slug, contest=contest.slug)
            problem.question_id = entry.question_id
            cached = self.session.tracker.state_of(problem.fid)
            if cached:
                problem.state = cached
            entry.problem = problem
            self.session.log_debug(f"Virtual: Got {entry.title_slug}")

        return entries
