"""Selection of the single action a ``virtual`` command performs."""

from typing import List, Optional

import click
from rich.markup import escape

from ..client.models import Problem, VirtualProblemEntry
from ..utils import files
from ..utils.terminal import print_problem, problems_table
from .errors import IndexOutOfRange, ProblemNotFound
from .runners import SubmitRunner, TestRunner
from .session import VirtualSession


class CommandDispatcher:
    """
    Runs at most one action against a resolved contest.
    Priority: summary view, one question's detail, test or submit of a file.
    """

    def __init__(self, client, session: VirtualSession):
        self.client = client
        self.session = session
        self.console = session.console

    def dispatch(self, entries: List[VirtualProblemEntry]) -> Optional[str]:
        """Run the matching action and return its name, or None."""
        intent = self.session.intent

        if intent.view or not (
            intent.start
            or intent.end
            or intent.filename
            or intent.submit
            or intent.question >= 0
        ):
            self.console.print(problems_table(entries))
            return "view"

        if intent.question >= 0:
            if intent.question >= len(entries):
                raise IndexOutOfRange(intent.question, len(entries))
            self.show_problem(entries[intent.question].problem)
            return "question"

        if intent.filename:
            problem = self.find_problem(entries, intent.filename)
            if intent.submit:
                SubmitRunner(self.client, self.session).run(problem, intent.filename)
                return "submit"
            TestRunner(self.client, self.session).run(
                problem, intent.filename, intent.testcase
            )
            return "test"

        return None

    def find_problem(self, entries: List[VirtualProblemEntry], filename: str) -> Problem:
        slug = files.slug_from_filename(filename)
        self.session.log_debug(slug)
        for entry in entries:
            if entry.title_slug == slug:
                return entry.problem
        raise ProblemNotFound(slug)

    def show_problem(self, problem: Problem) -> None:
        """Print a problem, or generate its source file with ``--gen``/``--editor``."""
        intent = self.session.intent

        if intent.gen or intent.editor is not None:
            path = files.generate_source(problem, intent.lang, intent.outdir, intent.extra)
            self.console.print(f"[green]Code written to: {escape(str(path))}[/green]")
            if intent.editor is not None:
                click.edit(filename=str(path), editor=intent.editor or None)
            return

        print_problem(problem, self.client.url("problem", slug=problem.slug), self.console)
