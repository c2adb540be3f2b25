"""Contest start/end/register/rank operations.

None of these need the contest's problems, so they run without resolution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.console import Console
from rich.markup import escape


class LifecycleOutcome(Enum):
    SUCCESS = "success"
    ALREADY = "already"
    UNKNOWN = "unknown"


@dataclass
class LifecycleResult:
    outcome: LifecycleOutcome
    status_code: int
    message: str


def interpret_status(contest: str, status_code: int, started: bool) -> LifecycleResult:
    """Map a participate response code to an outcome.

    204 means done, 403 means it was already done, anything else is unknown.
    """
    output = f"[Virtual Contest]: {contest}"
    verb = "Started" if started else "Ended"

    if status_code == 204:
        return LifecycleResult(
            LifecycleOutcome.SUCCESS, status_code, f"{output} {verb} Successfully"
        )
    elif status_code == 403:
        return LifecycleResult(
            LifecycleOutcome.ALREADY, status_code, f"{output} Already {verb}"
        )
    return LifecycleResult(
        LifecycleOutcome.UNKNOWN, status_code, f"Unknown Response {status_code}"
    )


class ContestLifecycleController:
    """Single round-trip contest operations."""

    def __init__(self, client, console: Console):
        self.client = client
        self.console = console

    def _report(self, result: LifecycleResult) -> LifecycleResult:
        color = "red" if result.outcome is LifecycleOutcome.UNKNOWN else "yellow"
        self.console.print(f"  [{color}]{escape(result.message)}[/{color}]")
        return result

    def start(self, contest: str) -> LifecycleResult:
        status_code = self.client.start_contest(contest)
        return self._report(interpret_status(contest, status_code, started=True))

    def end(self, contest: str) -> LifecycleResult:
        status_code = self.client.end_contest(contest)
        return self._report(interpret_status(contest, status_code, started=False))

    def register(self, contest: str) -> LifecycleResult:
        """Register for a contest; success is a redirect to its page."""
        response = self.client.register_contest(contest, True)
        location = response.headers.get("location", "")
        if response.status_code == 302 and location.rstrip("/") == f"/contest/{contest}":
            result = LifecycleResult(
                LifecycleOutcome.SUCCESS,
                response.status_code,
                f"Successfully registered for {contest}",
            )
        else:
            result = LifecycleResult(
                LifecycleOutcome.UNKNOWN,
                response.status_code,
                f"Unknown Response {response.status_code} {response.text}",
            )
        return self._report(result)

    def unregister(self, contest: str) -> LifecycleResult:
        response = self.client.register_contest(contest, False)
        if response.status_code == 204:
            result = LifecycleResult(
                LifecycleOutcome.SUCCESS,
                response.status_code,
                f"Successfully un-registered for {contest}",
            )
        else:
            result = LifecycleResult(
                LifecycleOutcome.UNKNOWN,
                response.status_code,
                f"Unknown Response {response.status_code} {response.text}",
            )
        return self._report(result)

    def rank(self, contest: str) -> Any:
        """Fetch and display the raw ranking payload."""
        payload = self.client.get_rank(contest)
        self.console.print_json(data=payload)
        return payload
