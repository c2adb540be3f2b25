"""Data models for LeetCode virtual contest entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ContestRef:
    """Identifies a contest for the duration of one command."""

    slug: str


@dataclass
class Problem:
    """Represents a fully hydrated problem."""

    fid: str
    id: str
    name: str
    slug: str
    level: str = ""
    state: Optional[str] = None
    starred: bool = False
    locked: bool = False
    testable: bool = True
    testcase: str = ""
    percent: float = 0.0
    likes: int = 0
    dislikes: int = 0
    desc: str = ""
    templates: Dict[str, str] = field(default_factory=dict)
    question_id: Optional[str] = None
    contest: Optional[str] = None
    file: Optional[str] = None
    lang: Optional[str] = None


@dataclass
class VirtualProblemEntry:
    """One question of a contest, in the order the contest lists it."""

    question_id: str
    credit: int
    title_slug: str
    problem: Optional[Problem] = None


class PayloadKind(str, Enum):
    """Discriminator for raw judge payloads.

    Values sort so that the actual run result comes before the expected one.
    """

    ACTUAL = "Actual"
    EXPECTED = "Expected"


@dataclass
class JudgePayload:
    """Raw check response returned by the judge, tagged with its kind."""

    kind: PayloadKind
    body: Dict[str, Any]


@dataclass
class ResultRecord:
    """Canonical outcome of a test run or a submission."""

    ok: bool
    state: Optional[str] = None
    error: List[str] = field(default_factory=list)
    stdout: Optional[str] = None
    runtime: Optional[str] = None
    passed: int = 0
    total: int = 0
    answer: Optional[Any] = None
    output: Optional[Any] = None
    expected_answer: Optional[Any] = None
    your_input: Optional[str] = None
    testcase: Optional[str] = None
    memory: Optional[str] = None
    runtime_percentile: Optional[float] = None
    memory_percentile: Optional[float] = None
    lang: Optional[str] = None
