"""Client module for LeetCode interaction."""

from .client import LeetCodeClient
from .models import (
    ContestRef,
    JudgePayload,
    PayloadKind,
    Problem,
    ResultRecord,
    VirtualProblemEntry,
)

__all__ = [
    "LeetCodeClient",
    "ContestRef",
    "JudgePayload",
    "PayloadKind",
    "Problem",
    "ResultRecord",
    "VirtualProblemEntry",
]
