"""Utility functions."""

from .terminal import (
    create_table,
    pretty_level,
    pretty_state,
    pretty_text,
    print_problem,
    problems_table,
)

__all__ = [
    "create_table",
    "pretty_level",
    "pretty_state",
    "pretty_text",
    "print_problem",
    "problems_table",
]
