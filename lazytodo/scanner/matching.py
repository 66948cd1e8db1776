"""Single-line extraction of ``TODO(label): text`` tokens.

Comment markers around the token are irrelevant; only the literal,
case-sensitive ``TODO(`` prefix starts a match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Text stops at the end of the line or right before the next complete token.
TODO_PATTERN = re.compile(r"TODO\(([^)]+)\):\s*(.*?)(?=TODO\([^)]+\):|$)")


@dataclass(frozen=True)
class TodoMatch:
    label: str
    text: str
    column: int


def match_line(line: str) -> list[TodoMatch]:
    """Return every TODO token on ``line`` in left-to-right column order.

    Labels are stripped on both ends and may end up empty; the text loses
    surrounding whitespace.
    """
    if "TODO(" not in line:
        return []
    return [
        TodoMatch(
            label=match.group(1).strip(),
            text=match.group(2).strip(),
            column=match.start(),
        )
        for match in TODO_PATTERN.finditer(line)
    ]
