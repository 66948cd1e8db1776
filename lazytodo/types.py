"""Record and tree-node datatypes shared by the indexer and view model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

EMPTY_TEXT_PLACEHOLDER = "(empty)"


@dataclass(frozen=True)
class TodoRecord:
    """One ``TODO(label): text`` occurrence found in a file.

    ``line`` and ``column`` are 0-based. ``relative_path`` is POSIX-style and
    relative to the workspace root, or the absolute path when the file lives
    outside of it.
    """

    label: str
    text: str
    absolute_path: Path
    relative_path: str
    line: int
    column: int

    @property
    def full_text(self) -> str:
        return f"TODO({self.label}): {self.text}"

    @property
    def display_text(self) -> str:
        return self.text or EMPTY_TEXT_PLACEHOLDER

    @property
    def location(self) -> str:
        """Human-facing ``path:line`` with a 1-based line number."""
        return f"{self.relative_path}:{self.line + 1}"


@dataclass(frozen=True)
class LabelNode:
    """Group of records sharing one label."""

    name: str
    count: int
    kind: Literal["label"] = "label"

    @property
    def path(self) -> tuple[str, ...]:
        return (self.name,)

    @property
    def title(self) -> str:
        return f"{self.name} ({self.count})"


@dataclass(frozen=True)
class FileNode:
    """Records of one label inside one file (grouped mode only)."""

    label: str
    name: str
    count: int
    kind: Literal["file"] = "file"

    @property
    def path(self) -> tuple[str, ...]:
        return (self.label, self.name)

    @property
    def title(self) -> str:
        return f"{self.name} ({self.count})"


@dataclass(frozen=True)
class TodoNode:
    record: TodoRecord
    kind: Literal["todo"] = "todo"

    @property
    def title(self) -> str:
        return self.record.display_text


TreeNode = Union[LabelNode, FileNode, TodoNode]
