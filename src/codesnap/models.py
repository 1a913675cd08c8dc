# src/codesnap/models.py
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple, Union


class FileKind(Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class IgnoreFileFound:
    path: Path
    patterns: Tuple[str, ...]


@dataclass(frozen=True)
class IgnoreFileMissing:
    path: Path


IgnoreFileResult = Union[IgnoreFileFound, IgnoreFileMissing]


@dataclass(frozen=True)
class FileEntry:
    """Immutable data class holding one walked file."""
    path: Path
    rel_path: str
    extension: str
    content: str = ""
    binary: bool = False

    @property
    def line_count(self) -> int:
        # Raw count, before trailing blank lines are trimmed.
        return len(self.content.split("\n"))


@dataclass(frozen=True)
class RenderedSection:
    header: str
    language: str
    body: str

    @property
    def text(self) -> str:
        return f"{self.header}```{self.language}\n{self.body}\n```\n"


@dataclass(frozen=True)
class TreeSummary:
    dirs: int = 0
    files: int = 0


@dataclass(frozen=True)
class ProcessResult:
    output: str
    processed_files: int
    processed_lines: int


@dataclass(frozen=True)
class DocumentStats:
    chars: int
    size_kb: float
    lines: int
    over_limit: bool
