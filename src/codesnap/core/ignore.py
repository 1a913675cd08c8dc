# src/codesnap/core/ignore.py
import os
import sys
from pathlib import Path
from typing import Iterable, List

from codesnap.config import SnapshotConfig
from codesnap.errors import IgnoreFileError
from codesnap.models import IgnoreFileFound, IgnoreFileMissing, IgnoreFileResult


def matches_pattern(path: str, pattern: str, sep: str = os.sep) -> bool:
    """
    Checks a single path against a single pattern.
    1. Exact match on the whole path.
    2. Whole path-component match ('lib' matches 'a/lib/b', not 'library').
    3. Patterns starting with '.' match as a plain suffix ('.zip').
    """
    if path == pattern:
        return True

    if pattern in path.split(sep):
        return True

    if pattern.startswith("."):
        return path.endswith(pattern)

    return False


def is_excluded(rel_path: str, name: str, patterns: Iterable[str], sep: str = os.sep) -> bool:
    """A file is excluded if any pattern matches its relative path or its bare name."""
    for pattern in patterns:
        if matches_pattern(rel_path, pattern, sep) or matches_pattern(name, pattern, sep):
            return True
    return False


def read_ignore_file(ignore_file: Path) -> IgnoreFileResult:
    """
    Reads ignore patterns, one per line.
    Blank lines and '#' comments are dropped. A missing file is reported
    as IgnoreFileMissing; any other read failure raises IgnoreFileError.
    """
    try:
        with open(ignore_file, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().split("\n")
    except FileNotFoundError:
        return IgnoreFileMissing(path=ignore_file)
    except OSError as e:
        raise IgnoreFileError(f"Could not read '{ignore_file}': {e}") from e

    patterns = []
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return IgnoreFileFound(path=ignore_file, patterns=tuple(patterns))


def load_exclusions(root_dir: Path, config: SnapshotConfig) -> List[str]:
    """
    Ignore-file patterns followed by the built-in exclusions.
    The ignore file's own name is always excluded.
    """
    result = read_ignore_file(root_dir / config.ignore_file_name)

    if isinstance(result, IgnoreFileMissing):
        print(
            f"Warning: {result.path.name} file not found, proceeding without it.",
            file=sys.stderr,
        )
        patterns: List[str] = []
    else:
        patterns = list(result.patterns)

    patterns.extend(config.builtin_excludes)
    if config.ignore_file_name not in patterns:
        patterns.append(config.ignore_file_name)
    return patterns


def build_tree_filter(patterns: Iterable[str]) -> str:
    """Joins patterns into the '|' alternation understood by `tree -I`."""
    return "|".join(p.replace("/", "\\/") for p in patterns)
