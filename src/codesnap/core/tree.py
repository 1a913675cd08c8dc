# src/codesnap/core/tree.py
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Sequence

import pathspec

from codesnap.config import COMMAND_TIMEOUT
from codesnap.core.ignore import build_tree_filter
from codesnap.errors import TreeCommandError
from codesnap.models import TreeSummary


def _name_spec(patterns: Sequence[str]) -> pathspec.PathSpec:
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)
    except ValueError as e:
        print(f"Warning: Could not parse tree exclusion patterns: {e}", file=sys.stderr)
        return pathspec.PathSpec.from_lines("gitwildmatch", [])


def generate_project_tree(root_dir: Path, patterns: Sequence[str] = ()) -> str:
    """
    Builds a listing shaped like the output of `tree -I <patterns> <root>`.
    Hidden entries are left out and patterns are matched against entry
    names, as `tree` does. Ends with the '<N> directories, <M> files' line.
    """
    spec = _name_spec(patterns)
    lines = [str(root_dir)]
    counts = {"dirs": 0, "files": 0}

    def _generate_lines_recursive(directory: Path, prefix: str):
        try:
            names = sorted(os.listdir(directory))
        except OSError:
            return
        entries = [n for n in names if not n.startswith(".") and not spec.match_file(n)]

        for i, name in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{name}")

            path = directory / name
            if path.is_dir() and not path.is_symlink():
                counts["dirs"] += 1
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(path, new_prefix)
            else:
                counts["files"] += 1

    _generate_lines_recursive(root_dir, "")

    dir_word = "directory" if counts["dirs"] == 1 else "directories"
    file_word = "file" if counts["files"] == 1 else "files"
    lines.append("")
    lines.append(f"{counts['dirs']} {dir_word}, {counts['files']} {file_word}")
    return "\n".join(lines) + "\n"


def run_tree_command(root_dir: Path, patterns: Sequence[str], timeout: float = COMMAND_TIMEOUT) -> str:
    """
    Runs `tree` over root_dir with the exclusion filter and returns its text.
    A failing run with no output counts as an empty tree; a failing run
    with output raises TreeCommandError carrying the captured stderr.
    """
    cmd: List[str] = ["tree"]
    tree_filter = build_tree_filter(patterns)
    if tree_filter:
        cmd += ["-I", tree_filter]
    cmd.append(str(root_dir))

    try:
        proc = subprocess.run(cmd, capture_output=True, timeout=timeout)
    except FileNotFoundError:
        return generate_project_tree(root_dir, patterns)
    except subprocess.TimeoutExpired as e:
        raise TreeCommandError(f"tree command timed out after {e.timeout}s") from e

    output = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        if not output:
            return f"{root_dir}\n0 directories, 0 files\n"
        error_output = proc.stderr.decode("utf-8", errors="replace")
        raise TreeCommandError(
            f"failed to run tree command: {proc.returncode}\nOutput: {error_output}"
        )
    return output


def _to_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        return 0


def parse_tree_summary(tree_text: str) -> TreeSummary:
    """Reads '<dirs> directories, <files> files' from the last non-blank line."""
    lines = [line.strip() for line in tree_text.strip().split("\n")]
    non_blank = [line for line in lines if line]
    if len(non_blank) < 2:
        return TreeSummary()

    parts = non_blank[-1].split()
    if len(parts) < 4:
        return TreeSummary()

    return TreeSummary(dirs=_to_int(parts[0]), files=_to_int(parts[2]))
