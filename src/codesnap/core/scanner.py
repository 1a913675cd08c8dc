# src/codesnap/core/scanner.py
import os
from pathlib import Path
from typing import Iterator, List, Sequence

from codesnap.config import SnapshotConfig
from codesnap.core.binary import is_binary_file
from codesnap.core.ignore import is_excluded
from codesnap.core.render import render_section
from codesnap.errors import FileReadError
from codesnap.models import FileEntry, ProcessResult

SECRET_MARKER = ".env"


class ProjectScanner:
    def __init__(self, root_dir: Path, exclusions: Sequence[str], config: SnapshotConfig = SnapshotConfig()):
        self.root_dir = root_dir
        self.exclusions = list(exclusions)
        self.config = config

    def _should_skip(self, rel_path: str, name: str) -> bool:
        if is_excluded(rel_path, name, self.exclusions):
            return True
        # Secret files are never copied, whatever the patterns say.
        if SECRET_MARKER in name:
            return True
        return False

    def _read(self, path: Path) -> str:
        try:
            # newline="" keeps '\r\n' as-is so the snapshot is verbatim.
            with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(f"Could not read '{path}': {e}") from e

    def _walk_error(self, error: OSError):
        # A directory we cannot list would drop its files without notice.
        raise FileReadError(f"Could not read directory '{error.filename}': {error}") from error

    def scan(self) -> Iterator[FileEntry]:
        """
        Walks the directory tree in sorted order and yields a FileEntry for
        every file that survives the exclusion, secret-file and binary checks.
        """
        for root, dirs, files in os.walk(self.root_dir, onerror=self._walk_error):
            root_path = Path(root)

            # Sorting in place fixes the order os.walk descends in.
            dirs.sort()
            # A directory named like a pattern would exclude every file below it anyway.
            dirs[:] = [d for d in dirs if d not in self.exclusions]

            for name in sorted(files):
                file_abs_path = root_path / name
                if file_abs_path.is_symlink():
                    continue

                rel_path = os.path.relpath(file_abs_path, self.root_dir)
                if self._should_skip(rel_path, name):
                    continue

                if is_binary_file(file_abs_path, self.config.sniff_bytes):
                    continue

                yield FileEntry(
                    path=Path(os.path.abspath(file_abs_path)),
                    rel_path=rel_path,
                    extension=file_abs_path.suffix[1:].lower(),
                    content=self._read(file_abs_path),
                )

    def run(self) -> ProcessResult:
        """Renders every scanned file and accumulates the counters."""
        sections: List[str] = []
        processed_files = 0
        processed_lines = 0

        for entry in self.scan():
            processed_files += 1
            processed_lines += entry.line_count
            section = render_section(
                entry.path, entry.content, entry.extension, self.config.code_extensions
            )
            sections.append(section.text)

        return ProcessResult(
            output="".join(sections),
            processed_files=processed_files,
            processed_lines=processed_lines,
        )
