# src/codesnap/core/binary.py
from pathlib import Path

from codesnap.config import BINARY_SNIFF_BYTES
from codesnap.models import FileKind


def classify_prefix(chunk: bytes) -> FileKind:
    """
    Classifies a sampled byte prefix.
    Empty -> TEXT. Any null byte -> BINARY. Otherwise the prefix must
    decode as strict UTF-8 to count as TEXT.
    """
    if not chunk:
        return FileKind.TEXT

    if b"\0" in chunk:
        return FileKind.BINARY

    try:
        chunk.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        return FileKind.BINARY
    return FileKind.TEXT


def is_binary_file(path: Path, sniff_bytes: int = BINARY_SNIFF_BYTES) -> bool:
    """
    Reads the first `sniff_bytes` bytes and classifies them.
    Unreadable files count as text; the later full read reports the error.
    """
    try:
        with path.open("rb") as f:
            chunk = f.read(sniff_bytes)
    except OSError:
        return False
    return classify_prefix(chunk) is FileKind.BINARY
