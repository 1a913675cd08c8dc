# src/codesnap/core/document.py
from colorama import Fore, Style

from codesnap.config import CHAR_LIMIT
from codesnap.models import DocumentStats, ProcessResult, TreeSummary


def assemble_document(tree_text: str, result: ProcessResult) -> str:
    """Tree listing in a plain fence, followed by every rendered file."""
    return "## File Structure\n\n```\n" + tree_text + "```\n" + result.output


def exceeds_limit(chars: int, limit: int = CHAR_LIMIT) -> bool:
    return chars > limit


def compute_stats(document: str, tree_text: str, result: ProcessResult, limit: int = CHAR_LIMIT) -> DocumentStats:
    chars = len(document)
    return DocumentStats(
        chars=chars,
        size_kb=chars / 1024.0,
        lines=len(tree_text.split("\n")) + result.processed_lines,
        over_limit=exceeds_limit(chars, limit),
    )


def format_summary(
    tree: TreeSummary,
    result: ProcessResult,
    stats: DocumentStats,
    tokens: int,
    limit: int = CHAR_LIMIT,
) -> str:
    """The one line printed after a successful run."""
    chars = f"{stats.chars:,} chars"
    if stats.over_limit:
        chars = (
            f"{Fore.RED}{chars} (Character Limit Exceeded: "
            f"{stats.chars:,}/{limit:,}){Style.RESET_ALL}"
        )

    return (
        f"Scanned: {tree.dirs:,} dir, {tree.files:,} files | "
        f"Copied: {result.processed_files:,} files, {stats.lines:,} lines, "
        f"{stats.size_kb:.2f} kb, {chars}, ~{tokens:,} tokens"
    )
