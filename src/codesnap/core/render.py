# src/codesnap/core/render.py
from pathlib import Path
from typing import AbstractSet, Union

from codesnap.config import CODE_EXTENSIONS
from codesnap.models import RenderedSection

FENCE = "```"


def trim_trailing_blank_lines(content: str) -> str:
    """Drops whitespace-only lines from the end; everything else is kept verbatim."""
    lines = content.split("\n")
    while lines and lines[-1].strip() == "":
        lines.pop()
    return "\n".join(lines)


def language_for(extension: str, code_extensions: AbstractSet[str] = CODE_EXTENSIONS) -> str:
    """Fence tag for an extension, or '' for a plain block."""
    if extension == "md":
        return "md"
    if extension in code_extensions:
        return extension
    return ""


def render_section(
    abs_path: Union[str, Path],
    content: str,
    extension: str,
    code_extensions: AbstractSet[str] = CODE_EXTENSIONS,
) -> RenderedSection:
    body = trim_trailing_blank_lines(content)
    language = language_for(extension, code_extensions)

    # Markdown may carry its own fences; escape them so ours stays closed.
    if language == "md":
        body = body.replace(FENCE, "\\" + FENCE)

    return RenderedSection(
        header=f"\n## {abs_path}\n\n",
        language=language,
        body=body,
    )
