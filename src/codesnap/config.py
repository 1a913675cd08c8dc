# src/codesnap/config.py
from dataclasses import dataclass
from typing import FrozenSet, Tuple

IGNORE_FILE_NAME = ".gitignore"

# Always excluded, whatever the ignore file says.
BUILTIN_EXCLUDES: Tuple[str, ...] = (
    "target/release",
    ".git",
    ".claude",
    ".gitignore",
    "Cargo.lock",
    "package-lock.json",
    "hardware-configuration.nix",
    "README.md",
    "CLAUDE.md",
    "flake.lock",
    "rustc_info.json",
    ".zip",
    "node_modules",
    "build",
)

# Extensions rendered with their own fence tag.
CODE_EXTENSIONS: FrozenSet[str] = frozenset({
    "js", "css", "svelte", "json", "html", "py", "ts", "tsx", "nix",
    "rb", "php", "c", "cpp", "h", "java", "go", "rs", "kt", "sh",
    "yaml", "yml", "xml", "toml", "ini", "sql", "dart", "swift", "r",
    "pl", "lua", "scala",
})

CHAR_LIMIT = 390_000
BINARY_SNIFF_BYTES = 1024
COMMAND_TIMEOUT = 30.0


@dataclass(frozen=True)
class SnapshotConfig:
    """Immutable settings for a single snapshot run."""
    ignore_file_name: str = IGNORE_FILE_NAME
    builtin_excludes: Tuple[str, ...] = BUILTIN_EXCLUDES
    code_extensions: FrozenSet[str] = CODE_EXTENSIONS
    char_limit: int = CHAR_LIMIT
    sniff_bytes: int = BINARY_SNIFF_BYTES
    command_timeout: float = COMMAND_TIMEOUT
