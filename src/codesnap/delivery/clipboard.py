# src/codesnap/delivery/clipboard.py
"""
Delivers the finished snapshot.

Sinks are tried in priority order; the first one that reports success
wins. Each sink returns a DeliveryOutcome instead of raising, so the
reasons can be collected when every sink fails.
"""
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pyperclip

from codesnap.config import COMMAND_TIMEOUT
from codesnap.errors import DeliveryError


@dataclass(frozen=True)
class DeliveryOutcome:
    ok: bool
    reason: str = ""


@dataclass(frozen=True)
class CommandSink:
    """Pipes the document into a clipboard program's stdin."""
    argv: Tuple[str, ...]
    timeout: float = COMMAND_TIMEOUT

    @property
    def name(self) -> str:
        return self.argv[0]

    def deliver(self, content: str) -> DeliveryOutcome:
        # xclip and wl-copy leave a child serving the selection that inherits
        # stderr; a pipe there would not reach EOF until that child exits.
        with tempfile.TemporaryFile() as err_file:
            try:
                proc = subprocess.run(
                    list(self.argv),
                    input=content.encode("utf-8"),
                    stdout=subprocess.DEVNULL,
                    stderr=err_file,
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                return DeliveryOutcome(False, "not installed")
            except subprocess.TimeoutExpired:
                return DeliveryOutcome(False, f"timed out after {self.timeout}s")
            except OSError as e:
                return DeliveryOutcome(False, str(e))

            if proc.returncode != 0:
                err_file.seek(0)
                stderr = err_file.read().decode("utf-8", errors="replace").strip()
                return DeliveryOutcome(False, stderr or f"exit code {proc.returncode}")
        return DeliveryOutcome(True)


@dataclass(frozen=True)
class PyperclipSink:
    name: str = "pyperclip"

    def deliver(self, content: str) -> DeliveryOutcome:
        try:
            pyperclip.copy(content)
        except pyperclip.PyperclipException as e:
            return DeliveryOutcome(False, str(e))
        return DeliveryOutcome(True)


@dataclass(frozen=True)
class FileSink:
    """Writes the document to a file instead of the clipboard."""
    path: Path

    @property
    def name(self) -> str:
        return str(self.path)

    def deliver(self, content: str) -> DeliveryOutcome:
        try:
            with open(self.path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            return DeliveryOutcome(False, str(e))
        return DeliveryOutcome(True)


def default_sinks(platform: Optional[str] = None, timeout: float = COMMAND_TIMEOUT) -> List:
    platform = platform or sys.platform
    if platform.startswith("win"):
        # clip.exe decodes piped input with the console code page, so it goes last.
        return [PyperclipSink(), CommandSink(argv=("clip",), timeout=timeout)]
    if platform == "darwin":
        commands = [("pbcopy",)]
    else:
        commands = [
            ("wl-copy",),
            ("xsel", "--clipboard", "--input"),
            ("xclip", "-selection", "clipboard"),
        ]
    sinks: List = [CommandSink(argv=argv, timeout=timeout) for argv in commands]
    sinks.append(PyperclipSink())
    return sinks


def deliver(content: str, sinks: Sequence) -> str:
    """Hands content to the first sink that accepts it and returns that sink's name."""
    failures = []
    for sink in sinks:
        outcome = sink.deliver(content)
        if outcome.ok:
            return sink.name
        failures.append(f"{sink.name}: {outcome.reason}")

    raise DeliveryError("failed to deliver snapshot: " + "; ".join(failures))
