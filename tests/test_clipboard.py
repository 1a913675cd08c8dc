# tests/test_clipboard.py
import os
import subprocess
import sys
import time
import pytest
from unittest.mock import patch

import pyperclip

from codesnap.delivery.clipboard import (
    CommandSink,
    DeliveryOutcome,
    FileSink,
    PyperclipSink,
    default_sinks,
    deliver,
)
from codesnap.errors import DeliveryError


class FakeSink:
    def __init__(self, name, ok, reason=""):
        self.name = name
        self.ok = ok
        self.reason = reason
        self.received = None

    def deliver(self, content):
        self.received = content
        return DeliveryOutcome(self.ok, self.reason)

# --- Test 1: Ordered fallback ---

def test_first_successful_sink_wins():
    first = FakeSink("wl-copy", False, "not installed")
    second = FakeSink("xsel", True)
    third = FakeSink("xclip", True)

    assert deliver("doc", [first, second, third]) == "xsel"
    assert second.received == "doc"
    assert third.received is None

def test_all_sinks_failing_aggregates_reasons():
    sinks = [FakeSink("wl-copy", False, "not installed"), FakeSink("xclip", False, "no display")]
    with pytest.raises(DeliveryError) as exc_info:
        deliver("doc", sinks)

    message = str(exc_info.value)
    assert "wl-copy: not installed" in message
    assert "xclip: no display" in message

def test_default_sinks_per_platform():
    assert [s.name for s in default_sinks("linux")] == ["wl-copy", "xsel", "xclip", "pyperclip"]
    assert [s.name for s in default_sinks("darwin")] == ["pbcopy", "pyperclip"]
    assert [s.name for s in default_sinks("win32")] == ["pyperclip", "clip"]

# --- Test 2: Command sinks ---

def test_command_sink_pipes_content():
    done = subprocess.CompletedProcess(args=["xsel"], returncode=0, stdout=None, stderr=b"")
    sink = CommandSink(argv=("xsel", "--clipboard", "--input"), timeout=3)
    with patch("codesnap.delivery.clipboard.subprocess.run", return_value=done) as run:
        assert sink.deliver("héllo").ok is True

    args, kwargs = run.call_args
    assert args[0] == ["xsel", "--clipboard", "--input"]
    assert kwargs["input"] == "héllo".encode("utf-8")
    assert kwargs["timeout"] == 3

def test_command_sink_missing_program():
    sink = CommandSink(argv=("wl-copy",))
    with patch("codesnap.delivery.clipboard.subprocess.run", side_effect=FileNotFoundError()):
        outcome = sink.deliver("doc")
    assert outcome == DeliveryOutcome(False, "not installed")

def test_command_sink_nonzero_exit():
    def fake_run(argv, **kwargs):
        kwargs["stderr"].write(b"Error: Can't open display\n")
        return subprocess.CompletedProcess(args=argv, returncode=1)

    with patch("codesnap.delivery.clipboard.subprocess.run", side_effect=fake_run):
        outcome = CommandSink(argv=("xclip",)).deliver("doc")
    assert outcome.ok is False
    assert outcome.reason == "Error: Can't open display"

def test_command_sink_timeout():
    with patch("codesnap.delivery.clipboard.subprocess.run", side_effect=subprocess.TimeoutExpired("wl-copy", 2)):
        outcome = CommandSink(argv=("wl-copy",), timeout=2).deliver("doc")
    assert outcome.ok is False
    assert "timed out" in outcome.reason

# --- Test 3: Other sinks ---

def test_pyperclip_sink_failure(monkeypatch):
    def fail(text):
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", fail)
    outcome = PyperclipSink().deliver("doc")
    assert outcome == DeliveryOutcome(False, "no clipboard mechanism")

def test_pyperclip_sink_success(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    assert PyperclipSink().deliver("doc").ok is True
    assert copied == ["doc"]

def test_file_sink_writes_verbatim(tmp_path):
    target = tmp_path / "snapshot.md"
    assert FileSink(target).deliver("a\r\nb").ok is True
    assert target.read_bytes() == b"a\r\nb"

def test_file_sink_failure(tmp_path):
    outcome = FileSink(tmp_path / "missing-dir" / "snapshot.md").deliver("doc")
    assert outcome.ok is False

# --- Test 4: Real clipboard programs ---

@pytest.mark.skipif(sys.platform.startswith("win"), reason="needs a POSIX shell")
def test_command_sink_returns_while_forked_child_keeps_running(tmp_path, monkeypatch):
    # Mimics xclip: read the selection, leave a child serving it, exit 0
    received = tmp_path / "received.txt"
    script = tmp_path / "xclip"
    script.write_text(
        "#!/bin/sh\n"
        f"cat > '{received}'\n"
        "( sleep 20 ) &\n"
        "exit 0\n",
        encoding="utf-8",
    )
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}")

    started = time.monotonic()
    outcome = CommandSink(argv=("xclip", "-selection", "clipboard"), timeout=3).deliver("doc")

    assert outcome == DeliveryOutcome(True)
    assert time.monotonic() - started < 3
    assert received.read_text(encoding="utf-8") == "doc"

@pytest.mark.skipif(sys.platform.startswith("win"), reason="needs a POSIX shell")
def test_command_sink_reports_real_stderr(tmp_path, monkeypatch):
    script = tmp_path / "wl-copy"
    script.write_text("#!/bin/sh\ncat > /dev/null\necho 'Failed to connect to a Wayland server' >&2\nexit 1\n", encoding="utf-8")
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}")

    outcome = CommandSink(argv=("wl-copy",), timeout=3).deliver("doc")

    assert outcome == DeliveryOutcome(False, "Failed to connect to a Wayland server")
