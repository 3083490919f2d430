from types import SimpleNamespace

import pyperclip
import pytest

from pwforge import clipboard
from pwforge.clipboard import (
    ERASE_PREVIOUS_LINE,
    CopyOutcome,
    clear_clipboard_after,
    copy_to_clipboard,
    take_pending_clears,
)
from pwforge.exceptions import ClipboardUnavailable
from pwforge.generator import NO_CLASSES_SELECTED


class FakeClipboard:
    def __init__(self, content=""):
        self.content = content

    def copy(self, text):
        self.content = text

    def paste(self):
        return self.content


@pytest.fixture
def fake_clipboard(monkeypatch):
    board = FakeClipboard("previous")
    monkeypatch.setattr(clipboard.pyperclip, "copy", board.copy)
    monkeypatch.setattr(clipboard.pyperclip, "paste", board.paste)
    return board


@pytest.fixture(autouse=True)
def no_leftover_clears():
    yield
    for pending in take_pending_clears():
        pending.now()


@pytest.fixture
def broken_clipboard(monkeypatch):
    def fail(*args):
        raise pyperclip.PyperclipException("no copy mechanism")

    monkeypatch.setattr(clipboard.pyperclip, "copy", fail)
    monkeypatch.setattr(clipboard.pyperclip, "paste", fail)


def test_copy(fake_clipboard):
    outcome = copy_to_clipboard("s3cret!", timeout=0)
    assert outcome is CopyOutcome.COPIED
    assert fake_clipboard.content == "s3cret!"


@pytest.mark.parametrize("text", ["", None, NO_CLASSES_SELECTED])
def test_nothing_to_copy(fake_clipboard, text):
    assert copy_to_clipboard(text, timeout=0) is CopyOutcome.NOTHING_TO_COPY
    assert fake_clipboard.content == "previous"


def test_fallback_when_clipboard_unavailable(broken_clipboard):
    shown = []
    outcome = copy_to_clipboard("s3cret!", timeout=0, fallback=shown.append)
    assert outcome is CopyOutcome.FALLBACK
    assert shown == ["s3cret!"]


def test_failed_when_fallback_unavailable(broken_clipboard):
    def no_terminal(text):
        raise ClipboardUnavailable("no terminal")

    assert copy_to_clipboard("s3cret!", timeout=0, fallback=no_terminal) is CopyOutcome.FAILED


def test_default_fallback_needs_a_terminal(broken_clipboard, capsys):
    # pytest captures stdout, so there is no terminal to show the password on
    assert copy_to_clipboard("s3cret!", timeout=0) is CopyOutcome.FAILED


def test_clear_restores_previous_content(fake_clipboard):
    fake_clipboard.copy("s3cret!")
    clear_clipboard_after("s3cret!", 0.01, original="previous").wait()
    assert fake_clipboard.content == "previous"


def test_clear_leaves_newer_content_alone(fake_clipboard):
    fake_clipboard.copy("something else")
    clear_clipboard_after("s3cret!", 0.01, original="previous").wait()
    assert fake_clipboard.content == "something else"


def test_outcome_messages():
    assert CopyOutcome.COPIED.message == "Password copied to clipboard"
    assert CopyOutcome.FAILED.message == "Copy failed"
    assert CopyOutcome.NOTHING_TO_COPY.message == "No password to copy"


def test_notify_without_terminal_just_prints(capsys):
    clipboard.notify("Password copied to clipboard", duration=5)
    assert "Password copied to clipboard" in capsys.readouterr().out


def test_copy_schedules_a_clear(fake_clipboard):
    assert copy_to_clipboard("s3cret!", timeout=60) is CopyOutcome.COPIED
    pending = take_pending_clears()
    assert len(pending) == 1
    assert take_pending_clears() == []

    pending[0].now()
    assert fake_clipboard.content == "previous"
    assert not pending[0].thread.is_alive()


def test_no_clear_scheduled_without_timeout(fake_clipboard):
    copy_to_clipboard("s3cret!", timeout=0)
    assert take_pending_clears() == []


def test_wait_interrupted_clears_immediately(fake_clipboard, monkeypatch):
    fake_clipboard.copy("s3cret!")
    pending = clear_clipboard_after("s3cret!", 60, original="previous")

    # Ctrl+C during the first join; now() then joins for real
    calls = []
    real_join = pending.thread.join

    def join_once(timeout=None):
        if not calls:
            calls.append(timeout)
            raise KeyboardInterrupt
        return real_join(timeout)

    monkeypatch.setattr(pending.thread, "join", join_once)
    pending.wait()
    assert calls == [0.1]
    assert fake_clipboard.content == "previous"


def test_notify_on_terminal_erases_after_delay(monkeypatch):
    events = []

    class Terminal:
        def isatty(self):
            return True

    monkeypatch.setattr(clipboard, "sys", SimpleNamespace(stdout=Terminal()))
    monkeypatch.setattr(clipboard, "time", SimpleNamespace(sleep=lambda s: events.append(("sleep", s))))
    monkeypatch.setattr(clipboard.click, "echo", lambda message="", nl=True: events.append(("echo", message)))

    clipboard.notify("Password copied to clipboard", duration=1.8)

    assert [kind for kind, _ in events] == ["echo", "sleep", "echo"]
    assert "Password copied to clipboard" in events[0][1]
    assert events[1] == ("sleep", 1.8)
    assert events[2] == ("echo", ERASE_PREVIOUS_LINE)


def test_notify_with_zero_duration_never_erases(monkeypatch):
    events = []

    class Terminal:
        def isatty(self):
            return True

    monkeypatch.setattr(clipboard, "sys", SimpleNamespace(stdout=Terminal()))
    monkeypatch.setattr(clipboard, "time", SimpleNamespace(sleep=lambda s: events.append(("sleep", s))))
    monkeypatch.setattr(clipboard.click, "echo", lambda message="", nl=True: events.append(("echo", message)))

    clipboard.notify("Copy failed", duration=0, err=True)
    assert [kind for kind, _ in events] == ["echo"]
