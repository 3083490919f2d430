"""
clipboard.py - Clipboard copy with auto-clear, manual-copy fallback and notices
"""
import logging
import sys
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Union

import click
import pyperclip

from .exceptions import ClipboardUnavailable
from .generator import NoClassesSelected

logger = logging.getLogger(__name__)

ERASE_PREVIOUS_LINE = "\033[1A\033[2K"


class CopyOutcome(Enum):
    COPIED = "copied"
    FALLBACK = "fallback"
    FAILED = "failed"
    NOTHING_TO_COPY = "nothing"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    CopyOutcome.COPIED: "Password copied to clipboard",
    CopyOutcome.FALLBACK: "Clipboard unavailable, select the password above to copy it",
    CopyOutcome.FAILED: "Copy failed",
    CopyOutcome.NOTHING_TO_COPY: "No password to copy",
}


def write_clipboard(text: str) -> None:
    """
    Put text on the system clipboard.

    Raises:
        ClipboardUnavailable: If pyperclip has no working copy mechanism
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(str(e)) from e


def read_clipboard() -> str:
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(str(e)) from e


def show_for_manual_copy(text: str) -> None:
    """
    Print the password on its own line so the user can select it.

    Raises:
        ClipboardUnavailable: If stdout is not a terminal
    """
    if not sys.stdout.isatty():
        raise ClipboardUnavailable("no terminal available for manual copy")
    click.echo("\n    " + click.style(text, fg='green', bold=True, reverse=True) + "\n")


class PendingClear:
    """
    A scheduled restore of the clipboard.

    The worker is a daemon thread, so it dies with the process. Short-lived
    callers must wait() for it, or call now() before exiting.
    """

    def __init__(self, text: str, timeout: float, original: str = ""):
        self.text = text
        self.timeout = timeout
        self.original = original
        self._skip_wait = threading.Event()
        self.thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        self._skip_wait.wait(self.timeout)
        try:
            # Only clear if it's still our password
            if read_clipboard() == self.text:
                write_clipboard(self.original)
        except ClipboardUnavailable:
            logger.debug("Clipboard went away before it could be cleared")

    def start(self) -> "PendingClear":
        self.thread.start()
        return self

    def wait(self) -> None:
        """Block until the clipboard has been restored; Ctrl+C restores it at once"""
        try:
            while self.thread.is_alive():
                self.thread.join(0.1)
        except KeyboardInterrupt:
            self.now()

    def now(self) -> None:
        """Restore the clipboard immediately and wait for the worker"""
        self._skip_wait.set()
        self.thread.join()


_pending: List[PendingClear] = []


def clear_clipboard_after(text: str, timeout: float, original: str = "") -> PendingClear:
    """Restore the previous clipboard after `timeout` seconds if it still holds `text`"""
    pending = PendingClear(text, timeout, original).start()
    _pending.append(pending)
    return pending


def take_pending_clears() -> List[PendingClear]:
    """Hand over every scheduled clear that has not been collected yet"""
    taken = list(_pending)
    del _pending[:]
    return taken


def copy_to_clipboard(
    text: Optional[Union[str, NoClassesSelected]],
    timeout: float = 30,
    fallback: Callable[[str], None] = show_for_manual_copy
) -> CopyOutcome:
    """
    Copy a password to the clipboard.

    Args:
        text: The password; empty text, None or NoClassesSelected is not copied
        timeout: Restore the previous clipboard after N seconds (0 = never).
            The restore is collected with take_pending_clears().
        fallback: Called with the text when the clipboard cannot be written

    Returns:
        CopyOutcome describing what happened
    """
    if not text or isinstance(text, NoClassesSelected):
        return CopyOutcome.NOTHING_TO_COPY

    try:
        try:
            original = read_clipboard()
        except ClipboardUnavailable:
            original = ""
        write_clipboard(text)
    except ClipboardUnavailable as e:
        logger.info("Clipboard write failed (%s), using manual copy", e)
        try:
            fallback(text)
        except ClipboardUnavailable as fallback_error:
            logger.warning("Could not copy password: %s", fallback_error)
            return CopyOutcome.FAILED
        return CopyOutcome.FALLBACK

    if timeout > 0:
        clear_clipboard_after(text, timeout, original)
    return CopyOutcome.COPIED


def notify(message: str, duration: float = 1.8, err: bool = False) -> None:
    """
    Show a short notice that disappears after `duration` seconds.

    On a terminal the line is erased once the time is up; elsewhere the
    notice just stays in the output.
    """
    color = 'red' if err else 'cyan'
    click.echo(click.style(f"    {message}", fg=color))
    if duration > 0 and sys.stdout.isatty():
        time.sleep(duration)
        click.echo(ERASE_PREVIOUS_LINE, nl=False)
