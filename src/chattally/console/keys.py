import codecs
import os
import re
import select
import sys
import time
from collections import deque
from types import TracebackType
from typing import Any

# CSI (ESC [ params final), SS3 (ESC O x), Alt+key (ESC x) or a lone ESC.
ESCAPE_SEQUENCE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|O.|.)?", re.DOTALL)
WINDOWS_KEY_PREFIXES = frozenset({"\x00", "\xe0"})


class KeyReader:
    """Non-blocking single-key reader for the operator's terminal.

    Use as a context manager: on a POSIX tty the terminal is put into cbreak
    mode (keys arrive one at a time, no local echo) and restored on exit.
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[str] = deque()
        self._saved_attrs: list[Any] | None = None
        self._windows = sys.platform == "win32"

    def __enter__(self) -> "KeyReader":
        if not self._windows and os.isatty(self._fd):
            import termios
            import tty

            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def read_key(self, timeout: float) -> str | None:
        """Return the next character, None if nothing arrived within timeout, "" at EOF."""
        if self._pending:
            return self._pending.popleft()

        if self._windows:
            return self._read_console_key(timeout)

        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None

        data = os.read(self._fd, 64)
        if not data:
            return ""

        text = ESCAPE_SEQUENCE.sub("", self._decoder.decode(data))
        self._pending.extend(text)
        return self._pending.popleft() if self._pending else None

    def _read_console_key(self, timeout: float) -> str | None:
        import msvcrt

        if msvcrt.kbhit():  # type: ignore[attr-defined]
            key: str = msvcrt.getwch()  # type: ignore[attr-defined]
            if key in WINDOWS_KEY_PREFIXES:
                # Arrow and function keys: prefix plus scan code, both discarded.
                msvcrt.getwch()  # type: ignore[attr-defined]
                return None
            return key
        time.sleep(timeout)
        return None
