import sys
import threading
from typing import TextIO

CLEAR_LINE = "\r\x1b[2K"
BACKSPACE_KEYS = frozenset({"\x7f", "\b"})
SUBMIT_KEYS = frozenset({"\r", "\n"})


class LineEditor:
    """The operator's in-progress command line and the only writer to the console.

    Every console write takes the input lock, so a status line printed by
    another thread clears the partial input, prints, and redraws it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()
        self._buffer: list[str] = []

    @property
    def buffer(self) -> str:
        with self._lock:
            return "".join(self._buffer)

    def write_line(self, text: str) -> None:
        with self._lock:
            if self._buffer:
                self._stream.write(CLEAR_LINE)
                self._stream.write(text + "\n")
                self._stream.write("".join(self._buffer))
            else:
                self._stream.write(text + "\n")
            self._stream.flush()

    def feed(self, key: str) -> str | None:
        """Apply one keystroke. Returns the submitted line on Enter, else None."""
        if key in SUBMIT_KEYS:
            return self.submit()
        if key in BACKSPACE_KEYS:
            self.backspace()
        elif key and key.isprintable():
            self.insert(key)
        return None

    def insert(self, char: str) -> None:
        with self._lock:
            self._buffer.append(char)
            self._stream.write(char)
            self._stream.flush()

    def backspace(self) -> None:
        with self._lock:
            if not self._buffer:
                return
            self._buffer.pop()
            self._stream.write(CLEAR_LINE + "".join(self._buffer))
            self._stream.flush()

    def submit(self) -> str:
        with self._lock:
            line = "".join(self._buffer)
            self._buffer.clear()
            self._stream.write("\n")
            self._stream.flush()
        return line
