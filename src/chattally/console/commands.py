import threading
from typing import Protocol

import structlog

from chattally.console.line_editor import LineEditor
from chattally.services.publisher import Publisher
from chattally.services.tally import TallyStore

logger = structlog.get_logger(__name__)

POLL_INTERVAL_SECONDS = 0.05

USAGE_LINES = (
    "Available commands:",
    "clear - clear message logs",
    "exit - exit the program",
)


class KeySource(Protocol):
    def read_key(self, timeout: float) -> str | None: ...


class CommandConsole:
    def __init__(
        self,
        editor: LineEditor,
        store: TallyStore,
        publisher: Publisher,
        running: threading.Event,
    ) -> None:
        self.editor = editor
        self.store = store
        self.publisher = publisher
        self.running = running

    def run(self, keys: KeySource) -> None:
        """Poll for keystrokes until the running flag is cleared or input ends."""
        while self.running.is_set():
            key = keys.read_key(POLL_INTERVAL_SECONDS)
            if key is None:
                continue
            if key == "":
                logger.warning("Console input closed, commands disabled")
                return
            self.handle_key(key)

    def handle_key(self, key: str) -> None:
        line = self.editor.feed(key)
        # The input lock is released by now; dispatch may take the tally lock.
        if line is not None:
            self.dispatch(line)

    def dispatch(self, line: str) -> None:
        if line == "clear":
            self.publisher.clear()
            logger.info("Cleared message log")
        elif line == "exit":
            logger.info("Exit requested")
            self.running.clear()
        else:
            self.editor.write_line(f"Unknown command: {line}")
            for usage in USAGE_LINES:
                self.editor.write_line(usage)
