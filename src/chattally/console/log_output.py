import logging
from typing import Any

from chattally.console.line_editor import LineEditor


class ConsoleLogger:
    """structlog logger that prints rendered events through the line editor."""

    def __init__(self, editor: LineEditor) -> None:
        self._editor = editor

    def msg(self, message: str) -> None:
        self._editor.write_line(message)

    log = debug = info = warn = warning = msg
    error = critical = exception = fatal = failure = msg


class ConsoleLoggerFactory:
    def __init__(self, editor: LineEditor) -> None:
        self._editor = editor

    def __call__(self, *args: Any) -> ConsoleLogger:
        return ConsoleLogger(self._editor)


class ConsoleHandler(logging.Handler):
    """Routes stdlib log records (discord.py and friends) through the line editor."""

    def __init__(self, editor: LineEditor, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._editor = editor

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._editor.write_line(self.format(record))
        except Exception:
            self.handleError(record)
