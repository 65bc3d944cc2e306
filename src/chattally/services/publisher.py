import threading
from pathlib import Path

import structlog

from chattally.services.tally import TallyStore

logger = structlog.get_logger(__name__)

PUBLISH_INTERVAL_SECONDS = 5.0
TOP_ANSWERS = 3
REPORT_HEADER = "Answers:"
LINE_ENDING = "\r\n"


def format_report(entries: list[tuple[str, int]]) -> str:
    lines = [REPORT_HEADER] + [f"{message}({count})" for message, count in entries]
    return "".join(line + LINE_ENDING for line in lines)


class Publisher:
    """Writes the current top answers to the output file.

    The sink lock covers snapshot-then-write and reset-then-blank, so a clear
    can never be overwritten by a tick that snapshotted before it. Lock order
    is sink lock, then tally lock; the tally lock is only held for the copy,
    so ingress is never stalled by file I/O. Nothing logs while the sink lock
    is held.
    """

    def __init__(self, store: TallyStore, output_path: Path, top_n: int = TOP_ANSWERS) -> None:
        self.store = store
        self.output_path = output_path
        self.top_n = top_n
        self._sink_lock = threading.Lock()

    def publish(self) -> bool:
        with self._sink_lock:
            entries = self.store.top_n(self.top_n)
            if not entries:
                return False
            error = self._write(format_report(entries))

        if error is not None:
            self._log_write_error(error)
            return False

        logger.info("Updating output file", path=str(self.output_path), answers=len(entries))
        return True

    def clear(self) -> bool:
        """Reset the tally and blank the output file as one step."""
        with self._sink_lock:
            self.store.reset()
            error = self._write(REPORT_HEADER)

        if error is not None:
            self._log_write_error(error)
            return False
        return True

    def _write(self, content: str) -> OSError | None:
        try:
            self.output_path.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            return e
        return None

    def _log_write_error(self, error: OSError) -> None:
        logger.error(
            "Failed to write output file",
            path=str(self.output_path),
            error=str(error),
        )
