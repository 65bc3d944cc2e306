import enum
import threading
from dataclasses import dataclass

from chattally.utils.text import normalize


class RecordOutcome(enum.Enum):
    DUPLICATE = "duplicate"
    NEW_ANSWER = "new_answer"
    COUNTED = "counted"


@dataclass(frozen=True)
class RecordResult:
    outcome: RecordOutcome
    message: str
    count: int


class TallyStore:
    """Per-sender dedup history and the global answer tally.

    All access goes through the tally lock. Callers must not log or touch the
    console while holding it; ``record`` returns a result to log afterwards.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._history: dict[str, set[str]] = {}
        self._tally: dict[str, int] = {}

    def record(self, sender: str, raw_message: str) -> RecordResult:
        message = normalize(raw_message)

        with self._lock:
            seen = self._history.setdefault(sender, set())
            if message in seen:
                return RecordResult(RecordOutcome.DUPLICATE, message, self._tally[message])

            seen.add(message)
            count = self._tally.get(message, 0) + 1
            self._tally[message] = count

        outcome = RecordOutcome.NEW_ANSWER if count == 1 else RecordOutcome.COUNTED
        return RecordResult(outcome, message, count)

    def top_n(self, n: int) -> list[tuple[str, int]]:
        """Return up to ``n`` (message, count) pairs, highest count first.

        Equal counts keep the order in which the messages were first tallied.
        """
        if n <= 0:
            return []

        with self._lock:
            entries = list(self._tally.items())

        # sorted() is stable with reverse=True, so dict insertion order breaks ties.
        entries.sort(key=lambda entry: entry[1], reverse=True)
        return entries[:n]

    def reset(self) -> None:
        with self._lock:
            self._history.clear()
            self._tally.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tally)
