from chattally.services.ingress import IngressHandler
from chattally.services.publisher import Publisher, format_report
from chattally.services.tally import RecordOutcome, RecordResult, TallyStore

__all__ = [
    "IngressHandler",
    "Publisher",
    "RecordOutcome",
    "RecordResult",
    "TallyStore",
    "format_report",
]
