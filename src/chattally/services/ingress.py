import structlog

from chattally.services.tally import RecordOutcome, RecordResult, TallyStore

logger = structlog.get_logger(__name__)


class IngressHandler:
    """Feeds inbound chat events into the tally store.

    Holds no state of its own, so any number of transport callbacks may call
    ``handle`` at once.
    """

    def __init__(self, store: TallyStore) -> None:
        self.store = store

    def handle(self, sender: str | None, message: str | None) -> RecordResult | None:
        if sender is None or message is None:
            logger.debug("Dropping incomplete chat event", sender=sender)
            return None

        result = self.store.record(sender, message)

        if result.outcome is RecordOutcome.DUPLICATE:
            logger.info("Ignoring duplicate message", sender=sender)
        elif result.outcome is RecordOutcome.NEW_ANSWER:
            logger.info("Adding answer", sender=sender, message=result.message)

        return result
