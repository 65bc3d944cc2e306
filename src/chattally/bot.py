from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import discord
import structlog
from discord.ext import commands

from chattally.config import Settings

if TYPE_CHECKING:
    from chattally.runtime import TallyApp

logger = structlog.get_logger(__name__)


class TallyBot(commands.Bot):
    def __init__(self, settings: Settings, app: "TallyApp") -> None:
        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.settings = settings
        self.app = app
        self.start_time: datetime | None = None

    async def setup_hook(self) -> None:
        from chattally.discord.cogs import AnswerIngress

        await self.add_cog(AnswerIngress(self))
        logger.info("Bot setup complete", channel=self.settings.name)

    async def on_ready(self) -> None:
        self.start_time = datetime.now(UTC)
        logger.info(f"Logged in as {self.user} (ID: {self.user.id if self.user else 'Unknown'})")

    async def on_error(self, event_method: str, *_args: Any, **_kwargs: Any) -> None:
        logger.exception(f"Error in {event_method}")


def create_bot(settings: Settings, app: "TallyApp") -> TallyBot:
    return TallyBot(settings, app)
