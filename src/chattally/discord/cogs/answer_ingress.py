from typing import TYPE_CHECKING

import discord
import structlog
from discord.ext import commands

if TYPE_CHECKING:
    from chattally.bot import TallyBot

logger = structlog.get_logger(__name__)


class AnswerIngress(commands.Cog):
    def __init__(self, bot: "TallyBot") -> None:
        self.bot = bot

    def _is_watched_channel(self, channel: object) -> bool:
        return getattr(channel, "name", None) == self.bot.settings.name

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author == self.bot.user:
            return

        if not self._is_watched_channel(message.channel):
            return

        author = message.author.name if message.author else None
        self.bot.app.ingress.handle(author, message.content)


async def setup(bot: "TallyBot") -> None:
    await bot.add_cog(AnswerIngress(bot))
