from unittest.mock import MagicMock, patch

import pytest

from chattally.bot import TallyBot, create_bot
from chattally.config import Settings
from chattally.discord.cogs import AnswerIngress


@pytest.fixture
def settings() -> Settings:
    return Settings(oauth_token="test_token", name="answers")


@pytest.fixture
def mock_app() -> MagicMock:
    return MagicMock()


class TestTallyBot:
    async def test_create_bot(self, settings, mock_app) -> None:
        bot = create_bot(settings, mock_app)

        assert isinstance(bot, TallyBot)
        assert bot.settings == settings
        assert bot.app is mock_app

    async def test_bot_has_message_content_intent(self, settings, mock_app) -> None:
        bot = create_bot(settings, mock_app)

        assert bot.intents.message_content is True

    async def test_setup_hook_adds_ingress_cog(self, settings, mock_app) -> None:
        bot = create_bot(settings, mock_app)

        await bot.setup_hook()

        assert isinstance(bot.get_cog("AnswerIngress"), AnswerIngress)

    async def test_on_error_logs_exception(self, settings, mock_app) -> None:
        bot = create_bot(settings, mock_app)

        with patch("chattally.bot.logger") as mock_logger:
            await bot.on_error("on_message")

        mock_logger.exception.assert_called_once_with("Error in on_message")

    async def test_on_ready_sets_start_time(self, settings, mock_app) -> None:
        bot = create_bot(settings, mock_app)

        await bot.on_ready()

        assert bot.start_time is not None
