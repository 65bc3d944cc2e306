import io
import logging
from unittest.mock import AsyncMock, patch

import pytest
import structlog

from chattally.config import ConfigError, Settings
from chattally.console.line_editor import LineEditor
from chattally.console.log_output import ConsoleHandler
from chattally.main import configure_logging, main


@pytest.fixture
def settings() -> Settings:
    return Settings(oauth_token="test_token", name="answers")


class TestMain:
    @patch("chattally.main.configure_logging")
    @patch("chattally.main.load_settings", side_effect=ConfigError("missing"))
    def test_invalid_config_exits(self, _mock_load, _mock_logging) -> None:
        with patch("chattally.main.structlog.get_logger") as mock_get_logger:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        mock_get_logger.return_value.error.assert_called_once_with(
            "Invalid Config", error="missing"
        )

    @patch("chattally.main.run_app", new_callable=AsyncMock)
    @patch("chattally.main.configure_logging")
    @patch("chattally.main.load_settings")
    def test_runs_app(self, mock_load, mock_logging, mock_run_app, settings) -> None:
        mock_load.return_value = settings

        main()

        mock_logging.assert_called_once()
        assert mock_logging.call_args[0][0] == "INFO"
        mock_run_app.assert_awaited_once()
        assert mock_run_app.call_args[0][0] is settings

    @patch("chattally.main.run_app", new_callable=AsyncMock, side_effect=RuntimeError("boom"))
    @patch("chattally.main.configure_logging")
    @patch("chattally.main.load_settings")
    def test_fatal_error_exits(self, mock_load, _mock_logging, _mock_run_app, settings) -> None:
        mock_load.return_value = settings

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        yield
        structlog.reset_defaults()
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("discord").setLevel(logging.NOTSET)
        logging.getLogger("discord.http").setLevel(logging.NOTSET)

    def test_structlog_writes_through_editor(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", LineEditor(stream))

        structlog.get_logger("test").info("Updating output file", answers=2)

        output = stream.getvalue()
        assert "Updating output file" in output
        assert "answers" in output

    def test_level_filters_debug(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", LineEditor(stream))

        structlog.get_logger("test").debug("Dropping incomplete chat event")

        assert stream.getvalue() == ""

    def test_stdlib_routed_and_discord_quieted(self) -> None:
        configure_logging("DEBUG", LineEditor(io.StringIO()))

        assert any(isinstance(h, ConsoleHandler) for h in logging.getLogger().handlers)
        assert logging.getLogger("discord").level == logging.WARNING
