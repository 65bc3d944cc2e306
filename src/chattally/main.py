import asyncio
import logging
import sys

import structlog

from chattally.config import ConfigError, load_settings
from chattally.console.line_editor import LineEditor
from chattally.console.log_output import ConsoleHandler, ConsoleLoggerFactory
from chattally.runtime import run_app


def configure_logging(log_level: str, editor: LineEditor) -> None:
    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=ConsoleLoggerFactory(editor),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(name)s: %(message)s",
        level=level,
        handlers=[ConsoleHandler(editor)],
        force=True,
    )

    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.http").setLevel(logging.WARNING)


def main() -> None:
    editor = LineEditor()

    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging("INFO", editor)
        structlog.get_logger().error("Invalid Config", error=str(e))
        sys.exit(1)

    configure_logging(settings.log_level, editor)

    logger = structlog.get_logger()
    logger.info("Starting chattally", channel=settings.name, output=str(settings.output_path))

    try:
        asyncio.run(run_app(settings, editor))
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
