import asyncio
import threading
import time

import structlog

from chattally.bot import create_bot
from chattally.config import Settings
from chattally.console.commands import POLL_INTERVAL_SECONDS, CommandConsole
from chattally.console.keys import KeyReader
from chattally.console.line_editor import LineEditor
from chattally.services.ingress import IngressHandler
from chattally.services.publisher import PUBLISH_INTERVAL_SECONDS, Publisher
from chattally.services.tally import TallyStore

logger = structlog.get_logger(__name__)


class TallyApp:
    def __init__(self, settings: Settings, editor: LineEditor | None = None) -> None:
        self.settings = settings
        self.running = threading.Event()
        self.running.set()

        self.editor = editor if editor is not None else LineEditor()
        self.store = TallyStore()
        self.ingress = IngressHandler(self.store)
        self.publisher = Publisher(self.store, settings.output_path)
        self.console = CommandConsole(self.editor, self.store, self.publisher, self.running)

    def stop(self) -> None:
        self.running.clear()

    async def supervise(self) -> None:
        """Drive publish ticks until the running flag is cleared."""
        last_publish = time.monotonic()
        while self.running.is_set():
            now = time.monotonic()
            if now - last_publish >= PUBLISH_INTERVAL_SECONDS:
                last_publish = now
                await asyncio.to_thread(self.publisher.publish)
            await asyncio.sleep(POLL_INTERVAL_SECONDS)
        logger.info("Supervisor stopped")

    def start_console(self) -> threading.Thread:
        thread = threading.Thread(
            target=self._run_console,
            name="chattally-console",
            daemon=True,
        )
        thread.start()
        return thread

    def _run_console(self) -> None:
        try:
            reader = KeyReader()
        except (AttributeError, OSError, ValueError) as e:
            # stdin is None or closed.
            logger.warning("Console input unavailable, commands disabled", error=str(e))
            return

        with reader as keys:
            self.console.run(keys)


async def run_app(settings: Settings, editor: LineEditor) -> None:
    app = TallyApp(settings, editor)
    bot = create_bot(settings, app)

    def _on_transport_done(_task: asyncio.Task[None]) -> None:
        if app.running.is_set():
            logger.warning("Chat transport stopped, shutting down")
            app.stop()

    console_thread = app.start_console()
    transport = asyncio.create_task(bot.start(settings.oauth_token))
    transport.add_done_callback(_on_transport_done)

    try:
        await app.supervise()
    finally:
        app.stop()
        await bot.close()
        await asyncio.wait({transport}, timeout=5.0)
        console_thread.join(timeout=1.0)

    if not transport.done():
        transport.cancel()
    elif not transport.cancelled():
        transport.result()
