"""
Chat widget demo app.
"""

import logging
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.logging import TextualHandler

from chat_widget.config import Settings
from chat_widget.context import load_context
from chat_widget.core.client import ChatEndpointClient
from chat_widget.core.coordinator import ResponseCoordinator
from chat_widget.core.transcript import TranscriptStore
from chat_widget.sheets import SheetsBootstrap
from chat_widget.widgets import ChatWidget

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to the Textual devtools console."""
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[TextualHandler()], force=True)


def build_coordinator(settings: Settings) -> ResponseCoordinator:
    store = TranscriptStore(load_context(settings.context_file))
    client = ChatEndpointClient(settings.chat_api_url, settings.chat_api_key, timeout=settings.chat_timeout)
    return ResponseCoordinator(store, client)


class ChatApp(App):
    TITLE = "Chatbot"
    BINDINGS = [
        ("ctrl+t", "toggle_chat", "Toggle chat"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        coordinator: Optional[ResponseCoordinator] = None,
        bootstrap: Optional[SheetsBootstrap] = None,
    ):
        """
        Args:
            settings: runtime settings, read from the environment when omitted
            coordinator: chat coordinator, built from `settings` when omitted
            bootstrap: startup spreadsheet read, built from `settings` when omitted
        """
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.coordinator = coordinator or build_coordinator(self.settings)
        self.bootstrap = bootstrap or SheetsBootstrap(self.settings)

    def compose(self) -> ComposeResult:
        yield ChatWidget(self.coordinator, id="chatbot")

    def on_mount(self) -> None:
        if self.settings.sheets_enabled:
            self._sheets_flow()

    async def on_unmount(self) -> None:
        await self.coordinator.client.aclose()

    @work(exclusive=True, group="sheets")
    async def _sheets_flow(self) -> None:
        await self.bootstrap.run()

    def action_toggle_chat(self) -> None:
        chat = self.query_one("#chatbot", ChatWidget)
        chat.display = not chat.display
        if chat.display:
            chat.query_one("#input_text").focus()


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = ChatApp(settings)
    app.run()


if __name__ == "__main__":
    main()
