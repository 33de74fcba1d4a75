"""
The embeddable chat panel: transcript view plus input.
"""
import logging

from textual import work
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.widget import Widget

from chat_widget.core.coordinator import ResponseCoordinator
from chat_widget.core.errors import TranscriptBusyError
from chat_widget.core.transcript import TranscriptStore
from .chat_log import ChatLog
from .input_area import InputArea

logger = logging.getLogger(__name__)


class ChatWidget(Widget):
    DEFAULT_CSS = """
    ChatWidget {
        height: 1fr;
        border: round $secondary;
    }
    ChatWidget ChatLog {
        height: 1fr;
    }
    """

    def __init__(self, coordinator: ResponseCoordinator, **kwargs) -> None:
        super().__init__(**kwargs)
        self.coordinator = coordinator

    @property
    def store(self) -> TranscriptStore:
        return self.coordinator.store

    def compose(self) -> ComposeResult:
        yield ChatLog(id="chat_log")
        yield InputArea(id="input_text", placeholder="Message...")

    def on_mount(self) -> None:
        self.store.subscribe(self._on_transcript_change)
        self.refresh_transcript()
        self.query_one("#input_text", InputArea).focus()

    def on_unmount(self) -> None:
        self.store.unsubscribe(self._on_transcript_change)

    def _on_transcript_change(self, store: TranscriptStore) -> None:
        self.refresh_transcript()

    def refresh_transcript(self) -> None:
        """Redraw the transcript; a missing view is ignored."""
        try:
            chat_log = self.query_one("#chat_log", ChatLog)
            input_text = self.query_one("#input_text", InputArea)
        except NoMatches:
            return
        chat_log.show_turns(self.store.turns)

        pending = self.store.has_pending
        if input_text.disabled != pending:
            input_text.disabled = pending
            if not pending:
                input_text.focus()

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        message.stop()
        try:
            pending = self.store.submit(message.value)
        except TranscriptBusyError:
            logger.info("submission rejected: reply pending")
            self.notify("Please wait for the current reply.", severity="warning")
            return
        except ValueError:
            return
        self.run_respond(pending.turn_id)

    @work(exclusive=True, group='respond')
    async def run_respond(self, pending_id: int) -> None:
        await self.coordinator.respond(pending_id)
