import asyncio
import logging
from typing import Optional

from chat_widget.core.client import ChatEndpointClient
from chat_widget.core.domain import build_request
from chat_widget.core.errors import (
    ERROR_PREFIX,
    FALLBACK_ERROR_MESSAGE,
    ChatEndpointError,
    ChatWidgetError,
)
from chat_widget.core.sanitize import clean_reply
from chat_widget.core.transcript import TranscriptStore
from chat_widget.models import Turn

logger = logging.getLogger(__name__)


class ResponseCoordinator:
    """
    Sends the transcript to the chat endpoint and resolves the placeholder.

    `respond` performs exactly one transcript mutation and never raises:
    failures become a model turn with `is_error=True`.
    """

    def __init__(self, store: TranscriptStore, client: ChatEndpointClient):
        self.store = store
        self.client = client

    async def submit(self, text: str) -> Turn:
        pending = self.store.submit(text)
        return await self.respond(pending.turn_id)

    async def respond(self, pending_id: Optional[int] = None) -> Turn:
        request = build_request(self.store.turns)
        logger.info("requesting reply for %d turns", len(request["contents"]))

        try:
            text = clean_reply(await self.client.generate(request))
        except asyncio.CancelledError:
            self._resolve(ERROR_PREFIX + "Request cancelled", True, pending_id)
            raise
        except ChatEndpointError as exc:
            logger.warning("chat request failed: %s", exc.message)
            return self._resolve(exc.display_text(), True, pending_id)
        except ChatWidgetError as exc:
            logger.warning("chat request failed: %s", exc)
            return self._resolve(ERROR_PREFIX + (str(exc) or FALLBACK_ERROR_MESSAGE), True, pending_id)
        except Exception:
            logger.exception("unexpected error while requesting reply")
            return self._resolve(ERROR_PREFIX + FALLBACK_ERROR_MESSAGE, True, pending_id)

        return self._resolve(text, False, pending_id)

    def _resolve(self, text: str, is_error: bool, pending_id: Optional[int]) -> Turn:
        resolved = Turn(role='model', text=text, is_error=is_error)
        return self.store.replace_pending(resolved, pending_id)
