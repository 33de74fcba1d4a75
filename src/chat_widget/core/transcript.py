"""
Transcript store: the ordered list of turns the widget renders and sends.
"""
import logging
from typing import Callable, Iterator, List, Optional, Tuple

from chat_widget.core.errors import TranscriptBusyError
from chat_widget.models import Turn, placeholder

logger = logging.getLogger(__name__)

Listener = Callable[["TranscriptStore"], None]

_ROLES = ('user', 'model')


class TranscriptStore:
    """
    Single source of truth for the conversation.

    The first turn is always the hidden context turn. At most one pending
    placeholder exists at a time: `submit` refuses new input until the
    outstanding one has been replaced.
    """

    def __init__(self, context_text: str) -> None:
        self.next_turn_id = 1
        self._turns: List[Turn] = []
        self._listeners: List[Listener] = []
        self.append(Turn(role='model', text=context_text, hide_in_chat=True))

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def visible_turns(self) -> List[Turn]:
        return [t for t in self._turns if t.visible]

    @property
    def pending(self) -> Optional[Turn]:
        for turn in self._turns:
            if turn.is_pending:
                return turn
        return None

    @property
    def has_pending(self) -> bool:
        return self.pending is not None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, turn: Turn) -> Turn:
        if turn.role not in _ROLES:
            raise ValueError(f"unknown role: {turn.role!r}")
        if not isinstance(turn.text, str):
            raise ValueError("turn text must be a string")

        turn.turn_id = self.next_turn_id
        self.next_turn_id += 1
        self._turns.append(turn)
        self._notify()
        return turn

    def submit(self, text: str) -> Turn:
        """
        Append a user turn plus a pending placeholder and return the placeholder.
        """
        text = text.strip()
        if not text:
            raise ValueError("empty message")
        if self.has_pending:
            raise TranscriptBusyError("a reply is still pending")

        self.append(Turn(role='user', text=text))
        return self.append(placeholder())

    def replace_pending(self, resolved: Turn, pending_id: Optional[int] = None) -> Turn:
        """
        Drop the pending placeholder and append `resolved` in its place.

        With `pending_id` only that placeholder is removed, otherwise every
        pending turn is.
        """
        self._turns = [
            t for t in self._turns
            if not (t.is_pending and (pending_id is None or t.turn_id == pending_id))
        ]
        resolved.status = 'final'
        return self.append(resolved)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("transcript listener failed")
