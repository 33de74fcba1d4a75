"""
Data models for the chat widget.
"""
from dataclasses import dataclass
from typing import Literal

Role = Literal['user', 'model']
Status = Literal['final', 'pending']

PLACEHOLDER_TEXT = "Thinking..."


@dataclass
class Turn:
    """
    Represents a single message in the conversation transcript.

    `hide_in_chat` marks the synthetic context turn: it is sent with every
    request but never rendered. `status` is 'pending' only for the
    placeholder shown while a reply is outstanding.
    """
    role: Role
    text: str
    hide_in_chat: bool = False
    is_error: bool = False
    status: Status = 'final'
    turn_id: int = 0

    @property
    def is_pending(self) -> bool:
        return self.status == 'pending'

    @property
    def visible(self) -> bool:
        return not self.hide_in_chat


def placeholder() -> Turn:
    return Turn(role='model', text=PLACEHOLDER_TEXT, status='pending')
