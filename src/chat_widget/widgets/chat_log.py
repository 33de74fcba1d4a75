"""
Transcript view.
"""
from typing import Iterable, List

from rich.markup import escape
from textual.widgets import RichLog

from chat_widget.models import Turn

GREETING = "Hey there!\nHow can I help you today?"


def format_turn(turn: Turn) -> str:
    text = escape(turn.text)
    if turn.role == 'user':
        return f"[dim]you: {text}[/dim]"
    if turn.is_pending:
        return f"[italic]bot: {text}[/italic]"
    if turn.is_error:
        return f"[red]bot: {text}[/red]"
    return f"bot: {text}"


class ChatLog(RichLog):
    """Renders the greeting followed by every visible turn."""

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("markup", True)
        kwargs.setdefault("wrap", True)
        super().__init__(**kwargs)
        self.rendered_turns: List[Turn] = []

    def show_turns(self, turns: Iterable[Turn]) -> None:
        self.clear()
        self.write(f"[bold]bot: {escape(GREETING)}[/bold]")
        self.rendered_turns = [t for t in turns if t.visible]
        for turn in self.rendered_turns:
            self.write(format_turn(turn))
        self.scroll_end(animate=True)
