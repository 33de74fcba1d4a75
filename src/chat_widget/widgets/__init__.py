"""
Textual widgets for the chat panel.
"""
from .input_area import InputArea
from .chat_log import ChatLog
from .chat_widget import ChatWidget

__all__ = ["InputArea", "ChatLog", "ChatWidget"]
