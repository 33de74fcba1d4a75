"""
Data models for the chat widget.
"""
from .turn import PLACEHOLDER_TEXT, Role, Status, Turn, placeholder

__all__ = ["PLACEHOLDER_TEXT", "Role", "Status", "Turn", "placeholder"]
