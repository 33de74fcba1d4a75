import re

_BOLD = re.compile(r"\*\*(.*?)\*\*")


def strip_bold(text: str) -> str:
    """'**text**' -> 'text', shortest match first."""
    return _BOLD.sub(r"\1", text)


def clean_reply(text: str) -> str:
    return strip_bold(text).strip()
