"""
Error types for the chat and sheets flows.

Chat-path errors never leave the coordinator: they are folded into an
error turn. Sheets-path errors are only logged.
"""
from typing import Optional

FALLBACK_ERROR_MESSAGE = "Something went wrong!"
ERROR_PREFIX = "Error: "


class ChatWidgetError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ChatWidgetError):
    pass


class TranscriptBusyError(ChatWidgetError):
    """A submission arrived while a reply was still pending."""


class ChatEndpointError(ChatWidgetError):
    """
    A chat request did not produce usable text.

    `message` is what ends up in the transcript after the error prefix.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or FALLBACK_ERROR_MESSAGE
        super().__init__(self.message)

    def display_text(self) -> str:
        return ERROR_PREFIX + self.message


class TransportError(ChatEndpointError):
    """No response was received."""


class EndpointResponseError(ChatEndpointError):
    """The endpoint answered with a non-success status or an error payload."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(ChatEndpointError):
    """The endpoint answered successfully but with no candidate text."""


class RequestTimeoutError(ChatEndpointError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"Request timed out after {timeout:g}s")
        self.timeout = timeout


class SheetsError(Exception):
    """Base class for the spreadsheet bootstrap errors."""


class SheetsInitError(SheetsError):
    pass


class SheetsAuthError(SheetsError):
    pass


class SheetsReadError(SheetsError):
    pass
