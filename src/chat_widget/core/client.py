"""
HTTP client for the remote chat endpoint.
"""
import asyncio
import logging
from typing import Any, Optional

import httpx

from chat_widget.core.domain import ChatRequest, ChatResponse
from chat_widget.core.errors import (
    ConfigurationError,
    EmptyResultError,
    EndpointResponseError,
    RequestTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _error_message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        err = data.get('error')
        if isinstance(err, dict) and isinstance(err.get('message'), str):
            return err['message'] or None
    return None


def _first_text(data: ChatResponse) -> Optional[str]:
    candidates = data.get('candidates') or []
    if not candidates:
        return None
    parts = (candidates[0].get('content') or {}).get('parts') or []
    if not parts:
        return None
    text = parts[0].get('text')
    return text if isinstance(text, str) else None


class ChatEndpointClient:
    """
    Posts the projected history and returns the first candidate's text.

    Every failure is raised as a ChatEndpointError subclass.
    """

    def __init__(
        self,
        url: Optional[str],
        api_key: Optional[str],
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key or ''}",
            "Content-Type": "application/json",
        }

    async def generate(self, request: ChatRequest) -> str:
        if not self.url:
            raise ConfigurationError("CHAT_API_URL is not set")

        client = self._get_client()
        try:
            resp = await asyncio.wait_for(
                client.post(self.url, headers=self._headers(), json=request),
                self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RequestTimeoutError(self.timeout) from exc
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.is_success:
            raise EndpointResponseError(_error_message(data), status_code=resp.status_code)
        if not isinstance(data, dict):
            raise EmptyResultError()
        if (message := _error_message(data)) is not None:
            raise EndpointResponseError(message, status_code=resp.status_code)

        text = _first_text(data)
        if text is None:
            raise EmptyResultError()
        logger.debug("chat endpoint answered %d chars", len(text))
        return text

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ChatEndpointClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
