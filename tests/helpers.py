"""Shared test doubles."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

CHAT_URL = "https://chat.example.test/v1/generate"
CONTEXT_TEXT = "You are the helpful assistant of Example Corp."


def reply(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class RecordingHandler:
    """MockTransport handler that records requests and replays responses.

    The last response is repeated once the queue runs out.
    """

    def __init__(self, *responses: httpx.Response | Callable[[httpx.Request], Any]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        nxt = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(nxt, httpx.Response):
            return nxt
        return nxt(request)
