"""Pytest configuration and shared fixtures.

Keeps tests away from real .env files and real credentials, and provides
a chat endpoint faked with httpx.MockTransport.
"""

from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from chat_widget.config import Settings
from chat_widget.core.client import ChatEndpointClient
from chat_widget.core.coordinator import ResponseCoordinator
from chat_widget.core.transcript import TranscriptStore

from helpers import CHAT_URL, CONTEXT_TEXT

_ENV_PREFIXES = ("CHAT_", "AUTH_", "SHEETS_", "SPREADSHEET_", "LOG_LEVEL")


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent Settings from loading a project .env file.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setitem(Settings.model_config, "env_file", None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    for key in list(os.environ.keys()):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Chat endpoint doubles
# =============================================================================


@pytest.fixture
def store() -> TranscriptStore:
    return TranscriptStore(CONTEXT_TEXT)


@pytest.fixture
def make_client() -> Callable[..., ChatEndpointClient]:
    def _make(handler, *, url: str | None = CHAT_URL, api_key: str | None = "secret", timeout: float = 5.0):
        return ChatEndpointClient(url, api_key, timeout=timeout, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def make_coordinator(store, make_client) -> Callable[..., ResponseCoordinator]:
    def _make(handler, **kwargs):
        return ResponseCoordinator(store, make_client(handler, **kwargs))

    return _make
