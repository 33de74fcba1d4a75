"""Chat endpoint client: request shape and failure classification."""

import asyncio

import httpx
import pytest

from chat_widget.core.errors import (
    FALLBACK_ERROR_MESSAGE,
    ConfigurationError,
    EmptyResultError,
    EndpointResponseError,
    RequestTimeoutError,
    TransportError,
)

from helpers import CHAT_URL, RecordingHandler, reply

CONTENTS = [{"role": "user", "parts": [{"text": "hi"}]}]
REQUEST = {"contents": CONTENTS}


@pytest.mark.asyncio
async def test_posts_contents_with_bearer_auth(make_client):
    handler = RecordingHandler(httpx.Response(200, json=reply("hello")))
    client = make_client(handler)

    assert await client.generate(REQUEST) == "hello"

    (request,) = handler.requests
    assert request.method == "POST"
    assert str(request.url) == CHAT_URL
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Content-Type"] == "application/json"
    assert handler.bodies == [{"contents": CONTENTS}]
    await client.aclose()


@pytest.mark.asyncio
async def test_http_error_uses_endpoint_message(make_client):
    handler = RecordingHandler(httpx.Response(429, json={"error": {"message": "quota exceeded"}}))
    async with make_client(handler) as client:
        with pytest.raises(EndpointResponseError) as exc_info:
            await client.generate(REQUEST)

    assert exc_info.value.message == "quota exceeded"
    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_http_error_without_json_body_uses_fallback(make_client):
    handler = RecordingHandler(httpx.Response(502, text="<html>bad gateway</html>"))
    async with make_client(handler) as client:
        with pytest.raises(EndpointResponseError) as exc_info:
            await client.generate(REQUEST)

    assert exc_info.value.message == FALLBACK_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_embedded_error_on_success_status(make_client):
    handler = RecordingHandler(httpx.Response(200, json={"error": {"message": "blocked"}}))
    async with make_client(handler) as client:
        with pytest.raises(EndpointResponseError, match="blocked"):
            await client.generate(REQUEST)


@pytest.mark.parametrize(
    "body",
    [
        {"candidates": []},
        {},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        ["not", "an", "object"],
    ],
)
@pytest.mark.asyncio
async def test_missing_candidate_text_is_empty_result(make_client, body):
    handler = RecordingHandler(httpx.Response(200, json=body))
    async with make_client(handler) as client:
        with pytest.raises(EmptyResultError) as exc_info:
            await client.generate(REQUEST)

    assert exc_info.value.message == FALLBACK_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error(make_client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(refuse) as client:
        with pytest.raises(TransportError, match="connection refused"):
            await client.generate(REQUEST)


@pytest.mark.asyncio
async def test_slow_endpoint_times_out(make_client):
    async def stall(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=reply("late"))

    async with make_client(stall, timeout=0.05) as client:
        with pytest.raises(RequestTimeoutError) as exc_info:
            await client.generate(REQUEST)

    assert exc_info.value.timeout == 0.05
    assert "timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_url_fails_before_any_request(make_client):
    handler = RecordingHandler(httpx.Response(200, json=reply("unused")))
    async with make_client(handler, url=None) as client:
        with pytest.raises(ConfigurationError):
            await client.generate(REQUEST)

    assert handler.requests == []
