"""Integration: a real httpx.AsyncClient wrapped by the facade, served by MockTransport."""
from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from dapi_client import ClientStatus, create_dapi_client

BASE_URL = "http://inventory.test"


def _handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"path": request.url.path, "host": request.url.host})


async def fetch_json(deps: Any, path: str) -> dict[str, Any]:
    response = await deps["client"].get(path, headers=deps["headers"])
    response.raise_for_status()
    return response.json()


async def close_http_client(deps: Any, *, delay: float | None = None) -> None:
    if delay:
        await asyncio.sleep(delay)
    await deps["client"].aclose()


async def http_client_is_healthy(deps: Any) -> bool:
    return not deps["client"].is_closed


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(_handler))


def _definition(http: httpx.AsyncClient) -> dict[str, Any]:
    return {
        "dependencies": {"client": http, "headers": {"User-Agent": "dapi-client-tests"}},
        "fns": {"fetch_json": fetch_json},
        "type": "inventory-http",
        "close": close_http_client,
        "is_healthy": http_client_is_healthy,
    }


@pytest.mark.asyncio
async def test_httpx_client_full_lifecycle():
    http = _http_client()
    client = create_dapi_client(_definition(http))

    assert await client.is_healthy() is True
    assert await client.fetch_json("/items") == {"path": "/items", "host": "inventory.test"}

    pending = client.close(delay=0.02)
    assert client.status() is ClientStatus.CLOSING
    assert await client.is_healthy() is False
    assert http.is_closed is False

    await pending

    assert http.is_closed is True
    assert client.status() is ClientStatus.CLOSED
    assert await client.is_healthy() is False


@pytest.mark.asyncio
async def test_commands_after_close_fail_in_the_client():
    http = _http_client()
    client = create_dapi_client(_definition(http))

    await client.close()

    with pytest.raises(RuntimeError):
        await client.fetch_json("/items")


@pytest.mark.asyncio
async def test_swapped_client_is_used_and_closed():
    original = _http_client()
    replacement = _http_client()
    client = create_dapi_client(_definition(original))

    client.set_client(replacement)
    await original.aclose()

    assert await client.is_healthy() is True
    assert (await client.fetch_json("/swapped"))["path"] == "/swapped"

    await client.close()

    assert replacement.is_closed is True
    assert client.status() is ClientStatus.CLOSED
