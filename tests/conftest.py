from __future__ import annotations

import asyncio
from typing import Any

import pytest

from dapi_client import DapiDefinition


class FakeClient:
    """Stands in for a driver handle; records calls and tracks whether it was closed."""

    def __init__(self, name: str = "fake") -> None:
        self.name = name
        self.calls: list[str] = []
        self.closed = False

    def method1(self) -> str:
        self.calls.append("method1")
        return f"{self.name}.method1"

    def close(self) -> None:
        self.closed = True


class RecordingClose:
    """Async close override. Records (deps, delay) per call, sleeps for delay, closes the client."""

    def __init__(self, *, raise_on_close: Exception | None = None) -> None:
        self.calls: list[tuple[Any, float | None]] = []
        self._raise_on_close = raise_on_close

    async def __call__(self, deps: Any, *, delay: float | None = None) -> None:
        self.calls.append((deps, delay))
        await asyncio.sleep(delay or 0)
        if self._raise_on_close is not None:
            raise self._raise_on_close
        deps["client"].close()


class RecordingHealthCheck:
    """Sync is_healthy override with a fixed answer."""

    def __init__(self, healthy: bool = True) -> None:
        self.healthy = healthy
        self.calls: list[Any] = []

    def __call__(self, deps: Any) -> bool:
        self.calls.append(deps)
        return self.healthy


def command1(deps: Any) -> str:
    return deps["client"].method1()


def command2(deps: Any, a1: Any = None, a2: Any = None) -> tuple[Any, Any, Any]:
    return deps, a1, a2


async def command3(deps: Any) -> str:
    await asyncio.sleep(0)
    return deps["client"].method1()


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def dependencies(fake_client: FakeClient) -> dict[str, Any]:
    return {"client": fake_client, "opts": {"foo": "bar"}}


@pytest.fixture()
def fns() -> dict[str, Any]:
    return {"command1": command1, "command2": command2, "command3": command3}


@pytest.fixture()
def definition(dependencies: dict[str, Any], fns: dict[str, Any]) -> DapiDefinition:
    return DapiDefinition(dependencies=dependencies, fns=fns, type="test")
