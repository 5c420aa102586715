"""
Lifecycle controller: OPEN -> CLOSING -> CLOSED for one wrapped client.

close():
  OPEN -> CLOSING happens synchronously, before the close override runs or is
  awaited, so status()/is_healthy() observe CLOSING as soon as close() returns.
  On success -> CLOSED. If the override raises, the error propagates and the
  status stays CLOSING; there is no transition out of a failed close.
  Any call made when the status is not OPEN is a no-op.

is_healthy():
  False whenever the status is not OPEN, without calling the override.

Operations have the command shape (deps, ...) so the facade can register them
next to user commands and apply decorators and hooks to them.
"""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Mapping

from loguru import logger

from dapi_client.constants import ClientStatus
from dapi_client.core import SERVICE_NAME
from dapi_client.core.awaitables import is_async_callable, resolved
from dapi_client.domain.models import CloseFn, CommandFn, IsHealthyFn
from dapi_client.ports.dependency_store import DependencyStore


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class LifecycleController:
    def __init__(
        self,
        store: DependencyStore,
        *,
        close: CloseFn | None = None,
        is_healthy: IsHealthyFn | None = None,
        default_close_delay: float | None = None,
        client_type: str = "",
    ) -> None:
        self._store = store
        self._close_fn = close
        self._is_healthy_fn = is_healthy
        self._default_close_delay = default_close_delay
        self._client_type = client_type
        # Async overrides make the matching operation awaitable in every state.
        self._close_is_async = is_async_callable(close)
        self._is_healthy_is_async = is_async_callable(is_healthy)

    def status(self, deps: Mapping[str, Any] | None = None) -> ClientStatus:
        return self._store.status()

    def close(self, deps: Mapping[str, Any], *, delay: float | None = None) -> Awaitable[None] | None:
        if self._store.status() is not ClientStatus.OPEN:
            return resolved(None) if self._close_is_async else None

        self._store.advance(ClientStatus.CLOSING)
        if delay is None:
            delay = self._default_close_delay
        _log("client_closing", client_type=self._client_type, delay=delay)

        if self._close_fn is None:
            self._mark_closed()
            return None

        try:
            response = self._close_fn(deps, delay=delay)
        except Exception as exc:
            _log("client_close_failed", client_type=self._client_type, error=str(exc))
            raise

        if inspect.isawaitable(response):
            return self._finish_close(response)

        self._mark_closed()
        return None

    async def _finish_close(self, pending: Awaitable[Any]) -> None:
        try:
            await pending
        except Exception as exc:
            _log("client_close_failed", client_type=self._client_type, error=str(exc))
            raise
        self._mark_closed()

    def _mark_closed(self) -> None:
        self._store.advance(ClientStatus.CLOSED)
        _log("client_closed", client_type=self._client_type)

    def is_healthy(self, deps: Mapping[str, Any]) -> Awaitable[bool] | bool:
        if self._store.status() is not ClientStatus.OPEN:
            return resolved(False) if self._is_healthy_is_async else False

        if self._is_healthy_fn is None:
            return True

        return self._is_healthy_fn(deps)

    def commands(self) -> dict[str, CommandFn]:
        """Lifecycle operations keyed by the name they are exposed under."""
        return {
            "close": self.close,
            "is_healthy": self.is_healthy,
            "status": self.status,
        }
