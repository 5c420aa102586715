"""In-process dependency store.

The bundle and the lifecycle status live in one frozen `ClientState` record.
Every write builds a new record and swaps the reference under a lock, so a
reader sees either the previous record or the next one, never a mix.
"""
from __future__ import annotations

import threading
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Mapping

from loguru import logger

from dapi_client.constants import CLIENT_KEY, STATUS_ORDER, ClientStatus
from dapi_client.core import SERVICE_NAME
from dapi_client.domain.models import ClientState
from dapi_client.domain.validation import check_dependencies, reserved_keys_in
from dapi_client.errors import InvalidArgument


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _freeze(dependencies: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(dependencies))


class InMemoryDependencyStore:
    """DependencyStore implementation keeping the state record in memory."""

    def __init__(self, dependencies: Mapping[str, Any], *, status: ClientStatus = ClientStatus.OPEN) -> None:
        check_dependencies(dependencies, InvalidArgument, missing_message="Dependencies must be defined")
        self._state = ClientState(dependencies=_freeze(dependencies), status=status)
        self._lock = threading.Lock()

    @property
    def state(self) -> ClientState:
        return self._state

    def get(self) -> Mapping[str, Any]:
        return self._state.dependencies

    def set(self, dependencies: Mapping[str, Any]) -> None:
        if dependencies is self._state.dependencies:
            return
        check_dependencies(dependencies, InvalidArgument, missing_message="Dependencies must be defined")
        frozen = _freeze(dependencies)
        with self._lock:
            self._state = replace(self._state, dependencies=frozen)
        _log("dependencies_replaced", keys=sorted(frozen))

    def update(self, partial: Mapping[str, Any]) -> None:
        if not isinstance(partial, Mapping):
            raise InvalidArgument("Partial dependencies must be a mapping", details={"partial": partial})
        reserved = reserved_keys_in(partial)
        if reserved:
            raise InvalidArgument(
                "Dependencies cannot have reserved lifecycle keys",
                details={"partial": partial, "reserved": reserved},
            )
        if CLIENT_KEY in partial and partial[CLIENT_KEY] is None:
            raise InvalidArgument("Client cannot be None", details={"client": None})

        with self._lock:
            merged = {**self._state.dependencies, **partial}
            self._state = replace(self._state, dependencies=MappingProxyType(merged))
        _log("dependencies_updated", keys=sorted(partial))

    def get_client(self) -> Any:
        return self._state.dependencies[CLIENT_KEY]

    def set_client(self, client: Any) -> None:
        if client is None:
            raise InvalidArgument("Client cannot be None", details={"client": client})
        if client is self.get_client():
            return
        self.update({CLIENT_KEY: client})
        _log("client_replaced", client_type=type(client).__name__)

    def status(self) -> ClientStatus:
        return self._state.status

    def advance(self, status: ClientStatus) -> None:
        with self._lock:
            current = self._state.status
            if STATUS_ORDER[status] < STATUS_ORDER[current]:
                raise ValueError(f"cannot move client status from {current.value} back to {status.value}")
            if status is not current:
                self._state = replace(self._state, status=status)
