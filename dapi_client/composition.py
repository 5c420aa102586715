"""
Composition root: the only place where the store, the lifecycle controller and the
facade are wired together.

create_dapi_client validates the definition, seeds the dependency store, and
registers close/is_healthy/status next to the user commands.
"""
from __future__ import annotations

from typing import Any, Awaitable, Mapping

from loguru import logger

from dapi_client.application.dependency_store import InMemoryDependencyStore
from dapi_client.application.lifecycle import LifecycleController
from dapi_client.config.settings import Settings
from dapi_client.constants import ClientStatus
from dapi_client.core import SERVICE_NAME
from dapi_client.domain.models import DapiDefinition
from dapi_client.domain.validation import validate_definition
from dapi_client.errors import InvalidDefinition
from dapi_client.facade.dapi import Dapi


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class DapiClient(Dapi):
    """Client facade: user commands plus the close/is_healthy/status lifecycle."""

    def close(self, *, delay: float | None = None) -> Awaitable[None] | None:
        """Close the client once; later calls are no-ops.

        Returns an awaitable when the close override is async (or returns one).
        The status is CLOSING as soon as this returns. An `async def` override
        only starts running when the returned coroutine is awaited; until then
        the client stays at CLOSING, so callers must await or schedule it.
        """
        return self.invoke("close", delay=delay)

    def is_healthy(self) -> Awaitable[bool] | bool:
        return self.invoke("is_healthy")

    def status(self) -> ClientStatus:
        return self.invoke("status")


def create_dapi_client(
    definition: DapiDefinition | Mapping[str, Any],
    base: Any = None,
    *,
    settings: Settings | None = None,
) -> DapiClient:
    """Build a client facade from a definition.

    `definition` is a DapiDefinition or a mapping with the keys dependencies,
    fns, type and optionally close and is_healthy. `base` is an existing object
    whose attributes the facade exposes as well.

    Raises InvalidDefinition before anything is built.
    """
    if isinstance(definition, Mapping):
        definition = DapiDefinition.from_mapping(definition)
    elif not isinstance(definition, DapiDefinition):
        raise InvalidDefinition(
            "Definition must be a DapiDefinition or a mapping",
            details={"definition": definition},
        )
    validate_definition(definition)

    _settings = settings or Settings()
    if _settings.log_lifecycle_events:
        logger.enable(SERVICE_NAME)

    store = InMemoryDependencyStore(definition.dependencies)
    lifecycle = LifecycleController(
        store,
        close=definition.close,
        is_healthy=definition.is_healthy,
        default_close_delay=_settings.default_close_delay_seconds,
        client_type=definition.type if isinstance(definition.type, str) else "",
    )
    client = DapiClient(
        type=definition.type,
        fns=definition.fns,
        store=store,
        base=base,
        operations=lifecycle.commands(),
    )
    _log("client_created", client_type=client.type, commands=list(client.commands))
    return client
