"""Domain value objects: the construction definition and the stored client state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Union

from dapi_client.constants import ClientStatus

Dependencies = Mapping[str, Any]
CommandFn = Callable[..., Any]
CloseFn = Callable[..., Union[Awaitable[None], None]]
IsHealthyFn = Callable[[Dependencies], Union[Awaitable[bool], bool]]

_DEFINITION_KEYS = ("dependencies", "fns", "type", "close", "is_healthy")


@dataclass(frozen=True)
class DapiDefinition:
    """Everything needed to build a client facade.

    Fields are typed as Any: values come straight from callers and are checked
    by `validate_definition` before anything is built.
    """

    dependencies: Any
    fns: Any
    type: Any = None
    close: Any = None
    is_healthy: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DapiDefinition":
        values = {key: raw.get(key) for key in _DEFINITION_KEYS}
        if values["is_healthy"] is None and raw.get("isHealthy") is not None:
            values["is_healthy"] = raw["isHealthy"]
        return cls(**values)


@dataclass(frozen=True)
class ClientState:
    """Single record holding the bundle and the lifecycle status; swapped as a whole."""

    dependencies: Dependencies
    status: ClientStatus = field(default=ClientStatus.OPEN)
