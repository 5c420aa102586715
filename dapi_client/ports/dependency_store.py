"""Port: dependency store contract. The facade and the lifecycle controller depend on this."""
from __future__ import annotations

from typing import Any, Mapping, Protocol

from dapi_client.constants import ClientStatus


class DependencyStore(Protocol):
    """Holds the current dependency bundle and lifecycle status of one client."""

    def get(self) -> Mapping[str, Any]:
        """Latest committed bundle. Never a partially applied write."""
        ...

    def set(self, dependencies: Mapping[str, Any]) -> None: ...

    def update(self, partial: Mapping[str, Any]) -> None: ...

    def get_client(self) -> Any: ...

    def set_client(self, client: Any) -> None: ...

    def status(self) -> ClientStatus: ...

    def advance(self, status: ClientStatus) -> None:
        """Move the lifecycle forward. Backward transitions are rejected."""
        ...
