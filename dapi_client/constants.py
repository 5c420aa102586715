"""Package-level constants shared across modules."""
from __future__ import annotations

from enum import Enum


class ClientStatus(str, Enum):
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


# Forward-only ordering of the lifecycle.
STATUS_ORDER = {
    ClientStatus.OPEN: 0,
    ClientStatus.CLOSING: 1,
    ClientStatus.CLOSED: 2,
}

CLIENT_KEY = "client"

LIFECYCLE_COMMANDS = ("close", "is_healthy", "status")

# Names a dependency bundle may never carry.
RESERVED_DEPENDENCY_KEYS = frozenset(LIFECYCLE_COMMANDS) | {"isHealthy"}
