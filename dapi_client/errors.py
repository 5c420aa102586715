"""Errors raised by the facade. Failures from user commands propagate untouched."""
from __future__ import annotations

from typing import Any, Mapping


class DapiClientError(Exception):
    """Base for errors raised by dapi_client itself."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details or {})


class InvalidDefinition(DapiClientError, TypeError):
    """Raised at construction when the definition fails validation."""


class InvalidArgument(DapiClientError, TypeError):
    """Raised when replacing dependencies or the client with an invalid value."""
