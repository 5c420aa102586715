"""Validation of client definitions and dependency bundles. Inspection only, no side effects."""
from __future__ import annotations

from typing import Any, Callable, Mapping

from dapi_client.constants import CLIENT_KEY, RESERVED_DEPENDENCY_KEYS
from dapi_client.domain.models import DapiDefinition
from dapi_client.errors import DapiClientError, InvalidDefinition


def reserved_keys_in(dependencies: Mapping[str, Any]) -> list[str]:
    return sorted(key for key in dependencies if key in RESERVED_DEPENDENCY_KEYS)


def check_dependencies(
    dependencies: Any,
    error: Callable[..., DapiClientError],
    *,
    missing_message: str,
) -> None:
    """Raise `error` unless dependencies is a mapping with a client and no reserved keys."""
    if dependencies is None:
        raise error(missing_message, details={"dependencies": dependencies})
    if not isinstance(dependencies, Mapping):
        raise error("Dependencies must be a mapping", details={"dependencies": dependencies})

    reserved = reserved_keys_in(dependencies)
    if reserved:
        raise error(
            "Dependencies cannot have "
            + ", ".join(f"`{key}`" for key in reserved)
            + " keys. Please remove them from the dependencies mapping.",
            details={"dependencies": dependencies, "reserved": reserved},
        )

    if dependencies.get(CLIENT_KEY) is None:
        raise error("Dependencies must have a client", details={"dependencies": dependencies})


def validate_definition(definition: DapiDefinition) -> None:
    """Gate run before building a client facade; raises InvalidDefinition."""
    if definition.close is not None and not callable(definition.close):
        raise InvalidDefinition("close must be a function", details={"close": definition.close})

    if definition.is_healthy is not None and not callable(definition.is_healthy):
        raise InvalidDefinition(
            "is_healthy must be a function",
            details={"is_healthy": definition.is_healthy},
        )

    check_dependencies(
        definition.dependencies,
        InvalidDefinition,
        missing_message="Definition must have dependencies",
    )

    fns = definition.fns
    if not isinstance(fns, Mapping):
        raise InvalidDefinition(
            "Definition must have a dictionary (`fns`) of Dapi functions",
            details={"fns": fns},
        )
    bad_names = [name for name in fns if not isinstance(name, str)]
    if bad_names:
        raise InvalidDefinition("Command names must be strings", details={"names": bad_names})
    not_callable = sorted(name for name, fn in fns.items() if not callable(fn))
    if not_callable:
        raise InvalidDefinition(
            "Definition's fns dictionary must only contain functions",
            details={"fns": fns, "not_callable": not_callable},
        )
