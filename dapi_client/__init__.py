"""Lifecycle-managed facades over an external client and a set of pure commands."""
from loguru import logger

from dapi_client.application.dependency_store import InMemoryDependencyStore
from dapi_client.application.lifecycle import LifecycleController
from dapi_client.composition import DapiClient, create_dapi_client
from dapi_client.config.settings import Settings
from dapi_client.constants import ClientStatus
from dapi_client.domain.models import ClientState, DapiDefinition
from dapi_client.domain.validation import validate_definition
from dapi_client.errors import DapiClientError, InvalidArgument, InvalidDefinition
from dapi_client.facade.dapi import Dapi
from dapi_client.ports.dependency_store import DependencyStore

# Library default: silent until the application opts in.
logger.disable(__name__)

__all__ = [
    "ClientState",
    "ClientStatus",
    "Dapi",
    "DapiClient",
    "DapiClientError",
    "DapiDefinition",
    "DependencyStore",
    "InMemoryDependencyStore",
    "InvalidArgument",
    "InvalidDefinition",
    "LifecycleController",
    "Settings",
    "create_dapi_client",
    "validate_definition",
]
