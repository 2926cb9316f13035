"""Declarative management of HashiCorp Vault objects.

This package maps resource configurations (desired state) onto calls
against Vault's HTTP API and reads the observed state back, including a
VaultClient wrapper, Pydantic models, a provider registry, a Dagster
resource and exceptions.
"""

from vault_provider.client import VaultClient
from vault_provider.data_sources import (
    DataSource,
    KVSecretListDataSource,
    KVSecretListV2DataSource,
)
from vault_provider.exceptions import (
    BackendError,
    ProviderError,
    ResourceNotFoundError,
    ValidationError,
    VaultAuthenticationError,
)
from vault_provider.models import (
    KVSecretListConfig,
    KVSecretListV2Config,
    MFALoginEnforcementConfig,
    VaultConnectionConfig,
)
from vault_provider.provider import DATA_SOURCES, RESOURCES, Provider
from vault_provider.resources import MFALoginEnforcementResource, Resource
from vault_provider.state import ResourceState

__all__ = [
    "VaultClient",
    "DataSource",
    "KVSecretListDataSource",
    "KVSecretListV2DataSource",
    "BackendError",
    "ProviderError",
    "ResourceNotFoundError",
    "ValidationError",
    "VaultAuthenticationError",
    "KVSecretListConfig",
    "KVSecretListV2Config",
    "MFALoginEnforcementConfig",
    "VaultConnectionConfig",
    "DATA_SOURCES",
    "RESOURCES",
    "Provider",
    "MFALoginEnforcementResource",
    "Resource",
    "ResourceState",
]

__version__ = "0.1.0"
