"""Data sources exposed by the provider."""

from vault_provider.data_sources.base import DataSource
from vault_provider.data_sources.kv_secret_list import (
    KVSecretListDataSource,
    KVSecretListV2DataSource,
)

__all__ = [
    "DataSource",
    "KVSecretListDataSource",
    "KVSecretListV2DataSource",
]
