"""KV secret listing data sources.

Both data sources return child names exactly as Vault lists them: in
Vault's order, with nested containers keeping their trailing "/".
"""

import logging
from typing import Any, Optional

from vault_provider.data_sources.base import DataSource
from vault_provider.models import KVSecretListConfig, KVSecretListV2Config
from vault_provider.schema import STRING, STRING_LIST, FieldSpec

logger = logging.getLogger(__name__)


class KVSecretListDataSource(DataSource):
    """Lists secrets under a KV version 1 path (``vault_kv_secret_list``)."""

    type_name = "vault_kv_secret_list"
    config_model = KVSecretListConfig
    fields = (
        FieldSpec(
            "path",
            STRING,
            required=True,
            description="Full KV-V1 path where secrets will be listed.",
        ),
        FieldSpec(
            "names",
            STRING_LIST,
            computed=True,
            description="List of all secret names.",
        ),
    )

    def fetch(self, config: KVSecretListConfig) -> tuple[str, dict[str, Any]]:
        names = self.client.list(config.path)
        logger.debug(f"Listed {len(names)} secrets under {config.path!r}")
        return config.path, {"path": config.path, "names": names}


class KVSecretListV2DataSource(DataSource):
    """Lists secrets on a KV version 2 mount (``vault_kv_secrets_list_v2``).

    KV v2 keeps its listing under ``<mount>/metadata/``.
    """

    type_name = "vault_kv_secrets_list_v2"
    config_model = KVSecretListV2Config
    fields = (
        FieldSpec(
            "mount",
            STRING,
            required=True,
            description="Path where KV-V2 engine is mounted.",
        ),
        FieldSpec(
            "name",
            STRING,
            description="Full named path of the secret.",
        ),
        FieldSpec(
            "path",
            STRING,
            computed=True,
            description="Full path where the KV-V2 secrets are listed.",
        ),
        FieldSpec(
            "names",
            STRING_LIST,
            computed=True,
            description="List of all secret names.",
        ),
    )

    @staticmethod
    def metadata_path(mount: str, name: Optional[str] = None) -> str:
        path = f"{mount.strip('/')}/metadata"
        if name and name.strip("/"):
            path = f"{path}/{name.strip('/')}"
        return path

    def fetch(self, config: KVSecretListV2Config) -> tuple[str, dict[str, Any]]:
        path = self.metadata_path(config.mount, config.name)
        names = self.client.list(path)
        logger.debug(f"Listed {len(names)} secrets under {path!r}")
        return path, {
            "mount": config.mount,
            "name": config.name,
            "path": path,
            "names": names,
        }
