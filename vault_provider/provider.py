"""Provider entry point.

The provider owns a configured :class:`VaultClient` and hands it to the
resource and data source implementations it registers. Callers drive the
lifecycle through the methods below, one backend round-trip per call.
"""

import logging
from typing import Any, Optional

from vault_provider.client import VaultClient
from vault_provider.data_sources import (
    DataSource,
    KVSecretListDataSource,
    KVSecretListV2DataSource,
)
from vault_provider.exceptions import ValidationError
from vault_provider.models import VaultConnectionConfig
from vault_provider.resources import MFALoginEnforcementResource, Resource
from vault_provider.resources.base import ConfigInput
from vault_provider.state import ResourceState

logger = logging.getLogger(__name__)

RESOURCES: dict[str, type[Resource]] = {
    MFALoginEnforcementResource.type_name: MFALoginEnforcementResource,
}

DATA_SOURCES: dict[str, type[DataSource]] = {
    KVSecretListDataSource.type_name: KVSecretListDataSource,
    KVSecretListV2DataSource.type_name: KVSecretListV2DataSource,
}


class Provider:
    """Vault provider bound to one backend client.

    Example:
        >>> provider = Provider.from_config(
        ...     VaultConnectionConfig(vault_addr="http://127.0.0.1:8200", token="root")
        ... )
        >>> state = provider.apply("vault_mfa_login_enforcement", {
        ...     "name": "default",
        ...     "mfa_method_ids": ["..."],
        ...     "auth_method_types": ["userpass"],
        ... })
    """

    def __init__(self, client: VaultClient):
        self.client = client

    @classmethod
    def from_config(cls, config: VaultConnectionConfig) -> "Provider":
        return cls(VaultClient(config))

    def resource(self, type_name: str) -> Resource:
        """Return the resource implementation registered for a type."""
        try:
            resource_cls = RESOURCES[type_name]
        except KeyError:
            raise ValidationError(
                f"Unknown resource type: {type_name}",
                details={"known": sorted(RESOURCES)},
            ) from None
        return resource_cls(self.client)

    def data_source(self, type_name: str) -> DataSource:
        """Return the data source implementation registered for a type."""
        try:
            data_source_cls = DATA_SOURCES[type_name]
        except KeyError:
            raise ValidationError(
                f"Unknown data source type: {type_name}",
                details={"known": sorted(DATA_SOURCES)},
            ) from None
        return data_source_cls(self.client)

    def apply(
        self,
        type_name: str,
        config: ConfigInput,
        prior: Optional[ResourceState] = None,
    ) -> ResourceState:
        """Converge an instance on its desired configuration.

        ``prior`` is the last known state; a missing or absent prior state
        means the instance is created, otherwise it is updated in place.
        """
        resource = self.resource(type_name)
        if prior is not None and prior.exists:
            state = resource.update(config)
        else:
            state = resource.create(config)
        logger.info(f"Applied {type_name} '{state.id}'")
        return state

    def refresh(self, type_name: str, identifier: str) -> ResourceState:
        return self.resource(type_name).read(identifier)

    def destroy(self, type_name: str, identifier: str) -> None:
        self.resource(type_name).delete(identifier)
        logger.info(f"Destroyed {type_name} '{identifier}'")

    def import_resource(self, type_name: str, identifier: str) -> ResourceState:
        return self.resource(type_name).import_state(identifier)

    def read_data_source(self, type_name: str, config: ConfigInput) -> ResourceState:
        return self.data_source(type_name).read(config)

    @staticmethod
    def schema() -> dict[str, Any]:
        """Describe every resource and data source the provider exposes."""
        return {
            "resources": {name: cls.schema() for name, cls in sorted(RESOURCES.items())},
            "data_sources": {name: cls.schema() for name, cls in sorted(DATA_SOURCES.items())},
        }

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Provider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
