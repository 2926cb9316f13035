"""Dagster resource exposing the Vault provider to pipeline code.

Assets and ops that manage Vault objects declare a ``vault_provider``
resource key and receive a configured :class:`Provider` from it.
"""

import logging
from typing import Optional

from dagster import ConfigurableResource
from pydantic import Field

from vault_provider.config import connection_settings_from_env
from vault_provider.models import VaultConnectionConfig
from vault_provider.provider import Provider
from vault_provider.resources import parse_config

logger = logging.getLogger(__name__)


class VaultProviderResource(ConfigurableResource):
    """Dagster resource building providers bound to one Vault server.

    Example:
        >>> from dagster import Definitions, EnvVar
        >>> defs = Definitions(
        ...     assets=[...],
        ...     resources={
        ...         "vault_provider": VaultProviderResource(
        ...             vault_addr=EnvVar("VAULT_ADDR"),
        ...             token=EnvVar("VAULT_TOKEN"),
        ...         )
        ...     },
        ... )
    """

    vault_addr: Optional[str] = Field(
        default=None,
        description="Vault server address (e.g., 'https://vault.example.com:8200'). Defaults to $VAULT_ADDR.",
    )
    auth_method: Optional[str] = Field(
        default=None,
        description="Authentication method: token, approle or kubernetes. Defaults to $VAULT_AUTH_METHOD, then token.",
    )
    token: Optional[str] = Field(
        default=None,
        description="Vault token (if token auth). Defaults to $VAULT_TOKEN.",
    )
    role_id: Optional[str] = Field(
        default=None,
        description="AppRole role ID, or the Kubernetes auth role name.",
    )
    secret_id: Optional[str] = Field(
        default=None,
        description="AppRole secret ID (if approle auth).",
    )
    kubernetes_jwt_path: Optional[str] = Field(
        default=None,
        description="Service account token file (if kubernetes auth).",
    )
    namespace: Optional[str] = Field(
        default=None,
        description="Enterprise namespace.",
    )
    timeout: Optional[int] = Field(
        default=None,
        description="Request timeout in seconds. Defaults to $VAULT_CLIENT_TIMEOUT, then 30.",
    )
    retries: Optional[int] = Field(
        default=None,
        description="Number of retries on transport failures. Defaults to $VAULT_MAX_RETRIES, then 2.",
    )
    verify: Optional[bool] = Field(
        default=None,
        description="Verify TLS certificates. Defaults to false only if $VAULT_SKIP_VERIFY is set.",
    )

    def to_connection_config(self) -> VaultConnectionConfig:
        """Convert to VaultConnectionConfig for VaultClient.

        Unset fields take their value from the VAULT_* environment.

        Raises:
            ValidationError: If the combined settings are invalid
        """
        overrides = {
            name: value
            for name, value in (
                ("vault_addr", self.vault_addr),
                ("auth_method", self.auth_method),
                ("token", self.token),
                ("role_id", self.role_id),
                ("secret_id", self.secret_id),
                ("kubernetes_jwt_path", self.kubernetes_jwt_path),
                ("namespace", self.namespace),
                ("timeout", self.timeout),
                ("retries", self.retries),
                ("verify", self.verify),
            )
            if value is not None
        }
        return parse_config(VaultConnectionConfig, {**connection_settings_from_env(), **overrides})

    def get_provider(self) -> Provider:
        """Return a provider with its own client for the configured server."""
        config = self.to_connection_config()
        logger.info(f"Building Vault provider for {config.vault_addr}")
        return Provider.from_config(config)
