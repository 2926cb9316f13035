"""Pydantic models for the Vault provider.

This module defines the client connection settings and the configuration
models of every resource type and data source the provider exposes.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from vault_provider.schema import validate_no_trailing_slash

SUPPORTED_AUTH_METHODS = frozenset({"token", "approle", "kubernetes"})


class VaultConnectionConfig(BaseModel):
    """Configuration for Vault client connections."""

    vault_addr: str = Field(
        ...,
        description="Vault server address (https://...)",
        examples=["https://vault.example.com:8200"],
    )
    auth_method: str = Field(
        default="token",
        description="Authentication method",
        examples=["token"],
    )
    token: Optional[str] = Field(
        default=None,
        description="Vault token (if token auth)",
    )
    role_id: Optional[str] = Field(
        default=None,
        description="AppRole role ID, or the Kubernetes auth role name",
    )
    secret_id: Optional[str] = Field(
        default=None,
        description="AppRole secret ID (if approle)",
    )
    kubernetes_jwt_path: str = Field(
        default="/var/run/secrets/kubernetes.io/serviceaccount/token",
        description="Service account token used for Kubernetes auth",
    )
    namespace: Optional[str] = Field(
        default=None,
        description="Enterprise namespace",
    )
    timeout: int = Field(
        default=30,
        description="Request timeout in seconds",
        ge=1,
        le=300,
    )
    retries: int = Field(
        default=2,
        description="Number of retries on transport failures",
        ge=0,
        le=10,
    )
    verify: bool = Field(
        default=True,
        description="Verify TLS certificates",
    )

    @field_validator("vault_addr")
    @classmethod
    def validate_vault_addr(cls, v: str) -> str:
        """Validate Vault address format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("vault_addr must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("auth_method")
    @classmethod
    def validate_auth_method(cls, v: str) -> str:
        """Validate authentication method."""
        if v not in SUPPORTED_AUTH_METHODS:
            raise ValueError(
                f"Invalid auth_method: {v}. Must be one of {sorted(SUPPORTED_AUTH_METHODS)}"
            )
        return v

    def has_credentials(self) -> bool:
        """Check the configured auth method has the credentials it needs."""
        if self.auth_method == "approle":
            return bool(self.role_id and self.secret_id)
        elif self.auth_method == "token":
            return bool(self.token)
        elif self.auth_method == "kubernetes":
            return True  # Uses the mounted service account token
        return False

    class Config:
        json_schema_extra = {
            "example": {
                "vault_addr": "https://vault.example.com:8200",
                "auth_method": "token",
                "token": "hvs.example",
                "timeout": 30,
                "retries": 2,
            }
        }


class MFALoginEnforcementConfig(BaseModel):
    """Desired state of an MFA login enforcement.

    Optional sets left as ``None`` are absent and never sent to Vault.
    """

    name: str = Field(
        ...,
        description="Name for this login enforcement configuration.",
        min_length=1,
    )
    mfa_method_ids: frozenset[str] = Field(
        ...,
        description=(
            "Array of MFA method UUIDs to use. These will be ORed together, "
            "meaning if several IDs are specified, any one of them is "
            "sufficient to login."
        ),
        min_length=1,
    )
    auth_method_accessors: Optional[frozenset[str]] = Field(
        default=None,
        description=(
            "Array of auth mount accessor IDs. If present, only auth methods "
            "corresponding to the given accessors are checked during login."
        ),
    )
    auth_method_types: Optional[frozenset[str]] = Field(
        default=None,
        description=(
            "Array of auth method types. If present, only auth methods "
            "corresponding to the given types are checked during login."
        ),
    )
    identity_group_ids: Optional[frozenset[str]] = Field(
        default=None,
        description=(
            "Array of identity group IDs. If present, only entities belonging "
            "to one of the given groups are checked during login. Note that "
            "these IDs can be from the current namespace or a child namespace."
        ),
    )
    identity_entity_ids: Optional[frozenset[str]] = Field(
        default=None,
        description=(
            "Array of identity entity IDs. If present, only entities with the "
            "given IDs are checked during login. Note that these IDs can be "
            "from the current namespace or a child namespace."
        ),
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_no_trailing_slash(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "login-enforce-userpass",
                "mfa_method_ids": ["2f3a1e4c-5b6d-7e8f-9a0b-1c2d3e4f5a6b"],
                "auth_method_types": ["userpass"],
            }
        }


class KVSecretListConfig(BaseModel):
    """Input of the KV v1 secret listing data source."""

    path: str = Field(
        ...,
        description="Full KV-V1 path where secrets will be listed.",
        min_length=1,
        examples=["kvv1/app"],
    )


class KVSecretListV2Config(BaseModel):
    """Input of the KV v2 secret listing data source."""

    mount: str = Field(
        ...,
        description="Path where KV-V2 engine is mounted.",
        min_length=1,
        examples=["kvv2"],
    )
    name: Optional[str] = Field(
        default=None,
        description=(
            "Full named path of the secret. For a nested secret, the name "
            "is the nested path excluding the mount and data prefix."
        ),
    )
