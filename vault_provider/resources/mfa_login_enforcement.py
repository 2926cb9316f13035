"""MFA login enforcement resource.

Manages ``identity/mfa/login-enforcement/<name>``: which MFA methods must be
satisfied at login, scoped by auth mount accessors, auth method types,
identity groups or identity entities.
"""

from vault_provider.models import MFALoginEnforcementConfig
from vault_provider.resources.base import Resource
from vault_provider.schema import STRING, STRING_SET, FieldSpec

_DESCRIPTIONS = MFALoginEnforcementConfig.model_fields


def _describe(name: str) -> str:
    return _DESCRIPTIONS[name].description or ""


class MFALoginEnforcementResource(Resource):
    """Reconciler for ``vault_mfa_login_enforcement``."""

    type_name = "vault_mfa_login_enforcement"
    config_model = MFALoginEnforcementConfig
    path_prefix = "identity/mfa/login-enforcement"

    fields = (
        FieldSpec("name", STRING, required=True, description=_describe("name")),
        FieldSpec(
            "mfa_method_ids",
            STRING_SET,
            required=True,
            description=_describe("mfa_method_ids"),
        ),
        FieldSpec(
            "auth_method_accessors",
            STRING_SET,
            description=_describe("auth_method_accessors"),
        ),
        FieldSpec(
            "auth_method_types",
            STRING_SET,
            description=_describe("auth_method_types"),
        ),
        FieldSpec(
            "identity_group_ids",
            STRING_SET,
            description=_describe("identity_group_ids"),
        ),
        FieldSpec(
            "identity_entity_ids",
            STRING_SET,
            description=_describe("identity_entity_ids"),
        ),
    )

    qualifying_fields = (
        "auth_method_accessors",
        "auth_method_types",
        "identity_group_ids",
        "identity_entity_ids",
    )
