"""Resource types managed by the provider."""

from vault_provider.resources.base import Resource, parse_config
from vault_provider.resources.mfa_login_enforcement import MFALoginEnforcementResource

__all__ = [
    "Resource",
    "parse_config",
    "MFALoginEnforcementResource",
]
