import os
import os.path

from dotenv import load_dotenv

from vault_provider.models import VaultConnectionConfig

# Load environment variables from the .env file in the repository root
dotenv_path = os.path.join(os.path.dirname(__file__), '..', '.env')
load_dotenv(dotenv_path=dotenv_path)

TRUTHY = ('1', 'true', 'yes', 'on')

# --- Vault connection ---
# Environment variable -> VaultConnectionConfig field
VAULT_SETTINGS = {
    'VAULT_ADDR': 'vault_addr',
    'VAULT_AUTH_METHOD': 'auth_method',
    'VAULT_TOKEN': 'token',
    'VAULT_ROLE_ID': 'role_id',
    'VAULT_SECRET_ID': 'secret_id',
    'VAULT_KUBERNETES_JWT_PATH': 'kubernetes_jwt_path',
    'VAULT_NAMESPACE': 'namespace',
    'VAULT_CLIENT_TIMEOUT': 'timeout',
    'VAULT_MAX_RETRIES': 'retries',
}

VAULT_DEFAULTS = {
    'VAULT_ADDR': 'http://127.0.0.1:8200',
    'VAULT_AUTH_METHOD': 'token',
    'VAULT_CLIENT_TIMEOUT': '30',
    'VAULT_MAX_RETRIES': '2',
}

# --- Acceptance tests ---
TF_ACC = os.environ.get('TF_ACC', '').lower() in TRUTHY

# Path to .env file for configuration
ENV_PATH = dotenv_path


def connection_settings_from_env(environ=None) -> dict:
    """Collect raw connection settings from VAULT_* environment variables.

    Reads ``os.environ`` (including values loaded from .env) unless a mapping
    is given. Missing variables take the built-in defaults; values are left
    as strings for the model to validate.
    """
    env = os.environ if environ is None else environ
    settings = {}
    for name, field in VAULT_SETTINGS.items():
        value = env.get(name, VAULT_DEFAULTS.get(name))
        if value is not None:
            settings[field] = value
    settings['verify'] = env.get('VAULT_SKIP_VERIFY', '').lower() not in TRUTHY
    return settings


def connection_config_from_env(environ=None) -> VaultConnectionConfig:
    """Build validated connection settings from VAULT_* environment variables.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    return VaultConnectionConfig(**connection_settings_from_env(environ))
