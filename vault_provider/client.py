"""VaultClient wrapper for HashiCorp Vault.

This module provides the backend collaborator used by every resource and
data source: authenticated logical write/read/delete/list calls against
Vault paths, with transport retries and error translation.
"""

import logging
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Optional

import hvac
from hvac.exceptions import InvalidPath
from hvac.exceptions import VaultError as HvacVaultError
from requests.exceptions import RequestException

from vault_provider.exceptions import BackendError, VaultAuthenticationError
from vault_provider.models import VaultConnectionConfig
from vault_provider.retry import (
    RetryConfiguration,
    RetryExhaustedException,
    with_transport_retry,
)

logger = logging.getLogger(__name__)


class VaultClient:
    """Backend client for the Vault logical API.

    This client provides:
    - Lazy creation of the hvac client and authentication
    - write/read/delete/list against arbitrary logical paths
    - Retries with backoff on transport failures
    - Translation of hvac and requests errors into BackendError

    A read or list of a path Vault does not know returns ``None`` or an empty
    list instead of raising, and deleting an absent path succeeds.

    Example:
        >>> config = VaultConnectionConfig(
        ...     vault_addr="https://vault.example.com:8200",
        ...     token="hvs.example",
        ... )
        >>> with VaultClient(config) as client:
        ...     client.read("identity/mfa/login-enforcement/default")
    """

    def __init__(
        self,
        config: VaultConnectionConfig,
        retry_config: Optional[RetryConfiguration] = None,
    ):
        """Initialize Vault client.

        Args:
            config: Connection configuration
            retry_config: Transport retry behaviour (defaults to config.retries)
        """
        self.config = config
        self.retry_config = retry_config or RetryConfiguration.from_retries(config.retries)
        self._client: Optional[hvac.Client] = None
        self._auth_lock = Lock()
        self._authenticated = False

    def _get_client(self) -> hvac.Client:
        """Get or create the underlying hvac client."""
        if self._client is None:
            with self._auth_lock:
                if self._client is None:
                    self._client = hvac.Client(
                        url=self.config.vault_addr,
                        verify=self.config.verify,
                        timeout=self.config.timeout,
                        namespace=self.config.namespace,
                    )
        return self._client

    def _authenticate(self) -> None:
        """Authenticate with Vault using the configured method."""
        client = self._get_client()

        if self.config.auth_method == "token":
            if not self.config.token:
                raise VaultAuthenticationError("Token authentication requires token")
            client.token = self.config.token

        elif self.config.auth_method == "approle":
            if not self.config.role_id or not self.config.secret_id:
                raise VaultAuthenticationError(
                    "AppRole authentication requires role_id and secret_id"
                )
            try:
                response = client.auth.approle.login(
                    role_id=self.config.role_id,
                    secret_id=self.config.secret_id,
                )
            except (HvacVaultError, RequestException) as e:
                raise VaultAuthenticationError(f"AppRole login failed: {e}") from e
            client.token = self._token_from_login(response, "AppRole")

        elif self.config.auth_method == "kubernetes":
            jwt_path = Path(self.config.kubernetes_jwt_path)
            try:
                jwt = jwt_path.read_text().strip()
            except OSError as e:
                raise VaultAuthenticationError(
                    f"Cannot read Kubernetes service account token: {e}",
                    details={"path": str(jwt_path)},
                ) from e
            try:
                response = client.auth.kubernetes.login(
                    role=self.config.role_id or "default",
                    jwt=jwt,
                )
            except (HvacVaultError, RequestException) as e:
                raise VaultAuthenticationError(f"Kubernetes login failed: {e}") from e
            client.token = self._token_from_login(response, "Kubernetes")

        else:
            raise VaultAuthenticationError(
                f"Unsupported authentication method: {self.config.auth_method}"
            )

        self._authenticated = True
        logger.info(f"Authenticated to Vault at {self.config.vault_addr} using {self.config.auth_method}")

    @staticmethod
    def _token_from_login(response: Any, method: str) -> str:
        if not isinstance(response, dict) or "client_token" not in (response.get("auth") or {}):
            raise VaultAuthenticationError(f"{method} login did not return a token")
        return response["auth"]["client_token"]

    def _ensure_authenticated(self) -> None:
        """Ensure the client is authenticated."""
        if not self._authenticated:
            self._authenticate()

    def _execute(
        self,
        action: str,
        path: str,
        func: Callable[..., Any],
        *args: Any,
        absent_ok: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Run one hvac call with retries and error translation.

        Args:
            action: Verb used in error messages, e.g. "writing to"
            path: Logical path the call targets
            func: hvac callable to invoke
            absent_ok: Return None instead of failing when Vault answers 404

        Raises:
            BackendError: If Vault or the transport reports a failure
        """
        self._ensure_authenticated()
        call = with_transport_retry(self.retry_config)(func)
        try:
            return call(*args, **kwargs)
        except InvalidPath as e:
            if absent_ok:
                logger.debug(f"Path {path} not found in Vault")
                return None
            raise BackendError(
                f"error {action} Vault: {e}", operation=action, path=path
            ) from e
        except RetryExhaustedException as e:
            raise BackendError(
                f"error {action} Vault: {e.last_exception}",
                operation=action,
                path=path,
                details={"attempts": e.attempts},
            ) from e.last_exception
        except (HvacVaultError, RequestException) as e:
            raise BackendError(
                f"error {action} Vault: {e}", operation=action, path=path
            ) from e

    def write(self, path: str, payload: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Write a payload to a logical path.

        Args:
            path: Logical path, e.g. "identity/mfa/login-enforcement/default"
            payload: Request body

        Returns:
            Response body, or None when Vault answered without one
        """
        client = self._get_client()
        response = self._execute("writing to", path, client.write_data, path, data=payload)
        return response if isinstance(response, dict) else None

    def read(self, path: str) -> Optional[dict[str, Any]]:
        """Read a logical path.

        Returns:
            Response body, or None if nothing exists at the path
        """
        client = self._get_client()
        response = self._execute("reading from", path, client.read, path, absent_ok=True)
        return response if isinstance(response, dict) else None

    def delete(self, path: str) -> None:
        """Delete a logical path. Deleting an absent path is not an error."""
        client = self._get_client()
        self._execute("deleting from", path, client.delete, path, absent_ok=True)

    def list(self, path: str) -> list[str]:
        """List the child names under a logical path.

        Names are returned exactly as Vault sends them; children that are
        themselves containers keep their trailing "/".

        Returns:
            Child names, or an empty list if the path does not exist
        """
        client = self._get_client()
        response = self._execute("listing from", path, client.list, path, absent_ok=True)
        if not isinstance(response, dict):
            return []
        return list((response.get("data") or {}).get("keys") or [])

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._client is not None:
            adapter = getattr(self._client, "adapter", None)
            if adapter is not None:
                adapter.close()
            self._client = None
        self._authenticated = False
        logger.debug("Vault client closed")

    def __enter__(self) -> "VaultClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
