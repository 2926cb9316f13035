"""Read-only projections of Vault state."""

import logging
from typing import Any, ClassVar

from pydantic import BaseModel

from vault_provider.client import VaultClient
from vault_provider.resources.base import ConfigInput, parse_config
from vault_provider.schema import FieldSpec, describe
from vault_provider.state import ResourceState

logger = logging.getLogger(__name__)


class DataSource:
    """Base class for data sources.

    A data source has a single operation, :meth:`read`, recomputed from
    Vault on every call. Subclasses implement :meth:`fetch`.
    """

    type_name: ClassVar[str] = ""
    config_model: ClassVar[type[BaseModel]]
    fields: ClassVar[tuple[FieldSpec, ...]] = ()

    def __init__(self, client: VaultClient):
        self.client = client

    @classmethod
    def schema(cls) -> dict[str, Any]:
        return {"kind": "data_source", "importable": False, "attributes": describe(cls.fields)}

    def fetch(self, config: BaseModel) -> tuple[str, dict[str, Any]]:
        """Return the state id and values for a validated configuration."""
        raise NotImplementedError

    def read(self, config: ConfigInput) -> ResourceState:
        """Read the data source.

        Raises:
            ValidationError: If the configuration is invalid
            BackendError: If the backend call fails
        """
        parsed = parse_config(self.config_model, config)
        identifier, values = self.fetch(parsed)
        return ResourceState(self.type_name, id=identifier, values=values)
