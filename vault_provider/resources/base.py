"""Generic reconciler for resources stored at a single Vault path.

A concrete resource declares its configuration model, its field mapping
table and the path prefix it lives under; the lifecycle operations below
are shared by every resource type.
"""

import logging
from typing import Any, ClassVar, Mapping, Union

import pydantic
from pydantic import BaseModel

from vault_provider.client import VaultClient
from vault_provider.exceptions import ResourceNotFoundError, ValidationError
from vault_provider.schema import FieldSpec, decode_response, describe, encode_payload, is_set
from vault_provider.state import ResourceState

logger = logging.getLogger(__name__)

ConfigInput = Union[BaseModel, Mapping[str, Any]]
StateInput = Union[ResourceState, str]


def parse_config(model: type[BaseModel], config: ConfigInput) -> BaseModel:
    """Validate raw configuration against a model.

    Raises:
        ValidationError: If the configuration does not satisfy the model
    """
    if isinstance(config, model):
        return config
    try:
        if isinstance(config, BaseModel):
            config = config.model_dump()
        return model.model_validate(config)
    except pydantic.ValidationError as e:
        errors = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError(
            f"Invalid {model.__name__}: {'; '.join(errors)}",
            details={"errors": errors},
        ) from e


class Resource:
    """Base class for resources reconciled against one Vault path.

    Subclasses set:
        type_name: Resource type, e.g. "vault_mfa_login_enforcement"
        config_model: Pydantic model describing the desired state
        fields: Mapping table between model attributes and payload keys
        qualifying_fields: Optional fields of which at least one must be set
        path_prefix: Vault path under which instances live
        id_field: Attribute whose value is the instance identifier
    """

    type_name: ClassVar[str] = ""
    config_model: ClassVar[type[BaseModel]]
    fields: ClassVar[tuple[FieldSpec, ...]] = ()
    qualifying_fields: ClassVar[tuple[str, ...]] = ()
    path_prefix: ClassVar[str] = ""
    id_field: ClassVar[str] = "name"

    def __init__(self, client: VaultClient):
        self.client = client

    @classmethod
    def path_for(cls, identifier: str) -> str:
        """Build the Vault path of an instance.

        Leading and trailing separators are stripped from the identifier.
        """
        return f"{cls.path_prefix}/{identifier.strip('/')}"

    @classmethod
    def schema(cls) -> dict[str, Any]:
        return {"kind": "resource", "importable": True, "attributes": describe(cls.fields)}

    def validate(self, config: ConfigInput) -> BaseModel:
        """Validate configuration without contacting Vault.

        Raises:
            ValidationError: If the model rejects the configuration or none
                of the qualifying fields is set
        """
        parsed = parse_config(self.config_model, config)
        if self.qualifying_fields and not any(
            is_set(getattr(parsed, name, None)) for name in self.qualifying_fields
        ):
            raise ValidationError(
                f"One of {', '.join(self.qualifying_fields)} must be set.",
                details={"resource": self.type_name},
            )
        return parsed

    def _write(self, config: ConfigInput) -> ResourceState:
        parsed = self.validate(config)
        identifier = getattr(parsed, self.id_field)
        path = self.path_for(identifier)
        payload = encode_payload(parsed, self.fields)

        logger.debug(f"Updating {self.type_name} {identifier} in Vault")
        self.client.write(path, payload)
        logger.debug(f"Wrote {self.type_name} '{identifier}' in Vault")

        state = self.read(ResourceState(self.type_name, id=identifier))
        if not state.exists:
            logger.warning(f"{self.type_name} '{identifier}' was written but could not be read back")
        return state

    def create(self, config: ConfigInput) -> ResourceState:
        """Create the instance and return its state as read back from Vault.

        Raises:
            ValidationError: Before any backend call, if config is invalid
            BackendError: If the write or the follow-up read fails
        """
        return self._write(config)

    def update(self, config: ConfigInput) -> ResourceState:
        """Update the instance in place; same upsert as :meth:`create`."""
        return self._write(config)

    def _coerce_state(self, state: StateInput) -> ResourceState:
        if isinstance(state, ResourceState):
            return state
        return ResourceState(self.type_name, id=state)

    def read(self, state: StateInput) -> ResourceState:
        """Refresh state from Vault.

        Values are fully replaced by what Vault returns. If Vault reports
        the instance absent the state is marked absent, which is not an
        error.

        Raises:
            BackendError: If the read fails
        """
        state = self._coerce_state(state)
        if not state.exists:
            return state

        path = self.path_for(state.id)
        response = self.client.read(path)
        logger.debug(f"Read {self.type_name} {path!r}")

        if response is None:
            state.mark_absent()
            return state

        state.values = decode_response(response.get("data"), self.fields)
        return state

    def delete(self, state: StateInput) -> None:
        """Delete the instance. Deleting an absent instance succeeds.

        Raises:
            BackendError: If the delete fails
        """
        state = self._coerce_state(state)
        if not state.exists:
            return

        path = self.path_for(state.id)
        logger.debug(f"Deleting {self.type_name} '{path}' from Vault")
        self.client.delete(path)

    def import_state(self, identifier: str) -> ResourceState:
        """Import an existing instance by identifier.

        Raises:
            ResourceNotFoundError: If nothing exists under the identifier
            BackendError: If the read fails
        """
        if not identifier:
            raise ValidationError(f"Import of {self.type_name} requires an identifier")
        state = self.read(ResourceState(self.type_name, id=identifier))
        if not state.exists:
            raise ResourceNotFoundError(self.type_name, identifier)
        logger.info(f"Imported {self.type_name} '{identifier}'")
        return state

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type_name={self.type_name!r})"

