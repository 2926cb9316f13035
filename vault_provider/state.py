"""Stored representation of a resource or data source instance."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class ResourceState:
    """Observed state of one resource instance.

    Attributes:
        type_name: Resource or data source type, e.g. ``vault_mfa_login_enforcement``
        id: Identifier of the remote object, ``None`` once it is known absent
        values: Attribute values as last read from Vault
    """

    type_name: str
    id: Optional[str] = None
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def exists(self) -> bool:
        return self.id is not None

    def mark_absent(self) -> None:
        """Record that the remote object no longer exists.

        Clearing the identifier is what makes the next apply re-create it.
        """
        logger.info(f"{self.type_name} '{self.id}' not found in Vault, removing from state")
        self.id = None
        self.values = {}

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation, sets rendered sorted."""
        return {
            "type": self.type_name,
            "id": self.id,
            "values": {
                key: sorted(value) if isinstance(value, (set, frozenset)) else value
                for key, value in self.values.items()
            },
        }
