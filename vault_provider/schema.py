"""Typed field descriptors shared by resources and data sources.

Every resource declares a tuple of :class:`FieldSpec` entries mapping a
configuration attribute to the key Vault uses on the wire, together with the
functions converting values in each direction. The reconciler only ever
builds payloads and state through these tables.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

STRING = "string"
STRING_SET = "string_set"
STRING_LIST = "string_list"

COLLECTION_KINDS = frozenset({STRING_SET, STRING_LIST})


def validate_no_trailing_slash(value: str) -> str:
    """Reject values ending in a path separator."""
    if value.endswith("/"):
        raise ValueError(f"invalid value {value!r}, cannot end with '/'")
    return value


def _encode_string(value: Any) -> str:
    return str(value)


def _decode_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _encode_string_set(value: Iterable[str]) -> list[str]:
    # Set order is meaningless to Vault; sort so payloads are reproducible
    return sorted(value)


def _decode_string_set(value: Any) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(str(item) for item in value)


def _encode_string_list(value: Iterable[str]) -> list[str]:
    return list(value)


def _decode_string_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(item) for item in value]


_CODECS: dict[str, tuple[Callable[[Any], Any], Callable[[Any], Any]]] = {
    STRING: (_encode_string, _decode_string),
    STRING_SET: (_encode_string_set, _decode_string_set),
    STRING_LIST: (_encode_string_list, _decode_string_list),
}


@dataclass(frozen=True)
class FieldSpec:
    """Mapping of one configuration attribute to its Vault payload key.

    Attributes:
        name: Attribute name on the configuration model and in state
        backend_key: Key used in Vault request and response bodies
        kind: One of ``string``, ``string_set`` or ``string_list``
        required: Whether the attribute must be set in configuration
        description: Human readable description for the schema export
        computed: Attribute is only ever populated from Vault
    """

    name: str
    kind: str = STRING
    backend_key: Optional[str] = None
    required: bool = False
    description: str = ""
    computed: bool = False
    encode: Optional[Callable[[Any], Any]] = field(default=None, compare=False)
    decode: Optional[Callable[[Any], Any]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in _CODECS:
            raise ValueError(f"Unknown field kind: {self.kind}")
        default_encode, default_decode = _CODECS[self.kind]
        # frozen dataclass, so bypass __setattr__ for the derived defaults
        if self.backend_key is None:
            object.__setattr__(self, "backend_key", self.name)
        if self.encode is None:
            object.__setattr__(self, "encode", default_encode)
        if self.decode is None:
            object.__setattr__(self, "decode", default_decode)

    @property
    def is_collection(self) -> bool:
        return self.kind in COLLECTION_KINDS


def is_set(value: Any) -> bool:
    """Return True when a configuration value counts as explicitly set."""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (set, frozenset, list, tuple)):
        return len(value) > 0
    return True


def encode_payload(config: Any, fields: Iterable[FieldSpec]) -> dict[str, Any]:
    """Build a Vault request body from a configuration model.

    Only explicitly set attributes are emitted; ``None``, empty strings and
    empty collections are left out of the payload entirely.
    """
    payload: dict[str, Any] = {}
    for spec in fields:
        if spec.computed:
            continue
        value = getattr(config, spec.name, None)
        if is_set(value):
            payload[spec.backend_key] = spec.encode(value)
    return payload


def decode_response(
    data: Optional[Mapping[str, Any]],
    fields: Iterable[FieldSpec],
) -> dict[str, Any]:
    """Translate a Vault response body into a complete state value map.

    Every declared attribute is present in the result; keys Vault did not
    return decode to ``None`` or to an empty collection.
    """
    data = data or {}
    return {spec.name: spec.decode(data.get(spec.backend_key)) for spec in fields}


def describe(fields: Iterable[FieldSpec]) -> dict[str, dict[str, Any]]:
    """Render the schema surface of a set of fields."""
    return {
        spec.name: {
            "type": spec.kind,
            "required": spec.required,
            "optional": not spec.required and not spec.computed,
            "computed": spec.computed,
            "description": spec.description,
        }
        for spec in fields
    }
