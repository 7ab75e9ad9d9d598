"""
Global object identifiers.

A global ID is base64("<TypeName><separator><id>"), unique across the
whole schema. The type name is the concrete object type the field is
resolved on, so an `id` field declared once on an interface yields
distinct IDs per implementing type.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .defs import FieldDef, field
from .errors import SchemaDefinitionError
from .utils import resolve_attribute


DEFAULT_SEPARATOR = "-"


def encode_global_id(type_name: str, object_id: Any, separator: str = DEFAULT_SEPARATOR) -> str:
    """Encode a type name and object id into an opaque global ID."""
    raw = f"{type_name}{separator}{object_id}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_global_id(global_id: str, separator: str = DEFAULT_SEPARATOR) -> tuple[str, str]:
    """
    Decode a global ID into (type_name, object_id).

    Raises:
        ValueError: If the value is not a valid global ID
    """
    try:
        raw = base64.b64decode(global_id, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid global ID '{global_id}': {e}") from e

    type_name, sep, object_id = raw.partition(separator)
    if not sep or not type_name:
        raise ValueError(f"Invalid global ID '{global_id}': missing type name")
    return type_name, object_id


@dataclass(frozen=True)
class GlobalIdResolver:
    """
    Behavior of a global ID field.

    Declared on an interface the resolver is unbound; composition binds a
    copy to each implementing type with for_type(), so the encoded type
    name is the concrete one however the behavior is invoked. An unbound
    resolver falls back to the parent type of the execution context.
    """
    id_attribute: str = "id"
    type_name: Optional[str] = None

    def for_type(self, type_name: str) -> GlobalIdResolver:
        return dataclasses.replace(self, type_name=type_name)

    def __call__(self, obj: Any, arguments: Mapping[str, Any], context: Any) -> str:
        type_name = self.type_name or getattr(context, "parent_type", None)
        if not type_name:
            raise SchemaDefinitionError(
                "Cannot encode a global ID without a concrete type; "
                "invoke the behavior of the implementing object type"
            )

        separator = DEFAULT_SEPARATOR
        schema = getattr(context, "schema", None)
        if schema is not None:
            separator = schema.settings.global_id_separator
        return encode_global_id(type_name, resolve_attribute(obj, self.id_attribute), separator)


def global_id_field(
    name: str = "id",
    *,
    id_attribute: str = "id",
    description: Optional[str] = None,
) -> FieldDef:
    """
    Declare a non-null ID field that returns the object's global ID.

    Example:
        registry.define_interface("Node", fields=[global_id_field("id")])
    """
    return field(
        name,
        "ID",
        null=False,
        description=description or "The global ID of the object.",
        resolver=GlobalIdResolver(id_attribute=id_attribute),
    )
