"""
Type references - named types wrapped in list / non-null modifiers.

Field and argument types are stored as TypeRef trees and resolved by name
only when the schema is finalized, so definitions can be declared in any
order.

Accepted declaration forms:
    "String", "Comment!", "[Comment!]!"     - SDL-style strings
    str, int, float, bool                    - Python builtins (String, Int, ...)
    [Comment]                                - one-element list, items non-null
    CommentDef                               - any definition with a .name
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

from .errors import SchemaDefinitionError


_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

_PYTHON_SCALARS = {
    str: "String",
    int: "Int",
    float: "Float",
    bool: "Boolean",
}


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type, possibly wrapped."""
    kind: Literal["named", "list", "non_null"]
    name: Optional[str] = None
    of_type: Optional[TypeRef] = None

    @classmethod
    def named(cls, name: str) -> TypeRef:
        if not _NAME_PATTERN.match(name):
            raise SchemaDefinitionError(f"Invalid type name '{name}'")
        return cls(kind="named", name=name)

    @classmethod
    def list_of(cls, of_type: TypeRef) -> TypeRef:
        return cls(kind="list", of_type=of_type)

    @classmethod
    def non_null(cls, of_type: TypeRef) -> TypeRef:
        if of_type.kind == "non_null":
            return of_type
        return cls(kind="non_null", of_type=of_type)

    @property
    def is_non_null(self) -> bool:
        return self.kind == "non_null"

    @property
    def is_list(self) -> bool:
        return self.kind == "list"

    @property
    def nullable(self) -> TypeRef:
        """This reference with an outer non-null wrapper removed."""
        return self.of_type if self.kind == "non_null" else self

    @property
    def named_type(self) -> str:
        """Name of the innermost type, with every wrapper removed."""
        ref = self
        while ref.kind != "named":
            ref = ref.of_type
        return ref.name

    def __str__(self) -> str:
        if self.kind == "non_null":
            return f"{self.of_type}!"
        if self.kind == "list":
            return f"[{self.of_type}]"
        return self.name


def parse_type_ref(spec: Any) -> TypeRef:
    """
    Convert a declaration-time type spec into a TypeRef.

    Raises:
        SchemaDefinitionError: If the spec is malformed
    """
    if isinstance(spec, TypeRef):
        return spec

    if isinstance(spec, type) and spec in _PYTHON_SCALARS:
        return TypeRef.named(_PYTHON_SCALARS[spec])

    if isinstance(spec, list):
        if len(spec) != 1:
            raise SchemaDefinitionError(f"List type spec must have exactly one item, got {spec!r}")
        return TypeRef.list_of(TypeRef.non_null(parse_type_ref(spec[0])))

    if isinstance(spec, str):
        return _parse_type_string(spec.strip(), spec)

    name = getattr(spec, "name", None)
    if isinstance(name, str):
        return TypeRef.named(name)

    raise SchemaDefinitionError(f"Cannot interpret {spec!r} as a type")


def _parse_type_string(text: str, original: str) -> TypeRef:
    if not text:
        raise SchemaDefinitionError(f"Empty type in '{original}'")

    if text.endswith("!"):
        inner = _parse_type_string(text[:-1].rstrip(), original)
        if inner.is_non_null:
            raise SchemaDefinitionError(f"Doubled non-null marker in '{original}'")
        return TypeRef.non_null(inner)

    if text.startswith("["):
        if not text.endswith("]"):
            raise SchemaDefinitionError(f"Unbalanced brackets in '{original}'")
        return TypeRef.list_of(_parse_type_string(text[1:-1].strip(), original))

    if not _NAME_PATTERN.match(text):
        raise SchemaDefinitionError(f"Invalid type name '{text}' in '{original}'")
    return TypeRef.named(text)


def is_subtype(
    sub: TypeRef,
    sup: TypeRef,
    is_possible_type: Callable[[str, str], bool],
) -> bool:
    """
    Check that `sub` may be used where `sup` is declared.

    Non-null is stricter than nullable, list item types are compared
    covariantly, and a named type is a subtype of an abstract type when
    is_possible_type(abstract_name, type_name) holds.
    """
    if sub == sup:
        return True

    if sup.is_non_null:
        if sub.is_non_null:
            return is_subtype(sub.of_type, sup.of_type, is_possible_type)
        return False

    if sub.is_non_null:
        return is_subtype(sub.of_type, sup, is_possible_type)

    if sup.is_list:
        if sub.is_list:
            return is_subtype(sub.of_type, sup.of_type, is_possible_type)
        return False

    if sub.is_list:
        return False

    return is_possible_type(sup.name, sub.name)
