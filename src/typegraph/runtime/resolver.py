"""
Type resolver - maps a runtime value to a concrete object type.

Resolution order for a declared interface or union, first match wins:
1. The abstract type's own resolve_type(value, context)
2. The schema-level default resolve_type(value, context)
3. UnresolvableTypeError

A non-empty result from step 1 is authoritative; step 2 is not consulted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from typegraph.core.defs import ABSTRACT_KINDS, ObjectTypeDef, ResolveType, type_name_of
from typegraph.core.errors import (
    ImpossibleTypeError,
    SchemaDefinitionError,
    UnknownTypeError,
    UnresolvableTypeError,
)

if TYPE_CHECKING:
    from typegraph.core.registry import FrozenSchema

logger = logging.getLogger(__name__)


class TypeResolver:
    """
    Resolves abstract types against a frozen schema.

    Holds no mutable state, so one instance may serve concurrent requests.
    """

    def __init__(self, schema: FrozenSchema):
        self.schema = schema

    def resolve_type(self, value: Any, declared: Any, context: Any = None) -> ObjectTypeDef:
        """
        Determine the concrete type of `value` for a field declared as `declared`.

        Args:
            value: Runtime object returned by the parent field
            declared: Name or definition of the declared return type
            context: Request context, passed through to resolve_type functions

        Raises:
            UnresolvableTypeError: No behavior returned a type
            UnknownTypeError: The returned name is not part of the schema
            ImpossibleTypeError: The returned type does not implement / belong to `declared`
        """
        declared_name = type_name_of(declared)
        abstract = self.schema.get_type(declared_name)

        if isinstance(abstract, ObjectTypeDef):
            return abstract
        if abstract.kind not in ABSTRACT_KINDS:
            raise SchemaDefinitionError(
                f"'{declared_name}' is a {abstract.kind}; only interfaces and unions need type resolution"
            )

        result = None
        if abstract.resolve_type is not None:
            result = abstract.resolve_type(value, context)
        if not result and self.schema.default_resolve_type is not None:
            result = self.schema.default_resolve_type(value, context)
        if not result:
            raise UnresolvableTypeError(declared_name)

        type_name = type_name_of(result)
        if not self.schema.is_reachable(type_name):
            hint = None
            if type_name in self.schema.definitions:
                hint = "It is declared but not reachable; add it to orphan_types"
            raise UnknownTypeError(type_name, referenced_by=f"resolve_type of {declared_name}", hint=hint)

        if not self.schema.is_possible_type(declared_name, type_name):
            raise ImpossibleTypeError(declared_name, type_name)

        logger.debug(f"Resolved {declared_name} -> {type_name}")
        return self.schema.definitions[type_name]


def resolve_by_class(mapping: Sequence[tuple[type, str]]) -> ResolveType:
    """
    Build a resolve_type function from an ordered list of (class, type name).

    The first class the value is an instance of wins, so list subclasses
    before their bases.

    Example:
        Starrable = registry.define_interface(
            "Starrable",
            fields=[...],
            resolve_type=resolve_by_class([(Repository, "Repository"), (Gist, "Gist")]),
        )
    """
    pairs = tuple(mapping)

    def resolve(value: Any, context: Any) -> str | None:
        for cls, type_name in pairs:
            if isinstance(value, cls):
                return type_name
        return None

    return resolve
