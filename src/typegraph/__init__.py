"""
typegraph - runtime type system for GraphQL-style schemas.

Composes interface fields and behaviors into object types, resolves
concrete types of polymorphic values, and decides which types are part of
the schema.

Usage:
    from typegraph import SchemaRegistry, field, global_id_field

    registry = SchemaRegistry()
    registry.define_interface("Node", fields=[global_id_field("id")])
    registry.define_type("Comment", implements=["Node"], fields=[field("body", str)])
    registry.define_type("Query", fields=[field("node", "Node")])
    registry.define_schema(query="Query", orphan_types=["Comment"])

    schema = registry.finalize()
"""

from __future__ import annotations

from .config import SchemaSettings, load_settings
from .core import (
    NO_DEFAULT,
    ArgumentDef,
    ArgumentError,
    BehaviorNotFoundError,
    BuildError,
    BuildResult,
    DuplicateFieldError,
    DuplicateTypeError,
    EnumDef,
    EnumValueDef,
    FieldDef,
    FieldNotFoundError,
    FrozenSchema,
    ImpossibleTypeError,
    InputObjectDef,
    InterfaceContractViolation,
    InterfaceDef,
    NotFoundError,
    ObjectTypeDef,
    ScalarDef,
    SchemaDef,
    SchemaDefinitionError,
    SchemaFrozenError,
    SchemaNotFinalizedError,
    SchemaRegistry,
    TypegraphError,
    TypeRef,
    UnionDef,
    UnknownTypeError,
    UnresolvableTypeError,
    argument,
    decode_global_id,
    encode_global_id,
    field,
    global_id_field,
    print_schema,
)
from .introspection import SchemaInfo, TypeInfo, introspect
from .runtime import ExecutionContext, FieldExecutor, TypeResolver, resolve_by_class

__version__ = "0.1.0"

__all__ = [
    # Config
    "SchemaSettings",
    "load_settings",
    # Definitions
    "NO_DEFAULT",
    "TypeRef",
    "ArgumentDef",
    "FieldDef",
    "ScalarDef",
    "EnumDef",
    "EnumValueDef",
    "InputObjectDef",
    "InterfaceDef",
    "ObjectTypeDef",
    "UnionDef",
    "SchemaDef",
    "argument",
    "field",
    "global_id_field",
    "encode_global_id",
    "decode_global_id",
    # Errors
    "TypegraphError",
    "DuplicateTypeError",
    "DuplicateFieldError",
    "InterfaceContractViolation",
    "SchemaDefinitionError",
    "UnknownTypeError",
    "UnresolvableTypeError",
    "ImpossibleTypeError",
    "SchemaNotFinalizedError",
    "SchemaFrozenError",
    "NotFoundError",
    "FieldNotFoundError",
    "BehaviorNotFoundError",
    "ArgumentError",
    "BuildError",
    # Registry
    "SchemaRegistry",
    "FrozenSchema",
    "BuildResult",
    "print_schema",
    # Runtime
    "ExecutionContext",
    "TypeResolver",
    "FieldExecutor",
    "resolve_by_class",
    # Introspection
    "introspect",
    "SchemaInfo",
    "TypeInfo",
]
