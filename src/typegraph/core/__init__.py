"""
Core module - definitions, composition, reachability and the schema registry.
"""

from __future__ import annotations

from .errors import (
    ArgumentError,
    BehaviorNotFoundError,
    BuildError,
    DuplicateFieldError,
    DuplicateTypeError,
    FieldNotFoundError,
    ImpossibleTypeError,
    InterfaceContractViolation,
    NotFoundError,
    SchemaDefinitionError,
    SchemaFrozenError,
    SchemaNotFinalizedError,
    TypegraphError,
    UnknownTypeError,
    UnresolvableTypeError,
)
from .type_refs import TypeRef, is_subtype, parse_type_ref
from .defs import (
    NO_DEFAULT,
    ArgumentDef,
    EnumDef,
    EnumValueDef,
    FieldDef,
    InputObjectDef,
    InterfaceDef,
    ObjectTypeDef,
    ScalarDef,
    SchemaDef,
    UnionDef,
    argument,
    field,
)
from .utils import to_camel_case, to_snake_case
from .field_registry import FieldLayer, FieldRegistry
from .composer import Composition, ImplementationComposer
from .reachability import ReachabilityResult, ReachabilityTracker
from .global_id import decode_global_id, encode_global_id, global_id_field
from .printer import compute_fingerprint, print_schema
from .registry import BuildResult, FrozenSchema, SchemaRegistry

__all__ = [
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
    # Type references
    "TypeRef",
    "parse_type_ref",
    "is_subtype",
    # Definitions
    "NO_DEFAULT",
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
    # Utils
    "to_camel_case",
    "to_snake_case",
    # Field registry
    "FieldLayer",
    "FieldRegistry",
    # Composer
    "Composition",
    "ImplementationComposer",
    # Reachability
    "ReachabilityResult",
    "ReachabilityTracker",
    # Global IDs
    "encode_global_id",
    "decode_global_id",
    "global_id_field",
    # Printer
    "print_schema",
    "compute_fingerprint",
    # Registry
    "SchemaRegistry",
    "FrozenSchema",
    "BuildResult",
]
