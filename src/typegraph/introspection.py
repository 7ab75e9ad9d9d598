"""
Pydantic models answering schema-introspection queries.

Only reachable types are described. Dumping with `by_alias=True` produces
the camelCase keys of the GraphQL introspection format:

    info = introspect(schema)
    info.model_dump(by_alias=True)["queryType"]
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.defs import (
    ArgumentDef,
    EnumDef,
    FieldDef,
    InputObjectDef,
    InterfaceDef,
    ObjectTypeDef,
    UnionDef,
)
from .core.printer import format_value
from .core.registry import FrozenSchema
from .core.type_refs import TypeRef
from .core.utils import to_camel_case


TypeKind = Literal["SCALAR", "OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT", "LIST", "NON_NULL"]


class IntrospectionModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel_case, populate_by_name=True)


class TypeRefInfo(IntrospectionModel):
    """Reference to a type, wrappers included."""
    kind: TypeKind
    name: Optional[str] = None
    of_type: Optional[TypeRefInfo] = None


class InputValueInfo(IntrospectionModel):
    """Argument or input object field."""
    name: str
    description: Optional[str] = None
    type: TypeRefInfo
    default_value: Optional[str] = None  # GraphQL literal


class FieldInfo(IntrospectionModel):
    name: str
    description: Optional[str] = None
    args: list[InputValueInfo] = Field(default_factory=list)
    type: TypeRefInfo
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


class EnumValueInfo(IntrospectionModel):
    name: str
    description: Optional[str] = None
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


class TypeInfo(IntrospectionModel):
    """
    Full description of a named type.

    Kind-specific lists are None when they do not apply (e.g. `fields`
    on a SCALAR), matching the introspection format.
    """
    kind: TypeKind
    name: str
    description: Optional[str] = None
    fields: Optional[list[FieldInfo]] = None
    interfaces: Optional[list[TypeRefInfo]] = None
    possible_types: Optional[list[TypeRefInfo]] = None
    enum_values: Optional[list[EnumValueInfo]] = None
    input_fields: Optional[list[InputValueInfo]] = None


class SchemaInfo(IntrospectionModel):
    query_type: TypeRefInfo
    mutation_type: Optional[TypeRefInfo] = None
    subscription_type: Optional[TypeRefInfo] = None
    types: list[TypeInfo] = Field(default_factory=list)

    def get_type(self, name: str) -> TypeInfo | None:
        for type_info in self.types:
            if type_info.name == name:
                return type_info
        return None


def _type_ref_info(schema: FrozenSchema, ref: TypeRef) -> TypeRefInfo:
    if ref.is_non_null:
        return TypeRefInfo(kind="NON_NULL", of_type=_type_ref_info(schema, ref.of_type))
    if ref.is_list:
        return TypeRefInfo(kind="LIST", of_type=_type_ref_info(schema, ref.of_type))
    return TypeRefInfo(kind=schema.definitions[ref.name].kind, name=ref.name)


def _named_ref(schema: FrozenSchema, name: str) -> TypeRefInfo:
    return TypeRefInfo(kind=schema.definitions[name].kind, name=name)


def _input_value_info(schema: FrozenSchema, arg: ArgumentDef) -> InputValueInfo:
    return InputValueInfo(
        name=arg.name,
        description=arg.description,
        type=_type_ref_info(schema, arg.type),
        default_value=format_value(arg.default) if arg.has_default else None,
    )


def _field_info(schema: FrozenSchema, field_def: FieldDef) -> FieldInfo:
    return FieldInfo(
        name=field_def.name,
        description=field_def.description,
        args=[_input_value_info(schema, a) for a in field_def.arguments],
        type=_type_ref_info(schema, field_def.type),
        is_deprecated=field_def.deprecation_reason is not None,
        deprecation_reason=field_def.deprecation_reason,
    )


def _type_info(schema: FrozenSchema, definition) -> TypeInfo:
    info = TypeInfo(kind=definition.kind, name=definition.name, description=definition.description)

    if isinstance(definition, (ObjectTypeDef, InterfaceDef)):
        info.fields = [_field_info(schema, f) for f in schema.effective_fields(definition.name)]
    if isinstance(definition, ObjectTypeDef):
        info.interfaces = [_named_ref(schema, name) for name in definition.interfaces]
    if isinstance(definition, (InterfaceDef, UnionDef)):
        info.possible_types = [_named_ref(schema, t.name) for t in schema.possible_types(definition.name)]
    if isinstance(definition, EnumDef):
        info.enum_values = [
            EnumValueInfo(
                name=value.name,
                description=value.description,
                is_deprecated=value.deprecation_reason is not None,
                deprecation_reason=value.deprecation_reason,
            )
            for value in definition.values
        ]
    if isinstance(definition, InputObjectDef):
        info.input_fields = [_input_value_info(schema, f) for f in definition.fields]

    return info


def introspect(schema: FrozenSchema) -> SchemaInfo:
    """Describe every reachable type of a frozen schema."""
    return SchemaInfo(
        query_type=_named_ref(schema, schema.schema_def.query),
        mutation_type=_named_ref(schema, schema.schema_def.mutation) if schema.schema_def.mutation else None,
        subscription_type=(
            _named_ref(schema, schema.schema_def.subscription) if schema.schema_def.subscription else None
        ),
        types=[_type_info(schema, definition) for definition in schema.reachable_types()],
    )
