"""
Core dataclass definitions for the typegraph system.

These define the schema structure: object types, interfaces, unions,
enums, input objects, scalars, their fields and arguments, and the
schema roots. All definitions are immutable once created; references to
other types are stored by name and resolved at finalize time.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, Mapping, Optional, Sequence, Union

from .type_refs import TypeRef, parse_type_ref

if TYPE_CHECKING:
    from typegraph.runtime.context import ExecutionContext


# (object, arguments, context) -> value
Behavior = Callable[[Any, Mapping[str, Any], "ExecutionContext"], Any]

# (value, context) -> type name, ObjectTypeDef or None
ResolveType = Callable[[Any, Any], Any]


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


def type_name_of(ref: Any) -> str:
    """Name of a type given either its name or its definition."""
    if isinstance(ref, str):
        return ref
    name = getattr(ref, "name", None)
    if not isinstance(name, str):
        raise TypeError(f"Expected a type name or definition, got {ref!r}")
    return name


def _freeze_mapping(value: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class ArgumentDef:
    """Definition of a field argument or an input object field."""
    name: str
    type: TypeRef
    required: bool = False
    default: Any = NO_DEFAULT
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class FieldDef:
    """Definition of a field on an object type or interface."""
    name: str
    type: TypeRef
    arguments: tuple[ArgumentDef, ...] = ()
    description: Optional[str] = None
    resolver: Optional[Behavior] = None
    deprecation_reason: Optional[str] = None
    connection: bool = False
    camelize: bool = True  # expose snake_case names as camelCase

    @property
    def nullable(self) -> bool:
        return not self.type.is_non_null

    def get_argument(self, name: str) -> ArgumentDef | None:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None


@dataclass(frozen=True)
class ScalarDef:
    """Definition of a leaf scalar type."""
    kind: ClassVar[str] = "SCALAR"
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class EnumValueDef:
    """Single value of an enum."""
    name: str
    value: Any = None
    description: Optional[str] = None
    deprecation_reason: Optional[str] = None


@dataclass(frozen=True)
class EnumDef:
    """Definition of an enum type."""
    kind: ClassVar[str] = "ENUM"
    name: str
    values: tuple[EnumValueDef, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class InputObjectDef:
    """Definition of an input object used as an argument type."""
    kind: ClassVar[str] = "INPUT_OBJECT"
    name: str
    fields: tuple[ArgumentDef, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class InterfaceDef:
    """
    Definition of an interface.

    `behaviors` are field implementations merged into every implementing
    type at finalize time. `orphan_types` names object types that must be
    part of the schema whenever this interface is, even if no field returns
    them.
    """
    kind: ClassVar[str] = "INTERFACE"
    name: str
    fields: tuple[FieldDef, ...] = ()
    behaviors: Mapping[str, Behavior] = dataclass_field(default_factory=dict)
    resolve_type: Optional[ResolveType] = None
    orphan_types: tuple[str, ...] = ()
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "behaviors", _freeze_mapping(self.behaviors))
        object.__setattr__(self, "orphan_types", tuple(type_name_of(t) for t in self.orphan_types))


@dataclass(frozen=True)
class ObjectTypeDef:
    """Definition of a concrete object type."""
    kind: ClassVar[str] = "OBJECT"
    name: str
    interfaces: tuple[str, ...] = ()  # declaration order decides override precedence
    fields: tuple[FieldDef, ...] = ()
    behaviors: Mapping[str, Behavior] = dataclass_field(default_factory=dict)
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "interfaces", tuple(type_name_of(i) for i in self.interfaces))
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "behaviors", _freeze_mapping(self.behaviors))


@dataclass(frozen=True)
class UnionDef:
    """Definition of a union of object types."""
    kind: ClassVar[str] = "UNION"
    name: str
    possible_types: tuple[str, ...] = ()
    resolve_type: Optional[ResolveType] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "possible_types", tuple(type_name_of(t) for t in self.possible_types))


@dataclass(frozen=True)
class SchemaDef:
    """Root operation types and schema-wide settings."""
    query: str
    mutation: Optional[str] = None
    subscription: Optional[str] = None
    orphan_types: tuple[str, ...] = ()
    resolve_type: Optional[ResolveType] = None  # fallback for abstract types without their own

    def __post_init__(self):
        for attr in ("query", "mutation", "subscription"):
            value = getattr(self, attr)
            if value is not None:
                object.__setattr__(self, attr, type_name_of(value))
        object.__setattr__(self, "orphan_types", tuple(type_name_of(t) for t in self.orphan_types))

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(r for r in (self.query, self.mutation, self.subscription) if r)


TypeDef = Union[ScalarDef, EnumDef, InputObjectDef, InterfaceDef, ObjectTypeDef, UnionDef]

ABSTRACT_KINDS = frozenset({"INTERFACE", "UNION"})


BUILTIN_SCALARS: tuple[ScalarDef, ...] = (
    ScalarDef("String", "UTF-8 character sequence."),
    ScalarDef("Int", "Signed 32-bit integer."),
    ScalarDef("Float", "Signed double-precision floating-point value."),
    ScalarDef("Boolean", "`true` or `false`."),
    ScalarDef("ID", "Unique identifier, serialized as a string."),
)


CONNECTION_ARGUMENTS = (
    ("first", "Int", "Returns the first _n_ elements from the list."),
    ("after", "String", "Returns the elements in the list that come after the specified cursor."),
    ("last", "Int", "Returns the last _n_ elements from the list."),
    ("before", "String", "Returns the elements in the list that come before the specified cursor."),
)


# =============================================================================
# Declaration helpers
# =============================================================================


def argument(
    name: str,
    type: Any,
    *,
    required: bool = False,
    default: Any = NO_DEFAULT,
    description: Optional[str] = None,
) -> ArgumentDef:
    """
    Declare an argument.

    `required=True` without a default wraps the type as non-null. A
    non-null type without a default is always required.
    """
    ref = parse_type_ref(type)
    has_default = default is not NO_DEFAULT
    if required and not has_default:
        ref = TypeRef.non_null(ref)
    required = ref.is_non_null and not has_default
    return ArgumentDef(
        name=name,
        type=ref,
        required=required,
        default=default,
        description=description,
    )


def field(
    name: str,
    type: Any,
    *,
    null: bool = True,
    description: Optional[str] = None,
    arguments: Sequence[ArgumentDef] = (),
    resolver: Optional[Behavior] = None,
    deprecation_reason: Optional[str] = None,
    connection: bool = False,
    camelize: bool = True,
) -> FieldDef:
    """
    Declare a field.

    Example:
        field("stargazers", "StargazerConnection", null=False, connection=True,
              arguments=[argument("order_by", "StarOrder")])
    """
    ref = parse_type_ref(type)
    if not null:
        ref = TypeRef.non_null(ref)

    args = list(arguments)
    if connection:
        declared = {a.name for a in args}
        for arg_name, arg_type, arg_description in CONNECTION_ARGUMENTS:
            if arg_name not in declared:
                args.append(argument(arg_name, arg_type, description=arg_description))

    return FieldDef(
        name=name,
        type=ref,
        arguments=tuple(args),
        description=description,
        resolver=resolver,
        deprecation_reason=deprecation_reason,
        connection=connection,
        camelize=camelize,
    )


def enum_values(values: Iterable[Any]) -> tuple[EnumValueDef, ...]:
    """Build enum values from names, (name, value) pairs or EnumValueDefs."""
    result = []
    for item in values:
        if isinstance(item, EnumValueDef):
            result.append(item)
        elif isinstance(item, tuple):
            result.append(EnumValueDef(name=item[0], value=item[1]))
        else:
            result.append(EnumValueDef(name=item, value=item))
    return tuple(result)
