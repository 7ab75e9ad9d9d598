"""
Schema registry - collects type definitions and builds the frozen schema.

Usage:
    from typegraph import SchemaRegistry, field, resolve_by_class

    registry = SchemaRegistry()
    registry.define_interface(
        "Node",
        fields=[field("id", "ID", null=False)],
        resolve_type=resolve_by_class([(Repository, "Repository")]),
    )
    registry.define_type("Repository", implements=["Node"], fields=[field("name", str)])
    registry.define_type("Query", fields=[field("node", "Node")])
    registry.define_schema(query="Query")

    schema = registry.finalize()  # FrozenSchema, or raises BuildError
    schema.effective_fields("Repository")

Build phases (finalize):
1. Validate names and references
2. Compose interface fields and behaviors into every object type
3. Compute the reachable type set
4. Freeze

Definitions may be declared in any order; references are resolved by name
during finalize.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field as dataclass_field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

from typegraph.config import SchemaSettings
from typegraph.runtime.resolver import TypeResolver

from .composer import Composition, ImplementationComposer
from .defs import (
    ArgumentDef,
    BUILTIN_SCALARS,
    Behavior,
    EnumDef,
    FieldDef,
    InputObjectDef,
    InterfaceDef,
    ObjectTypeDef,
    ResolveType,
    ScalarDef,
    SchemaDef,
    TypeDef,
    UnionDef,
    enum_values,
)
from .errors import (
    BehaviorNotFoundError,
    BuildError,
    DuplicateFieldError,
    DuplicateTypeError,
    FieldNotFoundError,
    SchemaDefinitionError,
    SchemaFrozenError,
    SchemaNotFinalizedError,
    TypegraphError,
    UnknownTypeError,
)
from .field_registry import FieldLayer, FieldRegistry
from .printer import compute_fingerprint
from .reachability import ReachabilityResult, ReachabilityTracker
from .utils import camelize_field, to_camel_case

logger = logging.getLogger(__name__)


OUTPUT_KINDS = frozenset({"SCALAR", "ENUM", "OBJECT", "INTERFACE", "UNION"})
INPUT_KINDS = frozenset({"SCALAR", "ENUM", "INPUT_OBJECT"})
BUILTIN_SCALAR_NAMES = frozenset(s.name for s in BUILTIN_SCALARS)


@dataclass
class BuildResult:
    """Result of a schema build."""
    success: bool
    schema: Optional[FrozenSchema] = None
    errors: list[TypegraphError] = dataclass_field(default_factory=list)

    def error_messages(self) -> list[str]:
        """Get all error messages as strings."""
        return [str(e) for e in self.errors]


class FrozenSchema:
    """
    Immutable, finalized schema.

    Every table is read-only, so a FrozenSchema may be shared by any number
    of concurrent readers. Only types in the reachable set are visible
    through get_type() and reachable_types().
    """

    def __init__(
        self,
        *,
        definitions: Mapping[str, TypeDef],
        schema_def: SchemaDef,
        field_registry: FieldRegistry,
        behaviors: Mapping[str, Mapping[str, Behavior]],
        reachability: ReachabilityResult,
        settings: SchemaSettings,
    ):
        self.definitions = MappingProxyType(dict(definitions))
        self.schema_def = schema_def
        self.settings = settings
        self._fields = MappingProxyType({
            owner: MappingProxyType(dict(field_registry.effective(owner)))
            for owner, definition in self.definitions.items()
            if isinstance(definition, (ObjectTypeDef, InterfaceDef))
        })
        self._behaviors = MappingProxyType({
            name: MappingProxyType(dict(table))
            for name, table in behaviors.items()
        })
        self._reachability = reachability
        self._resolver = TypeResolver(self)
        self.fingerprint = compute_fingerprint(self)

    # --- roots -------------------------------------------------------------

    @property
    def query_type(self) -> ObjectTypeDef:
        return self.definitions[self.schema_def.query]

    @property
    def mutation_type(self) -> ObjectTypeDef | None:
        return self.definitions.get(self.schema_def.mutation) if self.schema_def.mutation else None

    @property
    def subscription_type(self) -> ObjectTypeDef | None:
        return self.definitions.get(self.schema_def.subscription) if self.schema_def.subscription else None

    @property
    def default_resolve_type(self) -> ResolveType | None:
        return self.schema_def.resolve_type

    def root_types(self) -> tuple[ObjectTypeDef, ...]:
        return tuple(self.definitions[name] for name in self.schema_def.roots)

    # --- type lookup -------------------------------------------------------

    def is_reachable(self, name: str) -> bool:
        return name in self._reachability.reachable

    def get_type(self, name: str) -> TypeDef:
        """
        Get a reachable type by name.

        Raises:
            UnknownTypeError: If the type is not part of the final schema
        """
        if not self.is_reachable(name):
            hint = None
            if name in self.definitions:
                hint = "It is declared but not reachable; add it to orphan_types"
            raise UnknownTypeError(name, hint=hint)
        return self.definitions[name]

    def reachable_types(self) -> tuple[TypeDef, ...]:
        """All types of the final schema, sorted by name."""
        return tuple(self.definitions[name] for name in sorted(self._reachability.reachable))

    def reachable_type_names(self) -> frozenset[str]:
        return self._reachability.reachable

    def excluded_types(self) -> tuple[str, ...]:
        """Declared types left out of the final schema (built-in scalars not listed)."""
        return tuple(n for n in self._reachability.unreachable if n not in BUILTIN_SCALAR_NAMES)

    def excluded_implementers(self) -> Mapping[str, tuple[str, ...]]:
        """Excluded object types mapped to the reachable interfaces they implement."""
        return MappingProxyType(dict(self._reachability.excluded_implementers))

    def is_possible_type(self, abstract_name: str, type_name: str) -> bool:
        """Whether a reachable object type implements / belongs to an abstract type."""
        if not self.is_reachable(type_name):
            return False
        abstract = self.definitions.get(abstract_name)
        candidate = self.definitions.get(type_name)
        if not isinstance(candidate, ObjectTypeDef):
            return False
        if isinstance(abstract, InterfaceDef):
            return abstract_name in candidate.interfaces
        if isinstance(abstract, UnionDef):
            return type_name in abstract.possible_types
        return False

    def possible_types(self, abstract_name: str) -> tuple[ObjectTypeDef, ...]:
        """Reachable implementations of an interface or members of a union, sorted by name."""
        return tuple(
            definition
            for definition in self.reachable_types()
            if self.is_possible_type(abstract_name, definition.name)
        )

    # --- fields and behaviors ----------------------------------------------

    def effective_fields(self, type_name: str) -> tuple[FieldDef, ...]:
        """Composed fields of an object type or interface, in composition order."""
        definition = self.get_type(type_name)
        if not isinstance(definition, (ObjectTypeDef, InterfaceDef)):
            raise SchemaDefinitionError(f"'{type_name}' is a {definition.kind} and has no fields")
        return tuple(self._fields[type_name].values())

    def lookup_field(self, type_name: str, field_name: str) -> FieldDef:
        self.get_type(type_name)
        field_def = self._fields.get(type_name, {}).get(field_name)
        if field_def is None:
            raise FieldNotFoundError(type_name, field_name)
        return field_def

    def effective_behaviors(self, type_name: str) -> Mapping[str, Behavior]:
        self.get_type(type_name)
        return self._behaviors.get(type_name, MappingProxyType({}))

    def effective_behavior(self, type_name: str, field_name: str) -> Behavior:
        """
        Get the composed behavior for a field.

        Raises:
            FieldNotFoundError: If the type has no such field
            BehaviorNotFoundError: If the field has no behavior (default resolution applies)
        """
        self.lookup_field(type_name, field_name)
        behavior = self._behaviors.get(type_name, {}).get(field_name)
        if behavior is None:
            raise BehaviorNotFoundError(type_name, field_name)
        return behavior

    # --- runtime -----------------------------------------------------------

    def resolve_type(self, value: Any, declared: Any, context: Any = None) -> ObjectTypeDef:
        """Concrete object type of `value` for a field declared as `declared`."""
        return self._resolver.resolve_type(value, declared, context)


class SchemaRegistry:
    """
    Collects definitions during the build phase and finalizes them once.

    Declaration problems (duplicate type names, duplicate fields) are
    recorded and reported by finalize() together with every other build
    error, so all of them can be fixed in one pass.

    Example:
        registry = SchemaRegistry()
        registry.define_interface("Node", fields=[field("id", "ID", null=False)])
        registry.define_type("Comment", implements=["Node"])
        registry.define_type("Query", fields=[field("node", "Node")])
        registry.define_schema(query="Query", orphan_types=["Comment"])
        schema = registry.finalize()
    """

    def __init__(self, settings: Optional[SchemaSettings] = None):
        self.settings = settings or SchemaSettings()
        self.fields = FieldRegistry()
        self._definitions: dict[str, TypeDef] = {s.name: s for s in BUILTIN_SCALARS}
        self._schema_def: Optional[SchemaDef] = None
        self._declaration_errors: list[TypegraphError] = []
        self._schema: Optional[FrozenSchema] = None

    @property
    def finalized(self) -> bool:
        return self._schema is not None

    @property
    def definitions(self) -> Mapping[str, TypeDef]:
        return MappingProxyType(self._definitions)

    # --- declaration -------------------------------------------------------

    def register(self, definition: TypeDef) -> TypeDef:
        """
        Register a definition.

        Interface and object type fields are added to the field registry,
        camelized when settings.auto_camelize is on. Returns the stored
        (normalized) definition.

        Raises:
            SchemaFrozenError: If the registry is already finalized
        """
        self._check_not_finalized(f"register type '{definition.name}'")

        if definition.name in self._definitions:
            self._declaration_errors.append(DuplicateTypeError(definition.name))
            return definition

        if isinstance(definition, (InterfaceDef, ObjectTypeDef)):
            definition = self._register_fields(definition)
        elif isinstance(definition, InputObjectDef) and self.settings.auto_camelize:
            definition = dataclasses.replace(
                definition,
                fields=tuple(dataclasses.replace(f, name=to_camel_case(f.name)) for f in definition.fields),
            )

        self._definitions[definition.name] = definition
        logger.debug(f"Registered {definition.kind} {definition.name}")
        return definition

    def define_interface(
        self,
        name: str,
        fields: Sequence[FieldDef] = (),
        behaviors: Optional[Mapping[str, Behavior]] = None,
        resolve_type: Optional[ResolveType] = None,
        orphan_types: Iterable[Any] = (),
        description: Optional[str] = None,
    ) -> InterfaceDef:
        return self.register(InterfaceDef(
            name=name,
            fields=tuple(fields),
            behaviors=behaviors or {},
            resolve_type=resolve_type,
            orphan_types=tuple(orphan_types),
            description=description,
        ))

    def define_type(
        self,
        name: str,
        implements: Iterable[Any] = (),
        fields: Sequence[FieldDef] = (),
        behaviors: Optional[Mapping[str, Behavior]] = None,
        description: Optional[str] = None,
    ) -> ObjectTypeDef:
        return self.register(ObjectTypeDef(
            name=name,
            interfaces=tuple(implements),
            fields=tuple(fields),
            behaviors=behaviors or {},
            description=description,
        ))

    def define_union(
        self,
        name: str,
        possible_types: Iterable[Any],
        resolve_type: Optional[ResolveType] = None,
        description: Optional[str] = None,
    ) -> UnionDef:
        return self.register(UnionDef(
            name=name,
            possible_types=tuple(possible_types),
            resolve_type=resolve_type,
            description=description,
        ))

    def define_enum(self, name: str, values: Iterable[Any], description: Optional[str] = None) -> EnumDef:
        return self.register(EnumDef(name=name, values=enum_values(values), description=description))

    def define_input(
        self,
        name: str,
        fields: Sequence[ArgumentDef],
        description: Optional[str] = None,
    ) -> InputObjectDef:
        return self.register(InputObjectDef(name=name, fields=tuple(fields), description=description))

    def define_scalar(self, name: str, description: Optional[str] = None) -> ScalarDef:
        return self.register(ScalarDef(name=name, description=description))

    def define_schema(
        self,
        query: Any,
        mutation: Any = None,
        subscription: Any = None,
        orphan_types: Iterable[Any] = (),
        resolve_type: Optional[ResolveType] = None,
    ) -> SchemaDef:
        """Declare root operation types, schema-level orphan types and the default resolve_type."""
        self._check_not_finalized("define_schema")
        schema_def = SchemaDef(
            query=query,
            mutation=mutation,
            subscription=subscription,
            orphan_types=tuple(orphan_types),
            resolve_type=resolve_type,
        )
        if self._schema_def is not None:
            self._declaration_errors.append(SchemaDefinitionError("Schema roots are already defined"))
            return schema_def
        self._schema_def = schema_def
        return schema_def

    # --- build -------------------------------------------------------------

    def build(self) -> BuildResult:
        """
        Validate, compose and freeze the schema.

        Returns the cached result when the registry is already finalized.
        """
        if self._schema is not None:
            return BuildResult(success=True, schema=self._schema)

        errors: list[TypegraphError] = list(self._declaration_errors)
        errors.extend(self._validate_references())

        composer = ImplementationComposer(self._definitions, self.fields)
        compositions: dict[str, Composition] = {}
        for definition in self._definitions.values():
            if isinstance(definition, ObjectTypeDef):
                composition = composer.compose(definition)
                errors.extend(composition.errors)
                compositions[definition.name] = composition

        if errors:
            logger.debug(f"Schema build failed with {len(errors)} errors")
            return BuildResult(success=False, errors=errors)

        behaviors: dict[str, Mapping[str, Behavior]] = {}
        for definition in self._definitions.values():
            if isinstance(definition, InterfaceDef):
                self.fields.set_effective(
                    definition.name,
                    self.fields.declared(definition.name, FieldLayer.INTERFACE).values(),
                )
                behaviors[definition.name] = composer.layer_behaviors(definition, FieldLayer.INTERFACE)
        for name, composition in compositions.items():
            self.fields.set_effective(name, composition.fields.values())
            behaviors[name] = composition.behaviors

        tracker = ReachabilityTracker(self._definitions, self.fields)
        reachability = tracker.compute(self._schema_def.roots, self._schema_def.orphan_types)
        if self.settings.warn_on_excluded_types:
            for type_name, interfaces in reachability.excluded_implementers.items():
                logger.warning(
                    f"Type '{type_name}' implements {', '.join(interfaces)} but is not reachable "
                    f"and is excluded from the schema; reference it from a field or add it to orphan_types"
                )

        self._schema = FrozenSchema(
            definitions=self._definitions,
            schema_def=self._schema_def,
            field_registry=self.fields,
            behaviors=behaviors,
            reachability=reachability,
            settings=self.settings,
        )
        self.fields.freeze()
        logger.info(
            f"Schema finalized with {len(self._definitions)} types, "
            f"{len(reachability.reachable)} reachable, fingerprint={self._schema.fingerprint}"
        )
        return BuildResult(success=True, schema=self._schema)

    def finalize(self) -> FrozenSchema:
        """
        Build the schema, raising on failure.

        Idempotent: later calls return the same FrozenSchema.

        Raises:
            BuildError: With every violation found
        """
        result = self.build()
        if not result.success:
            raise BuildError(result.errors)
        return result.schema

    # --- runtime API (after finalize) --------------------------------------

    @property
    def schema(self) -> FrozenSchema:
        return self._require_finalized("schema")

    def effective_fields(self, type_name: str) -> tuple[FieldDef, ...]:
        return self._require_finalized("effective_fields").effective_fields(type_name)

    def effective_behavior(self, type_name: str, field_name: str) -> Behavior:
        return self._require_finalized("effective_behavior").effective_behavior(type_name, field_name)

    def lookup_field(self, type_name: str, field_name: str) -> FieldDef:
        return self._require_finalized("lookup_field").lookup_field(type_name, field_name)

    def resolve_type(self, value: Any, declared: Any, context: Any = None) -> ObjectTypeDef:
        return self._require_finalized("resolve_type").resolve_type(value, declared, context)

    def reachable_types(self) -> tuple[TypeDef, ...]:
        return self._require_finalized("reachable_types").reachable_types()

    # --- internals ---------------------------------------------------------

    def _require_finalized(self, operation: str) -> FrozenSchema:
        if self._schema is None:
            raise SchemaNotFinalizedError(operation)
        return self._schema

    def _check_not_finalized(self, action: str) -> None:
        if self._schema is not None:
            raise SchemaFrozenError(f"Cannot {action}: schema is already finalized")

    def _register_fields(self, definition: InterfaceDef | ObjectTypeDef) -> InterfaceDef | ObjectTypeDef:
        """Add fields to the field registry and align behavior keys with final field names."""
        layer = FieldLayer.INTERFACE if isinstance(definition, InterfaceDef) else FieldLayer.OWN
        renamed: dict[str, str] = {}
        fields: list[FieldDef] = []

        for field_def in definition.fields:
            final = camelize_field(field_def) if self.settings.auto_camelize else field_def
            renamed[field_def.name] = final.name
            try:
                self.fields.define(definition.name, final, layer)
            except DuplicateFieldError as e:
                self._declaration_errors.append(e)
                continue
            fields.append(final)

        behaviors = {}
        for key, behavior in definition.behaviors.items():
            name = renamed.get(key)
            if name is None:
                name = to_camel_case(key) if self.settings.auto_camelize else key
            behaviors[name] = behavior

        return dataclasses.replace(definition, fields=tuple(fields), behaviors=behaviors)

    def _validate_references(self) -> list[TypegraphError]:
        errors: list[TypegraphError] = []

        if self._schema_def is None:
            errors.append(SchemaDefinitionError("No query root defined; call define_schema(query=...)"))
        else:
            for role in ("query", "mutation", "subscription"):
                name = getattr(self._schema_def, role)
                if name:
                    self._expect_kind(name, {"OBJECT"}, f"schema {role}", errors)
            for name in self._schema_def.orphan_types:
                self._expect_kind(name, {"OBJECT"}, "schema orphan_types", errors)

        for definition in self._definitions.values():
            if isinstance(definition, (InterfaceDef, ObjectTypeDef)):
                for field_def in definition.fields:
                    location = f"{definition.name}.{field_def.name}"
                    self._expect_kind(field_def.type.named_type, OUTPUT_KINDS, location, errors)
                    for arg in field_def.arguments:
                        self._expect_kind(arg.type.named_type, INPUT_KINDS, f"{location}({arg.name})", errors)

            if isinstance(definition, InterfaceDef):
                for name in definition.orphan_types:
                    self._expect_kind(name, {"OBJECT"}, f"{definition.name} orphan_types", errors)
            elif isinstance(definition, UnionDef):
                if not definition.possible_types:
                    errors.append(SchemaDefinitionError(f"Union '{definition.name}' has no member types"))
                for name in definition.possible_types:
                    self._expect_kind(name, {"OBJECT"}, f"union {definition.name}", errors)
            elif isinstance(definition, InputObjectDef):
                for input_field in definition.fields:
                    self._expect_kind(
                        input_field.type.named_type,
                        INPUT_KINDS,
                        f"{definition.name}.{input_field.name}",
                        errors,
                    )
            elif isinstance(definition, EnumDef) and not definition.values:
                errors.append(SchemaDefinitionError(f"Enum '{definition.name}' has no values"))

        return errors

    def _expect_kind(self, name: str, kinds: Iterable[str], referenced_by: str, errors: list[TypegraphError]) -> None:
        definition = self._definitions.get(name)
        if definition is None:
            errors.append(UnknownTypeError(name, referenced_by=referenced_by))
        elif definition.kind not in kinds:
            expected = " or ".join(sorted(kinds))
            errors.append(SchemaDefinitionError(
                f"{referenced_by} must reference {expected}, got {definition.kind} '{name}'"
            ))
