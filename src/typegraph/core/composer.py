"""
Implementation composer - merges interface contracts into object types.

For a type declaring `implements I1, I2`:
1. Fold interface fields in declaration order; the first interface to
   declare a name keeps it.
2. Overlay the type's own fields; they always win.
3. Apply the same two passes to behaviors.
4. Bind owner-aware behaviors (those with `for_type`) to the type.
5. Check every interface field against the composed result.

Composition reads the field registry and definitions only; the caller
decides what to do with the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .defs import Behavior, FieldDef, InterfaceDef, ObjectTypeDef, TypeDef, UnionDef
from .errors import (
    InterfaceContractViolation,
    SchemaDefinitionError,
    TypegraphError,
    UnknownTypeError,
)
from .field_registry import FieldLayer, FieldRegistry
from .type_refs import is_subtype

logger = logging.getLogger(__name__)


@dataclass
class Composition:
    """Effective field and behavior tables for one object type."""
    type_name: str
    fields: dict[str, FieldDef] = field(default_factory=dict)
    behaviors: dict[str, Behavior] = field(default_factory=dict)
    errors: list[TypegraphError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class ImplementationComposer:
    """
    Computes effective fields and behaviors of object types.

    Usage:
        composer = ImplementationComposer(definitions, field_registry)
        composition = composer.compose(definitions["Repository"])
        if composition.errors:
            ...
    """

    def __init__(self, definitions: Mapping[str, TypeDef], field_registry: FieldRegistry):
        self.definitions = definitions
        self.field_registry = field_registry

    def compose(self, type_def: ObjectTypeDef) -> Composition:
        composition = Composition(type_name=type_def.name)
        interfaces = self._resolve_interfaces(type_def, composition.errors)

        # Pass 1: interfaces, first declared wins
        for iface in interfaces:
            for name, iface_field in self.field_registry.declared(iface.name, FieldLayer.INTERFACE).items():
                composition.fields.setdefault(name, iface_field)
            for name, behavior in self.layer_behaviors(iface, FieldLayer.INTERFACE).items():
                composition.behaviors.setdefault(name, behavior)

        # Pass 2: the type's own declarations always win
        composition.fields.update(self.field_registry.declared(type_def.name, FieldLayer.OWN))
        composition.behaviors.update(self.layer_behaviors(type_def, FieldLayer.OWN))

        for name in list(composition.behaviors):
            if name not in composition.fields:
                logger.warning(f"Dropping behavior '{name}' on {type_def.name}: no such field")
                del composition.behaviors[name]

        # Behaviors that encode their owner (global IDs) are bound to this type
        for name, behavior in list(composition.behaviors.items()):
            for_type = getattr(behavior, "for_type", None)
            if callable(for_type):
                composition.behaviors[name] = for_type(type_def.name)

        for iface in interfaces:
            self._check_contract(iface, type_def.name, composition)

        logger.debug(
            f"Composed {type_def.name}: {len(composition.fields)} fields, "
            f"{len(composition.behaviors)} behaviors, {len(composition.errors)} errors"
        )
        return composition

    def is_possible_type(self, abstract_name: str, type_name: str) -> bool:
        """Whether `type_name` is an implementation or member of `abstract_name`."""
        abstract = self.definitions.get(abstract_name)
        candidate = self.definitions.get(type_name)
        if isinstance(abstract, InterfaceDef):
            return isinstance(candidate, ObjectTypeDef) and abstract_name in candidate.interfaces
        if isinstance(abstract, UnionDef):
            return type_name in abstract.possible_types
        return False

    def _resolve_interfaces(self, type_def: ObjectTypeDef, errors: list[TypegraphError]) -> list[InterfaceDef]:
        interfaces: list[InterfaceDef] = []
        seen: set[str] = set()
        for name in type_def.interfaces:
            if name in seen:
                errors.append(SchemaDefinitionError(
                    f"{type_def.name} declares interface '{name}' more than once"
                ))
                continue
            seen.add(name)

            iface = self.definitions.get(name)
            if iface is None:
                errors.append(UnknownTypeError(name, referenced_by=f"{type_def.name} implements"))
            elif not isinstance(iface, InterfaceDef):
                errors.append(SchemaDefinitionError(
                    f"{type_def.name} implements '{name}', which is a {iface.kind}, not an INTERFACE"
                ))
            else:
                interfaces.append(iface)
        return interfaces

    def layer_behaviors(self, definition, layer: FieldLayer) -> dict[str, Behavior]:
        """Inline field resolvers of a layer, overridden by its behaviors map."""
        behaviors = {
            name: field_def.resolver
            for name, field_def in self.field_registry.declared(definition.name, layer).items()
            if field_def.resolver is not None
        }
        behaviors.update(definition.behaviors)
        return behaviors

    def _check_contract(self, iface: InterfaceDef, type_name: str, composition: Composition) -> None:
        for name, iface_field in self.field_registry.declared(iface.name, FieldLayer.INTERFACE).items():
            impl = composition.fields[name]
            reason = self._incompatibility(iface_field, impl)
            if reason:
                composition.errors.append(InterfaceContractViolation(iface.name, type_name, name, reason))

    def _incompatibility(self, iface_field: FieldDef, impl: FieldDef) -> Optional[str]:
        if impl is iface_field:
            return None

        if not is_subtype(impl.type, iface_field.type, self.is_possible_type):
            return f"type {impl.type} is not compatible with {iface_field.type}"

        for arg in iface_field.arguments:
            impl_arg = impl.get_argument(arg.name)
            if impl_arg is None:
                return f"missing argument '{arg.name}'"
            if impl_arg.type != arg.type:
                return f"argument '{arg.name}' has type {impl_arg.type}, expected {arg.type}"

        for impl_arg in impl.arguments:
            if iface_field.get_argument(impl_arg.name) is None and impl_arg.required:
                return f"additional argument '{impl_arg.name}' must be optional"

        return None
