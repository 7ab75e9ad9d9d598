"""
Field executor - invokes composed field behaviors.

This is the narrow interface a query executor uses for one field at a
time:

    executor = FieldExecutor(schema)
    value = executor.resolve_field("Repository", "viewerHasStarred", repo, {}, context)
    concrete = executor.resolve_abstract(value, "Starrable", context)

Fields without a behavior fall back to reading the value from the parent
object (mapping key or attribute). Exceptions raised by behaviors
propagate unchanged.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping, Optional

from typegraph.core.defs import FieldDef, ObjectTypeDef
from typegraph.core.errors import ArgumentError
from typegraph.core.utils import resolve_attribute

from .context import ExecutionContext

if TYPE_CHECKING:
    from typegraph.core.registry import FrozenSchema


class FieldExecutor:
    """Resolves single fields against a frozen schema. Holds no per-request state."""

    def __init__(self, schema: FrozenSchema):
        self.schema = schema

    def resolve_field(
        self,
        type_name: str,
        field_name: str,
        obj: Any,
        arguments: Optional[Mapping[str, Any]] = None,
        context: Optional[ExecutionContext] = None,
    ) -> Any:
        """
        Resolve `type_name.field_name` on `obj`.

        Raises:
            FieldNotFoundError: If the field is not part of the type
            ArgumentError: If arguments do not match the field declaration
        """
        field_def = self.schema.lookup_field(type_name, field_name)
        args = self.coerce_arguments(type_name, field_def, arguments or {})
        ctx = self._field_context(context, type_name, field_name)

        behavior = self.schema.effective_behaviors(type_name).get(field_name)
        if behavior is None:
            return resolve_attribute(obj, field_name)
        return behavior(obj, args, ctx)

    def resolve_abstract(self, value: Any, declared: Any, context: Optional[ExecutionContext] = None) -> ObjectTypeDef:
        """Concrete type of a value returned for an interface or union field."""
        return self.schema.resolve_type(value, declared, context)

    def coerce_arguments(
        self,
        type_name: str,
        field_def: FieldDef,
        arguments: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Apply defaults and check required / unknown arguments.

        Arguments that are neither given nor defaulted are left out.
        """
        declared = {arg.name for arg in field_def.arguments}
        unknown = sorted(set(arguments) - declared)
        if unknown:
            raise ArgumentError(type_name, field_def.name, f"unknown arguments {unknown}")

        coerced: dict[str, Any] = {}
        for arg in field_def.arguments:
            if arg.name in arguments:
                value = arguments[arg.name]
                if value is None and arg.type.is_non_null:
                    raise ArgumentError(type_name, field_def.name, f"argument '{arg.name}' must not be null")
            elif arg.has_default:
                value = arg.default
            elif arg.required:
                raise ArgumentError(type_name, field_def.name, f"missing required argument '{arg.name}'")
            else:
                continue
            coerced[arg.name] = value
        return coerced

    def _field_context(
        self,
        context: Optional[ExecutionContext],
        type_name: str,
        field_name: str,
    ) -> ExecutionContext:
        if context is None:
            context = ExecutionContext(schema=self.schema)
        elif context.schema is None:
            context = dataclasses.replace(context, schema=self.schema)
        return context.for_field(type_name, field_name)
