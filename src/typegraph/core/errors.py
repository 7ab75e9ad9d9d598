"""
Custom exceptions for the typegraph system.

Build-time errors are collected by SchemaRegistry.finalize() and raised
together as a BuildError. Resolution-time errors are raised directly to the
caller. None of them are transient.
"""

from __future__ import annotations

from typing import Optional


class TypegraphError(Exception):
    """Base exception for all typegraph errors."""
    pass


class DuplicateTypeError(TypegraphError):
    """Raised when two definitions share a type name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Type name '{name}' is already defined")


class DuplicateFieldError(TypegraphError):
    """Raised when an owner declares the same field twice in one layer."""

    def __init__(self, owner: str, field_name: str, layer: str):
        self.owner = owner
        self.field_name = field_name
        self.layer = layer
        super().__init__(f"Field '{owner}.{field_name}' is already defined ({layer} layer)")


class InterfaceContractViolation(TypegraphError):
    """Raised when a type does not satisfy a field of an interface it implements."""

    def __init__(self, interface: str, type_name: str, field_name: str, reason: str):
        self.interface = interface
        self.type_name = type_name
        self.field_name = field_name
        self.reason = reason
        super().__init__(
            f"'{type_name}' does not satisfy '{interface}.{field_name}': {reason}"
        )


class SchemaDefinitionError(TypegraphError):
    """Raised when a definition is structurally invalid."""
    pass


class UnknownTypeError(TypegraphError):
    """Raised when a type name is not present in the schema."""

    def __init__(self, name: str, referenced_by: Optional[str] = None, hint: Optional[str] = None):
        self.name = name
        self.referenced_by = referenced_by
        message = f"Unknown type '{name}'"
        if referenced_by:
            message += f" (referenced by {referenced_by})"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class UnresolvableTypeError(TypegraphError):
    """Raised when no resolve-type behavior produced a concrete type."""

    def __init__(self, abstract_type: str):
        self.abstract_type = abstract_type
        super().__init__(
            f"Cannot resolve a concrete type for '{abstract_type}': "
            f"no resolve_type behavior returned a result"
        )


class ImpossibleTypeError(TypegraphError):
    """Raised when a resolved type is not a possible type of the abstract type."""

    def __init__(self, abstract_type: str, type_name: str):
        self.abstract_type = abstract_type
        self.type_name = type_name
        super().__init__(f"'{type_name}' is not a possible type of '{abstract_type}'")


class SchemaNotFinalizedError(TypegraphError):
    """Raised when runtime operations are used before finalize()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call {operation}() before the schema is finalized")


class SchemaFrozenError(TypegraphError):
    """Raised when declaring definitions after finalize()."""
    pass


class NotFoundError(TypegraphError):
    """Raised when a lookup finds nothing."""
    pass


class FieldNotFoundError(NotFoundError):
    """Raised when a field is not part of a type's effective field set."""

    def __init__(self, owner: str, field_name: str):
        self.owner = owner
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' not found on '{owner}'")


class BehaviorNotFoundError(NotFoundError):
    """Raised when a field has no behavior after composition."""

    def __init__(self, owner: str, field_name: str):
        self.owner = owner
        self.field_name = field_name
        super().__init__(f"No behavior for '{owner}.{field_name}'")


class ArgumentError(TypegraphError):
    """Raised when field arguments do not match the field's declaration."""

    def __init__(self, owner: str, field_name: str, message: str):
        self.owner = owner
        self.field_name = field_name
        super().__init__(f"{owner}.{field_name}: {message}")


class BuildError(TypegraphError):
    """Raised by finalize() with every violation found during the build."""

    def __init__(self, errors: list[TypegraphError]):
        self.errors = errors
        details = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Schema build failed with {len(errors)} error(s):\n{details}")
