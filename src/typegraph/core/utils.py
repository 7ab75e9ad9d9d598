"""
Utility functions for typegraph.

Includes:
- Case conversion (camelCase <-> snake_case)
- Field name normalization
- Default attribute resolution
"""

from __future__ import annotations

import dataclasses
import inspect
import re
from typing import Any, Mapping

from .defs import FieldDef


# =============================================================================
# Case conversion utilities
# =============================================================================

# Word boundaries: lower/digit -> upper, and the last capital of an acronym
_WORD_BOUNDARY_PATTERN = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SNAKE_TO_CAMEL_PATTERN = re.compile(r'_([a-z0-9])')


def to_snake_case(name: str) -> str:
    """
    Convert camelCase to snake_case.

    Examples:
        viewerHasStarred -> viewer_has_starred
        totalCount -> total_count
        viewerID -> viewer_id
        IDToken -> id_token
    """
    return _WORD_BOUNDARY_PATTERN.sub("_", name).lower()


def to_camel_case(name: str) -> str:
    """
    Convert snake_case to camelCase.

    Leading underscores are kept, names without underscores are returned
    unchanged.

    Examples:
        viewer_has_starred -> viewerHasStarred
        order_by -> orderBy
        id -> id
    """
    stripped = name.lstrip("_")
    prefix = name[: len(name) - len(stripped)]

    def replace_underscore(match):
        return match.group(1).upper()

    return prefix + _SNAKE_TO_CAMEL_PATTERN.sub(replace_underscore, stripped)


# =============================================================================
# Field name utilities
# =============================================================================


def camelize_field(field_def: FieldDef) -> FieldDef:
    """Return the field with its name and argument names in camelCase."""
    if not field_def.camelize:
        return field_def

    arguments = tuple(
        dataclasses.replace(arg, name=to_camel_case(arg.name))
        for arg in field_def.arguments
    )
    return dataclasses.replace(
        field_def,
        name=to_camel_case(field_def.name),
        arguments=arguments,
    )


def resolve_attribute(obj: Any, name: str) -> Any:
    """
    Default field resolution: read `name` from a mapping or an object.

    The snake_case form of the name is tried first, then the name as
    declared. Bound methods are called without arguments. Missing values
    resolve to None.
    """
    candidates = [to_snake_case(name)]
    if name not in candidates:
        candidates.append(name)

    if isinstance(obj, Mapping):
        for key in candidates:
            if key in obj:
                return obj[key]
        return None

    for attr in candidates:
        if hasattr(obj, attr):
            value = getattr(obj, attr)
            return value() if inspect.ismethod(value) else value
    return None
