"""
SDL printer for frozen schemas.

Renders the reachable part of a schema:
- schema roots
- types sorted by name (built-in scalars omitted)
- fields in effective (composition) order

The output is deterministic, which makes it the basis of the schema
fingerprint.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any, Optional

from .defs import (
    NO_DEFAULT,
    ArgumentDef,
    BUILTIN_SCALARS,
    EnumDef,
    FieldDef,
    InputObjectDef,
    InterfaceDef,
    ObjectTypeDef,
    ScalarDef,
    UnionDef,
)

if TYPE_CHECKING:
    from .registry import FrozenSchema


_BUILTIN_NAMES = frozenset(s.name for s in BUILTIN_SCALARS)


def format_value(value: Any) -> str:
    """Format a default value as a GraphQL literal."""
    if isinstance(value, dict):
        items = ", ".join(f"{k}: {format_value(v)}" for k, v in value.items())
        return f"{{{items}}}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    return json.dumps(value, default=str)


def _description_lines(description: Optional[str], indent: str = "") -> list[str]:
    if not description:
        return []
    if "\n" not in description and '"' not in description:
        return [f'{indent}"{description}"']
    lines = [f'{indent}"""']
    lines.extend(f"{indent}{line}" if line else "" for line in description.splitlines())
    lines.append(f'{indent}"""')
    return lines


def _deprecated(reason: Optional[str]) -> str:
    if reason is None:
        return ""
    return f" @deprecated(reason: {json.dumps(reason)})"


def _print_argument(arg: ArgumentDef) -> str:
    text = f"{arg.name}: {arg.type}"
    if arg.default is not NO_DEFAULT:
        text += f" = {format_value(arg.default)}"
    return text


def _print_field(field_def: FieldDef) -> list[str]:
    lines = _description_lines(field_def.description, "  ")
    args = ""
    if field_def.arguments:
        args = "(" + ", ".join(_print_argument(a) for a in field_def.arguments) + ")"
    lines.append(f"  {field_def.name}{args}: {field_def.type}{_deprecated(field_def.deprecation_reason)}")
    return lines


def print_type(schema: FrozenSchema, definition) -> list[str]:
    """Render one type definition as SDL lines."""
    lines = _description_lines(definition.description)

    if isinstance(definition, ScalarDef):
        lines.append(f"scalar {definition.name}")
        return lines

    if isinstance(definition, EnumDef):
        lines.append(f"enum {definition.name} {{")
        for value in definition.values:
            lines.extend(_description_lines(value.description, "  "))
            lines.append(f"  {value.name}{_deprecated(value.deprecation_reason)}")
        lines.append("}")
        return lines

    if isinstance(definition, UnionDef):
        lines.append(f"union {definition.name} = {' | '.join(definition.possible_types)}")
        return lines

    if isinstance(definition, InputObjectDef):
        lines.append(f"input {definition.name} {{")
        for input_field in definition.fields:
            lines.extend(_description_lines(input_field.description, "  "))
            lines.append(f"  {_print_argument(input_field)}")
        lines.append("}")
        return lines

    if isinstance(definition, InterfaceDef):
        header = f"interface {definition.name}"
    else:
        header = f"type {definition.name}"
        if isinstance(definition, ObjectTypeDef) and definition.interfaces:
            header += " implements " + " & ".join(definition.interfaces)

    lines.append(f"{header} {{")
    for field_def in schema.effective_fields(definition.name):
        lines.extend(_print_field(field_def))
    lines.append("}")
    return lines


def print_schema(schema: FrozenSchema) -> str:
    """Render the reachable schema as SDL."""
    blocks: list[str] = []

    roots = [("query", schema.schema_def.query)]
    if schema.schema_def.mutation:
        roots.append(("mutation", schema.schema_def.mutation))
    if schema.schema_def.subscription:
        roots.append(("subscription", schema.schema_def.subscription))
    blocks.append("\n".join(["schema {", *(f"  {op}: {name}" for op, name in roots), "}"]))

    for definition in schema.reachable_types():
        if definition.name in _BUILTIN_NAMES:
            continue
        blocks.append("\n".join(print_type(schema, definition)))

    return "\n\n".join(blocks) + "\n"


def compute_fingerprint(schema: FrozenSchema) -> str:
    """
    SHA-256 fingerprint of the printed schema.

    Returns:
        Fingerprint string in format 'sha256:<hash>'
    """
    digest = hashlib.sha256(print_schema(schema).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
