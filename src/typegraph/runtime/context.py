"""
Execution context passed to field behaviors and resolve-type functions.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from typegraph.core.registry import FrozenSchema


@dataclass(frozen=True)
class ExecutionContext:
    """
    Per-request context.

    Contains:
    - schema: The frozen schema being executed
    - viewer: The authenticated user, if any
    - values: Arbitrary request-scoped values supplied by the executor
    - parent_type / field_name: Set by FieldExecutor for the field being resolved
    """
    schema: Optional[FrozenSchema] = None
    viewer: Any = None
    values: dict[str, Any] = field(default_factory=dict)
    parent_type: Optional[str] = None
    field_name: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        if key == "viewer":
            return self.viewer
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Get a request-scoped value by key."""
        try:
            return self[key]
        except KeyError:
            return default

    def for_field(self, parent_type: str, field_name: str) -> ExecutionContext:
        """Copy of this context scoped to one field invocation."""
        return dataclasses.replace(self, parent_type=parent_type, field_name=field_name)
