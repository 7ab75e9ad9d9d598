"""
Runtime module - type resolution and field invocation.
"""

from __future__ import annotations

from .context import ExecutionContext
from .resolver import TypeResolver, resolve_by_class
from .executor import FieldExecutor

__all__ = [
    "ExecutionContext",
    "TypeResolver",
    "resolve_by_class",
    "FieldExecutor",
]
