"""
Reachability tracker - decides which types belong to the final schema.

Breadth-first traversal from the root operation types and the
schema-level orphan types. Visiting a type enqueues:
- object / interface: effective field return types and argument types
- object: the interfaces it implements
- interface: its declared orphan types
- union: its member types
- input object: its input field types

Implementers of an interface are NOT enqueued when the interface is
visited. A type that is only connected to the schema by implementing an
interface is excluded unless something references it or it is declared
as an orphan type.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from .defs import InputObjectDef, InterfaceDef, ObjectTypeDef, TypeDef, UnionDef
from .field_registry import FieldRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReachabilityResult:
    """Outcome of a reachability pass."""
    reachable: frozenset[str]
    unreachable: tuple[str, ...] = ()
    # object type -> reachable interfaces it implements, for types left out
    excluded_implementers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


class ReachabilityTracker:
    """
    Usage:
        tracker = ReachabilityTracker(definitions, field_registry)
        result = tracker.compute(roots=["Query"], orphan_types=["Comment"])
        "Comment" in result.reachable
    """

    def __init__(self, definitions: Mapping[str, TypeDef], field_registry: FieldRegistry):
        self.definitions = definitions
        self.field_registry = field_registry

    def compute(self, roots: Iterable[str], orphan_types: Iterable[str] = ()) -> ReachabilityResult:
        visited: set[str] = set()
        queue: deque[str] = deque(roots)
        queue.extend(orphan_types)

        while queue:
            name = queue.popleft()
            if name in visited:
                continue
            definition = self.definitions.get(name)
            if definition is None:
                # Dangling references are reported by schema validation
                continue
            visited.add(name)
            queue.extend(ref for ref in self._references(definition) if ref not in visited)

        unreachable = tuple(sorted(name for name in self.definitions if name not in visited))
        excluded_implementers = {}
        for name in unreachable:
            definition = self.definitions[name]
            if isinstance(definition, ObjectTypeDef):
                interfaces = tuple(i for i in definition.interfaces if i in visited)
                if interfaces:
                    excluded_implementers[name] = interfaces

        logger.debug(f"Reachability: {len(visited)} reachable, {len(unreachable)} unreachable")
        return ReachabilityResult(
            reachable=frozenset(visited),
            unreachable=unreachable,
            excluded_implementers=excluded_implementers,
        )

    def _references(self, definition: TypeDef) -> Iterator[str]:
        if isinstance(definition, (ObjectTypeDef, InterfaceDef)):
            for field_def in self.field_registry.effective(definition.name).values():
                yield field_def.type.named_type
                for arg in field_def.arguments:
                    yield arg.type.named_type

        if isinstance(definition, ObjectTypeDef):
            yield from definition.interfaces
        elif isinstance(definition, InterfaceDef):
            yield from definition.orphan_types
        elif isinstance(definition, UnionDef):
            yield from definition.possible_types
        elif isinstance(definition, InputObjectDef):
            for input_field in definition.fields:
                yield input_field.type.named_type
