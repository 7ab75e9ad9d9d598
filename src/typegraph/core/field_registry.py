"""
Field registry - stores field definitions per owner and composition layer.

Layers:
- INTERFACE: fields declared by an interface
- OWN: fields declared directly by an object type
- EFFECTIVE: the composed table written once per owner at finalize time

The same owner may hold a field name in several layers; this is how an
object type overrides a field it inherits from an interface.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .defs import FieldDef
from .errors import DuplicateFieldError, FieldNotFoundError, SchemaFrozenError

logger = logging.getLogger(__name__)


class FieldLayer(str, Enum):
    INTERFACE = "interface"
    OWN = "own"
    EFFECTIVE = "effective"


class FieldRegistry:
    """
    Stores FieldDefs keyed by (owner, layer, field name).

    Usage:
        fields = FieldRegistry()
        fields.define("Node", field("id", "ID!"), FieldLayer.INTERFACE)
        fields.set_effective("Node", fields.declared("Node", FieldLayer.INTERFACE))
        fields.lookup("Node", "id")
    """

    def __init__(self):
        self._layers: dict[tuple[str, FieldLayer], dict[str, FieldDef]] = {}
        self._frozen = False

    def define(self, owner: str, field_def: FieldDef, layer: FieldLayer = FieldLayer.OWN) -> None:
        """
        Register a field under an owner.

        Raises:
            DuplicateFieldError: If the owner already has this field in the layer
            SchemaFrozenError: If the registry is frozen
        """
        self._check_not_frozen(f"define field {owner}.{field_def.name}")
        fields = self._layers.setdefault((owner, layer), {})
        if field_def.name in fields:
            raise DuplicateFieldError(owner, field_def.name, layer.value)
        fields[field_def.name] = field_def
        logger.debug(f"Defined field {owner}.{field_def.name} ({layer.value})")

    def declared(self, owner: str, layer: FieldLayer) -> Mapping[str, FieldDef]:
        """Fields of one layer, in declaration order."""
        return MappingProxyType(self._layers.get((owner, layer), {}))

    def set_effective(self, owner: str, fields: Iterable[FieldDef]) -> None:
        """Store the composed field table for an owner, replacing any previous one."""
        self._check_not_frozen(f"set effective fields of {owner}")
        self._layers[(owner, FieldLayer.EFFECTIVE)] = {f.name: f for f in fields}

    def effective(self, owner: str) -> Mapping[str, FieldDef]:
        return self.declared(owner, FieldLayer.EFFECTIVE)

    def lookup(self, owner: str, field_name: str) -> FieldDef:
        """
        Get a field from the owner's effective table.

        Raises:
            FieldNotFoundError: If the owner has no such effective field
        """
        field_def = self._layers.get((owner, FieldLayer.EFFECTIVE), {}).get(field_name)
        if field_def is None:
            raise FieldNotFoundError(owner, field_name)
        return field_def

    def owners(self) -> set[str]:
        return {owner for owner, _ in self._layers}

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further define() and set_effective() calls."""
        self._frozen = True

    def _check_not_frozen(self, action: str) -> None:
        if self._frozen:
            raise SchemaFrozenError(f"Cannot {action}: field registry is frozen")
