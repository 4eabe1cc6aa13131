"""Component registry implementation.

Entries are looked up by type name. Unknown names fail fast with
``UnknownComponentTypeError`` so the store never builds a malformed layer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from src.core.errors import UnknownComponentTypeError
from src.schema import ObjectShape, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """A registered component type.

    Attributes:
        name: Component type name used as the layer ``type``.
        component: Opaque render capability handed to the presentation layer.
        shape: Props shape description.
        normalized: Whether ``shape`` is already in normalized form.
        description: Optional human-readable description.
    """

    name: str
    component: Any
    shape: ObjectShape
    normalized: bool = False
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Summarize the entry for listings."""
        return {
            "name": self.name,
            "description": self.description,
            "fields": self.shape.names(),
            "normalized": self.normalized,
        }


class ComponentRegistry:
    """Catalog of component types, keyed by name.

    Normalized shapes are computed once per entry and cached.

    Args:
        entries: Initial entries to register.
    """

    def __init__(self, entries: Iterable[RegistryEntry] = ()):
        self._entries: dict[str, RegistryEntry] = {}
        self._normalized: dict[str, ObjectShape] = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry: RegistryEntry) -> None:
        """Add or replace an entry.

        Raises:
            TypeError: If the entry's shape is not an object shape.
        """
        if not isinstance(entry.shape, ObjectShape):
            raise TypeError(
                f"Component '{entry.name}' must declare an object shape, "
                f"got '{entry.shape.kind.value}'"
            )
        if entry.name in self._entries:
            logger.debug("Replacing registry entry '%s'", entry.name)
        self._entries[entry.name] = entry
        self._normalized.pop(entry.name, None)

    def get(self, name: str) -> RegistryEntry:
        """Look up an entry by type name.

        Raises:
            UnknownComponentTypeError: If no entry has this name.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise UnknownComponentTypeError(name) from None

    def normalized_shape(self, name: str) -> ObjectShape:
        """Get the normalized props shape for a type name.

        Raises:
            UnknownComponentTypeError: If no entry has this name.
        """
        cached = self._normalized.get(name)
        if cached is not None:
            return cached

        entry = self.get(name)
        shape = entry.shape if entry.normalized else normalize(entry.shape)
        self._normalized[name] = shape
        return shape

    def names(self) -> list[str]:
        """Registered type names in registration order."""
        return list(self._entries)

    def entries(self) -> list[RegistryEntry]:
        """Registered entries in registration order."""
        return list(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ComponentRegistry", "RegistryEntry"]
