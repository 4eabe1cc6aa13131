"""Component registry - catalog of instantiable component types.

The registry maps a component type name to its render capability and its
props shape description. Entries are immutable; the layer store only reads
them.

Example usage:
    >>> from src.registry import ComponentRegistry, RegistryEntry
    >>> from src.schema import obj, string
    >>> registry = ComponentRegistry([RegistryEntry("Badge", object, obj(label=string()))])
    >>> registry.get("Badge").name
    'Badge'
"""

from .lib import ComponentRegistry, RegistryEntry

__all__ = [
    "ComponentRegistry",
    "RegistryEntry",
]
