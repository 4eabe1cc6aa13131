"""Layer data model.

A layer is one node in the editable component tree: either a component
instance with props and ordered children, or a text leaf. Layers are frozen
pydantic models; every edit builds new nodes and shares untouched subtrees.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

TEXT_LAYER_TYPE = "_text_"


def freeze_props(props: Mapping[str, Any]) -> Mapping[str, Any]:
    """Wrap props in a read-only view over a private copy."""
    if isinstance(props, MappingProxyType):
        return props
    return MappingProxyType(dict(props))


class TextType(str, Enum):
    """How a text layer's content is interpreted."""

    TEXT = "text"
    MARKDOWN = "markdown"


class ComponentLayer(BaseModel):
    """A component instance in the layer tree.

    Attributes:
        id: Identifier, unique within the tree.
        type: Component registry key.
        props: Component props. Children are never stored here.
        children: Ordered child layers.
    """

    id: str = Field(..., min_length=1, description="Unique identifier for the layer")
    type: str = Field(..., min_length=1, description="Component registry key")
    props: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Props passed to the component (read-only)",
    )
    children: tuple["Layer", ...] = Field(
        default=(),
        description="Ordered child layers",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("type")
    @classmethod
    def _reject_text_sentinel(cls, value: str) -> str:
        if value == TEXT_LAYER_TYPE:
            raise ValueError(f"'{TEXT_LAYER_TYPE}' is reserved for text layers")
        return value

    @field_validator("props")
    @classmethod
    def _freeze_props(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze_props(value)

    @field_serializer("props")
    def _serialize_props(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)


class TextLayer(BaseModel):
    """A text leaf in the layer tree.

    Attributes:
        id: Identifier, unique within the tree.
        type: Always the text sentinel.
        text: Raw text content.
        text_type: Plain text or markdown.
    """

    id: str = Field(..., min_length=1, description="Unique identifier for the layer")
    type: Literal["_text_"] = TEXT_LAYER_TYPE
    text: str = ""
    text_type: TextType = Field(default=TextType.TEXT, validate_default=True)

    model_config = ConfigDict(frozen=True, use_enum_values=True)


Layer = Union[ComponentLayer, TextLayer]

# An ordered forest of root layers.
LayerTree = tuple[Layer, ...]

ComponentLayer.model_rebuild()


def is_text_layer(layer: Layer) -> bool:
    """Check whether a layer is a text leaf."""
    return isinstance(layer, TextLayer)


__all__ = [
    "TEXT_LAYER_TYPE",
    "TextType",
    "freeze_props",
    "ComponentLayer",
    "TextLayer",
    "Layer",
    "LayerTree",
    "is_text_layer",
]
