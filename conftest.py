"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- A sample component registry mirroring a small UI catalog
- A fresh layer store per test
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

from src.registry import ComponentRegistry, RegistryEntry
from src.schema import (
    any_,
    array,
    boolean,
    literal,
    nullable,
    number,
    obj,
    optional,
    string,
    union,
)
from src.store import LayerStore

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Sample Catalog
# =============================================================================


def _render(name: str):
    """Stand-in render capability; the presentation layer is out of scope."""

    def render(props: dict, children: tuple = ()) -> str:
        return f"<{name} {sorted(props)} children={len(children)}>"

    render.__name__ = f"render_{name}"
    return render


def build_sample_registry() -> ComponentRegistry:
    """Build a registry with Button, Badge, Transactions and Card."""
    return ComponentRegistry(
        [
            RegistryEntry(
                "Button",
                _render("Button"),
                obj(
                    asChild=optional(boolean()),
                    children=optional(any_()),
                    variant=optional(
                        nullable(
                            union(
                                literal("default"),
                                literal("destructive"),
                                literal("outline"),
                                literal("ghost"),
                            )
                        )
                    ),
                    size=optional(
                        nullable(union(literal("default"), literal("sm"), literal("lg")))
                    ),
                ),
                description="Clickable button",
            ),
            RegistryEntry(
                "Badge",
                _render("Badge"),
                obj(
                    children=optional(any_()),
                    variant=optional(
                        nullable(union(literal("default"), literal("secondary")))
                    ),
                ),
                description="Small status label",
            ),
            RegistryEntry(
                "Transactions",
                _render("Transactions"),
                obj(
                    data=array(
                        obj(
                            id=string(),
                            customer=string(),
                            email=string(),
                            amount=number(),
                        )
                    )
                ),
                description="Table of recent transactions",
            ),
            RegistryEntry(
                "Card",
                _render("Card"),
                obj(title=string(), children=optional(any_())),
                description="Titled container",
            ),
        ]
    )


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ComponentRegistry:
    """Sample component registry."""
    return build_sample_registry()


@pytest.fixture
def store(registry: ComponentRegistry) -> LayerStore:
    """Empty layer store over the sample registry, non-strict."""
    return LayerStore(registry, seed=1234, strict=False)
