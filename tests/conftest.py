"""Shared fixtures: a memory host seeded with the default levels and types."""

from __future__ import annotations

import pytest

from parahouse.host.memory import MemoryHostDocument, MemoryType
from parahouse.models.building import Level
from parahouse.models.house import default_type_selectors


def build_memory_host(**kwargs) -> MemoryHostDocument:
    """Return a memory host with 'Level 1' at 0mm, 'Level 2' at 3000mm and
    every default family type present but inactive.
    """
    return MemoryHostDocument(
        levels=[Level("Level 1", 0.0), Level("Level 2", 3000.0)],
        types=[
            MemoryType(category=s.category, name=s.name, family=s.family)
            for s in default_type_selectors()
        ],
        **kwargs,
    )


@pytest.fixture()
def memory_host() -> MemoryHostDocument:
    return build_memory_host()


@pytest.fixture()
def make_memory_host():
    """Factory fixture for memory hosts with non-default settings."""
    return build_memory_host
