"""Shared fixtures for the formtree test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from formtree import Node, create_node, reset_count


@pytest.fixture(autouse=True)
def _fresh_names() -> Iterator[None]:
    """Restart anonymous node naming so generated names are predictable."""
    reset_count()
    yield
    reset_count()


@pytest.fixture
def form() -> Node:
    """A small form tree::

        form (group)
        ├── email (input)
        ├── address (group)
        │   ├── street (input)
        │   └── city (input)
        └── tags (list)
            ├── 0 (input)
            └── 1 (input)
    """
    root = create_node(type="group", name="form")
    create_node(name="email", parent=root)
    address = create_node(type="group", name="address", parent=root)
    create_node(name="street", parent=address)
    create_node(name="city", parent=address)
    tags = create_node(type="list", name="tags", parent=root)
    create_node(parent=tags)
    create_node(parent=tags)
    return root
