"""Structural protocols for the callables collaborators hand to a node.

Plugins, middleware and search predicates are plain callables; any function
with a conformant signature satisfies these protocols without inheritance.

Example::

    from formtree import create_node

    def readonly(node):
        node.hook.input.use(lambda value: node.value)
        return False  # do not enroll the children

    form = create_node(type="group", plugins=[readonly])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from formtree.tree.node import Node

__all__ = ["Middleware", "NodePlugin", "SearchFunction"]

T = TypeVar("T")


@runtime_checkable
class NodePlugin(Protocol):
    """A function applied once to each node it reaches.

    Returning literal ``False`` stops the plugin from descending to the
    node's children; any other return value (including ``None``) lets it
    propagate.
    """

    def __call__(self, node: Node) -> bool | None: ...


@runtime_checkable
class Middleware(Protocol[T]):
    """One stage of a hook pipeline: receives a payload and returns it."""

    def __call__(self, payload: T) -> T: ...


@runtime_checkable
class SearchFunction(Protocol):
    """Predicate used by breadth-first search in place of a field name."""

    def __call__(self, node: Node, term: Any = None) -> bool: ...
