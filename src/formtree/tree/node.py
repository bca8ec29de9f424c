"""Node: the interceptable handle every collaborator talks to.

A Node holds nothing but its Context.  Attribute reads are answered by the
context's trap table (``node.add``, ``node.address``, ``node.name`` ...) and
fall back to the context record for plain state (``node.children``,
``node.hook``, ``node.type``).  Attribute writes go through the trap's setter:

- a trap without a setter raises ``DeniedMutationError``;
- a setter that returns False rejects the write silently (``node.parent = 5``
  leaves the parent untouched);
- names without a trap are written to the context record.

Because the table belongs to a single node, a plugin can replace or wrap any
entry for that node alone::

    def audit_adds(node):
        original = node.traps["add"]
        def logged_add(n, ctx):
            bound = original.get(n, ctx)
            def add(child):
                print("adding", child.name)
                return bound(child)
            return add
        node.traps["add"] = Trap(get=logged_add, set=original.set)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from formtree.config import create_config
from formtree.dispatcher import create_hooks
from formtree.tree.nodes import USE_INDEX, Context, NodeType
from formtree.tree.traps import create_traps
from formtree.utils import dedupe

__all__ = ["Node", "create_node", "reset_count"]

logger = logging.getLogger(__name__)

# Deterministic naming: the same construction order yields the same names.
_counter = itertools.count(1)


def reset_count() -> None:
    """Restart the counter used to name anonymous nodes."""
    global _counter
    _counter = itertools.count(1)


class Node:
    """Handle around a Context whose operations are resolved via traps."""

    __slots__ = ("_context",)

    #: Class-level marker read by ``formtree.utils.is_node``.
    _formtree_node = True

    def __init__(self, context: Context) -> None:
        object.__setattr__(self, "_context", context)

    def __getattr__(self, prop: str) -> Any:
        if prop.startswith("_"):
            raise AttributeError(prop)
        context = self._context
        entry = context.traps.get(prop)
        if entry is not None and entry.get is not None:
            return entry.get(self, context)
        try:
            return getattr(context, prop)
        except AttributeError:
            msg = f"Node has no property {prop!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, prop: str, value: Any) -> None:
        if prop.startswith("_"):
            msg = f"Cannot assign private attribute {prop!r} on a Node"
            raise AttributeError(msg)
        context = self._context
        entry = context.traps.get(prop)
        if entry is not None and entry.set is not None:
            entry.set(self, context, prop, value)
            return
        setattr(context, prop, value)

    def __dir__(self) -> list[str]:
        fields = [name for name in Context.__slots__ if not name.startswith("_")]
        return sorted({*self._context.traps, *fields})

    def __repr__(self) -> str:
        context = self._context
        return f"<Node {context.type} {context.name!r}>"


def _create_name(name: str | None, node_type: NodeType, parent: Node | None) -> Any:
    if parent is not None and parent.type == NodeType.LIST:
        return USE_INDEX
    return name or f"{node_type}_{next(_counter)}"


def _create_value(node_type: NodeType, value: Any) -> Any:
    if node_type == NodeType.GROUP:
        return value if isinstance(value, dict) else {}
    if node_type == NodeType.LIST:
        return value if isinstance(value, list) else []
    return value


def _init(node: Node, plugins: Iterable[Any] | None) -> Node:
    def adopt(child: Node) -> None:
        child.parent = node

    node.each(adopt)
    if node.parent is not None:
        node.parent.add(node)
    for plugin in plugins or ():
        node.use(plugin)
    return node.hook.init.dispatch(node)


def create_node(
    *,
    name: str | None = None,
    type: NodeType | str = NodeType.INPUT,  # noqa: A002
    parent: Node | None = None,
    value: Any = None,
    children: Iterable[Node] | None = None,
    plugins: Iterable[Any] | None = None,
    config: Mapping[str, Any] | None = None,
) -> Node:
    """Create and fully initialize a node.

    Args:
        name:     Node name.  Defaults to ``"{type}_{n}"``; ignored for members
                  of a ``list`` parent, which are named by position.
        type:     ``"input"``, ``"list"`` or ``"group"``.
        parent:   Node to attach to.  Without ``config`` the new node shares
                  the parent's config object.
        value:    Initial value.  ``group`` nodes keep only dicts and ``list``
                  nodes keep only lists; anything else becomes empty.
        children: Nodes to adopt, in order, without duplicates.
        plugins:  Plugins applied after attachment.
        config:   Config overrides.  With a parent they are merged into the
                  parent's (shared) config object in place.

    Returns:
        The node returned by the ``init`` hook, after attachment and plugins.

    Raises:
        ValueError: If ``type`` is not a NodeType or ``config`` carries an
            invalid delimiter.
    """
    node_type = NodeType(type)
    context = Context(
        config=create_config(parent, config),
        hook=create_hooks(),
        name=_create_name(name, node_type, parent),
        traps=create_traps(),
        type=node_type,
        value=_create_value(node_type, value),
        parent=parent,
        children=dedupe(children or ()),
    )
    node = Node(context)
    logger.debug("created %s node %r", node_type, context.name)
    return _init(node, plugins)
