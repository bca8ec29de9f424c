"""The reserved trap implementations that make up a node's operation table.

Every function here receives the node handle and its context as the first two
arguments.  Method-like traps are exposed curried (``node.add(child)``);
property-like traps are evaluated on read (``node.index``).  Setters follow
``(node, context, prop, value) -> bool``.

Calls between nodes always go back through the node handle (``child.parent =
node``, ``parent.remove(child)``) rather than touching another node's context,
so a plugin that replaces a trap on one node sees every interaction with it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from formtree.config import NodeConfig
from formtree.tree.address import get_node
from formtree.tree.nodes import USE_INDEX, Context, NodeType, Trap, trap
from formtree.utils import bfs, has, is_node, names

if TYPE_CHECKING:
    from formtree.protocols import NodePlugin, SearchFunction
    from formtree.tree.node import Node

__all__ = ["create_traps"]

logger = logging.getLogger(__name__)

ChildCallback = Callable[["Node"], Any]


def create_traps() -> dict[str, Trap]:
    """Return a fresh operation table for a new node."""
    return {
        "add": trap(add_child),
        "address": trap(get_address, curry=False),
        "at": trap(get_node),
        "config": trap(),
        "each": trap(each_child),
        "find": trap(find),
        "index": trap(get_index, set_index, curry=False),
        "input": trap(input_value),
        "name": trap(get_name, curry=False),
        "parent": trap(None, set_parent),
        "plugins": trap(),
        "remove": trap(remove_child),
        "root": trap(get_root, curry=False),
        "set_config": trap(set_config),
        "use": trap(use),
        "value": trap(get_value, curry=False),
        "walk": trap(walk_tree),
    }


# ----------------------------------------------------------------------
# Parent / child synchronization
# ----------------------------------------------------------------------


def add_child(parent: Node, parent_context: Context, child: Node) -> Node:
    """(node.add) Attach ``child`` to ``parent``, detaching it elsewhere first."""
    if child.parent is not None and child.parent is not parent:
        child.parent.remove(child)
    if child not in parent_context.children:
        parent_context.children.append(child)
    if child.parent is not parent:
        child.parent = parent
        # A replaced parent trap may have sent the child somewhere else; move
        # it there once instead of leaving it listed under both parents.
        redirected = child.parent
        if redirected is not parent:
            logger.debug("parent assignment for %r redirected to %r", child, redirected)
            parent.remove(child)
            if is_node(redirected):
                redirected.add(child)
    else:
        child.use(parent.plugins)
    return parent


def remove_child(node: Node, context: Context, child: Node) -> Node:
    """(node.remove) Detach ``child``; a no-op when it is not a child."""
    if child in context.children:
        context.children.remove(child)
        child.parent = None
    return node


def set_parent(child: Node, context: Context, prop: str, parent: Any) -> bool:
    """Setter for ``node.parent``.

    Accepts a node or None.  Anything else is rejected by returning False,
    which the node handle turns into a silent no-op.
    """
    if is_node(parent):
        if child.parent is not None and child.parent is not parent:
            child.parent.remove(child)
        context.parent = parent
        child.set_config(parent.config)
        if child not in parent.children:
            parent.add(child)
        else:
            child.use(parent.plugins)
        return True
    if parent is None:
        context.parent = None
        return True
    logger.debug("rejected parent assignment of %r to %r", parent, child)
    return False


def get_index(node: Node, context: Context) -> int:
    """Position of the node within its parent's children, or -1."""
    parent = context.parent
    if parent is None:
        return -1
    try:
        return parent.children.index(node)
    except ValueError:
        return -1


def set_index(node: Node, context: Context, prop: str, index: Any) -> bool:
    """Move the node to ``index`` among its siblings, clamped into range."""
    parent = context.parent
    if not is_node(parent) or isinstance(index, bool) or not isinstance(index, int):
        return False
    children = parent.children
    if node not in children:
        return False
    target = min(max(index, 0), len(children) - 1)
    children.remove(node)
    children.insert(target, node)
    return True


# ----------------------------------------------------------------------
# Computed properties
# ----------------------------------------------------------------------


def get_name(node: Node, context: Context) -> str | int:
    """Stored name, or the current index for list members and USE_INDEX names."""
    parent = context.parent
    if context.name is USE_INDEX or (parent is not None and parent.type == NodeType.LIST):
        return node.index
    return context.name


def get_address(node: Node, context: Context) -> list[str | int]:
    """Names from the root down to this node."""
    if context.parent is None:
        return [node.name]
    return [*context.parent.address, node.name]


def get_root(node: Node, context: Context) -> Node:
    pointer = node
    while pointer.parent is not None:
        pointer = pointer.parent
    return pointer


def get_value(node: Node, context: Context) -> Any:
    """The node's value; composite nodes are aggregated from their children."""
    if not context.children:
        return context.value
    if context.type == NodeType.LIST:
        return [child.value for child in context.children]
    return {child.name: child.value for child in context.children}


# ----------------------------------------------------------------------
# Iteration and search
# ----------------------------------------------------------------------


def each_child(node: Node, context: Context, callback: ChildCallback) -> None:
    for child in list(context.children):
        callback(child)


def walk_tree(node: Node, context: Context, callback: ChildCallback) -> None:
    """Depth-first, pre-order visit of every descendant."""
    for child in list(context.children):
        callback(child)
        child.walk(callback)


def find(
    node: Node,
    context: Context,
    term: Any,
    goal: str | SearchFunction | None = None,
) -> Node | None:
    return bfs(node, term, goal or "name")


# ----------------------------------------------------------------------
# Config, plugins and values
# ----------------------------------------------------------------------


def set_config(
    node: Node,
    context: Context,
    config: NodeConfig | Mapping[str, Any],
) -> None:
    """Replace the config reference on this node and its whole subtree.

    A plain mapping is turned into a fresh NodeConfig first, so the whole
    subtree still shares one validated record.

    Raises:
        TypeError: If ``config`` is neither a NodeConfig nor a mapping.
        ValueError: If a mapping carries an invalid delimiter.
    """
    if isinstance(config, Mapping):
        config = NodeConfig().update(config)
    elif not isinstance(config, NodeConfig):
        msg = f"config must be a NodeConfig or a mapping, got {type(config).__name__}"
        raise TypeError(msg)
    context.config = config
    for child in list(context.children):
        child.set_config(config)


def use(
    node: Node,
    context: Context,
    plugin: NodePlugin | Iterable[NodePlugin],
) -> Node:
    """Apply a plugin (or a collection of plugins) to the node and its children."""
    if isinstance(plugin, (list, tuple, set, frozenset)):
        for item in list(plugin):
            use(node, context, item)
        return node
    if plugin in context.plugins:
        return node
    context.plugins.append(plugin)
    if plugin(node) is False:
        logger.debug("plugin %r stopped at %r", plugin, node)
        return node
    for child in list(context.children):
        child.use(plugin)
    return node


def _lookup(payload: Mapping[Any, Any] | Sequence[Any], key: Any) -> Any:
    if isinstance(payload, Mapping):
        return payload[key] if key in payload else payload[str(key)]
    return payload[int(key)]


def input_value(node: Node, context: Context, value: Any) -> Node:
    """(node.input) Run the input hook and commit the result down the tree."""
    candidate = context.hook.input.dispatch(value)
    if not context.children:
        context.value = candidate
    elif isinstance(candidate, (Mapping, Sequence)) and not isinstance(
        candidate, (str, bytes)
    ):
        for name, child in names(context.children).items():
            if has(candidate, name):
                child.input(_lookup(candidate, name))
    return node
