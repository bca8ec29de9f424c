"""Address resolution: walk a tree by a delimited path of names.

A locator is either a string split on the node's config delimiter or a
pre-split sequence of tokens.  Tokens are resolved one at a time against a
moving pointer:

- ``$root``   jumps to the root of the tree.
- ``$parent`` moves to the pointer's parent.
- ``$self``   returns to the node the lookup started from.
- anything else matches an immediate child by name (``"0"`` matches the
  list member at index 0), falling back to a selector such as
  ``find(email)`` or ``find(checkbox, type)``.

Example::

    form.at("form.address.street")
    street.at("$parent.city")
    form.at("form.find(street)")
"""

from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from cachetools import LRUCache, cached

if TYPE_CHECKING:
    from formtree.tree.node import Node
    from formtree.tree.nodes import Context

__all__ = ["get_node", "parse_selector", "select"]

logger = logging.getLogger(__name__)

_SELECTOR = re.compile(r"^(find)\((.*)\)$")


@cached(cache=LRUCache(maxsize=256))
def parse_selector(selector: str) -> tuple[str, tuple[str, ...]] | None:
    """Split ``verb(arg, ...)`` into its verb and stripped arguments.

    Returns None when ``selector`` is not a known selector.  Results are
    memoized since the same selectors recur across lookups.
    """
    match = _SELECTOR.match(selector)
    if match is None:
        return None
    action, arg_str = match.groups()
    return action, tuple(arg.strip() for arg in arg_str.split(","))


def select(node: Node, selector: Any) -> Node | None:
    """Apply a selector token to the subtree rooted at ``node``."""
    parsed = parse_selector(str(selector))
    if parsed is None:
        return None
    action, args = parsed
    if action == "find":
        goal = args[1] if len(args) > 1 and args[1] else "name"
        return node.find(args[0], goal)
    return None


def _child_named(node: Node, name: Any) -> Node | None:
    wanted = str(name)
    for child in node.children:
        if str(child.name) == wanted:
            return child
    return None


def get_node(
    node: Node,
    context: Context,
    locator: str | Sequence[str | int],
) -> Node | None:
    """(node.at) Resolve ``locator`` relative to ``node``; None when not found."""
    if isinstance(locator, str):
        tokens = deque(locator.split(node.config.delimiter))
    else:
        tokens = deque(locator)
    if not tokens:
        return None

    first = tokens[0]
    pointer: Node | None = node.parent
    if pointer is None:
        # A root resolves from itself, so its own name may lead the address.
        if str(first) == str(node.name):
            tokens.popleft()
        pointer = node
    # Non-root lookups already start at the parent.
    if first == "$parent" and tokens and tokens[0] == "$parent":
        tokens.popleft()

    while pointer is not None and tokens:
        name = tokens.popleft()
        if name == "$root":
            pointer = node.root
        elif name == "$parent":
            pointer = pointer.parent
        elif name == "$self":
            pointer = node
        else:
            child = _child_named(pointer, name)
            pointer = child if child is not None else select(pointer, name)

    if pointer is None:
        logger.debug("address %r did not resolve from %r", locator, node)
    return pointer
