"""Small, dependency-free helpers shared by the node engine.

Includes the breadth-first search primitive used by ``node.find`` and by the
``find(term, field)`` address selector.
"""

from __future__ import annotations

import secrets
import string
from collections import deque
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from formtree.tree.node import Node

__all__ = [
    "bfs",
    "dedupe",
    "has",
    "is_node",
    "loose_equals",
    "names",
    "setify",
    "token",
]

T = TypeVar("T")

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits
_TOKEN_LENGTH = 13


def token() -> str:
    """Return a random lowercase base-36 string of 13 characters."""
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(_TOKEN_LENGTH))


def setify(items: Iterable[T] | None) -> set[T]:
    """Return ``items`` as a set, passing existing sets through untouched."""
    if isinstance(items, set):
        return items
    return set(items or ())


def dedupe(first: Iterable[T], second: Iterable[T] | None = None) -> list[T]:
    """Combine two iterables into one list without duplicates, keeping order."""
    combined: dict[T, None] = dict.fromkeys(first)
    if second is not None:
        combined.update(dict.fromkeys(second))
    return list(combined)


def is_node(obj: Any) -> bool:
    """Return True if ``obj`` is a formtree node."""
    return getattr(type(obj), "_formtree_node", False) is True


def names(children: Iterable[Node]) -> dict[str | int, Node]:
    """Map each child's effective name to the child (later duplicates win)."""
    return {child.name: child for child in children}


def has(obj: Any, key: Any) -> bool:
    """Check whether ``key`` is an own key (mapping) or valid index (sequence).

    Mapping keys also match on their string form, so an integer child name
    finds a ``"0"`` key the way a JSON-shaped payload would spell it.
    """
    if isinstance(obj, Mapping):
        return key in obj or str(key) in obj
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return False
        return 0 <= index < len(obj)
    return False


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values, treating scalars with equal string forms as equal.

    ``loose_equals(1, "1")`` is True; ``loose_equals(None, "None")`` is False.
    """
    if left == right:
        return True
    scalars = (str, int, float)
    if isinstance(left, scalars) and isinstance(right, scalars):
        return str(left) == str(right)
    return False


def bfs(
    tree: Node,
    term: Any,
    goal: str | Callable[[Node, Any], bool] = "name",
) -> Node | None:
    """Return the first node in level order that satisfies ``goal``.

    Args:
        tree: Root of the subtree to search (tested first).
        term: The value to look for.
        goal: Either a node attribute name compared loosely against ``term``,
              or a predicate ``goal(node, term) -> bool``.

    Returns:
        The matching node, or None when the queue empties without a match.
    """
    if isinstance(goal, str):
        field = goal

        def search(node: Node, value: Any) -> bool:
            return loose_equals(getattr(node, field, None), value)

    else:
        search = goal

    queue: deque[Node] = deque([tree])
    while queue:
        node = queue.popleft()
        if search(node, term):
            return node
        queue.extend(node.children)
    return None
