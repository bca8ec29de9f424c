"""Core data types of the node engine: NodeType, Context and Trap.

A ``Node`` (see ``formtree.tree.node``) is only a handle.  Every piece of
state lives on the ``Context`` it wraps, and every operation is looked up in
the context's trap table at access time.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum, auto
from functools import partial
from typing import TYPE_CHECKING, Any

from formtree.errors import DeniedMutationError

if TYPE_CHECKING:
    from formtree.config import NodeConfig
    from formtree.dispatcher import Hooks
    from formtree.protocols import NodePlugin
    from formtree.tree.node import Node

__all__ = [
    "USE_INDEX",
    "Context",
    "NodeType",
    "Trap",
    "TrapGetter",
    "TrapSetter",
    "deny_mutation",
    "trap",
]


class NodeType(StrEnum):
    """The role a node plays in the tree.

    - INPUT -> "input" : a scalar (or opaque) value
    - LIST  -> "list"  : an ordered sequence; children are named by position
    - GROUP -> "group" : a keyed mapping; children are named by key
    """

    INPUT = auto()
    LIST = auto()
    GROUP = auto()


class _Sentinel(enum.Enum):
    USE_INDEX = "index"

    def __repr__(self) -> str:
        return "USE_INDEX"


#: Stored as a node's name to mean "use my position in the parent's children".
USE_INDEX = _Sentinel.USE_INDEX

TrapGetter = Callable[..., Any]
TrapSetter = Callable[["Node", "Context", str, Any], bool]


def deny_mutation(node: Node, context: Context, prop: str, value: Any) -> bool:
    """Setter installed on every trap that does not accept writes."""
    raise DeniedMutationError(prop)


@dataclass(frozen=True, slots=True)
class Trap:
    """One entry of a node's operation table.

    Attributes:
        get: ``get(node, context)`` returning the property value (possibly a
             callable already bound to the node), or None to fall back to the
             context attribute of the same name.
        set: ``set(node, context, prop, value)`` returning True on success and
             False to reject silently; None lets the write reach the context.
    """

    get: Callable[[Node, Context], Any] | None
    set: TrapSetter | None


def trap(
    getter: TrapGetter | None = None,
    setter: TrapSetter | None = deny_mutation,
    *,
    curry: bool = True,
) -> Trap:
    """Build a Trap, binding the node/context pair onto ``getter``.

    With ``curry=True`` a read returns ``getter`` partially applied to
    ``(node, context)``, i.e. a method.  With ``curry=False`` a read calls
    ``getter(node, context)`` and returns its result, i.e. a property.
    """
    if getter is None:
        return Trap(get=None, set=setter)
    if curry:
        return Trap(get=lambda node, context: partial(getter, node, context), set=setter)
    return Trap(get=getter, set=setter)


@dataclass(slots=True, eq=False)
class Context:
    """The mutable state record behind a single node.

    Attributes:
        children: Child nodes in insertion order (the only ownership edge).
        config:   Possibly shared NodeConfig (see ``formtree.config``).
        hook:     The node's init/input/commit pipelines.
        name:     Stored name, or ``USE_INDEX``.
        parent:   Back-reference to the parent node, or None for a root.
        plugins:  Plugins applied to this node, in application order.
        traps:    The node's operation table, keyed by property name.
        type:     The node's NodeType.
        value:    Stored value; composite nodes aggregate from children on read.
    """

    config: NodeConfig
    hook: Hooks
    name: str | _Sentinel
    traps: dict[str, Trap]
    type: NodeType = NodeType.INPUT
    value: Any = None
    parent: Node | None = None
    children: list[Node] = field(default_factory=list)
    plugins: list[NodePlugin] = field(default_factory=list)
