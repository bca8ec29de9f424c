"""Tree subpackage: the node engine.

Re-exports the public API for the tree module:
- create_node: factory returning a fully initialized Node
- Node: the trap-dispatched handle around a Context
- Context, Trap, trap: the state record and operation-table entries
- NodeType: StrEnum of the three node kinds (INPUT, LIST, GROUP)
- USE_INDEX: name sentinel meaning "named by position"
"""

from formtree.tree.node import Node, create_node, reset_count
from formtree.tree.nodes import USE_INDEX, Context, NodeType, Trap, trap

__all__ = [
    "USE_INDEX",
    "Context",
    "Node",
    "NodeType",
    "Trap",
    "create_node",
    "reset_count",
    "trap",
]
