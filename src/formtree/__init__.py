"""formtree - a hierarchical node engine for form state."""

from __future__ import annotations

import logging

from formtree.config import NodeConfig
from formtree.dispatcher import Dispatcher, Hooks
from formtree.errors import DeniedMutationError, FormTreeError
from formtree.protocols import Middleware, NodePlugin, SearchFunction
from formtree.tree import USE_INDEX, Node, NodeType, Trap, create_node, reset_count
from formtree.utils import bfs, is_node

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "USE_INDEX",
    "DeniedMutationError",
    "Dispatcher",
    "FormTreeError",
    "Hooks",
    "Middleware",
    "Node",
    "NodeConfig",
    "NodePlugin",
    "NodeType",
    "SearchFunction",
    "Trap",
    "bfs",
    "create_node",
    "is_node",
    "reset_count",
]
