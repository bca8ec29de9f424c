"""NodeConfig: the subtree-wide options record shared between nodes.

Unlike most records in this package, NodeConfig is deliberately mutable.
A child created without overrides holds the *same* NodeConfig object as its
parent, so an in-place change on any node is observed by every node holding
that reference.  Replacing the reference for a whole subtree goes through
``node.set_config``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from formtree.tree.node import Node

__all__ = ["DEFAULT_DELIMITER", "NodeConfig", "create_config"]

DEFAULT_DELIMITER = "."


def _check_delimiter(delimiter: Any) -> None:
    if not isinstance(delimiter, str) or not delimiter:
        msg = f"delimiter must be a non-empty string, got {delimiter!r}"
        raise ValueError(msg)


@dataclass(slots=True, eq=False)
class NodeConfig:
    """Mutable configuration inherited by reference through a node tree.

    Attributes:
        delimiter: Token separator used when resolving string addresses.
        options:   Arbitrary extra options supplied by collaborators.  Readable
                   through item access (``config["locale"]``) alongside
                   ``delimiter``.
    """

    delimiter: str = DEFAULT_DELIMITER
    options: dict[str, Any] = field(default_factory=dict)

    def __setattr__(self, name: str, value: Any) -> None:
        # Covers __init__, update() and direct in-place writes alike.
        if name == "delimiter":
            _check_delimiter(value)
        object.__setattr__(self, name, value)

    def __getitem__(self, key: str) -> Any:
        if key == "delimiter":
            return self.delimiter
        return self.options[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.update({key: value})

    def __contains__(self, key: object) -> bool:
        return key == "delimiter" or key in self.options

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def update(self, overrides: Mapping[str, Any]) -> NodeConfig:
        """Merge ``overrides`` into this record in place and return it."""
        for key, value in overrides.items():
            if key == "delimiter":
                self.delimiter = value
            else:
                self.options[key] = value
        return self


def create_config(
    parent: Node | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> NodeConfig:
    """Build the config a new node starts with.

    - With a parent and no overrides, the parent's object is returned as-is.
    - With a parent and overrides, the overrides are merged into the parent's
      object in place and that object is returned.
    - Without a parent, a fresh record is built from the defaults plus any
      overrides.
    """
    if parent is not None and overrides is None:
        return parent.config
    if parent is not None:
        return parent.config.update(overrides or {})
    return NodeConfig().update(overrides or {})
