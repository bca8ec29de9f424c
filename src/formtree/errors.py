"""Exception types raised by formtree.

Only programmer misuse raises: writing through a trap that has no setter.
Expected, checkable outcomes (an invalid parent assignment, an address that
resolves to nothing) are reported as ``False`` or ``None`` instead.
"""

from __future__ import annotations

__all__ = ["DeniedMutationError", "FormTreeError"]


class FormTreeError(Exception):
    """Base class for all formtree errors."""


class DeniedMutationError(FormTreeError, AttributeError):
    """Raised when assigning to a node property whose trap defines no setter.

    Subclasses ``AttributeError`` so ``hasattr``/``setattr`` callers see the
    failure the way they would for any read-only attribute.
    """

    def __init__(self, prop: str) -> None:
        self.prop = prop
        super().__init__(f"Cannot assign to read-only node property {prop!r}")
