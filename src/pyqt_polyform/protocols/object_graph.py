"""
Structural object-graph view contract.

The controller never touches inspected objects directly. It reads fields,
stages edits, commits them and resolves owners through this view, which lets
hosts back the inspector with a staging store, a database row or a proxy.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator

from pyqt_polyform.core.field_path import FieldPath

if TYPE_CHECKING:
    from pyqt_polyform.forms.field_state import FieldStateBase


class ObjectGraphView(ABC):
    """ABC for reflective access to an inspected object graph."""

    @property
    @abstractmethod
    def root(self) -> Any:
        """The inspected root object."""
        pass

    @abstractmethod
    def get_value(self, path: FieldPath) -> Any:
        """Read the committed value at ``path``."""
        pass

    @abstractmethod
    def set_value(self, path: FieldPath, value: Any) -> None:
        """
        Stage an edit of the field at ``path``.

        Staged edits are invisible to reads until ``commit()``.
        """
        pass

    @abstractmethod
    def commit(self) -> int:
        """
        Apply all staged edits to the live objects.

        Returns:
            Number of edits applied
        """
        pass

    @property
    @abstractmethod
    def has_pending(self) -> bool:
        pass

    @abstractmethod
    def resolve_owner(self, path: FieldPath) -> Any:
        """
        Object directly holding the leaf of ``path``.

        Raises:
            OwnerResolutionError: If the path cannot be walked
        """
        pass

    @abstractmethod
    def is_expanded(self, path: FieldPath) -> bool:
        pass

    @abstractmethod
    def set_expanded(self, path: FieldPath, expanded: bool) -> None:
        pass

    @abstractmethod
    def iter_fields(self, path: FieldPath, depth: int) -> Iterator['FieldStateBase']:
        """
        Yield the direct member fields of the object at ``path``.

        Args:
            path: Path of the parent object (``FieldPath.root()`` for the root)
            depth: Depth assigned to the yielded fields
        """
        pass

    @abstractmethod
    def iter_descendants(self, state: 'FieldStateBase') -> Iterator['FieldStateBase']:
        """
        Flattened pre-order walk below ``state``.

        Yields each child at ``state.depth + 1`` and, for children that are
        expanded and non-None, their own descendants right after them. An
        object already on the current ancestor chain is never entered again.
        """
        pass
