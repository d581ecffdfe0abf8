"""
Nested writability scopes.

Effective writability is the logical AND of every scope currently open
during a render pass: once an ancestor field is read-only, every descendant
renders read-only until that ancestor's scope closes.

Pattern:
    Instead of:
        enabled = stack.push(config.can_write)
        try:
            # ... render
        finally:
            stack.pop()

    Use:
        with stack.scope(config.can_write) as enabled:
            # ... render
"""

from contextlib import contextmanager
from typing import Iterator, List
import logging

logger = logging.getLogger(__name__)


class WritabilityScopeStack:
    """
    Boolean-AND stack of writability scopes.

    Tracks the number of read-only entries so that ``push``, ``pop`` and
    ``effective`` are O(1) regardless of nesting depth.
    """

    def __init__(self):
        self._scopes: List[bool] = []
        self._read_only_count = 0

    @property
    def effective(self) -> bool:
        """AND of all pushed values; True when nothing is pushed."""
        return self._read_only_count == 0

    def push(self, enabled: bool) -> bool:
        """
        Open a scope.

        Args:
            enabled: Whether the new nesting level permits edits

        Returns:
            Effective writability including the new scope
        """
        enabled = bool(enabled)
        self._scopes.append(enabled)
        if not enabled:
            self._read_only_count += 1
        return self.effective

    def pop(self) -> bool:
        """
        Close the innermost scope.

        Returns:
            Effective writability of the remaining scopes. Popping an empty
            stack is not an error and returns True.
        """
        if not self._scopes:
            self._read_only_count = 0
            return True
        if not self._scopes.pop():
            self._read_only_count -= 1
        return self.effective

    @contextmanager
    def scope(self, enabled: bool) -> Iterator[bool]:
        """
        Context manager pairing ``push`` with a guaranteed ``pop``.

        Yields:
            Effective writability inside the scope
        """
        depth = len(self._scopes)
        effective = self.push(enabled)
        try:
            yield effective
        finally:
            self.pop()
            if len(self._scopes) != depth:
                logger.warning(
                    f"Writability scopes unbalanced: expected depth {depth}, "
                    f"found {len(self._scopes)}"
                )

    def clear(self) -> None:
        self._scopes.clear()
        self._read_only_count = 0

    def __len__(self) -> int:
        return len(self._scopes)
