"""
Default object-graph view backed by live Python objects.

Reads go straight to the inspected objects. Writes are staged and only
reach the objects on ``commit()``, so a structural edit (such as switching a
field's variant) must be committed before anything reads the new shape.
"""

from functools import lru_cache
from typing import Any, Callable, Dict, Iterator, List, Tuple
import logging

from pyqt_polyform.core.exceptions import FieldAssignmentError
from pyqt_polyform.core.field_path import FieldPath, IndexSegment, resolve_owner, resolve_value
from pyqt_polyform.core.type_utils import FieldTypeUtils
from pyqt_polyform.forms.field_config import get_field_config
from pyqt_polyform.forms.field_state import (
    CompositeFieldState, FieldStateBase, PolymorphicFieldState, SequenceFieldState,
    create_field_state,
)
from pyqt_polyform.protocols.object_graph import ObjectGraphView

logger = logging.getLogger(__name__)

CommitListener = Callable[[FieldPath, Any], None]


@lru_cache(maxsize=256)
def _member_hints(cls: type) -> Dict[str, Any]:
    return FieldTypeUtils.get_member_hints(cls)


class ObjectGraphStore(ObjectGraphView):
    """
    Staging store over an object graph.

    Example:
        store = ObjectGraphStore(player)
        store.set_value(FieldPath.parse("person"), Student())
        store.commit()   # player.person is now the Student
    """

    def __init__(self, root: Any):
        self._root = root
        self._pending: Dict[FieldPath, Any] = {}
        self._expanded: Dict[FieldPath, bool] = {}
        self._commit_listeners: List[CommitListener] = []

    @property
    def root(self) -> Any:
        return self._root

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def get_value(self, path: FieldPath) -> Any:
        return resolve_value(self._root, path)

    def set_value(self, path: FieldPath, value: Any) -> None:
        # Re-staging moves the edit to the end so commits keep edit order
        self._pending.pop(path, None)
        self._pending[path] = value
        logger.debug(f"Staged {path} = {value!r}")

    def commit(self) -> int:
        applied = 0
        while self._pending:
            path = next(iter(self._pending))
            value = self._pending.pop(path)
            self._assign(path, value)
            applied += 1
            for listener in list(self._commit_listeners):
                listener(path, value)
        if applied:
            logger.debug(f"Committed {applied} edit(s)")
        return applied

    def discard(self) -> None:
        """Drop staged edits without applying them."""
        self._pending.clear()

    def _assign(self, path: FieldPath, value: Any) -> None:
        owner = resolve_owner(self._root, path)
        leaf = path.leaf
        try:
            if isinstance(leaf, IndexSegment):
                if isinstance(owner, tuple):
                    # Tuples are rebuilt and stored on their own owner
                    items = list(owner)
                    items[leaf.index] = value
                    self._assign(path.parent, tuple(items))
                else:
                    owner[leaf.index] = value
            else:
                setattr(owner, leaf.name, value)
        except (AttributeError, TypeError, IndexError) as e:
            raise FieldAssignmentError(f"Cannot store {path}: {e}") from e

    def add_commit_listener(self, listener: CommitListener) -> None:
        self._commit_listeners.append(listener)

    def remove_commit_listener(self, listener: CommitListener) -> None:
        if listener in self._commit_listeners:
            self._commit_listeners.remove(listener)

    def resolve_owner(self, path: FieldPath) -> Any:
        return resolve_owner(self._root, path)

    def is_expanded(self, path: FieldPath) -> bool:
        return self._expanded.get(path, False)

    def set_expanded(self, path: FieldPath, expanded: bool) -> None:
        self._expanded[path] = bool(expanded)

    def iter_fields(self, path: FieldPath, depth: int) -> Iterator[FieldStateBase]:
        parent = self._root if path.is_root else self.get_value(path)
        if parent is None:
            return
        yield from self._member_states(parent, path, depth)

    def iter_descendants(self, state: FieldStateBase) -> Iterator[FieldStateBase]:
        if state.value is None:
            return
        yield from self._walk(state, (id(self._root), id(state.value)))

    def _walk(self, state: FieldStateBase, ancestors: Tuple[int, ...]) -> Iterator[FieldStateBase]:
        for child in self._children(state):
            yield child
            if not child.expanded or child.value is None or id(child.value) in ancestors:
                continue
            yield from self._walk(child, ancestors + (id(child.value),))

    def _children(self, state: FieldStateBase) -> Iterator[FieldStateBase]:
        if state.value is None:
            return
        depth = state.depth + 1
        if isinstance(state, SequenceFieldState):
            element_hint = FieldTypeUtils.get_sequence_element_type(state.declared_type)
            element_config = state.config.for_element()
            for index, element in enumerate(state.value):
                element_path = state.path.index(index)
                yield create_field_state(
                    owner=state.value,
                    name=f"[{index}]",
                    path=element_path,
                    hint=element_hint,
                    value=element,
                    depth=depth,
                    expanded=self.is_expanded(element_path),
                    config=element_config,
                )
        elif isinstance(state, (CompositeFieldState, PolymorphicFieldState)):
            yield from self._member_states(state.value, state.path, depth)

    def _member_states(self, obj: Any, path: FieldPath, depth: int) -> Iterator[FieldStateBase]:
        hints = _member_hints(type(obj))
        for name in FieldTypeUtils.iter_member_names(obj):
            hint = hints.get(name)
            member_path = path.child(name)
            try:
                value = getattr(obj, name, None)
            except Exception as e:
                logger.error(f"Skipping member '{member_path}': reading it raised {type(e).__name__}: {e}")
                continue
            yield create_field_state(
                owner=obj,
                name=name,
                path=member_path,
                hint=hint,
                value=value,
                depth=depth,
                expanded=self.is_expanded(member_path),
                config=get_field_config(obj, name, hint),
            )
