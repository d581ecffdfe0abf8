"""
Discriminated union types for rendered field state.

Instead of boolean flags (is_polymorphic, is_sequence), each field is
described by the FieldState subclass whose ``matches()`` predicate first
accepts its declared type and value:

    - PolymorphicFieldState: abstract/interface declared type (variant selector)
    - SequenceFieldState: list/tuple members (one child per element)
    - CompositeFieldState: concrete objects with members (foldout of children)
    - ValueFieldState: everything else (single value editor)

FieldState objects are ephemeral: the object-graph view creates them fresh on
every render pass and nothing holds on to them afterwards.
"""

from typing import Any, List, Type
from dataclasses import dataclass, is_dataclass
from abc import ABC, ABCMeta
import logging

from pyqt_polyform.core.field_path import FieldPath
from pyqt_polyform.core.type_utils import FieldTypeUtils
from .field_config import DEFAULT_FIELD_CONFIG, FieldConfig

logger = logging.getLogger(__name__)


@dataclass
class FieldStateBase(ABC):
    """ABC for per-pass field state."""
    owner: Any
    name: str
    path: FieldPath
    declared_type: Any
    value: Any
    depth: int = 0
    expanded: bool = False
    config: FieldConfig = DEFAULT_FIELD_CONFIG

    @property
    def key(self) -> str:
        """Stable identifier of the field's row on the host surface."""
        return str(self.path)


class FieldStateMeta(ABCMeta):
    """
    Metaclass for auto-registration of FieldState kinds.

    Every class defining a ``matches()`` predicate is registered in definition
    order; the factory picks the first kind whose predicate accepts a field.
    """
    _registry: List[Type] = []

    def __new__(mcs, name, bases, namespace):
        cls = super().__new__(mcs, name, bases, namespace)

        if 'matches' in namespace:
            mcs._registry.append(cls)
            logger.debug(f"Auto-registered FieldState kind: {name}")

        return cls

    @classmethod
    def get_registry(mcs) -> List[Type]:
        return mcs._registry.copy()


@dataclass
class PolymorphicFieldState(FieldStateBase, metaclass=FieldStateMeta):
    """Member declared with an abstract class, ABC marker or Protocol."""

    @staticmethod
    def matches(declared_type: Any, value: Any) -> bool:
        return FieldTypeUtils.is_abstract_type(declared_type)


@dataclass
class SequenceFieldState(FieldStateBase, metaclass=FieldStateMeta):
    """Ordered sequence member; elements are rendered as ``[i]`` children."""

    @staticmethod
    def matches(declared_type: Any, value: Any) -> bool:
        if FieldTypeUtils.is_sequence_type(declared_type):
            return True
        return isinstance(value, (list, tuple))


@dataclass
class CompositeFieldState(FieldStateBase, metaclass=FieldStateMeta):
    """Concrete object with inspectable members of its own."""

    @staticmethod
    def matches(declared_type: Any, value: Any) -> bool:
        if not isinstance(declared_type, type) or FieldTypeUtils.is_value_type(declared_type):
            return False
        if value is not None:
            return FieldTypeUtils.has_members(value)
        return is_dataclass(declared_type) or bool(FieldTypeUtils.get_member_hints(declared_type))


@dataclass
class ValueFieldState(FieldStateBase, metaclass=FieldStateMeta):
    """
    Leaf member edited with a single value editor.

    Predicate: fallback - matches everything, so it must be defined last.
    """

    @staticmethod
    def matches(declared_type: Any, value: Any) -> bool:
        return True

    @property
    def value_type(self) -> Any:
        if FieldTypeUtils.is_value_type(self.declared_type) and self.declared_type is not type(None):
            return self.declared_type
        return type(self.value) if self.value is not None else type(None)


FieldState = FieldStateBase


def infer_declared_type(hint: Any, value: Any) -> Any:
    """Declared type from a member hint, falling back to the runtime type."""
    declared = FieldTypeUtils.declared_type(hint) if hint is not None else None
    if declared is None or declared is Any:
        return type(value) if value is not None else object
    return declared


def create_field_state(owner: Any,
                       name: str,
                       path: FieldPath,
                       hint: Any,
                       value: Any,
                       depth: int = 0,
                       expanded: bool = False,
                       config: FieldConfig = DEFAULT_FIELD_CONFIG) -> FieldStateBase:
    """
    Factory that auto-selects the FieldState kind for a member.

    Args:
        owner: Object holding the member
        name: Member name, or ``[i]`` for sequence elements
        path: Path of the member from the inspected root
        hint: The member's annotation (None if unannotated)
        value: Current member value
        depth: Nesting depth (top-level members are depth 0)
        expanded: Persisted disclosure state of the member
        config: Effective FieldConfig

    Returns:
        The first matching FieldState subclass instance
    """
    declared_type = infer_declared_type(hint, value)
    for state_class in FieldStateMeta.get_registry():
        if state_class.matches(declared_type, value):
            return state_class(
                owner=owner,
                name=name,
                path=path,
                declared_type=declared_type,
                value=value,
                depth=depth,
                expanded=expanded,
                config=config,
            )

    raise ValueError(
        f"No matching FieldState kind for {declared_type}. "
        f"ValueFieldState should match everything."
    )
