"""
Field type utilities for the inspector.

Centralizes the type introspection shared by the catalog, the object-graph
store, the proxy synchronizer and the variant factory: Optional/Union/Annotated
unwrapping, abstract-type detection, assignability checks and member discovery.
"""

import dataclasses
import inspect
import re
import types
from abc import ABC
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Tuple, Union, get_args, get_origin
import collections.abc
import logging
import typing

logger = logging.getLogger(__name__)

_UNION_ORIGINS = (Union, types.UnionType)
_SEQUENCE_ORIGINS = (
    list, tuple,
    collections.abc.Sequence, collections.abc.MutableSequence,
)
_VALUE_TYPES = (bool, int, float, complex, str, bytes)
_ZERO_VALUES = {bool: False, int: 0, float: 0.0, complex: 0j}
_NUMERIC_PROMOTIONS = {float: (int,), complex: (int, float)}


class FieldTypeUtils:
    """
    Static helpers for type checking and resolution of inspected fields.

    Every helper is tolerant of typing constructs (``Optional[T]``,
    ``Annotated[T, ...]``, ``list[T]``) as well as plain classes.
    """

    @staticmethod
    def strip_annotated(hint: Any) -> Tuple[Any, Tuple[Any, ...]]:
        """
        Split ``Annotated[T, *extras]`` into ``(T, extras)``.

        Args:
            hint: The type hint to unwrap

        Returns:
            The base hint and the tuple of metadata objects (empty if not Annotated)

        Example:
            >>> FieldTypeUtils.strip_annotated(Annotated[int, "meta"])
            (<class 'int'>, ('meta',))
        """
        if get_origin(hint) is Annotated:
            return get_args(hint)[0], tuple(hint.__metadata__)
        return hint, ()

    @staticmethod
    def is_optional(hint: Any) -> bool:
        """
        Check if a hint is Optional[T] (Union[T, None]).

        Example:
            >>> FieldTypeUtils.is_optional(Optional[str])
            True
            >>> FieldTypeUtils.is_optional(str)
            False
        """
        if get_origin(hint) in _UNION_ORIGINS:
            args = get_args(hint)
            return len(args) == 2 and type(None) in args
        return False

    @staticmethod
    def resolve_union_type(hint: Any) -> Any:
        """
        Resolve Union types to their primary (first non-None) type.

        Example:
            >>> FieldTypeUtils.resolve_union_type(Optional[str])
            <class 'str'>
            >>> FieldTypeUtils.resolve_union_type(Union[int, str])
            <class 'int'>
        """
        if get_origin(hint) in _UNION_ORIGINS:
            non_none_types = [arg for arg in get_args(hint) if arg is not type(None)]
            if non_none_types:
                return non_none_types[0]
        return hint

    @staticmethod
    def declared_type(hint: Any) -> Any:
        """Reduce a member annotation to the type used for dispatch."""
        base, _ = FieldTypeUtils.strip_annotated(hint)
        return FieldTypeUtils.resolve_union_type(base)

    @staticmethod
    def is_abstract_type(cls: Any) -> bool:
        """
        Check if a class cannot be instantiated directly.

        A class counts as abstract when it still has abstract methods, when it is
        a ``typing.Protocol`` class, or when ``abc.ABC`` is one of its direct
        bases (the interface-marker idiom ``class IPerson(ABC): ...``).

        Args:
            cls: The object to check

        Returns:
            True if cls is an abstract class or interface
        """
        if not isinstance(cls, type):
            return False
        if inspect.isabstract(cls):
            return True
        if getattr(cls, '_is_protocol', False):
            return True
        return ABC in cls.__bases__

    @staticmethod
    def is_subtype(candidate: type, base: type) -> bool:
        """
        ``issubclass`` that tolerates protocols and exotic metaclasses.

        Non-runtime-checkable protocols make ``issubclass`` raise TypeError;
        explicit inheritance is then checked through the MRO.
        """
        try:
            return issubclass(candidate, base)
        except TypeError:
            return base in getattr(candidate, '__mro__', ())

    @staticmethod
    def is_assignable(target: Any, source: Any) -> bool:
        """
        Check whether a value declared as ``source`` may be stored into ``target``.

        Args:
            target: Declared type of the receiving slot (e.g. a property's type)
            source: Declared type of the value being stored (e.g. a field's type)

        Returns:
            True if every value of ``source`` is acceptable for ``target``

        Example:
            >>> FieldTypeUtils.is_assignable(float, int)
            True
            >>> FieldTypeUtils.is_assignable(int, Optional[int])
            False
        """
        target, _ = FieldTypeUtils.strip_annotated(target)
        source, _ = FieldTypeUtils.strip_annotated(source)

        if target in (Any, object, inspect.Parameter.empty):
            return True
        if source is target:
            return True
        if get_origin(target) in _UNION_ORIGINS:
            return any(FieldTypeUtils.is_assignable(arm, source) for arm in get_args(target))
        if get_origin(source) in _UNION_ORIGINS:
            return all(FieldTypeUtils.is_assignable(target, arm) for arm in get_args(source))
        if target in (None, type(None)):
            return source in (None, type(None))
        if source in _NUMERIC_PROMOTIONS.get(target, ()):
            return True

        target_cls = get_origin(target) or target
        source_cls = get_origin(source) or source
        if not isinstance(target_cls, type) or not isinstance(source_cls, type):
            return False
        return FieldTypeUtils.is_subtype(source_cls, target_cls)

    @staticmethod
    def is_value_type(hint: Any) -> bool:
        """Check if a type is edited inline with a single value editor."""
        if hint in (None, type(None)):
            return True
        if not isinstance(hint, type):
            return False
        return issubclass(hint, _VALUE_TYPES) or issubclass(hint, Enum)

    @staticmethod
    def is_sequence_type(hint: Any) -> bool:
        """Check if a type is an ordered sequence of elements (str/bytes excluded)."""
        origin = get_origin(hint) or hint
        if origin in _SEQUENCE_ORIGINS:
            return True
        return isinstance(origin, type) and issubclass(origin, (list, tuple))

    @staticmethod
    def get_sequence_element_type(hint: Any) -> Optional[Any]:
        """
        Extract the element type from ``list[T]``, ``Sequence[T]`` or ``tuple[T, ...]``.

        Returns:
            The element hint, or None when the sequence is unparameterized or heterogeneous
        """
        args = get_args(hint)
        if not args:
            return None
        if get_origin(hint) is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return args[0]
            return None
        return args[0]

    @staticmethod
    def is_class_var(hint: Any) -> bool:
        return hint is ClassVar or get_origin(hint) is ClassVar

    @staticmethod
    def get_member_hints(cls: type) -> Dict[str, Any]:
        """
        Resolve member annotations of a class across its MRO.

        Uses ``typing.get_type_hints`` with extras preserved. Unresolvable
        forward references fall back to the raw annotations, with string
        annotations mapped to None (unknown).
        """
        try:
            return typing.get_type_hints(cls, include_extras=True)
        except (NameError, TypeError, AttributeError) as e:
            logger.debug(f"Falling back to raw annotations for {cls.__name__}: {e}")

        hints: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            for name, hint in inspect.get_annotations(klass).items():
                hints[name] = None if isinstance(hint, str) else hint
        return hints

    @staticmethod
    def iter_member_names(obj: Any) -> List[str]:
        """
        List the inspectable members of an object in declaration order.

        Dataclasses expose their fields; other classes expose annotated
        (non-ClassVar) names across the MRO; unannotated objects fall back to
        public instance attributes.
        """
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return [f.name for f in dataclasses.fields(obj)]

        hints = FieldTypeUtils.get_member_hints(type(obj))
        names = [
            name for name, hint in hints.items()
            if not name.startswith('__') and not FieldTypeUtils.is_class_var(hint)
        ]
        if names:
            return names

        instance_dict = getattr(obj, '__dict__', None)
        if instance_dict is None:
            return []
        return [name for name in instance_dict if not name.startswith('_')]

    @staticmethod
    def has_members(obj: Any) -> bool:
        return bool(FieldTypeUtils.iter_member_names(obj))

    @staticmethod
    def zero_value(hint: Any) -> Any:
        """
        Zero value for a member hint, as left by an allocation that skips ``__init__``.

        Numbers and booleans get their zero; everything else (including
        Optional[T]) is None.
        """
        base, _ = FieldTypeUtils.strip_annotated(hint)
        return _ZERO_VALUES.get(base)

    @staticmethod
    def nicify_name(name: str) -> str:
        """
        Convert a member name into a display label.

        Example:
            >>> FieldTypeUtils.nicify_name("m_student_count")
            'Student Count'
            >>> FieldTypeUtils.nicify_name("teachId")
            'Teach Id'
        """
        stripped = re.sub(r'^(m_|_+)', '', name) or name
        spaced = re.sub(r'(?<=[a-z0-9])(?=[A-Z])', ' ', stripped)
        words = [word for word in re.split(r'[_\s]+', spaced) if word]
        return " ".join(word[:1].upper() + word[1:] for word in words)
