"""
Structural field paths and owner resolution.

A FieldPath addresses a leaf field from a root object as a sequence of
segments: named members (``config``) and sequence indices (``[2]``).

    FieldPath.parse("a.b[2].c")  ->  a / b / [2] / c

Owner resolution walks every segment except the leaf and returns the object
that directly holds the leaf member. Resolution never substitutes None for a
missing segment; it raises OwnerResolutionError naming the failing segment.
"""

import itertools
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Iterator, Tuple, Union

from .exceptions import OwnerResolutionError

_TOKEN_PATTERN = re.compile(r'([^.\[\]]+)|\[(-?\d+)\]')
_LEGACY_ARRAY_MARKER = ".Array.data["
_MISSING = object()


@dataclass(frozen=True)
class NameSegment:
    """Named member of the current object."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IndexSegment:
    """Element of the current ordered sequence."""
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


PathSegment = Union[NameSegment, IndexSegment]


@dataclass(frozen=True)
class FieldPath:
    """
    Immutable, hashable path from a root object to a field.

    Paths are composed ahead of time and reused across render passes:

        people = FieldPath.root() / "people"
        third_name = people.index(2) / "name"
    """
    segments: Tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> 'FieldPath':
        return cls(())

    @classmethod
    def parse(cls, text: str) -> 'FieldPath':
        """
        Parse ``a.b[2].c`` (or the legacy ``a.b.Array.data[2].c``) into a path.

        Raises:
            ValueError: If the text contains characters outside member names and indices
        """
        normalized = text.replace(_LEGACY_ARRAY_MARKER, "[")
        segments = []
        position = 0
        for match in _TOKEN_PATTERN.finditer(normalized):
            gap = normalized[position:match.start()]
            if gap.strip('.'):
                raise ValueError(f"Malformed field path '{text}' near '{gap}'")
            name, index = match.groups()
            if name is not None:
                segments.append(NameSegment(name))
            else:
                segments.append(IndexSegment(int(index)))
            position = match.end()
        if normalized[position:].strip('.'):
            raise ValueError(f"Malformed field path '{text}'")
        return cls(tuple(segments))

    def child(self, name: str) -> 'FieldPath':
        return FieldPath(self.segments + (NameSegment(name),))

    def index(self, index: int) -> 'FieldPath':
        return FieldPath(self.segments + (IndexSegment(index),))

    def __truediv__(self, name: str) -> 'FieldPath':
        return self.child(name)

    @property
    def parent(self) -> 'FieldPath':
        return FieldPath(self.segments[:-1])

    @property
    def leaf(self) -> PathSegment:
        if not self.segments:
            raise ValueError("The root path has no leaf segment")
        return self.segments[-1]

    @property
    def is_root(self) -> bool:
        return not self.segments

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        text = ""
        for segment in self.segments:
            if isinstance(segment, IndexSegment) or not text:
                text += str(segment)
            else:
                text += f".{segment}"
        return text

    def resolve_owner(self, root: Any) -> Any:
        return resolve_owner(root, self)

    def resolve_value(self, root: Any) -> Any:
        return resolve_value(root, self)


def _as_path(path: Union[str, FieldPath]) -> FieldPath:
    return path if isinstance(path, FieldPath) else FieldPath.parse(path)


def find_member(obj: Any, name: str) -> Any:
    """
    Read member ``name`` of ``obj``, searching its runtime type and every base.

    Looks in the instance ``__dict__`` first, then walks the MRO for slots,
    dataclass fields and class attributes (properties included).

    Returns:
        The member value, or the module-private ``_MISSING`` sentinel if no class
        in the hierarchy declares the member
    """
    instance_dict = getattr(obj, '__dict__', None)
    if instance_dict is not None and name in instance_dict:
        return instance_dict[name]

    for klass in type(obj).__mro__:
        if klass is object:
            continue
        namespace = vars(klass)
        declared = (
            name in namespace
            or name in namespace.get('__dataclass_fields__', ())
            or name in _slot_names(namespace)
        )
        if declared:
            try:
                return getattr(obj, name)
            except AttributeError:
                return _MISSING
    return _MISSING


def _slot_names(namespace) -> Tuple[str, ...]:
    slots = namespace.get('__slots__', ())
    return (slots,) if isinstance(slots, str) else tuple(slots)


def _element_at(obj: Any, index: int) -> Any:
    if index < 0:
        return _MISSING
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        return obj[index] if index < len(obj) else _MISSING
    try:
        iterator = iter(obj)
    except TypeError:
        return _MISSING
    return next(itertools.islice(iterator, index, None), _MISSING)


def _step(current: Any, segment: PathSegment, path: FieldPath) -> Any:
    if current is None:
        raise OwnerResolutionError(path, segment, "intermediate value is None")

    if isinstance(segment, IndexSegment):
        if isinstance(current, (str, bytes)) or not hasattr(current, '__iter__'):
            raise OwnerResolutionError(
                path, segment, f"{type(current).__name__} is not an ordered sequence"
            )
        value = _element_at(current, segment.index)
        if value is _MISSING:
            raise OwnerResolutionError(path, segment, "index out of range")
        return value

    try:
        value = find_member(current, segment.name)
    except Exception as e:
        raise OwnerResolutionError(
            path, segment, f"reading '{segment.name}' raised {type(e).__name__}: {e}"
        ) from e
    if value is _MISSING:
        raise OwnerResolutionError(
            path, segment,
            f"no member '{segment.name}' in {type(current).__name__} or its bases"
        )
    return value


def resolve_owner(root: Any, path: Union[str, FieldPath]) -> Any:
    """
    Return the object that directly holds the leaf field of ``path``.

    Args:
        root: The object the path starts from
        path: FieldPath or its text form (``a.b[2].c``)

    Returns:
        The owner of the leaf segment (``root`` itself for single-segment paths)

    Raises:
        OwnerResolutionError: If any prefix segment cannot be matched, or if the
            owner it reaches is None

    Example:
        >>> resolve_owner(root, "a.b[2].c") is root.a.b[2]
        True
    """
    path = _as_path(path)
    if path.is_root:
        raise OwnerResolutionError(path, "", "the root path has no owner")
    if root is None:
        raise OwnerResolutionError(path, path.segments[0], "root object is None")
    current = root
    for segment in path.segments[:-1]:
        current = _step(current, segment, path)
        if current is None:
            raise OwnerResolutionError(path, segment, "owner is None")
    return current


def resolve_value(root: Any, path: Union[str, FieldPath]) -> Any:
    """Resolve ``path`` all the way down to the leaf value."""
    path = _as_path(path)
    if path.is_root:
        return root
    owner = resolve_owner(root, path)
    return _step(owner, path.leaf, path)
