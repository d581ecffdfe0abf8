"""
Variant discovery for abstract field types.

The TypeCatalog answers "which concrete classes can be stored in a field
declared as X?" by scanning every type a type provider yields and caching the
answer per abstract type.

Design:
- Providers enumerate candidate classes; the catalog filters and caches
- Cache is bounded and evicts strictly in insertion order (oldest key first,
  independent of how recently a key was read)
- A key is never re-scanned once cached; classes defined after the first
  resolution of a key are not picked up until the key is evicted or cleared
"""

import sys
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Type
import logging

from .type_utils import FieldTypeUtils

logger = logging.getLogger(__name__)


class TypeProvider(ABC):
    """Enumerates the classes a catalog may consider as variants."""

    @abstractmethod
    def iter_types(self) -> Iterator[type]:
        """
        Yield candidate classes in a stable discovery order.

        Duplicates are allowed; the catalog keeps the first occurrence.
        """
        pass


class LoadedTypeProvider(TypeProvider):
    """
    Every class currently loaded in the interpreter.

    Walks ``type.__subclasses__`` depth-first from ``object``, so classes are
    yielded in definition order under each base.
    """

    def iter_types(self) -> Iterator[type]:
        seen = set()
        stack: List[type] = [object]
        while stack:
            cls = stack.pop()
            if cls in seen:
                continue
            seen.add(cls)
            yield cls
            try:
                subclasses = type.__subclasses__(cls)
            except TypeError:
                continue
            stack.extend(reversed(subclasses))


class ModuleTypeProvider(TypeProvider):
    """
    Classes bound at module level, module by module.

    Args:
        modules: Modules to scan. Defaults to a snapshot of ``sys.modules``
                 taken on every scan.
    """

    def __init__(self, modules: Optional[Iterable] = None):
        self._modules = list(modules) if modules is not None else None

    def iter_types(self) -> Iterator[type]:
        modules = self._modules if self._modules is not None else list(sys.modules.values())
        for module in modules:
            namespace = getattr(module, '__dict__', None)
            if not namespace:
                continue
            for value in list(namespace.values()):
                if isinstance(value, type):
                    yield value


class RegistryTypeProvider(TypeProvider):
    """
    Explicit, closed list of variants.

    Example:
        registry = RegistryTypeProvider()

        @registry.register
        class Student(IPerson):
            ...

        catalog = TypeCatalog(provider=registry)
    """

    def __init__(self):
        self._types: List[type] = []

    def register(self, cls: type) -> type:
        if cls not in self._types:
            self._types.append(cls)
            logger.debug(f"Registered variant {cls.__qualname__}")
        return cls

    def iter_types(self) -> Iterator[type]:
        return iter(list(self._types))


class TypeCatalog:
    """
    Resolves and caches the concrete variants of abstract types.

    Example:
        catalog = TypeCatalog()
        catalog.resolve(IPerson)   # (Student, Teacher)
    """

    DEFAULT_CAPACITY = 10

    def __init__(self, provider: Optional[TypeProvider] = None, capacity: Optional[int] = None):
        if capacity is None:
            from pyqt_polyform.protocols.inspector_config import get_inspector_config
            capacity = get_inspector_config().catalog_capacity
        if capacity < 1:
            raise ValueError(f"Catalog capacity must be positive, got {capacity}")

        self.provider = provider or LoadedTypeProvider()
        self.capacity = capacity
        self._entries: Dict[type, Tuple[type, ...]] = {}
        self._lock = threading.RLock()

    def resolve(self, abstract_type: type) -> Tuple[type, ...]:
        """
        Get the concrete variants assignable to ``abstract_type``.

        Args:
            abstract_type: The abstract class or interface used as lookup key

        Returns:
            Variants in discovery order. Never contains ``abstract_type`` itself
            or any other abstract class.
        """
        with self._lock:
            cached = self._entries.get(abstract_type)
            if cached is not None:
                return cached

            variants = self._discover(abstract_type)
            while len(self._entries) >= self.capacity:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug(f"Evicted variant cache entry for {_type_name(oldest)}")
            self._entries[abstract_type] = variants
            return variants

    def _discover(self, abstract_type: type) -> Tuple[type, ...]:
        seen = set()
        variants: List[type] = []
        for candidate in self.provider.iter_types():
            if candidate in seen or candidate is abstract_type:
                continue
            seen.add(candidate)
            if not FieldTypeUtils.is_subtype(candidate, abstract_type):
                continue
            if not FieldTypeUtils.is_abstract_type(candidate):
                variants.append(candidate)

        logger.debug(
            f"Discovered {len(variants)} variant(s) for {_type_name(abstract_type)}: "
            f"{[v.__name__ for v in variants]}"
        )
        return tuple(variants)

    def keys(self) -> List[type]:
        """Cached abstract types, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, abstract_type: object) -> bool:
        with self._lock:
            return abstract_type in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _type_name(cls: type) -> str:
    return getattr(cls, '__qualname__', repr(cls))


# Global catalog instance (replaceable by application)
_type_catalog: Optional[TypeCatalog] = None


def get_type_catalog() -> TypeCatalog:
    """Get the process-wide catalog, creating it on first use."""
    global _type_catalog
    if _type_catalog is None:
        _type_catalog = TypeCatalog()
    return _type_catalog


def set_type_catalog(catalog: TypeCatalog) -> None:
    global _type_catalog
    _type_catalog = catalog


def reset_type_catalog() -> None:
    """Drop the process-wide catalog so the next access starts empty."""
    global _type_catalog
    _type_catalog = None


def register_variant(provider: RegistryTypeProvider) -> Callable[[Type], Type]:
    """Decorator factory registering a class with an explicit provider."""
    return provider.register
