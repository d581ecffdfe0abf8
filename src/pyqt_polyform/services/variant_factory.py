"""
Variant construction for polymorphic fields.

When the user picks a variant in the selector, a fresh instance must be
produced without asking for constructor arguments:

1. A default factory registered for the variant wins.
2. Otherwise the class is called if its constructor binds with no arguments.
3. Otherwise the instance is allocated without running ``__init__`` and every
   declared member is set to its zero value (0, 0.0, False) or None.

Step 3 is a degraded construction: invariants a constructor would normally
establish do not hold for such instances, and code consuming them must cope
with zero/None members. ``strict=True`` turns it into a
VariantConstructionError instead.
"""

import inspect
from typing import Any, Callable, Dict, Optional, Type
import logging

from pyqt_polyform.core.exceptions import VariantConstructionError
from pyqt_polyform.core.type_utils import FieldTypeUtils

logger = logging.getLogger(__name__)


class VariantFactory:
    """Produces instances of variant classes for the variant selector."""

    def __init__(self, strict: Optional[bool] = None):
        if strict is None:
            from pyqt_polyform.protocols.inspector_config import get_inspector_config
            strict = get_inspector_config().strict_variant_construction
        self.strict = strict
        self._factories: Dict[type, Callable[[], Any]] = {}

    def register(self, variant: type, factory: Callable[[], Any]) -> None:
        """Register an explicit default factory for ``variant``."""
        self._factories[variant] = factory
        logger.debug(f"Registered default factory for {variant.__qualname__}")

    def unregister(self, variant: type) -> None:
        self._factories.pop(variant, None)

    @staticmethod
    def has_zero_arg_constructor(variant: type) -> bool:
        """
        Check whether ``variant()`` is a valid call.

        Returns:
            True if every constructor parameter is optional or variadic
        """
        try:
            signature = inspect.signature(variant)
        except (TypeError, ValueError):
            return False
        try:
            signature.bind()
        except TypeError:
            return False
        return True

    def create(self, variant: type) -> Any:
        """
        Produce a new instance of ``variant``.

        Raises:
            VariantConstructionError: If a factory or constructor raises, or if
                strict mode forbids allocating without a constructor
        """
        factory = self._factories.get(variant)
        if factory is not None:
            return self._invoke(variant, factory, "default factory")

        if self.has_zero_arg_constructor(variant):
            return self._invoke(variant, variant, "constructor")

        if self.strict:
            raise VariantConstructionError(
                f"{variant.__qualname__} has no zero-argument constructor and no registered "
                f"default factory. Register one with VariantFactory.register()."
            )

        logger.warning(
            f"{variant.__qualname__} has no zero-argument constructor; "
            f"allocating without running __init__"
        )
        return self.allocate_uninitialized(variant)

    @staticmethod
    def _invoke(variant: type, factory: Callable[[], Any], source: str) -> Any:
        try:
            instance = factory()
        except Exception as e:
            raise VariantConstructionError(
                f"{source} of {variant.__qualname__} failed: {e}"
            ) from e
        if not isinstance(instance, variant):
            raise VariantConstructionError(
                f"{source} of {variant.__qualname__} returned {type(instance).__name__}"
            )
        return instance

    @staticmethod
    def allocate_uninitialized(variant: Type) -> Any:
        """
        Allocate ``variant`` bypassing ``__init__``, with zeroed declared members.

        Members are written with ``object.__setattr__`` so frozen dataclasses
        and classes overriding ``__setattr__`` are populated as well.
        """
        try:
            instance = object.__new__(variant)
        except TypeError as e:
            raise VariantConstructionError(
                f"Cannot allocate {variant.__qualname__} without a constructor: {e}"
            ) from e

        for name, hint in FieldTypeUtils.get_member_hints(variant).items():
            if name.startswith('__') or FieldTypeUtils.is_class_var(hint):
                continue
            try:
                object.__setattr__(instance, name, FieldTypeUtils.zero_value(hint))
            except AttributeError:
                logger.debug(f"{variant.__qualname__}.{name} has no storage slot, left unset")
        return instance
