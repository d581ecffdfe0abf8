"""Base configuration class for the inspector.

Provides hooks for applications to customize inspector behavior.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class InspectorConfig:
    """Base configuration for inspector behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        catalog_capacity: Number of abstract types the variant catalog caches
        unset_option_label: Text of the first variant selector entry (clears the field)
        element_label: Label format for sequence elements, receives ``index``
        strict_variant_construction: Refuse to allocate variants that lack a
            zero-argument constructor instead of skipping ``__init__``
        refresh_delay_ms: Delay before re-rendering after user input
        indent_width: Pixels of indentation per nesting level
    """

    catalog_capacity: int = 10
    unset_option_label: str = "None (null)"
    element_label: str = "Element {index}"
    strict_variant_construction: bool = False
    refresh_delay_ms: int = 0
    indent_width: int = 14


# Global config instance (set by application)
_inspector_config: Optional[InspectorConfig] = None


def set_inspector_config(config: Optional[InspectorConfig]) -> None:
    """Set the global inspector configuration.

    Args:
        config: InspectorConfig instance, or None to restore defaults
    """
    global _inspector_config
    _inspector_config = config


def get_inspector_config() -> InspectorConfig:
    """Get the current inspector configuration.

    Returns:
        Current InspectorConfig or default if not set
    """
    if _inspector_config is None:
        return InspectorConfig()
    return _inspector_config
