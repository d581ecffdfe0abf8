"""Inspector exceptions."""


class InspectorError(Exception):
    """Base class for failures local to a single field's render."""


class OwnerResolutionError(InspectorError, LookupError):
    """Raised when a field path cannot be walked to its owning object."""

    def __init__(self, path, segment, reason: str):
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Cannot resolve '{path}' at segment '{segment}': {reason}")


class FieldAssignmentError(InspectorError):
    """Raised when a committed edit cannot be stored on its owner."""


class ProxyBindingError(InspectorError):
    """Raised when a proxy accessor is missing or has an incompatible type."""


class VariantConstructionError(InspectorError):
    """Raised when a variant instance cannot be produced for a field."""
