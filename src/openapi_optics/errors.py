"""
Setup-time errors for openapi_optics.

Every error here is raised while the accessor registry is being wired,
never while an accessor is applied to a document. Absence of a value is
not an error: partial reads return None.
"""


class RegistryError(Exception):
    """Base class for accessor wiring failures."""
    pass


class AmbiguousAccessorError(RegistryError):
    """Raised when an (entity, name) pair is registered twice."""
    pass


class UnknownAccessorError(RegistryError, KeyError):
    """Raised when an (entity, name) pair has no registered accessor."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ""


class CompositionError(RegistryError):
    """Raised when two optics cannot be composed (capability or type mismatch)."""
    pass


class FrozenRegistryError(RegistryError):
    """Raised when registering into a registry that has been frozen."""
    pass


class CapabilityError(TypeError):
    """Raised when an optic is asked for an operation its capability lacks."""
    pass
