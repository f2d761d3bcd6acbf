__all__ = [
    "DepscopeError",
    "TypeNotFoundError",
    "IntrospectionError",
    "ComponentNotFoundError",
    "ManifestNotFoundError",
    "ManifestMalformedError",
    "PackageListError",
]


class DepscopeError(Exception):
    """Base class for every error raised by depscope."""

    pass


class TypeNotFoundError(DepscopeError):
    """Raised when a type name (and its factory-stripped fallback) does not exist."""

    pass


class IntrospectionError(DepscopeError):
    """Raised when a type cannot be located or is not instantiable."""

    pass


class ComponentNotFoundError(DepscopeError):
    """Raised when no module or library can be attributed to a type."""

    pass


class ManifestNotFoundError(DepscopeError):
    """Raised when a manifest path is empty or missing."""

    pass


class ManifestMalformedError(DepscopeError):
    """Raised when a manifest decodes to nothing or lacks its ``require`` section."""

    pass


class PackageListError(DepscopeError):
    """Raised when the installed package list cannot be obtained."""

    pass
