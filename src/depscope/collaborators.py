"""Contracts for the collaborators the dependency engine talks to.

The engine never reflects on code, reads package lists or parses manifests itself.
Instead it is handed objects satisfying the protocols below. ``depscope.introspection``,
``depscope.packages`` and ``depscope.components`` provide the implementations used by
default; tests substitute their own.
"""

from typing import Protocol

from depscope.domain import TypeDescription

__all__ = [
    "TypeExistenceProbe",
    "TypeIntrospector",
    "ModuleKnowledgeBase",
    "PackageMetadataSource",
    "ManifestSource",
]


class TypeExistenceProbe(Protocol):
    def exists(self, name: str) -> bool:
        """Return True if ``name`` is a class, interface or trait. Must never raise."""
        ...

    def is_trait(self, name: str) -> bool:
        """Return True if ``name`` is a trait. Must never raise."""
        ...


class TypeIntrospector(Protocol):
    def introspect(self, name: str) -> TypeDescription:
        """Describe the named type.

        Raises:
            IntrospectionError: If the type cannot be located.
        """
        ...

    def resolve_substitution(self, name: str) -> str:
        """Return the concrete type registered in place of ``name``, or ""."""
        ...

    def is_abstract(self, name: str) -> bool: ...

    def is_interface(self, name: str) -> bool: ...

    def is_instantiable(self, name: str) -> bool: ...


class ModuleKnowledgeBase(Protocol):
    def is_known_module(self, name: str) -> bool: ...

    def package_name_for(self, name: str) -> str:
        """Return the package shipping module ``name``, or "" if it is not recorded."""
        ...


class PackageMetadataSource(Protocol):
    def get_installed_packages(self) -> list[dict[str, str]]:
        """Return installed packages as ``{"name": ..., "version": ...}`` mappings."""
        ...

    def get_version_by_package(self, name: str) -> str:
        """Return the installed version of package ``name``, or ""."""
        ...


class ManifestSource(Protocol):
    def read_requirements(self, manifest_path: str) -> dict[str, str]:
        """Return the manifest's ``require`` mapping of package name to constraint.

        Raises:
            ManifestNotFoundError: If the path is empty or missing.
            ManifestMalformedError: If the manifest decodes to nothing or has no
                ``require`` section.
        """
        ...
