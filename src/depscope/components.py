"""Construction of :class:`~depscope.domain.Component` values."""

import logging
from typing import Iterable, Optional

from depscope.collaborators import ModuleKnowledgeBase, PackageMetadataSource
from depscope.domain import Component, ComponentType
from depscope.errors import PackageListError

__all__ = ["ModuleRegistry", "ComponentAttributor"]

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Known application modules, optionally with the package that ships each."""

    def __init__(self, modules: Optional[Iterable[str]] = None):
        self._packages: dict[str, str] = {name: "" for name in modules or []}

    def register(self, module_name: str, package_name: str = ""):
        """Record a module as known.

        Args:
            module_name: The module name, e.g. ``Acme_Widgets``.
            package_name: The package shipping the module, e.g. ``acme/module-widgets``.
        """
        self._packages[module_name] = package_name

    def is_known_module(self, name: str) -> bool:
        return name in self._packages

    def package_name_for(self, name: str) -> str:
        return self._packages.get(name, "")


class ComponentAttributor:
    """Builds module and library components, filling in installed package versions."""

    def __init__(
        self,
        modules: Optional[ModuleKnowledgeBase] = None,
        packages: Optional[PackageMetadataSource] = None,
    ):
        self._modules = modules
        self._packages = packages
        self._packages_failed = False

    def from_module_name(self, name: str) -> Component:
        package_name = self._modules.package_name_for(name) if self._modules else ""
        return Component(
            name,
            ComponentType.MODULE,
            package_name,
            self._version_of(package_name),
        )

    def from_library(self, vendor: str, package: str) -> Component:
        package_name = f"{vendor}/{package}"
        return Component(
            package_name,
            ComponentType.LIBRARY,
            package_name,
            self._version_of(package_name),
        )

    def _version_of(self, package_name: str) -> str:
        if not package_name or self._packages is None or self._packages_failed:
            return ""
        try:
            return self._packages.get_version_by_package(package_name)
        except PackageListError as e:
            logger.warning("Package versions are unavailable: %s", e)
            self._packages_failed = True
            return ""
