"""Dependency discovery and component attribution for a single target type.

``DependencyInspector`` merges four independent signals into one dependency list:

    1. constructor parameter types that do *not* currently resolve (missing
       dependencies)
    2. implemented interfaces that *do* currently resolve, except the array-access
       marker
    3. names imported by the defining file
    4. names found in the defining file by the content detectors

The first two are filtered; imports and content matches are taken as they are. The
list is not de-duplicated.

Introspection handles are cached per type name for the lifetime of the inspector.
Use one inspector per scan to bound the cache.
"""

import logging
import re
import tokenize
from pathlib import Path
from typing import Optional

from depscope.collaborators import ModuleKnowledgeBase, TypeIntrospector
from depscope.components import ComponentAttributor
from depscope.detectors import ContentDetectorSet
from depscope.domain import Component, TypeDescription
from depscope.errors import ComponentNotFoundError, IntrospectionError, TypeNotFoundError
from depscope.imports import ImportScanner
from depscope.introspection import BUILTIN_INTERFACES, UNTYPED_CONTAINERS
from depscope.oracle import TypeOracle

__all__ = ["DependencyInspector"]

logger = logging.getLogger(__name__)


class DependencyInspector:
    """Inspects one target type at a time.

    Example:
        >>> inspector.set_target("app.checkout.Checkout")
        >>> inspector.get_dependencies()
        ['payments.Gateway', 'app.cart.Cart', ...]
        >>> inspector.get_component_by_class()
        Component(component_name='App_Checkout', ...)
    """

    def __init__(
        self,
        oracle: TypeOracle,
        introspector: TypeIntrospector,
        import_scanner: ImportScanner,
        detectors: ContentDetectorSet,
        modules: ModuleKnowledgeBase,
        attributor: ComponentAttributor,
        namespace_separator: str = ".",
        dependency_root: str = "vendor",
        array_access_interface: str = "collections.abc.MutableMapping",
        deprecation_markers: tuple[str, ...] = ("@deprecated", ".. deprecated::"),
        builtin_types: frozenset = BUILTIN_INTERFACES | UNTYPED_CONTAINERS,
    ):
        self._oracle = oracle
        self._introspector = introspector
        self._import_scanner = import_scanner
        self._detectors = detectors
        self._modules = modules
        self._attributor = attributor
        self._separator = namespace_separator
        self._package_pattern = re.compile(
            rf"(?:^|/){re.escape(dependency_root)}/([^/]+)/([^/]+)/"
        )
        self._array_access_interface = array_access_interface
        self._deprecation_markers = tuple(deprecation_markers)
        self._builtin_types = builtin_types
        self._handles: dict[str, TypeDescription] = {}
        self._target = ""

    @property
    def target(self) -> str:
        return self._target

    def set_target(self, name: str) -> "DependencyInspector":
        """Make ``name`` the inspected type.

        Raises:
            TypeNotFoundError: If neither ``name`` nor its factory-stripped base name
                exists. The inspector is left without a target.
        """
        self._target = ""
        if not self._oracle.exists(name):
            raise TypeNotFoundError(f'Type "{name}" does not exist')
        self._target = name
        return self

    def get_dependencies(self) -> list[str]:
        """Return the merged dependency list of the target, in signal order."""
        name = self._require_target()
        if not self._is_instantiable(name):
            logger.debug("%s is not instantiable, no dependencies", name)
            return []

        handle = self._handle(name)
        dependencies = self._constructor_dependencies(handle) + self._interface_dependencies(handle)

        if handle.file_path:
            try:
                with tokenize.open(handle.file_path) as source_file:
                    source = source_file.read()
                imported = list(self._import_scanner.scan(source, _package_of(handle)))
            except (SyntaxError, UnicodeDecodeError, tokenize.TokenError) as e:
                raise IntrospectionError(f'Cannot scan "{handle.file_path}": {e}') from e
            detected = self._detectors.scan(source)
            logger.debug(
                "%s: %d imported and %d detected names in %s",
                name, len(imported), len(detected), handle.file_path,
            )
            dependencies += imported + detected

        return dependencies

    def is_deprecated(self) -> bool:
        """Return True if the target's documentation carries a deprecation marker."""
        try:
            handle = self._handle(self._require_target())
        except Exception as e:
            logger.debug("Treating %s as not deprecated: %s", self._target, e)
            return False
        return any(marker in handle.doc_comment for marker in self._deprecation_markers)

    def get_component_by_class(self) -> Component:
        """Return the module or library that defines the target.

        A known module named after the first two namespace segments wins; otherwise the
        defining file's location under the dependency root names the library.

        Raises:
            ComponentNotFoundError: If neither convention identifies a component.
        """
        name = self._require_target()
        parts = name.split(self._separator)
        if len(parts) >= 2:
            module_name = f"{parts[0]}_{parts[1]}"
            if self._modules.is_known_module(module_name):
                return self._attributor.from_module_name(module_name)

        package = self.get_package_by_class()
        if package:
            vendor, package_name = package.split("/", 1)
            return self._attributor.from_library(vendor, package_name)

        raise ComponentNotFoundError(f'No component found for type "{name}"')

    def get_package_by_class(self) -> str:
        """Return ``vendor/package`` from the defining file's path, or ""."""
        filename = self.get_filename()
        if not filename:
            return ""

        match = self._package_pattern.search(filename.replace("\\", "/"))
        if not match:
            return ""
        return f"{match.group(1)}/{match.group(2)}"

    def get_filename(self) -> str:
        """Return the path of the file declaring the target, or "" if it is unknown."""
        try:
            return self._handle(self._require_target()).file_path
        except Exception as e:
            logger.debug("No file for %s: %s", self._target, e)
            return ""

    def _require_target(self) -> str:
        if not self._target:
            raise TypeNotFoundError("No target type has been set")
        return self._target

    def _constructor_dependencies(self, handle: TypeDescription) -> list[str]:
        result = []
        for parameter in handle.constructor_parameters:
            dependency = parameter.type_name
            if not dependency:
                continue
            if self._oracle.exists(dependency):
                continue
            if dependency in self._builtin_types:
                continue
            result.append(dependency)
        return result

    def _interface_dependencies(self, handle: TypeDescription) -> list[str]:
        return [
            interface_name
            for interface_name in handle.interface_names
            if self._oracle.exists(interface_name)
            and interface_name != self._array_access_interface
        ]

    def _is_instantiable(self, name: str) -> bool:
        if self._oracle.is_trait(name):
            return False
        # No factory fallback: a factory that is not present cannot be introspected.
        if not self._oracle.exists_directly(name):
            return False

        instance_type = self._introspector.resolve_substitution(name)
        if not instance_type:
            return True

        if self._introspector.is_interface(instance_type):
            return True
        if not self._introspector.is_instantiable(instance_type):
            return False
        return not self._introspector.is_abstract(instance_type)

    def _handle(self, name: str) -> TypeDescription:
        if name in self._handles:
            logger.debug("Using cached handle for %s", name)
            return self._handles[name]

        if not self._is_instantiable(name):
            raise IntrospectionError(f'Type "{name}" is not instantiable')

        logger.debug("Introspecting %s", name)
        handle = self._introspector.introspect(name)
        self._handles[name] = handle
        return handle


def _package_of(handle: TypeDescription) -> str:
    if Path(handle.file_path).name == "__init__.py":
        return handle.module
    return handle.module.rpartition(".")[0]
