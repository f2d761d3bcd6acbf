"""Cross-checking the packages a type uses against a manifest's requirements."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from depscope.domain import Component
from depscope.errors import ComponentNotFoundError, IntrospectionError, TypeNotFoundError
from depscope.inspector import DependencyInspector

__all__ = ["DependencyReport", "TypeReport", "RequirementCheck", "scan_type", "check_requirements"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyReport:
    """A dependency of a scanned type and the component it was attributed to.

    Attributes:
        name: The dependency's type name.
        component: The owning component, or None if attribution failed.
        error: Why attribution failed, "" on success.
    """

    name: str
    component: Optional[Component]
    error: str = ""


@dataclass(frozen=True)
class TypeReport:
    type_name: str
    component: Optional[Component]
    deprecated: bool
    dependencies: list[DependencyReport] = field(default_factory=list)

    def components(self) -> list[Component]:
        """Return the type's own component followed by its dependencies' components."""
        found = [self.component] + [dependency.component for dependency in self.dependencies]
        return [component for component in found if component is not None]


@dataclass(frozen=True)
class RequirementCheck:
    """Outcome of comparing used packages with declared requirements.

    Attributes:
        missing: Packages used by the scanned code but not required, sorted.
        unused: Vendor/package requirements nothing scanned uses, sorted.
    """

    missing: list[str]
    unused: list[str]

    @property
    def ok(self) -> bool:
        return not self.missing


def scan_type(inspector: DependencyInspector, name: str) -> TypeReport:
    """Inspect ``name`` and attribute each of its distinct dependencies to a component.

    A dependency that does not exist or cannot be attributed is reported with its error
    and does not stop the scan.

    Raises:
        TypeNotFoundError: If ``name`` itself does not exist.
    """
    inspector.set_target(name)
    deprecated = inspector.is_deprecated()
    try:
        component = inspector.get_component_by_class()
    except ComponentNotFoundError as e:
        logger.warning("%s", e)
        component = None
    dependency_names = list(dict.fromkeys(inspector.get_dependencies()))

    dependencies = []
    for dependency_name in dependency_names:
        try:
            dependency_component = inspector.set_target(dependency_name).get_component_by_class()
        except (TypeNotFoundError, ComponentNotFoundError, IntrospectionError) as e:
            logger.warning("Cannot attribute %s (used by %s): %s", dependency_name, name, e)
            dependencies.append(DependencyReport(dependency_name, None, str(e)))
            continue
        dependencies.append(DependencyReport(dependency_name, dependency_component))

    inspector.set_target(name)
    return TypeReport(name, component, deprecated, dependencies)


def check_requirements(
    reports: Iterable[TypeReport],
    requirements: Mapping[str, str],
    own_package: str = "",
) -> RequirementCheck:
    """Compare the packages behind the reported components with ``requirements``.

    Args:
        reports: Reports of the scanned types.
        requirements: The manifest's ``require`` mapping.
        own_package: The package the scanned code belongs to; never reported.
    """
    used = {
        component.package_name
        for report in reports
        for component in report.components()
        if component.package_name and component.package_name != own_package
    }
    missing = sorted(used - set(requirements))
    unused = sorted(
        package
        for package in requirements
        if "/" in package and package not in used and package != own_package
    )
    return RequirementCheck(missing, unused)
