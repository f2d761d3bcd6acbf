"""High level entry points for constructing an inspector."""

from typing import Optional

from depscope.collaborators import ModuleKnowledgeBase, PackageMetadataSource
from depscope.components import ComponentAttributor, ModuleRegistry
from depscope.detectors import ContentDetectorSet, default_detector_set
from depscope.imports import ImportScanner
from depscope.inspector import DependencyInspector
from depscope.introspection import PythonTypeIntrospector, SubstitutionRegistry
from depscope.oracle import TypeOracle
from depscope.packages import CommandPackageSource, PackageCache
from depscope.settings import Settings

__all__ = ["make_inspector"]


def make_inspector(
    settings: Optional[Settings] = None,
    substitutions: Optional[SubstitutionRegistry] = None,
    modules: Optional[ModuleKnowledgeBase] = None,
    packages: Optional[PackageMetadataSource] = None,
    detectors: Optional[ContentDetectorSet] = None,
    cache: Optional[PackageCache] = None,
) -> DependencyInspector:
    """Wire a :class:`DependencyInspector` for importable Python code.

    Args:
        settings: Settings to use; read from the environment if None.
        substitutions: Registered preferences; none if None.
        modules: The known application modules; ``settings.known_modules`` if None.
        packages: Source of installed package versions; a
            :class:`CommandPackageSource` running ``settings.package_command`` if None.
            Versions are left empty when neither is given.
        detectors: Content detectors; :func:`default_detector_set` if None.
        cache: Package list cache shared by this run; a fresh one if None.

    Returns:
        A new inspector with an empty introspection cache.

    Example:
        >>> inspector = make_inspector(Settings(known_modules=["App_Checkout"]))
        >>> inspector.set_target("App.Checkout.Model.Cart").get_dependencies()
    """
    settings = settings or Settings()
    introspector = PythonTypeIntrospector(substitutions, settings.trait_suffix)
    if modules is None:
        modules = ModuleRegistry(settings.known_modules)
    if packages is None and settings.package_command:
        packages = CommandPackageSource(settings.package_command, settings.project_root, cache)

    return DependencyInspector(
        TypeOracle(introspector, settings.factory_suffix),
        introspector,
        ImportScanner(),
        detectors if detectors is not None else default_detector_set(),
        modules,
        ComponentAttributor(modules, packages),
        namespace_separator=settings.namespace_separator,
        dependency_root=settings.dependency_root,
        array_access_interface=settings.array_access_interface,
        deprecation_markers=tuple(settings.deprecation_markers),
    )
