from pathlib import Path

import pytest

from depscope.components import ComponentAttributor, ModuleRegistry
from depscope.detectors import default_detector_set
from depscope.domain import TypeDescription
from depscope.errors import IntrospectionError
from depscope.imports import ImportScanner
from depscope.inspector import DependencyInspector
from depscope.oracle import TypeOracle

FIXTURES = Path(__file__).parent / "fixtures"


class FakeTypes:
    """In-memory stand-in for both the existence probe and the introspector."""

    def __init__(self):
        self.kinds: dict[str, str] = {}
        self.descriptions: dict[str, TypeDescription] = {}
        self.substitutions: dict[str, str] = {}
        self.introspected: list[str] = []

    def add(self, name: str, kind: str = "class", **description) -> "FakeTypes":
        self.kinds[name] = kind
        self.descriptions[name] = TypeDescription(name, **description)
        return self

    def exists(self, name: str) -> bool:
        return name in self.kinds

    def is_trait(self, name: str) -> bool:
        return self.kinds.get(name) == "trait"

    def is_interface(self, name: str) -> bool:
        return self.kinds.get(name) == "interface"

    def is_abstract(self, name: str) -> bool:
        return self.kinds.get(name) == "abstract"

    def is_instantiable(self, name: str) -> bool:
        return self.kinds.get(name) == "class"

    def resolve_substitution(self, name: str) -> str:
        return self.substitutions.get(name, "")

    def introspect(self, name: str) -> TypeDescription:
        self.introspected.append(name)
        if name not in self.descriptions:
            raise IntrospectionError(f"Type {name} does not exist")
        return self.descriptions[name]


class FakePackages:
    def __init__(self, versions: dict[str, str]):
        self.versions = versions

    def get_installed_packages(self) -> list[dict[str, str]]:
        return [{"name": name, "version": version} for name, version in self.versions.items()]

    def get_version_by_package(self, name: str) -> str:
        return self.versions.get(name, "")


@pytest.fixture
def types() -> FakeTypes:
    return FakeTypes()


@pytest.fixture
def modules() -> ModuleRegistry:
    return ModuleRegistry()


@pytest.fixture
def packages() -> FakePackages:
    return FakePackages({"acme/widgets": "1.4.2"})


@pytest.fixture
def inspector(types, modules, packages) -> DependencyInspector:
    return DependencyInspector(
        TypeOracle(types),
        types,
        ImportScanner(),
        default_detector_set(),
        modules,
        ComponentAttributor(modules, packages),
        namespace_separator="\\",
        dependency_root="dependency-root",
        array_access_interface="ArrayAccess",
    )


@pytest.fixture
def shopfront(monkeypatch):
    """Make the ``shopfront`` fixture package importable."""
    monkeypatch.syspath_prepend(str(FIXTURES))
    return FIXTURES / "shopfront"
