"""Domain models used throughout depscope."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ConstructorParameter:
    """A parameter of a type's constructor.

    Attributes:
        name: The parameter name in the constructor signature.
        type_name: The normalised name of the declared type, or None if the parameter
            carries no annotation.
    """

    name: str
    type_name: Optional[str]


@dataclass(frozen=True)
class TypeDescription:
    """Introspection handle for a single type.

    Attributes:
        name: The fully-qualified type name this description was built for.
        module: The module that defines the type ("" when unknown). Used to resolve
            relative imports in the defining file.
        constructor_parameters: The constructor's parameters, in declaration order.
        interface_names: Names of the interfaces the type implements.
        file_path: Path of the file declaring the type ("" for built-in types).
        doc_comment: The type's own documentation text.
    """

    name: str
    module: str = ""
    constructor_parameters: tuple[ConstructorParameter, ...] = field(default_factory=tuple)
    interface_names: tuple[str, ...] = field(default_factory=tuple)
    file_path: str = ""
    doc_comment: str = ""


class ComponentType(str, Enum):
    MODULE = "module"
    LIBRARY = "library"


@dataclass(frozen=True)
class Component:
    """An application module or third-party library to which types are attributed.

    Attributes:
        component_name: The module name (``Acme_Widgets``) or library package name
            (``acme/widgets``).
        component_type: Whether this is a module or a library.
        package_name: The package shipping the component, "" when unknown.
        package_version: The installed version of that package, "" when unknown.
    """

    component_name: str
    component_type: ComponentType
    package_name: str = ""
    package_version: str = ""

    def __str__(self) -> str:
        return self.component_name
