"""Runtime introspection of Python types.

``PythonTypeIntrospector`` locates types by their dotted name, importing the defining
module on demand, and describes them with :mod:`inspect` and :mod:`typing`:

    - classes are anything :func:`inspect.isclass` accepts
    - interfaces are ``typing.Protocol`` classes, ``collections.abc`` classes, and ABCs
      whose own methods are all abstract
    - traits are mixins, recognised by the trait suffix on the class name
    - constructor parameter types come from the signature of the class, evaluated with
      :func:`typing.get_type_hints` where possible and by name lookup otherwise, so that
      annotations referring to code which is not importable survive as plain names

Substitutions ("preferences") map a requested type to the concrete type that will be
built in its place, and are kept in a ``SubstitutionRegistry``.
"""

import builtins
import collections.abc
import importlib
import inspect
import types
import typing
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin

from depscope.domain import ConstructorParameter, TypeDescription
from depscope.errors import IntrospectionError

__all__ = [
    "BUILTIN_INTERFACES",
    "UNTYPED_CONTAINERS",
    "SubstitutionRegistry",
    "PythonTypeIntrospector",
    "qualified_name",
    "annotation_name",
]

_ABC_MODULES = {"collections.abc", "_collections_abc"}

BUILTIN_INTERFACES = frozenset(
    [f"collections.abc.{name}" for name in collections.abc.__all__]
    + [f"typing.{name}" for name in collections.abc.__all__ if hasattr(typing, name)]
    + ["typing.SupportsInt", "typing.SupportsFloat", "typing.SupportsIndex"]
)
"""Standard interfaces which never count as constructor dependencies."""

UNTYPED_CONTAINERS = frozenset(
    ["list", "dict", "tuple", "set", "frozenset", "object", "typing.Any"]
)
"""Generic containers whose annotation says nothing about a dependency."""

_UnionType = getattr(types, "UnionType", None)


def qualified_name(cls: Any) -> str:
    """Return the dotted name of a class.

    Built-in classes are named without their module, and ``collections.abc`` classes
    by their public module.

    Example:
        >>> qualified_name(int)                         # "int"
        >>> qualified_name(collections.abc.Mapping)     # "collections.abc.Mapping"
        >>> qualified_name(Outer.Inner)                 # "some.module.Outer.Inner"
    """
    module = getattr(cls, "__module__", "") or ""
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", "")
    if module == "builtins":
        return name
    if module in _ABC_MODULES:
        module = "collections.abc"
    return f"{module}.{name}" if module else name


def annotation_name(annotation: Any) -> Optional[str]:
    """Normalise a parameter annotation to the name of the type it declares.

    ``Annotated`` metadata is dropped, ``Optional``/union annotations resolve to their
    first non-None member, generic aliases to their origin, and unresolved string
    annotations are returned as written.

    Example:
        >>> annotation_name(Optional[Printer])     # "app.printing.Printer"
        >>> annotation_name(list[int])             # "list"
        >>> annotation_name("payments.Gateway")    # "payments.Gateway"
    """
    if annotation is inspect.Parameter.empty or annotation is None:
        return None
    if isinstance(annotation, str):
        return annotation.strip().strip("'\"") or None
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__

    origin = get_origin(annotation)
    if origin is Annotated:
        return annotation_name(get_args(annotation)[0])
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return annotation_name(members[0]) if members else None
    if origin is not None:
        return annotation_name(origin)

    if annotation is Any:
        return "typing.Any"
    if inspect.isclass(annotation):
        return qualified_name(annotation)
    return str(annotation)


class SubstitutionRegistry:
    """Registry of preferences: concrete types built in place of requested ones."""

    def __init__(self):
        self._preferences: dict[str, str] = {}

    def prefer(self, requested: Any, concrete: Any):
        """Register ``concrete`` as the type to build when ``requested`` is asked for.

        Args:
            requested: The requested type, or its dotted name.
            concrete: The substituted type, or its dotted name.
        """
        self._preferences[_as_name(requested)] = _as_name(concrete)

    def substitutes(self, requested: Any) -> Callable:
        """Decorator to register a class as the preference for ``requested``.

        Example:
            @substitutions.substitutes("app.payments.Gateway")
            class StripeGateway:
                ...
        """

        def decorator(cls):
            self.prefer(requested, cls)
            return cls

        return decorator

    def resolve(self, name: str) -> str:
        return self._preferences.get(name, "")

    def __contains__(self, name: str) -> bool:
        return name in self._preferences


def _as_name(target: Any) -> str:
    return target if isinstance(target, str) else qualified_name(target)


class PythonTypeIntrospector:
    """Type existence probe and introspector for importable Python code."""

    def __init__(
        self,
        substitutions: Optional[SubstitutionRegistry] = None,
        trait_suffix: str = "Mixin",
    ):
        self._substitutions = substitutions or SubstitutionRegistry()
        self._trait_suffix = trait_suffix

    def exists(self, name: str) -> bool:
        try:
            return inspect.isclass(locate(name))
        except Exception:
            return False

    def is_trait(self, name: str) -> bool:
        try:
            cls = locate(name)
        except Exception:
            return False
        return inspect.isclass(cls) and self._is_trait(cls)

    def is_interface(self, name: str) -> bool:
        cls = self._find_class(name)
        return cls is not None and _is_interface(cls)

    def is_abstract(self, name: str) -> bool:
        cls = self._find_class(name)
        return cls is not None and inspect.isabstract(cls)

    def is_instantiable(self, name: str) -> bool:
        cls = self._find_class(name)
        if cls is None or self._is_trait(cls):
            return False
        return not inspect.isabstract(cls) and not _is_interface(cls)

    def resolve_substitution(self, name: str) -> str:
        return self._substitutions.resolve(name)

    def introspect(self, name: str) -> TypeDescription:
        cls = locate(name)
        if not inspect.isclass(cls):
            raise IntrospectionError(f"Type {name} does not exist")

        return TypeDescription(
            name,
            getattr(cls, "__module__", "") or "",
            _constructor_parameters(cls),
            tuple(
                qualified_name(base)
                for base in cls.__mro__[1:]
                if base is not object and base.__module__ != "typing" and _is_interface(base)
            ),
            _source_file(cls),
            cls.__dict__.get("__doc__") or "",
        )

    def _find_class(self, name: str):
        try:
            cls = locate(name)
        except Exception:
            return None
        return cls if inspect.isclass(cls) else None

    def _is_trait(self, cls) -> bool:
        return bool(self._trait_suffix) and cls.__name__.endswith(self._trait_suffix)


def locate(name: str) -> Any:
    """Import the longest module prefix of ``name`` and walk the remaining attributes.

    Returns:
        The located object, or None if no prefix is importable or an attribute is
        missing.

    Raises:
        Exception: Whatever importing the defining module raises, other than the module
            itself being absent.
    """
    parts = name.split(".")
    if not all(part.isidentifier() for part in parts):
        return None

    for index in range(len(parts), 0, -1):
        module_name = ".".join(parts[:index])
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                continue
            raise

        for attribute in parts[index:]:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target

    return getattr(builtins, name, None) if len(parts) == 1 else None


def _is_interface(cls) -> bool:
    if getattr(cls, "_is_protocol", False):
        return True
    if cls.__module__ in _ABC_MODULES:
        return True
    if not inspect.isabstract(cls):
        return False
    own_methods = [
        value
        for key, value in vars(cls).items()
        if not key.startswith("__") and (callable(value) or isinstance(value, (staticmethod, classmethod, property)))
    ]
    return all(getattr(value, "__isabstractmethod__", False) for value in own_methods)


def _constructor_parameters(cls) -> tuple[ConstructorParameter, ...]:
    if cls.__init__ is object.__init__:
        return ()
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return ()

    init = cls.__init__
    hints = _type_hints(init)
    namespace = getattr(init, "__globals__", {})

    result = []
    for name, parameter in signature.parameters.items():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        annotation = hints.get(name, parameter.annotation)
        if isinstance(annotation, str):
            annotation = _lookup(annotation, namespace)
        result.append(ConstructorParameter(name, annotation_name(annotation)))
    return tuple(result)


def _type_hints(func) -> dict[str, Any]:
    # Unresolvable forward references make get_type_hints fail as a whole; the
    # parameters are then resolved one by one.
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception:
        return {}


def _lookup(annotation: str, namespace: dict[str, Any]) -> Any:
    """Resolve a dotted string annotation against a module namespace, else keep it."""
    head, *rest = annotation.strip().strip("'\"").split(".")
    target = namespace.get(head, getattr(builtins, head, None))
    for attribute in rest:
        if target is None:
            break
        target = getattr(target, attribute, None)
    return target if inspect.isclass(target) else annotation


def _source_file(cls) -> str:
    try:
        return inspect.getsourcefile(cls) or ""
    except TypeError:
        return ""
