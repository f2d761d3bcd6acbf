"""Existence checks for type names, with the factory-suffix fallback."""

from depscope.collaborators import TypeExistenceProbe

__all__ = ["TypeOracle"]


class TypeOracle:
    """Answers whether a type name exists.

    Generated factories (``acme.catalog.ProductFactory``) are often not present until
    something asks for them, so a name carrying the factory suffix also counts as
    existing when its unsuffixed base name does.

    Example:
        >>> oracle = TypeOracle(probe)
        >>> oracle.exists("acme.catalog.ProductFactory")  # True if acme.catalog.Product exists
    """

    def __init__(self, probe: TypeExistenceProbe, factory_suffix: str = "Factory"):
        self._probe = probe
        self._factory_suffix = factory_suffix

    def exists(self, name: str) -> bool:
        if not name:
            return False
        if self._probe.exists(name):
            return True

        base_name = self.strip_factory_suffix(name)
        if base_name == name:
            return False
        return self._probe.exists(base_name)

    def exists_directly(self, name: str) -> bool:
        """Like :meth:`exists`, without the factory-suffix fallback."""
        return bool(name) and self._probe.exists(name)

    def is_trait(self, name: str) -> bool:
        return bool(name) and self._probe.is_trait(name)

    def strip_factory_suffix(self, name: str) -> str:
        """Remove a trailing factory suffix from ``name``, if there is one."""
        suffix = self._factory_suffix
        if suffix and name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
        return name
