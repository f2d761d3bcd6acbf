import pytest

from depscope.domain import ComponentType, ConstructorParameter
from depscope.errors import ComponentNotFoundError, IntrospectionError, TypeNotFoundError

CART = "Acme\\Shop\\Model\\Cart"

SOURCE = '''\
from acme.shop.model import Cart
import acme.shop.api as api

HANDLER = "acme.shop.handlers.OrderHandler"
'''


@pytest.fixture
def cart_file(tmp_path):
    path = tmp_path / "Cart.py"
    path.write_text(SOURCE)
    return str(path)


def test_set_target_rejects_unknown_types(inspector):
    with pytest.raises(TypeNotFoundError, match='Type "Acme\\\\Nope" does not exist'):
        inspector.set_target("Acme\\Nope")

    assert inspector.target == ""


def test_failed_set_target_leaves_no_target(inspector, types):
    types.add(CART)
    inspector.set_target(CART)

    with pytest.raises(TypeNotFoundError):
        inspector.set_target("Acme\\Nope")

    with pytest.raises(TypeNotFoundError, match="No target type has been set"):
        inspector.get_dependencies()


def test_factory_names_fall_back_to_their_base_type(inspector, types):
    types.add(CART)

    assert inspector.set_target(CART + "Factory").target == CART + "Factory"


def test_generated_factories_have_no_dependencies(inspector, types):
    types.add(CART, constructor_parameters=(ConstructorParameter("x", "Missing\\Type"),))

    assert inspector.set_target(CART + "Factory").get_dependencies() == []


def test_traits_have_no_dependencies(inspector, types, cart_file):
    types.add(
        "Acme\\Shop\\Model\\PricingTrait",
        "trait",
        interface_names=("Acme\\Shop\\Api\\PricingInterface",),
        file_path=cart_file,
    )
    types.add("Acme\\Shop\\Api\\PricingInterface", "interface")

    inspector.set_target("Acme\\Shop\\Model\\PricingTrait")

    assert inspector.get_dependencies() == []
    assert types.introspected == []


def test_constructor_signal_keeps_only_unresolvable_types(inspector, types):
    types.add("Acme\\Shop\\Model\\Quote")
    types.add(
        CART,
        constructor_parameters=(
            ConstructorParameter("quote", "Acme\\Shop\\Model\\Quote"),
            ConstructorParameter("items", "list"),
            ConstructorParameter("data", "dict"),
            ConstructorParameter("iterator", "collections.abc.Iterator"),
            ConstructorParameter("anything", "typing.Any"),
            ConstructorParameter("untyped", None),
            ConstructorParameter("gateway", "Acme\\Payment\\Gateway"),
        ),
    )

    assert inspector.set_target(CART).get_dependencies() == ["Acme\\Payment\\Gateway"]


def test_interface_signal_keeps_only_resolvable_interfaces(inspector, types):
    types.add("Acme\\Shop\\Api\\CartInterface", "interface")
    types.add("ArrayAccess", "interface")
    types.add(
        CART,
        interface_names=("Acme\\Shop\\Api\\CartInterface", "Acme\\Gone\\Api\\GoneInterface", "ArrayAccess"),
    )

    assert inspector.set_target(CART).get_dependencies() == ["Acme\\Shop\\Api\\CartInterface"]


def test_signals_are_concatenated_in_order_without_deduplication(inspector, types, cart_file):
    types.add("Acme\\Shop\\Api\\CartInterface", "interface")
    types.add(
        CART,
        constructor_parameters=(ConstructorParameter("handler", "acme.shop.handlers.OrderHandler"),),
        interface_names=("Acme\\Shop\\Api\\CartInterface",),
        file_path=cart_file,
    )

    assert inspector.set_target(CART).get_dependencies() == [
        "acme.shop.handlers.OrderHandler",
        "Acme\\Shop\\Api\\CartInterface",
        "acme.shop.model.Cart",
        "acme.shop.api",
        "acme.shop.handlers.OrderHandler",
    ]


def test_import_and_content_signals_are_not_filtered(inspector, types, cart_file):
    types.add("acme.shop.model.Cart")
    types.add(CART, file_path=cart_file)

    dependencies = inspector.set_target(CART).get_dependencies()

    assert "acme.shop.model.Cart" in dependencies
    assert "acme.shop.handlers.OrderHandler" in dependencies


def test_substitution_to_an_abstract_type_is_not_instantiable(inspector, types):
    types.add("Acme\\Shop\\Api\\CartInterface", "interface", interface_names=("ArrayAccess",))
    types.add("Acme\\Shop\\Model\\AbstractCart", "abstract")
    types.substitutions["Acme\\Shop\\Api\\CartInterface"] = "Acme\\Shop\\Model\\AbstractCart"

    assert inspector.set_target("Acme\\Shop\\Api\\CartInterface").get_dependencies() == []


def test_substitution_to_a_missing_type_is_not_instantiable(inspector, types):
    types.add("Acme\\Shop\\Api\\CartInterface", "interface")
    types.substitutions["Acme\\Shop\\Api\\CartInterface"] = "Acme\\Shop\\Model\\Gone"

    assert inspector.set_target("Acme\\Shop\\Api\\CartInterface").get_dependencies() == []


def test_substitution_to_a_concrete_type_is_inspected(inspector, types):
    types.add("Acme\\Shop\\Api\\TotalsInterface", "interface")
    types.add(
        "Acme\\Shop\\Api\\CartInterface",
        "interface",
        interface_names=("Acme\\Shop\\Api\\TotalsInterface",),
    )
    types.add(CART)
    types.substitutions["Acme\\Shop\\Api\\CartInterface"] = CART

    assert inspector.set_target("Acme\\Shop\\Api\\CartInterface").get_dependencies() == [
        "Acme\\Shop\\Api\\TotalsInterface"
    ]


def test_introspection_handles_are_cached(inspector, types, cart_file):
    types.add(CART, file_path=cart_file, doc_comment="A cart.")

    inspector.set_target(CART)
    inspector.get_dependencies()
    inspector.get_dependencies()
    inspector.is_deprecated()
    inspector.get_filename()
    inspector.set_target(CART).get_dependencies()

    assert types.introspected == [CART]


def test_deprecation_is_read_from_the_doc_comment(inspector, types):
    types.add(CART, doc_comment="Shopping cart.\n\n@deprecated use Quote instead")
    types.add("Acme\\Shop\\Model\\Quote", doc_comment="Quote.")

    assert inspector.set_target(CART).is_deprecated()
    assert not inspector.set_target("Acme\\Shop\\Model\\Quote").is_deprecated()


def test_advisory_queries_swallow_introspection_failures(inspector, types):
    types.add("Acme\\Shop\\Model\\PricingTrait", "trait", doc_comment="@deprecated")

    inspector.set_target("Acme\\Shop\\Model\\PricingTrait")

    assert inspector.is_deprecated() is False
    assert inspector.get_filename() == ""
    assert inspector.get_package_by_class() == ""


def test_component_from_known_module(inspector, types, modules):
    types.add("VendorX\\ModuleY\\Foo\\Bar")
    modules.register("VendorX_ModuleY")

    component = inspector.set_target("VendorX\\ModuleY\\Foo\\Bar").get_component_by_class()

    assert component.component_name == "VendorX_ModuleY"
    assert component.component_type == ComponentType.MODULE


def test_component_from_dependency_root_path(inspector, types):
    types.add("Acme\\Widgets\\Foo", file_path="/srv/app/dependency-root/acme/widgets/src/Foo.py")

    inspector.set_target("Acme\\Widgets\\Foo")
    component = inspector.get_component_by_class()

    assert inspector.get_package_by_class() == "acme/widgets"
    assert component.component_type == ComponentType.LIBRARY
    assert component.package_name == "acme/widgets"
    assert component.package_version == "1.4.2"


def test_known_module_wins_over_path(inspector, types, modules):
    types.add("Acme\\Widgets\\Foo", file_path="/srv/app/dependency-root/acme/widgets/src/Foo.py")
    modules.register("Acme_Widgets", "acme/module-widgets")

    component = inspector.set_target("Acme\\Widgets\\Foo").get_component_by_class()

    assert component.component_type == ComponentType.MODULE
    assert component.package_name == "acme/module-widgets"


def test_component_not_found(inspector, types):
    types.add("Acme\\Widgets\\Foo", file_path="/srv/app/src/Acme/Widgets/Foo.py")

    inspector.set_target("Acme\\Widgets\\Foo")

    assert inspector.get_package_by_class() == ""
    with pytest.raises(ComponentNotFoundError, match='No component found for type "Acme'):
        inspector.get_component_by_class()


def test_path_must_contain_the_whole_dependency_root_segment(inspector, types):
    types.add("Acme\\Widgets\\Foo", file_path="/srv/my-dependency-root/acme/widgets/Foo.py")

    assert inspector.set_target("Acme\\Widgets\\Foo").get_package_by_class() == ""


def test_declared_source_encoding_is_honoured(inspector, types, tmp_path):
    path = tmp_path / "Shop.py"
    path.write_bytes(
        b"# -*- coding: latin-1 -*-\n"
        b"from os import path\n"
        b'"""Caf\xe9."""\n'
    )
    types.add(CART, file_path=str(path))

    assert inspector.set_target(CART).get_dependencies() == ["os.path"]


def test_undecodable_source_is_an_introspection_error(inspector, types, tmp_path):
    path = tmp_path / "Shop.py"
    path.write_bytes(b"import os\nname = 'Caf\xe9'\n")
    types.add(CART, file_path=str(path))

    with pytest.raises(IntrospectionError, match="Cannot scan"):
        inspector.set_target(CART).get_dependencies()


def test_substituted_factories_that_are_not_present_have_no_dependencies(inspector, types):
    types.add(CART)
    types.substitutions[CART + "Factory"] = CART

    assert inspector.set_target(CART + "Factory").get_dependencies() == []
    assert types.introspected == []
