"""Tests for doctypes.namespace module."""

import collections
import datetime
import numbers

import pytest

from doctypes import DEFAULT_ALIASES, DEFAULT_NAMESPACE, Found, Namespace, NotFound
from doctypes.namespace import split_name


class Widget:
    """A class registered under a custom name."""


class TestSplitName:
    """Test splitting of qualified names."""

    @pytest.mark.parametrize(
        ("name", "segments"),
        [
            ("String", ["String"]),
            ("Foo::Bar", ["Foo", "Bar"]),
            ("::Foo::Bar", ["Foo", "Bar"]),
            ("foo.bar.Baz", ["foo", "bar", "Baz"]),
            ("foo::bar.Baz", ["foo", "bar", "Baz"]),
        ],
    )
    def test_split(self, name: str, segments: list[str]) -> None:
        assert split_name(name) == segments


class TestResolve:
    """Test Namespace.resolve."""

    def test_alias(self) -> None:
        assert DEFAULT_NAMESPACE.resolve("Fixnum") == Found(int)
        assert DEFAULT_NAMESPACE.resolve("Numeric") == Found(numbers.Number)

    def test_builtin(self) -> None:
        assert DEFAULT_NAMESPACE.resolve("bytearray") == Found(bytearray)

    def test_module_attribute(self) -> None:
        expected = Found(collections.OrderedDict)
        assert DEFAULT_NAMESPACE.resolve("collections.OrderedDict") == expected
        assert DEFAULT_NAMESPACE.resolve("::collections::OrderedDict") == expected

    def test_submodule_is_imported(self) -> None:
        result = DEFAULT_NAMESPACE.resolve("xml.dom.minidom.Document")
        assert isinstance(result, Found)
        assert result.handle.__name__ == "Document"

    def test_not_found(self) -> None:
        result = DEFAULT_NAMESPACE.resolve("NoSuchThing")
        assert isinstance(result, NotFound)
        assert result.name == "NoSuchThing"
        assert "NoSuchThing" in result.reason

    def test_attribute_of_non_module_not_found(self) -> None:
        result = DEFAULT_NAMESPACE.resolve("String::Missing")
        assert result == NotFound("String::Missing", "uninitialized constant String.Missing")

    def test_empty_name(self) -> None:
        assert isinstance(DEFAULT_NAMESPACE.resolve("::"), NotFound)

    def test_bare_module_name_not_imported(self) -> None:
        assert isinstance(DEFAULT_NAMESPACE.resolve("this"), NotFound)
        assert isinstance(DEFAULT_NAMESPACE.resolve("datetime"), NotFound)
        assert DEFAULT_NAMESPACE.resolve("datetime.date") == Found(datetime.date)


class TestCustomNamespace:
    """Test configuring a Namespace."""

    def test_aliases_argument(self) -> None:
        ns = Namespace({"Widget": Widget})
        assert ns.resolve("Widget") == Found(Widget)
        assert DEFAULT_NAMESPACE.resolve("Widget") != Found(Widget)

    def test_register(self) -> None:
        ns = Namespace()
        ns.register("Widget", Widget)
        ns.register("Widget", Widget)
        assert ns.resolve("Widget") == Found(Widget)

    def test_register_conflict(self) -> None:
        ns = Namespace()
        ns.register("Widget", Widget)
        with pytest.raises(ValueError, match="already registered"):
            ns.register("Widget", dict)

    def test_registered_names_shadow_aliases(self) -> None:
        ns = Namespace({"String": bytes})
        assert ns.resolve("String") == Found(bytes)

    def test_without_defaults(self) -> None:
        ns = Namespace(defaults=False)
        assert isinstance(ns.resolve("Fixnum"), NotFound)
        assert ns.resolve("int") == Found(int)

    def test_default_aliases_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_ALIASES["Widget"] = Widget  # type: ignore[index]
