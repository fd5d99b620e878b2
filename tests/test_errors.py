"""Tests for errors raised while checking values."""

import pytest

from doctypes import (
    DocTypesError,
    Found,
    KindMismatchError,
    KindType,
    LiteralType,
    NameLookupError,
    Namespace,
    NotFound,
    TypeSyntaxError,
    UnsupportedLiteralError,
    check,
    parse,
)


class TestUnsupportedLiteral:
    """Test the LiteralType vocabulary guard."""

    def test_raises_with_name(self) -> None:
        with pytest.raises(UnsupportedLiteralError, match="zero") as exc:
            LiteralType("zero").check(0)
        assert exc.value.name == "zero"

    def test_is_not_implemented_error(self) -> None:
        with pytest.raises(NotImplementedError):
            LiteralType("zero").check(0)


class TestKindResolution:
    """Test lazy resolution of kind names."""

    def test_unknown_constant(self) -> None:
        kind = parse("ReversedString").first  # mind the typo
        with pytest.raises(NameLookupError, match="ReversedString") as exc:
            kind.check("gnirts")
        assert exc.value.name == "ReversedString"

    def test_unknown_constant_is_name_error(self) -> None:
        with pytest.raises(NameError):
            check("ReversedString", "gnirts")

    def test_unknown_attribute(self) -> None:
        with pytest.raises(NameLookupError, match=r"datetime\.Dates"):
            check("datetime::Dates", None)

    def test_not_a_class(self) -> None:
        kind = KindType("math::pi")
        with pytest.raises(
            KindMismatchError,
            match="class or module required; math::pi is a float",
        ) as exc:
            kind.check("anything")
        assert isinstance(exc.value.resolved, float)

    def test_not_a_class_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            check("len", "anything")

    def test_errors_raised_lazily(self) -> None:
        constraint = parse("ReversedString, math.pi")
        assert len(constraint) == 2

    def test_resolution_is_memoized(self) -> None:
        lookups: list[str] = []

        class CountingNamespace(Namespace):
            def resolve(self, name: str) -> Found | NotFound:
                lookups.append(name)
                return super().resolve(name)

        kind = KindType("String", CountingNamespace())
        assert kind.check("a")
        assert kind.check("b")
        assert not kind.check(1)
        assert lookups == ["String"]

    def test_boolean_is_never_resolved(self) -> None:
        kind = KindType("Boolean", Namespace(defaults=False))
        assert kind.check(True)
        assert "constant" not in vars(kind)


class TestHierarchy:
    """Test that every error shares the package base class."""

    @pytest.mark.parametrize(
        "error",
        [TypeSyntaxError, NameLookupError, KindMismatchError, UnsupportedLiteralError],
    )
    def test_subclasses_base(self, error: type[Exception]) -> None:
        assert issubclass(error, DocTypesError)

    def test_syntax_error_message(self) -> None:
        with pytest.raises(DocTypesError) as exc:
            parse("Foo Bar")
        assert str(exc.value) == "expecting END, got name 'Bar'"
        assert exc.value.position == 4
        assert exc.value.token == "Bar"
