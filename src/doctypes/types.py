"""Type variants produced by parsing a type description.

The set of variants is closed: KindType, DuckType, LiteralType,
CollectionType, TupleType and HashType. Behaviour lives in check_type and
format_type, which match exhaustively over the YardType union.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Protocol, TypeAlias, assert_never, runtime_checkable

from doctypes.errors import KindMismatchError, NameLookupError, UnsupportedLiteralError
from doctypes.namespace import DEFAULT_NAMESPACE, Found, Namespace, NotFound

LITERAL_NAMES: tuple[str, ...] = ("true", "false", "nil", "void", "self")
"""Names parsed as LiteralType rather than KindType."""

DUCK_MARKER = "#"
BOOLEAN = "Boolean"
DEFAULT_COLLECTION = "Array"
DEFAULT_HASH = "Hash"


# =============================================================================
# Capabilities checked structurally by tuples and hashes
# =============================================================================


@runtime_checkable
class Indexable(Protocol):
    """Anything with a length and positional access."""

    def __len__(self) -> int: ...

    def __getitem__(self, index: int, /) -> Any: ...


@runtime_checkable
class KeyValueEnumerable(Protocol):
    """Anything exposing its keys and its values.

    Both members may be methods (dict) or plain attributes holding an
    iterable (a namedtuple with ``keys`` and ``values`` fields).
    """

    keys: Any
    values: Any


def _enumerate_member(member: Any) -> Iterator[Any]:
    return iter(member() if callable(member) else member)


# =============================================================================
# Variants
# =============================================================================


class _TypeOps:
    """Operations every variant exposes."""

    __slots__ = ()

    def check(self, value: Any) -> bool:
        """Return True if value satisfies this type."""
        return check_type(self, value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return format_type(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class KindType(_TypeOps):
    """Value must be an instance of the named class: ``String``, ``io.IOBase``.

    ``Boolean`` is special-cased to mean ``True`` or ``False`` and is never
    resolved.
    """

    name: str
    namespace: Namespace = field(default=DEFAULT_NAMESPACE, compare=False, repr=False)

    @cached_property
    def constant(self) -> type:
        """The class named by this type, resolved once.

        Raises:
            NameLookupError: If the name cannot be resolved.
            KindMismatchError: If the name resolves to something other than
                a class.

        """
        match self.namespace.resolve(self.name):
            case NotFound(reason=reason):
                msg = f"{reason} (while resolving {self.name})"
                raise NameLookupError(msg, name=self.name)
            case Found(handle=handle) if not isinstance(handle, type):
                msg = (
                    f"class or module required; {self.name} is a "
                    f"{type(handle).__name__}"
                )
                raise KindMismatchError(msg, name=self.name, resolved=handle)
            case Found(handle=handle):
                return handle


@dataclass(frozen=True)
class DuckType(_TypeOps):
    """Value must have an attribute: ``#read``."""

    name: str

    @property
    def message(self) -> str:
        """The attribute name, without the leading marker."""
        return self.name.removeprefix(DUCK_MARKER)


@dataclass(frozen=True)
class LiteralType(_TypeOps):
    """One of ``true``, ``false``, ``nil``, ``void`` or ``self``.

    ``void`` and ``self`` are documentation placeholders and accept anything.
    """

    name: str


@dataclass(frozen=True)
class CollectionType(_TypeOps):
    """Container of the named kind whose elements match any of types.

    ``Array<String, #to_str>`` -> CollectionType("Array", (String, #to_str)).
    """

    name: str = DEFAULT_COLLECTION
    types: tuple[YardType, ...] = ()
    namespace: Namespace = field(default=DEFAULT_NAMESPACE, compare=False, repr=False)

    @cached_property
    def kind(self) -> KindType:
        """KindType for this collection's name."""
        return KindType(self.name, self.namespace)


@dataclass(frozen=True)
class TupleType(_TypeOps):
    """Fixed-length sequence with one type per position.

    ``(String, Fixnum)`` -> TupleType(None, (String, Fixnum)); a None name
    accepts any kind of sequence.
    """

    name: str | None = None
    types: tuple[YardType, ...] = ()
    namespace: Namespace = field(default=DEFAULT_NAMESPACE, compare=False, repr=False)

    @cached_property
    def kind(self) -> KindType | None:
        """KindType for this tuple's name, or None if any kind is accepted."""
        if self.name is None:
            return None
        return KindType(self.name, self.namespace)


@dataclass(frozen=True)
class HashType(_TypeOps):
    """Key/value container: ``{String => Fixnum}`` or ``Hash<String, Fixnum>``.

    The name is kept for display only. Any object exposing keys and values
    is checked, whatever its class.
    """

    name: str = DEFAULT_HASH
    key_types: tuple[YardType, ...] = ()
    value_types: tuple[YardType, ...] = ()


YardType: TypeAlias = (
    KindType | DuckType | LiteralType | CollectionType | TupleType | HashType
)
"""Union of all type variants."""


def type_for(name: str, namespace: Namespace | None = None) -> YardType:
    """Build the variant for a bare name.

    Names starting with '#' are ducks, names in LITERAL_NAMES are literals,
    anything else is a kind.
    """
    if name.startswith(DUCK_MARKER):
        return DuckType(name)
    if name in LITERAL_NAMES:
        return LiteralType(name)
    return KindType(name, namespace or DEFAULT_NAMESPACE)


# =============================================================================
# Checking: (type, value) -> bool
# =============================================================================


def _is_kind_of(value: Any, constant: type) -> bool:
    # bool subclasses int, but True is not a number in a type description
    if (
        isinstance(value, bool)
        and constant is not bool
        and issubclass(constant, numbers.Number)
    ):
        return False
    return isinstance(value, constant)


def _any_accepts(options: tuple[YardType, ...], value: Any) -> bool:
    return any(check_type(option, value) for option in options)


def _check_kind(t: KindType, value: Any) -> bool:
    if t.name == BOOLEAN:
        return value is True or value is False
    return _is_kind_of(value, t.constant)


def _check_literal(t: LiteralType, value: Any) -> bool:
    match t.name:
        case "true":
            return value is True
        case "false":
            return value is False
        case "nil":
            return value is None
        case "void" | "self":
            return True
        case _:
            msg = f"Unsupported literal type: {t.name!r}"
            raise UnsupportedLiteralError(msg, name=t.name)


def _check_collection(t: CollectionType, value: Any) -> bool:
    if not _check_kind(t.kind, value) or not isinstance(value, Iterable):
        return False
    return all(_any_accepts(t.types, element) for element in value)


def _check_tuple(t: TupleType, value: Any) -> bool:
    if t.kind is not None and not _check_kind(t.kind, value):
        return False
    if not issubclass(type(value), Indexable) or len(value) != len(t.types):
        return False
    try:
        items = [value[i] for i in range(len(t.types))]
    except LookupError:
        return False
    return all(
        check_type(expected, item)
        for expected, item in zip(t.types, items, strict=True)
    )


def _check_hash(t: HashType, value: Any) -> bool:
    # classes expose keys and values as unbound methods
    if isinstance(value, type) or not isinstance(value, KeyValueEnumerable):
        return False
    try:
        keys = _enumerate_member(value.keys)
        values = _enumerate_member(value.values)
    except TypeError:
        return False
    return all(_any_accepts(t.key_types, k) for k in keys) and all(
        _any_accepts(t.value_types, v) for v in values
    )


def check_type(t: YardType, value: Any) -> bool:
    """Return True if value satisfies the type t."""
    match t:
        case KindType():
            return _check_kind(t, value)
        case DuckType():
            return hasattr(value, t.message)
        case LiteralType():
            return _check_literal(t, value)
        case CollectionType():
            return _check_collection(t, value)
        case TupleType():
            return _check_tuple(t, value)
        case HashType():
            return _check_hash(t, value)
        case _:
            assert_never(t)


# =============================================================================
# Formatting: type -> description string
# =============================================================================


def format_types(types: Iterable[YardType]) -> str:
    """Join types the way a description lists alternatives."""
    return ", ".join(format_type(t) for t in types)


def format_type(t: YardType) -> str:
    """Render a type back to description syntax.

    The result parses to an equal type. Hashes always use the braces form,
    so ``Hash<A, B>`` comes back as ``{A => B}``.
    """
    match t:
        case KindType(name=name) | DuckType(name=name) | LiteralType(name=name):
            return name
        case CollectionType(name=name, types=types):
            return f"{name}<{format_types(types)}>"
        case TupleType(name=name, types=types):
            return f"{name or ''}({format_types(types)})"
        case HashType(name=name, key_types=keys, value_types=values):
            prefix = "" if name == DEFAULT_HASH else name
            return f"{prefix}{{{format_types(keys)} => {format_types(values)}}}"
        case _:
            assert_never(t)
