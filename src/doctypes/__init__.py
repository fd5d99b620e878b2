"""doctypes - parse YARD-style type descriptions and check values against them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from doctypes.constraint import (
    CheckResult,
    Failure,
    Success,
    TypeConstraint,
)
from doctypes.errors import (
    DocTypesError,
    KindMismatchError,
    NameLookupError,
    TypeSyntaxError,
    UnsupportedLiteralError,
)
from doctypes.namespace import (
    DEFAULT_ALIASES,
    DEFAULT_NAMESPACE,
    Found,
    Namespace,
    NotFound,
)
from doctypes.parser import Parser
from doctypes.types import (
    LITERAL_NAMES,
    CollectionType,
    DuckType,
    HashType,
    KindType,
    LiteralType,
    TupleType,
    YardType,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


def parse(
    description: str | Sequence[str],
    *,
    namespace: Namespace | None = None,
    strict: bool = False,
) -> TypeConstraint:
    """Parse a type description into a TypeConstraint.

    Args:
        description: A type description such as ``"Array<String>, nil"``,
            or a list of them (as YARD stores a tag's types), which are
            joined into one list of alternatives.
        namespace: Where kind names are resolved; DEFAULT_NAMESPACE if None.
        strict: Reject closing brackets that do not match their opener.

    Returns:
        The parsed constraint.

    Raises:
        TypeSyntaxError: If the description could not be parsed.

    Example:
        constraint = parse("MyClass, #quacks_like_my_class")
        constraint.check(some_object)

    """
    if not isinstance(description, str):
        description = ", ".join(description)
    return Parser(description, namespace=namespace, strict=strict).parse()


def check(
    description: str | Sequence[str],
    value: Any,
    *,
    namespace: Namespace | None = None,
    strict: bool = False,
) -> CheckResult:
    """Parse a type description and check a value against it.

    Args:
        description: As for parse.
        value: The value to check.
        namespace: Where kind names are resolved; DEFAULT_NAMESPACE if None.
        strict: Reject closing brackets that do not match their opener.

    Returns:
        Success carrying the type that matched, or Failure.

    Raises:
        TypeSyntaxError: If the description could not be parsed.
        NameLookupError: If a kind name could not be resolved.
        KindMismatchError: If a kind name does not name a class.

    """
    constraint = parse(description, namespace=namespace, strict=strict)
    if (matched := constraint.match(value)) is not None:
        return Success(constraint, value, matched)
    return Failure(constraint, value)


__all__ = [
    "DEFAULT_ALIASES",
    "DEFAULT_NAMESPACE",
    "LITERAL_NAMES",
    "CheckResult",
    "CollectionType",
    "DocTypesError",
    "DuckType",
    "Failure",
    "Found",
    "HashType",
    "KindMismatchError",
    "KindType",
    "LiteralType",
    "NameLookupError",
    "Namespace",
    "NotFound",
    "Parser",
    "Success",
    "TupleType",
    "TypeConstraint",
    "TypeSyntaxError",
    "UnsupportedLiteralError",
    "YardType",
    "check",
    "parse",
]
