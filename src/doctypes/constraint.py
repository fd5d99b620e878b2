"""Parsed type constraints and the results of checking values against them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, overload

from doctypes.types import YardType, check_type, format_types


@dataclass(frozen=True)
class TypeConstraint:
    """The set of types a value may satisfy, in declaration order.

    Parsing any type description returns a TypeConstraint. A value passes
    if it satisfies at least one of the accepted types.
    """

    accepted_types: tuple[YardType, ...]

    def match(self, value: Any) -> YardType | None:
        """Return the first accepted type satisfied by value, or None."""
        for t in self.accepted_types:
            if check_type(t, value):
                return t
        return None

    def check(self, value: Any) -> bool:
        """Return True if value satisfies any accepted type."""
        return self.match(value) is not None

    @property
    def first(self) -> YardType:
        """The first accepted type."""
        return self.accepted_types[0]

    def __len__(self) -> int:
        return len(self.accepted_types)

    def __iter__(self) -> Iterator[YardType]:
        return iter(self.accepted_types)

    @overload
    def __getitem__(self, index: int) -> YardType: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[YardType, ...]: ...

    def __getitem__(self, index: int | slice) -> YardType | tuple[YardType, ...]:
        return self.accepted_types[index]

    def __str__(self) -> str:
        return format_types(self.accepted_types)


@dataclass(frozen=True)
class CheckResult(ABC):
    """Outcome of checking a value against a type description."""

    constraint: TypeConstraint
    value: Any

    @property
    @abstractmethod
    def success(self) -> bool:
        """Return True if the value satisfied the constraint."""

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class Success(CheckResult):
    """The value satisfied the constraint; matched is the type it satisfied."""

    matched: YardType

    @property
    def success(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"Success: {self.value!r} is {self.matched}"


@dataclass(frozen=True)
class Failure(CheckResult):
    """The value satisfied none of the constraint's types."""

    @property
    def success(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"Failure: {self.value!r} is not {self.constraint}"
