"""Error types raised while parsing and checking type descriptions.

Every error derives from DocTypesError and from the built-in exception
closest in meaning, so callers may catch either one.
"""

from __future__ import annotations


class DocTypesError(Exception):
    """Base class for all doctypes errors."""


class TypeSyntaxError(DocTypesError, SyntaxError):
    """A type description could not be parsed.

    Attributes:
        position: Offset into the input where parsing failed.
        token: The offending token text, or None at end of input.

    """

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        token: str | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.token = token

    def __str__(self) -> str:
        return self.msg


class NameLookupError(DocTypesError, NameError):
    """A kind name could not be resolved to anything."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class KindMismatchError(DocTypesError, TypeError):
    """A kind name resolved to something that is not a class."""

    def __init__(self, message: str, *, name: str, resolved: object) -> None:
        super().__init__(message)
        self.name = name
        self.resolved = resolved


class UnsupportedLiteralError(DocTypesError, NotImplementedError):
    """A literal type was evaluated with a name outside the vocabulary."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name
