"""Recursive-descent parser for YARD-style type descriptions.

The scanner is embedded: at each position the token patterns are tried in a
fixed priority order, and the first one that matches wins. A single
recursive method builds every composite form (collections, tuples, hashes)
as well as the top-level list of alternatives.

Example:
    >>> str(Parser("Array<String, #to_s>, nil").parse())
    'Array<String, #to_s>, nil'

"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from doctypes.constraint import TypeConstraint
from doctypes.errors import TypeSyntaxError
from doctypes.namespace import DEFAULT_NAMESPACE, Namespace
from doctypes.types import (
    DEFAULT_COLLECTION,
    DEFAULT_HASH,
    CollectionType,
    HashType,
    TupleType,
    YardType,
    type_for,
)

logger = logging.getLogger(__name__)

# Pending name of a tuple written without a kind, as in "(String, Fixnum)"
_GENERIC_TUPLE = "<generic-tuple>"


class TokenKind(Enum):
    """Kinds of token, in the order the scanner tries them."""

    COLLECTION_START = auto()
    COLLECTION_END = auto()
    TUPLE_START = auto()
    TUPLE_END = auto()
    NAME = auto()
    SEPARATOR = auto()
    WHITESPACE = auto()
    HASH_START = auto()
    HASH_ARROW = auto()
    HASH_END = auto()
    END = auto()


_PATTERNS: tuple[tuple[TokenKind, re.Pattern[str]], ...] = (
    (TokenKind.COLLECTION_START, re.compile(r"<")),
    (TokenKind.COLLECTION_END, re.compile(r">")),
    (TokenKind.TUPLE_START, re.compile(r"\(")),
    (TokenKind.TUPLE_END, re.compile(r"\)")),
    (TokenKind.NAME, re.compile(r"#\w+|(?:::)?\w+(?:(?:::|\.)\w+)*")),
    (TokenKind.SEPARATOR, re.compile(r"[,;]")),
    (TokenKind.WHITESPACE, re.compile(r"\s+")),
    (TokenKind.HASH_START, re.compile(r"\{")),
    (TokenKind.HASH_ARROW, re.compile(r"=>")),
    (TokenKind.HASH_END, re.compile(r"\}")),
)

TERMINATORS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.HASH_ARROW,
        TokenKind.HASH_END,
        TokenKind.TUPLE_END,
        TokenKind.COLLECTION_END,
        TokenKind.END,
    },
)


@dataclass(frozen=True)
class Token:
    """A slice of the input classified by the scanner."""

    kind: TokenKind
    text: str
    position: int

    def describe(self) -> str:
        """Describe the token for error messages."""
        if self.kind is TokenKind.END:
            return "END"
        return repr(self.text)


class Scanner:
    """Splits a type description into tokens on demand."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def next_token(self) -> Token:
        """Consume and return the next token, END once input is exhausted.

        Raises:
            TypeSyntaxError: If no token matches at the current position.

        """
        for kind, pattern in _PATTERNS:
            if match := pattern.match(self.text, self.pos):
                self.pos = match.end()
                return Token(kind, match.group(), match.start())
        if self.pos >= len(self.text):
            return Token(TokenKind.END, "", self.pos)
        char = self.text[self.pos]
        msg = f"invalid character at {char!r} (position {self.pos})"
        raise TypeSyntaxError(msg, position=self.pos, token=char)

    def tokens(self) -> Iterator[Token]:
        """Yield the remaining significant tokens, ending with END."""
        while (token := self.next_token()).kind is not TokenKind.END:
            if token.kind is not TokenKind.WHITESPACE:
                yield token
        yield token


class Parser:
    """Parses one type description into a TypeConstraint.

    Args:
        text: The type description, e.g. ``"Array<String>, nil"``.
        namespace: Namespace kind names are resolved in when checked.
        strict: Require every closing token to match the bracket it closes.
            By default any closer ends the innermost list, so ``"(String>"``
            is accepted; with strict=True it raises TypeSyntaxError.

    """

    def __init__(
        self,
        text: str,
        *,
        namespace: Namespace | None = None,
        strict: bool = False,
    ) -> None:
        self.scanner = Scanner(text)
        self.namespace = namespace or DEFAULT_NAMESPACE
        self.strict = strict

    def parse(self) -> TypeConstraint:
        """Parse the whole input.

        Raises:
            TypeSyntaxError: If the input is not a valid type description.

        """
        constraint = TypeConstraint(tuple(self._parse_types(TokenKind.END)))
        logger.debug("parsed %r as %s", self.scanner.text, constraint)
        return constraint

    def _parse_types(self, closer: TokenKind) -> list[YardType]:
        """Parse a list of alternatives up to and including a terminator.

        closer is the terminator this list is expected to end with; it is
        only enforced in strict mode.
        """
        types: list[YardType] = []
        name: str | None = None
        pending: YardType | None = None

        while True:
            token = self.scanner.next_token()
            match token.kind:
                case TokenKind.WHITESPACE:
                    continue

                case TokenKind.NAME:
                    if name is not None:
                        msg = f"expecting END, got name {token.text!r}"
                        raise TypeSyntaxError(
                            msg,
                            position=token.position,
                            token=token.text,
                        )
                    name = token.text

                case TokenKind.SEPARATOR:
                    types.append(self._finish(name, pending, token))
                    name = None
                    pending = None

                case TokenKind.COLLECTION_START:
                    name = name or DEFAULT_COLLECTION
                    pending = self._parse_collection(name, token)

                case TokenKind.TUPLE_START:
                    name = name or _GENERIC_TUPLE
                    pending = TupleType(
                        None if name == _GENERIC_TUPLE else name,
                        tuple(self._parse_types(TokenKind.TUPLE_END)),
                        self.namespace,
                    )

                case TokenKind.HASH_START:
                    name = name or DEFAULT_HASH
                    keys = self._parse_types(TokenKind.HASH_ARROW)
                    values = self._parse_types(TokenKind.HASH_END)
                    pending = HashType(name, tuple(keys), tuple(values))

                case kind if kind in TERMINATORS:
                    if self.strict and kind is not closer:
                        msg = (
                            f"expecting {closer.name}, got {token.describe()} "
                            f"at {token.position}"
                        )
                        raise TypeSyntaxError(
                            msg,
                            position=token.position,
                            token=token.text or None,
                        )
                    types.append(self._finish(name, pending, token))
                    return types

    def _parse_collection(self, name: str, token: Token) -> YardType:
        contents = self._parse_types(TokenKind.COLLECTION_END)
        if name != DEFAULT_HASH:
            return CollectionType(name, tuple(contents), self.namespace)
        if len(contents) != 2:
            msg = f"expected 2 types for key/value; got {len(contents)}"
            raise TypeSyntaxError(msg, position=token.position, token=token.text)
        key, value = contents
        return HashType(name, (key,), (value,))

    def _finish(
        self,
        name: str | None,
        pending: YardType | None,
        token: Token,
    ) -> YardType:
        """Turn the pending name or composite into a type."""
        if name is None:
            msg = f"expecting name, got {token.describe()} at {token.position}"
            raise TypeSyntaxError(
                msg,
                position=token.position,
                token=token.text or None,
            )
        if pending is not None:
            return pending
        return type_for(name, self.namespace)
