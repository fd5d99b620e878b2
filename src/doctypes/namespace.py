"""Name resolution for kind types.

A KindType never looks names up in a global namespace on its own. It asks a
Namespace, which answers with Found or NotFound. The default namespace knows
the YARD vocabulary (String, Fixnum, Hash, ...) as well as Python builtins
and importable dotted paths.
"""

from __future__ import annotations

import builtins
import datetime
import importlib
import logging
import numbers
import re
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"::|\.")


@dataclass(frozen=True)
class Found:
    """Successful lookup of a name."""

    handle: Any


@dataclass(frozen=True)
class NotFound:
    """Failed lookup of a name."""

    name: str
    reason: str


Lookup: TypeAlias = Found | NotFound
"""Result of Namespace.resolve."""


DEFAULT_ALIASES: Mapping[str, Any] = types.MappingProxyType(
    {
        "Object": object,
        "String": str,
        "Symbol": str,
        "Integer": int,
        "Fixnum": int,
        "Bignum": int,
        "Float": float,
        "Numeric": numbers.Number,
        "Array": list,
        "Hash": dict,
        "Set": set,
        "NilClass": type(None),
        "Class": type,
        "Module": types.ModuleType,
        "Proc": Callable,
        "Date": datetime.date,
        "DateTime": datetime.datetime,
        "Time": datetime.datetime,
    },
)
"""YARD names mapped onto their Python counterparts."""


def split_name(name: str) -> list[str]:
    """Split a qualified name on '::' or '.', ignoring a leading '::'."""
    return [segment for segment in _SEGMENT_SPLIT.split(name) if segment]


class Namespace:
    """Resolves kind names to Python objects.

    Usage:
        ns = Namespace()
        ns.register("Widget", Widget)
        constraint = parse("Array<Widget>", namespace=ns)

    Lookup order for the first segment of a name: names registered on this
    namespace, DEFAULT_ALIASES (unless defaults=False), builtins, and
    finally, for qualified names only, an importable module of that name.
    Later segments are looked up as attributes, importing submodules where
    needed. A bare unknown name such as ``this`` is never imported.
    """

    def __init__(
        self,
        aliases: Mapping[str, Any] | None = None,
        *,
        defaults: bool = True,
    ) -> None:
        self._names: dict[str, Any] = dict(aliases or {})
        self._defaults = defaults

    def register(self, name: str, obj: Any) -> None:
        """Register a name for this namespace.

        Raises:
            ValueError: If the name is already registered to another object.

        """
        if (existing := self._names.get(name, obj)) is not obj:
            msg = f"Name '{name}' already registered to {existing!r}."
            raise ValueError(msg)
        self._names[name] = obj

    def resolve(self, name: str) -> Lookup:
        """Look a name up, returning Found or NotFound."""
        segments = split_name(name)
        if not segments:
            return NotFound(name, "empty name")

        head, *rest = segments
        match self._resolve_head(head, qualified=bool(rest)):
            case NotFound() as missing:
                result: Lookup = NotFound(name, missing.reason)
            case Found(handle=handle):
                result = self._resolve_rest(name, handle, head, rest)

        logger.debug("resolved %r -> %r", name, result)
        return result

    def _resolve_head(self, head: str, *, qualified: bool) -> Lookup:
        if head in self._names:
            return Found(self._names[head])
        if self._defaults and head in DEFAULT_ALIASES:
            return Found(DEFAULT_ALIASES[head])
        if hasattr(builtins, head):
            return Found(getattr(builtins, head))
        if not qualified:
            return NotFound(head, f"uninitialized constant {head}")
        try:
            return Found(importlib.import_module(head))
        except ImportError:
            return NotFound(head, f"uninitialized constant {head}")

    def _resolve_rest(
        self,
        name: str,
        handle: Any,
        path: str,
        rest: list[str],
    ) -> Lookup:
        for segment in rest:
            path = f"{path}.{segment}"
            if hasattr(handle, segment):
                handle = getattr(handle, segment)
                continue
            if not isinstance(handle, types.ModuleType):
                return NotFound(name, f"uninitialized constant {path}")
            try:
                handle = importlib.import_module(f"{handle.__name__}.{segment}")
            except ImportError:
                return NotFound(name, f"uninitialized constant {path}")
        return Found(handle)


DEFAULT_NAMESPACE = Namespace()
"""Namespace used when none is given to parse or check."""
