"""
Argument Checking Example
=========================

Checks function arguments against YARD-style type descriptions, demonstrating:
- parse() once, check many times
- Success/Failure results from check()
- A custom Namespace for project classes
"""

import functools
import inspect
from typing import Any

from doctypes import Namespace, check, parse


# ============================================================================
# Project classes
# ============================================================================

class Point(tuple):
    """An (x, y) pair."""


namespace = Namespace()
namespace.register("Point", Point)


# ============================================================================
# Decorator
# ============================================================================

def typed(**descriptions: str):
    """Check each named argument against its type description on every call."""
    constraints = {
        name: parse(text, namespace=namespace) for name, text in descriptions.items()
    }

    def decorate(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind(*args, **kwargs)
            for name, value in bound.arguments.items():
                constraint = constraints.get(name)
                if constraint is not None and not constraint.check(value):
                    raise TypeError(f"{name}: expected {constraint}, got {value!r}")
            return func(*args, **kwargs)

        return wrapper

    return decorate


@typed(points="Array<Point(Numeric, Numeric)>", labels="{String => #format}, nil")
def plot(points, labels=None):
    return len(points)


# ============================================================================
# Run
# ============================================================================

if __name__ == "__main__":
    print(plot([Point((1, 2)), Point((3.5, 4))]))
    print(plot([Point((1, 2))], labels={"title": "Chart"}))

    try:
        plot([(1, 2)])
    except TypeError as exc:
        print(exc)

    print(check("(String, Fixnum)", ["a", 1]))
    print(check("(String, Fixnum)", ["a", 1, 2]))
