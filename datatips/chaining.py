# datatips/chaining.py

from __future__ import annotations

from functools import reduce
from typing import Any, Callable


def pipe(value: Any, *funcs: Callable[[Any], Any]) -> Any:
    """
    Thread `value` through `funcs` left to right.

        pipe(x, f, g, h) == h(g(f(x)))

    Reads in the order the steps happen, instead of inside-out like the
    nested call.
    """
    return reduce(lambda acc, func: func(acc), funcs, value)


def compose(*funcs: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Build a single function applying `funcs` left to right.
    compose() with no arguments is the identity.
    """
    def composed(value: Any) -> Any:
        return pipe(value, *funcs)

    return composed
