"""Ready-made transforms for finalizing a :class:`~liquefied.proxy.Liquefied`.

Each factory returns a callable taking the wrapped value first, so it can be
passed as ``transform=`` at construction or as ``callback=`` at finalization.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

__all__ = ["formatted", "query", "pipeline"]


def formatted(spec: str = "") -> Callable[..., str]:
    """Finalize with ``format(value, spec)``; a call-time spec replaces ``spec``."""

    def apply(value, override: Optional[str] = None) -> str:
        return format(value, spec if override is None else override)

    return apply


def query(expression: str) -> Callable[..., Any]:
    """Finalize by running a JMESPath expression against the wrapped value.

    The expression is compiled up front, so syntax errors surface here rather
    than at finalization.
    """

    import jmespath as _jmespath  # type: ignore[import-untyped]

    compiled = _jmespath.compile(expression)

    def apply(data, options=None):
        return compiled.search(data, options=options)

    return apply


def pipeline(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """Feed the wrapped value through ``funcs`` in order.

    Call-time arguments go to the first step only.
    """
    if not funcs:
        raise ValueError("pipeline() requires at least one step")
    for func in funcs:
        if not callable(func):
            raise TypeError(
                f"pipeline() steps must be callable, got {type(func).__name__}"
            )
    first, rest = funcs[0], funcs[1:]

    def apply(value, *args, **kwargs):
        result = first(value, *args, **kwargs)
        for func in rest:
            result = func(result)
        return result

    return apply
