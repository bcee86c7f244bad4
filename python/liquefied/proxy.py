"""Delegating proxy that defers a value's finalizer until it is asked for."""

from __future__ import annotations

import functools
import math
import operator as _op
from typing import Any, Callable, Optional

__all__ = ["Liquefied", "liquefy"]

# Forwarded to the wrapped value; same-typed results are re-wrapped.
_OPS: dict[str, Callable[..., Any]] = {
    "__add__": _op.add,
    "__sub__": _op.sub,
    "__mul__": _op.mul,
    "__matmul__": _op.matmul,
    "__truediv__": _op.truediv,
    "__floordiv__": _op.floordiv,
    "__mod__": _op.mod,
    "__divmod__": divmod,
    "__pow__": pow,
    "__lshift__": _op.lshift,
    "__rshift__": _op.rshift,
    "__and__": _op.and_,
    "__xor__": _op.xor,
    "__or__": _op.or_,
    "__lt__": _op.lt,
    "__le__": _op.le,
    "__gt__": _op.gt,
    "__ge__": _op.ge,
    "__neg__": _op.neg,
    "__pos__": _op.pos,
    "__invert__": _op.invert,
    "__abs__": abs,
    "__round__": round,
    "__trunc__": math.trunc,
    "__floor__": math.floor,
    "__ceil__": math.ceil,
    "__getitem__": _op.getitem,
    "__setitem__": _op.setitem,
    "__delitem__": _op.delitem,
}

# Reflected forms call the operator with the wrapped value on the right.
_REFLECTED_OPS: dict[str, Callable[..., Any]] = {
    "__radd__": _op.add,
    "__rsub__": _op.sub,
    "__rmul__": _op.mul,
    "__rmatmul__": _op.matmul,
    "__rtruediv__": _op.truediv,
    "__rfloordiv__": _op.floordiv,
    "__rmod__": _op.mod,
    "__rdivmod__": divmod,
    "__rpow__": pow,
    "__rlshift__": _op.lshift,
    "__rrshift__": _op.rshift,
    "__rand__": _op.and_,
    "__rxor__": _op.xor,
    "__ror__": _op.or_,
}

# In-place forms never mutate the wrapped value; they rebind to a new proxy.
_INPLACE_OPS: dict[str, Callable[..., Any]] = {
    "__iadd__": _op.add,
    "__isub__": _op.sub,
    "__imul__": _op.mul,
    "__imatmul__": _op.matmul,
    "__itruediv__": _op.truediv,
    "__ifloordiv__": _op.floordiv,
    "__imod__": _op.mod,
    "__ipow__": pow,
    "__ilshift__": _op.lshift,
    "__irshift__": _op.rshift,
    "__iand__": _op.and_,
    "__ixor__": _op.xor,
    "__ior__": _op.or_,
}

# The interpreter checks the result type of these, so they are never re-wrapped.
_PLAIN_OPS: dict[str, Callable[..., Any]] = {
    "__len__": len,
    "__bool__": bool,
    "__iter__": iter,
    "__reversed__": reversed,
    "__contains__": _op.contains,
    "__int__": int,
    "__float__": float,
    "__complex__": complex,
    "__index__": _op.index,
    "__bytes__": bytes,
}


class Liquefied:
    """Wrap a value and forward everything to it until the finalizer is called.

    The finalizer ``method`` is looked up on the wrapped value only when it is
    invoked. Positional and keyword defaults are passed to it when the
    finalizer is called with no arguments at all; explicit arguments replace
    the defaults entirely. A ``transform`` (or a ``callback=`` given at the
    call site, which takes precedence) is called as
    ``transform(original, *args, **kwargs)`` instead of the finalizer.

    Forwarded calls whose result has exactly the wrapped value's type come
    back as a new ``Liquefied`` with the same finalizer configuration; any
    other result is returned as-is. Finalization results are never wrapped.

    Example::

        >>> price = Liquefied(12.333, ".2f", method="__format__")
        >>> f"{price}"
        '12.33'
        >>> (Liquefied([1, 2, 3]) + [4]).finalize()
        '[1, 2, 3, 4]'
    """

    __slots__ = (
        "_liquefied_original",
        "_liquefied_method",
        "_liquefied_args",
        "_liquefied_kwargs",
        "_liquefied_transform",
    )

    def __init__(
        self,
        original: Any,
        /,
        *default_args: Any,
        method: str = "__str__",
        transform: Optional[Callable[..., Any]] = None,
        **default_kwargs: Any,
    ) -> None:
        if not isinstance(method, str):
            raise TypeError(
                f"finalizer method name must be a str, got {type(method).__name__}"
            )
        if transform is not None and not callable(transform):
            raise TypeError(
                f"transform must be callable, got {type(transform).__name__}"
            )
        _set = object.__setattr__
        _set(self, "_liquefied_original", original)
        _set(self, "_liquefied_method", method)
        _set(self, "_liquefied_args", default_args)
        _set(self, "_liquefied_kwargs", default_kwargs)
        _set(self, "_liquefied_transform", transform)

    def unwrap(self) -> Any:
        """Return the wrapped value untouched."""
        return self._liquefied_original

    def finalize(
        self,
        *args: Any,
        callback: Optional[Callable[..., Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """Run the finalizer and return its plain result.

        ``callback`` overrides the configured transform for this call only.
        """
        if callback is None:
            callback = self._liquefied_transform
        original = self._liquefied_original
        if callback is not None:
            return callback(original, *args, **kwargs)
        if not args and not kwargs:
            args, kwargs = self._liquefied_args, self._liquefied_kwargs
        return getattr(original, self._liquefied_method)(*args, **kwargs)

    def __repr__(self) -> str:
        original = self._liquefied_original
        return f"<{type(self).__name__}({type(original).__name__}) at {id(self):#x}>"

    def __str__(self) -> str:
        original = self._liquefied_original
        call = functools.partial(str, original)
        return _invoke(self, "__str__", call, (), {}, rewrap=False)

    def __format__(self, format_spec: str) -> str:
        if self._liquefied_method == "__format__":
            configured = (
                self._liquefied_args
                or self._liquefied_kwargs
                or self._liquefied_transform is not None
            )
            if format_spec or not configured:
                return self.finalize(format_spec)
            return self.finalize()
        if not format_spec:
            return str(self)
        return format(self._liquefied_original, format_spec)

    def __eq__(self, other: Any) -> bool:
        return self._liquefied_original == _plain(other)

    def __ne__(self, other: Any) -> bool:
        return self._liquefied_original != _plain(other)

    def __hash__(self) -> int:
        return hash(self._liquefied_original)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _invoke(self, "__call__", self._liquefied_original, args, kwargs)

    def __dir__(self) -> list[str]:
        return sorted(set(dir(self._liquefied_original)) | {"finalize", "unwrap"})

    def __getattr__(self, name: str) -> Any:
        if name in Liquefied.__slots__:
            # unset slot while copying or unpickling
            raise AttributeError(name)
        if name == self._liquefied_method:
            return self.finalize
        attr = getattr(self._liquefied_original, name)
        if not callable(attr):
            return _rewrap(self, attr)
        return _forwarder(self, name, attr)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in Liquefied.__slots__:
            raise AttributeError(f"{name!r} is read-only")
        setattr(self._liquefied_original, name, value)

    def __delattr__(self, name: str) -> None:
        if name in Liquefied.__slots__:
            raise AttributeError(f"{name!r} is read-only")
        delattr(self._liquefied_original, name)

    def __reduce__(self):
        return (
            _rebuild,
            (
                type(self),
                self._liquefied_original,
                self._liquefied_method,
                self._liquefied_args,
                self._liquefied_kwargs,
                self._liquefied_transform,
            ),
        )


def liquefy(
    original: Any,
    /,
    *default_args: Any,
    method: str = "__str__",
    transform: Optional[Callable[..., Any]] = None,
    **default_kwargs: Any,
) -> Liquefied:
    """Wrap ``original``; see :class:`Liquefied` for the arguments."""
    return Liquefied(
        original, *default_args, method=method, transform=transform, **default_kwargs
    )


def _plain(value):
    if isinstance(value, Liquefied):
        return value._liquefied_original
    return value


def _rebuild(cls, original, method, args, kwargs, transform):
    return cls(original, *args, method=method, transform=transform, **kwargs)


def _rewrap(proxy: Liquefied, result: Any) -> Any:
    if type(result) is not type(proxy._liquefied_original):
        return result
    return _rebuild(
        type(proxy),
        result,
        proxy._liquefied_method,
        proxy._liquefied_args,
        proxy._liquefied_kwargs,
        proxy._liquefied_transform,
    )


def _invoke(proxy, name, call, args, kwargs, *, rewrap=True):
    if name == proxy._liquefied_method:
        return proxy.finalize(*args, **kwargs)
    result = call(*args, **kwargs)
    return _rewrap(proxy, result) if rewrap else result


def _forwarder(
    proxy: Liquefied, name: str, attr: Callable[..., Any]
) -> Callable[..., Any]:
    def forward(*args: Any, **kwargs: Any) -> Any:
        return _invoke(proxy, name, attr, args, kwargs)

    forward.__name__ = name
    forward.__qualname__ = f"{type(proxy).__name__}.{name}"
    forward.__doc__ = getattr(attr, "__doc__", None)
    return forward


def _make_operator(
    name: str, func: Callable[..., Any], *, reflected: bool = False, rewrap: bool = True
) -> Callable[..., Any]:
    def operator_method(self, *operands):
        original = self._liquefied_original
        operands = tuple(_plain(operand) for operand in operands)
        if reflected:

            def call(*ops):
                return func(*ops, original)

        else:
            call = functools.partial(func, original)
        return _invoke(self, name, call, operands, {}, rewrap=rewrap)

    operator_method.__name__ = name
    operator_method.__qualname__ = f"Liquefied.{name}"
    return operator_method


for _name, _func in _OPS.items():
    setattr(Liquefied, _name, _make_operator(_name, _func))

for _name, _func in _INPLACE_OPS.items():
    setattr(Liquefied, _name, _make_operator(_name, _func))

for _name, _func in _REFLECTED_OPS.items():
    setattr(Liquefied, _name, _make_operator(_name, _func, reflected=True))

for _name, _func in _PLAIN_OPS.items():
    setattr(Liquefied, _name, _make_operator(_name, _func, rewrap=False))
