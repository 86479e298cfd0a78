r"""@package autodiff.contexts

Numeric contexts fixing the floating point type of an expression tree.

All nodes of one tree share a single context. The context knows how to
convert literals and arguments to its type and provides the IEEE-754
elementwise functions used by the expressions. Computations are carried out
with numpy scalars, so that e.g. a division by zero yields `inf` (or `nan`)
instead of raising a `ZeroDivisionError` as Python floats would.

Contexts are singletons and should be obtained via get_context():

~~~.py
ctx = get_context('float32')
ctx.convert(1.5)  # -> numpy.float32(1.5)
~~~
"""

from contextlib import contextmanager

import numpy as np

from .common import is_literal


__all__ = [
    "NumericContext",
    "get_context",
    "available_contexts",
]


class NumericContext(object):
    r"""Floating point domain of an expression tree.

    Do not instantiate this class directly. Use get_context() to get the
    shared instance for a given type.
    """
    def __init__(self, name, dtype):
        ## Name under which this context is registered.
        self.name = name
        ## The numpy scalar type of all values in this context.
        self.dtype = np.dtype(dtype).type
        self.zero = self.dtype(0)
        self.one = self.dtype(1)
        self.sin = np.sin
        self.cos = np.cos
        self.log = np.log
        self.power = np.power

    def convert(self, x):
        r"""Convert a scalar or array-like to this context's type."""
        if isinstance(x, (np.ndarray, list, tuple)):
            return np.asarray(x, dtype=self.dtype)
        if not is_literal(x):
            raise TypeError("Cannot convert %r to %s." % (x, self.name))
        return self.dtype(x)

    @contextmanager
    def errstate(self):
        r"""Silence floating point warnings for the duration of a computation."""
        with np.errstate(all='ignore'):
            yield self

    def __reduce__(self):
        return (get_context, (self.name,))

    def __repr__(self):
        return "<NumericContext(%s)>" % self.name


_CONTEXTS = dict(
    (name, NumericContext(name, dtype)) for name, dtype in [
        ('float64', np.float64),
        ('float32', np.float32),
        ('longdouble', np.longdouble),
    ]
)


def available_contexts():
    r"""Return the names of all available numeric contexts."""
    return sorted(_CONTEXTS)


def get_context(dtype=None):
    r"""Return the shared numeric context for a given type.

    @param dtype
        One of:
            * `None` to use the configured default (see config.get_config())
            * a context name (see available_contexts())
            * a numpy floating point type or dtype
            * a NumericContext, which is returned as is
    """
    if isinstance(dtype, NumericContext):
        return dtype
    if dtype is None:
        from .config import get_config
        dtype = get_config().get('numeric', 'dtype')
    if isinstance(dtype, str):
        try:
            return _CONTEXTS[dtype]
        except KeyError:
            raise ValueError("Unknown numeric context: %r (available: %s)"
                             % (dtype, ", ".join(available_contexts())))
    try:
        scalar_type = np.dtype(dtype).type
    except TypeError:
        raise ValueError("Not a floating point type: %r" % (dtype,))
    for ctx in _CONTEXTS.values():
        if ctx.dtype is scalar_type:
            return ctx
    raise ValueError("No numeric context for type: %r" % (dtype,))
