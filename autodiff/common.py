r"""@package autodiff.common

Utils used by multiple modules in autodiff.
"""

from numbers import Real

import numpy as np


__all__ = [
    "ContextMismatchError",
    "ExpressionWarning",
    "is_literal",
]


class ContextMismatchError(TypeError):
    r"""Raised when combining expressions of different numeric contexts.

    All nodes of one expression tree must share the same numeric context (see
    contexts.get_context()). Building a tree out of nodes with e.g. `float32`
    and `float64` contexts is a programming error and fails immediately.
    """
    pass


class ExpressionWarning(UserWarning):
    """Warning issued when expressions might not evaluate as expected."""
    pass


def is_literal(obj):
    r"""Return whether `obj` is a real number that may be promoted to a constant."""
    if isinstance(obj, (bool, np.bool_)):
        return False
    return isinstance(obj, (Real, np.floating, np.integer))


def _check_same_context(*exprs):
    r"""Ensure all given expressions share one numeric context.

    @return The common context.
    """
    ctx = exprs[0].context
    for expr in exprs[1:]:
        if expr.context is not ctx:
            raise ContextMismatchError(
                "Cannot combine expressions of contexts %r and %r."
                % (ctx.name, expr.context.name)
            )
    return ctx
