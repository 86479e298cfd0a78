r"""@package autodiff.evaluators

Callable evaluators of numexpr.NumericExpression objects.

An evaluator is a light-weight callable created via
numexpr.NumericExpression.evaluator(). In addition to evaluating the
expression, it can compute derivatives of any order:

~~~.py
ev = (x*sin(x)).evaluator()
ev(1.0)           # value
ev.diff(1.0)      # first derivative (pointwise, no expression is built)
ev.diff(1.0, 3)   # third derivative
f2 = ev.function(2)
~~~

The first derivative uses the pointwise (forward mode) path. For higher
orders, the expression is differentiated symbolically `n-1` times and the
pointwise path is applied to the result. The symbolic derivatives are cached
on the evaluator. Since no simplification is performed, their size grows
rapidly with the order. An ExpressionWarning is issued when a cached
derivative exceeds the configured node count.
"""

import logging
import warnings

from .common import ExpressionWarning
from .config import get_config


__all__ = [
    "ExpressionEvaluator",
]


_logger = logging.getLogger(__name__)


class ExpressionEvaluator(object):
    r"""Evaluator for an expression and its derivatives."""

    def __init__(self, expr, max_nodes=None):
        r"""Create an evaluator for a given expression.

        @param expr
            The expression object for which this evaluator is created.
        @param max_nodes
            Node count above which an ExpressionWarning is issued for a newly
            created symbolic derivative. By default, the
            `[diagnostics] swell_warning_nodes` setting is used.
        """
        if max_nodes is None:
            max_nodes = get_config().getint('diagnostics', 'swell_warning_nodes')
        self._expr = expr
        self._max_nodes = max_nodes
        ## Cached symbolic derivatives, the n'th element being of order n.
        self._derivs = [expr]

    @property
    def expr(self):
        r"""The expression this evaluator was created for."""
        return self._expr

    @property
    def context(self):
        r"""Numeric context of the expression."""
        return self._expr.context

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        return self._expr.evaluate(x)

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s" % n)
        if n == 0:
            return self._expr.evaluate(x)
        return self.derivative_expression(n-1).derivative(x)

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s" % n)
        if n == 0:
            return self._expr.evaluate
        expr = self.derivative_expression(n-1)
        return lambda x: expr.derivative(x)

    def derivative_expression(self, n=1):
        r"""Return the (cached) symbolic n'th derivative expression."""
        for order in range(len(self._derivs), n+1):
            expr = self._derivs[-1].derivative()
            count = expr.node_count()
            _logger.debug("Cached derivative of order %d (%d nodes)", order, count)
            if count > self._max_nodes:
                warnings.warn(
                    "Derivative of order %d has %d nodes (limit %d)."
                    % (order, count, self._max_nodes),
                    ExpressionWarning
                )
            self._derivs.append(expr)
        return self._derivs[n]

    def is_zero_function(self, n=0):
        r"""Return whether the n'th derivative is known to vanish identically.

        This is only detected for constant expressions and is not a general
        test for zero functions.
        """
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %s" % n)
        return self.derivative_expression(n).is_zero_expression()
