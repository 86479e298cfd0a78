r"""@package autodiff.trig

Sine and cosine of an expression.

Both apply the chain rule to their argument, e.g.
\f[ \frac{d}{dx} \sin(f(x)) = \cos(f(x)) f'(x). \f]
"""

import sympy as sp

from .basics import NegateExpression, ProductExpression
from .numexpr import UnaryExpression


__all__ = [
    "SinExpression",
    "CosExpression",
]


class SinExpression(UnaryExpression):
    r"""Sine of an expression, \f$ \sin(f(x)) \f$."""
    def __init__(self, expr, name='sin'):
        super(SinExpression, self).__init__(expr, name=name)

    def _expr_str(self):
        return "sin(%s)" % self.f.str()

    def _sympy(self, symbol):
        return sp.sin(self.f._sympy(symbol))

    def _evaluate(self, x):
        return self.context.sin(self.f._evaluate(x))

    def _derivative(self):
        f = self.f
        return ProductExpression(CosExpression(f), f._derivative())

    def _derivative_at(self, x):
        f = self.f
        return self.context.cos(f._evaluate(x)) * f._derivative_at(x)


class CosExpression(UnaryExpression):
    r"""Cosine of an expression, \f$ \cos(f(x)) \f$."""
    def __init__(self, expr, name='cos'):
        super(CosExpression, self).__init__(expr, name=name)

    def _expr_str(self):
        return "cos(%s)" % self.f.str()

    def _sympy(self, symbol):
        return sp.cos(self.f._sympy(symbol))

    def _evaluate(self, x):
        return self.context.cos(self.f._evaluate(x))

    def _derivative(self):
        f = self.f
        return ProductExpression(NegateExpression(SinExpression(f)),
                                 f._derivative())

    def _derivative_at(self, x):
        f = self.f
        return -self.context.sin(f._evaluate(x)) * f._derivative_at(x)
