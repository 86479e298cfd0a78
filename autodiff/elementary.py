r"""@package autodiff.elementary

Natural logarithm and general power of expressions.
"""

import sympy as sp

from .basics import SumExpression, ProductExpression, DivisionExpression
from .numexpr import UnaryExpression, BinaryExpression


__all__ = [
    "LogExpression",
    "PowerExpression",
]


POWER_PRECEDENCE = 40


class LogExpression(UnaryExpression):
    r"""Natural logarithm of an expression, \f$ \ln(f(x)) \f$.

    Non-positive arguments are not treated specially: the logarithm of zero
    is `-inf` and of negative numbers `nan`.
    """
    def __init__(self, expr, name='ln'):
        super(LogExpression, self).__init__(expr, name=name)

    def _expr_str(self):
        return "ln(%s)" % self.f.str()

    def _sympy(self, symbol):
        return sp.log(self.f._sympy(symbol))

    def _evaluate(self, x):
        return self.context.log(self.f._evaluate(x))

    def _derivative(self):
        f = self.f
        return DivisionExpression(f._derivative(), f)

    def _derivative_at(self, x):
        f = self.f
        return f._derivative_at(x) / f._evaluate(x)


class PowerExpression(BinaryExpression):
    r"""Raise one expression to the power of another, \f$ f(x)^{g(x)} \f$.

    The derivative is always computed using logarithmic differentiation,
    \f[
        \frac{d}{dx} f^g = f^g \left(\frac{f' g}{f} + g' \ln(f)\right),
    \f]
    which covers variable bases and exponents alike. This also holds for
    constant exponents, where the (vanishing) second term still costs a
    logarithm. As a consequence, the derivative is not finite wherever `f`
    is non-positive, even if e.g. \f$ f^2 \f$ would have a finite derivative
    there.
    """

    precedence = POWER_PRECEDENCE

    def __init__(self, expr1, expr2, name='pow'):
        super(PowerExpression, self).__init__(expr1, expr2, name=name)

    def _expr_str(self):
        return "%s ** %s" % (self._sub_str(self.f, strict=True),
                             self._sub_str(self.g))

    def _sympy(self, symbol):
        return self.f._sympy(symbol) ** self.g._sympy(symbol)

    def _evaluate(self, x):
        return self.context.power(self.f._evaluate(x), self.g._evaluate(x))

    def _derivative(self):
        f, g = self.f, self.g
        return ProductExpression(
            PowerExpression(f, g),
            SumExpression(
                DivisionExpression(ProductExpression(f._derivative(), g), f),
                ProductExpression(g._derivative(), LogExpression(f)),
            ),
        )

    def _derivative_at(self, x):
        f, g = self.f, self.g
        fx = f._evaluate(x)
        return self._evaluate(x) * (
            f._derivative_at(x) * g._evaluate(x) / fx
            + g._derivative_at(x) * self.context.log(fx)
        )
