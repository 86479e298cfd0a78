r"""@package autodiff.basics

Collection of basic numexpr.NumericExpression subclasses.

These are the leaves of every expression (constants and the variable) and the
arithmetic operations built from them. The transcendental functions live in
the trig and elementary modules.
"""

import sympy as sp

from .common import is_literal
from .numexpr import NumericExpression, UnaryExpression, BinaryExpression


__all__ = [
    "ConstantExpression",
    "VariableExpression",
    "NegateExpression",
    "SumExpression",
    "ProductExpression",
    "DivisionExpression",
]


SUM_PRECEDENCE = 10
PRODUCT_PRECEDENCE = 20
NEGATE_PRECEDENCE = 30


class ConstantExpression(NumericExpression):
    r"""Represent an expression that is a constant.

    Represents an expression of the form \f$ f(x) = c = \mathrm{const} \f$.

    The value of the constant can be accessed through the `c` property. It is
    stored converted to the numeric context of the expression.
    """

    def __init__(self, value=0, dtype=None, name='const'):
        r"""Init function.

        Args:
            value:  The constant value. Must be a real number.
            dtype:  Numeric context (see contexts.get_context()).
            name:   Name of the expression (e.g. for print_tree()).
        """
        if not is_literal(value):
            raise TypeError("Constant must be a real number, got %r" % (value,))
        super(ConstantExpression, self).__init__(dtype=dtype, name=name)
        self._c = self.context.convert(value)

    @property
    def c(self):
        r"""The constant value this expression represents."""
        return self._c

    @property
    def precedence(self):
        if self._c < 0:
            return NEGATE_PRECEDENCE
        return super(ConstantExpression, self).precedence

    @property
    def nice_name(self):
        return "%s (%s)" % (self.name, self._c)

    def is_zero_expression(self):
        return self._c == 0

    def _expr_str(self):
        return "%s" % self._c

    def _sympy(self, symbol):
        return sp.Float(float(self._c))

    def _evaluate(self, x):
        return self._c

    def _derivative(self):
        return ConstantExpression(0, dtype=self.context)

    def _derivative_at(self, x):
        return self.context.zero


class VariableExpression(NumericExpression):
    r"""The independent variable, i.e. the identity \f$ f(x) = x \f$."""

    def __init__(self, dtype=None, name='x'):
        r"""Init function.

        Args:
            dtype:  Numeric context (see contexts.get_context()).
            name:   Name of the expression (e.g. for print_tree()).
        """
        super(VariableExpression, self).__init__(dtype=dtype, name=name)

    def _expr_str(self):
        return "x"

    def _sympy(self, symbol):
        return symbol

    def _evaluate(self, x):
        return x

    def _derivative(self):
        return ConstantExpression(1, dtype=self.context)

    def _derivative_at(self, x):
        return self.context.one


class NegateExpression(UnaryExpression):
    r"""Negate an expression, i.e. \f$ -f(x) \f$."""

    precedence = NEGATE_PRECEDENCE

    def __init__(self, expr, name='neg'):
        super(NegateExpression, self).__init__(expr, name=name)

    def _expr_str(self):
        return "-%s" % self._sub_str(self.f, strict=True)

    def _sympy(self, symbol):
        return -self.f._sympy(symbol)

    def _evaluate(self, x):
        return -self.f._evaluate(x)

    def _derivative(self):
        return NegateExpression(self.f._derivative())

    def _derivative_at(self, x):
        return -self.f._derivative_at(x)


class SumExpression(BinaryExpression):
    r"""Sum of two expressions, \f$ f(x) + g(x) \f$.

    Differences are represented as sums with a negated second operand.
    """

    precedence = SUM_PRECEDENCE

    def __init__(self, expr1, expr2, name='add'):
        super(SumExpression, self).__init__(expr1, expr2, name=name)

    @property
    def nice_name(self):
        if isinstance(self.g, NegateExpression):
            return "%s (f - g)" % self.name
        return "%s (f + g)" % self.name

    def _expr_str(self):
        if isinstance(self.g, NegateExpression):
            return "%s - %s" % (self._sub_str(self.f),
                                self._sub_str(self.g.f, strict=True))
        return "%s + %s" % (self._sub_str(self.f), self._sub_str(self.g))

    def _sympy(self, symbol):
        return self.f._sympy(symbol) + self.g._sympy(symbol)

    def _evaluate(self, x):
        return self.f._evaluate(x) + self.g._evaluate(x)

    def _derivative(self):
        return SumExpression(self.f._derivative(), self.g._derivative())

    def _derivative_at(self, x):
        return self.f._derivative_at(x) + self.g._derivative_at(x)


class ProductExpression(BinaryExpression):
    r"""Multiply two expressions, \f$ f(x) g(x) \f$."""

    precedence = PRODUCT_PRECEDENCE

    def __init__(self, expr1, expr2, name='mult'):
        super(ProductExpression, self).__init__(expr1, expr2, name=name)

    def _expr_str(self):
        return "%s * %s" % (self._sub_str(self.f),
                            self._sub_str(self.g, strict=True))

    def _sympy(self, symbol):
        return self.f._sympy(symbol) * self.g._sympy(symbol)

    def _evaluate(self, x):
        return self.f._evaluate(x) * self.g._evaluate(x)

    def _derivative(self):
        f, g = self.f, self.g
        return SumExpression(
            ProductExpression(f._derivative(), g),
            ProductExpression(f, g._derivative()),
        )

    def _derivative_at(self, x):
        f, g = self.f, self.g
        return f._derivative_at(x) * g._evaluate(x) + f._evaluate(x) * g._derivative_at(x)


class DivisionExpression(BinaryExpression):
    r"""Divide one expression by another, \f$ f(x) / g(x) \f$.

    No special handling of vanishing denominators takes place, i.e. the
    result at such points is `inf` or `nan`.
    """

    precedence = PRODUCT_PRECEDENCE

    def __init__(self, expr1, expr2, name='divide'):
        super(DivisionExpression, self).__init__(expr1, expr2, name=name)

    def _expr_str(self):
        return "%s / %s" % (self._sub_str(self.f),
                            self._sub_str(self.g, strict=True))

    def _sympy(self, symbol):
        return self.f._sympy(symbol) / self.g._sympy(symbol)

    def _evaluate(self, x):
        return self.f._evaluate(x) / self.g._evaluate(x)

    def _derivative(self):
        f, g = self.f, self.g
        numerator = SumExpression(
            ProductExpression(f._derivative(), g),
            NegateExpression(ProductExpression(f, g._derivative())),
        )
        return DivisionExpression(numerator, ProductExpression(g, g))

    def _derivative_at(self, x):
        f, g = self.f, self.g
        gx = g._evaluate(x)
        return (f._derivative_at(x) * gx - f._evaluate(x) * g._derivative_at(x)) / (gx * gx)
