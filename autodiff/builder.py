r"""@package autodiff.builder

Convenience layer for building expressions from literals and operators.

The Variable class wraps either the independent variable, a constant or an
existing expression and supports all arithmetic operators. Combined with the
functions sin(), cos(), ln(), pow() and d(), expressions can be written
almost like on paper:

~~~.py
x = Variable()
f = pow(x, ln(x))
df = d(f)               # symbolic derivative (a new expression)
print(f(math.e), df(math.e), d(f, math.e))
~~~

Every operation creates new nodes, literals being promoted to fresh
constants. Existing nodes are never modified, but they may end up shared by
several parent expressions (e.g. `x` in `x * x`).
"""

from .common import is_literal, ContextMismatchError
from .contexts import get_context
from .numexpr import NumericExpression
from .basics import ConstantExpression, VariableExpression
from .trig import SinExpression, CosExpression
from .elementary import LogExpression, PowerExpression


__all__ = [
    "Variable",
    "var",
    "sin",
    "cos",
    "ln",
    "pow",
    "d",
]


class Variable(object):
    r"""Wrapper around an expression providing operator syntax.

    Depending on the argument, a new Variable wraps:
        * no argument: a new basics.VariableExpression (the independent
          variable)
        * a real number: a new basics.ConstantExpression
        * an expression: that expression itself
        * another Variable: the expression wrapped by it

    Arithmetic on Variable objects returns plain expression nodes, which
    support the same operators. Wrap the result again if desired.
    """

    __array_ufunc__ = None

    def __init__(self, value=None, dtype=None):
        r"""Init function.

        Args:
            value:  What to wrap (see class description).
            dtype:  Numeric context for a new variable or constant. When
                    wrapping an existing expression, this may be given to
                    assert the expression's context.
        """
        if isinstance(value, Variable):
            value = value.expr
        if value is None:
            expr = VariableExpression(dtype=dtype)
        elif isinstance(value, NumericExpression):
            expr = value
            if dtype is not None and get_context(dtype) is not expr.context:
                raise ContextMismatchError(
                    "Expression has context %r, not %r."
                    % (expr.context.name, get_context(dtype).name)
                )
        elif is_literal(value):
            expr = ConstantExpression(value, dtype=dtype)
        else:
            raise TypeError("Cannot create a Variable from %r" % (value,))
        self._expr = expr

    @property
    def expr(self):
        r"""The wrapped expression."""
        return self._expr

    @property
    def context(self):
        r"""Numeric context of the wrapped expression."""
        return self._expr.context

    def evaluate(self, x):
        r"""Evaluate the wrapped expression at `x`."""
        return self._expr.evaluate(x)

    def __call__(self, x):
        return self._expr.evaluate(x)

    def derivative(self, x=None):
        r"""Symbolic derivative (no argument) or derivative at `x`."""
        return self._expr.derivative(x)

    def str(self):
        return self._expr.str()

    def __str__(self):
        return self._expr.str()

    def __repr__(self):
        return "<Variable(%s)>" % self._expr.str()

    def __neg__(self):
        return -self._expr

    def __pos__(self):
        return self._expr

    def __add__(self, other):
        return self._expr.__add__(_unwrap(other))

    def __radd__(self, other):
        return self._expr.__radd__(_unwrap(other))

    def __sub__(self, other):
        return self._expr.__sub__(_unwrap(other))

    def __rsub__(self, other):
        return self._expr.__rsub__(_unwrap(other))

    def __mul__(self, other):
        return self._expr.__mul__(_unwrap(other))

    def __rmul__(self, other):
        return self._expr.__rmul__(_unwrap(other))

    def __truediv__(self, other):
        return self._expr.__truediv__(_unwrap(other))

    def __rtruediv__(self, other):
        return self._expr.__rtruediv__(_unwrap(other))

    def __pow__(self, other):
        return self._expr.__pow__(_unwrap(other))

    def __rpow__(self, other):
        return self._expr.__rpow__(_unwrap(other))


## Short alias for Variable.
var = Variable


def _unwrap(obj):
    r"""Return the expression wrapped by a Variable or `obj` itself."""
    if isinstance(obj, Variable):
        return obj.expr
    return obj


def _as_expr(obj, context=None):
    r"""Convert a Variable, expression or literal to an expression.

    Literals are promoted to new constants in the given `context` (default
    context if `None`).
    """
    obj = _unwrap(obj)
    if isinstance(obj, NumericExpression):
        return obj
    if is_literal(obj):
        return ConstantExpression(obj, dtype=context)
    raise TypeError("Expected an expression, Variable or real number, got %r"
                    % (obj,))


def sin(expr):
    r"""Create the expression \f$ \sin(f(x)) \f$."""
    return SinExpression(_as_expr(expr))


def cos(expr):
    r"""Create the expression \f$ \cos(f(x)) \f$."""
    return CosExpression(_as_expr(expr))


def ln(expr):
    r"""Create the expression \f$ \ln(f(x)) \f$."""
    return LogExpression(_as_expr(expr))


def pow(base, exponent): # pylint: disable=redefined-builtin
    r"""Create the expression \f$ f(x)^{g(x)} \f$.

    Either argument may be an expression, a Variable or a real number. A
    number is promoted to a constant in the context of the other argument.
    """
    base, exponent = _unwrap(base), _unwrap(exponent)
    context = None
    for obj in (base, exponent):
        if isinstance(obj, NumericExpression):
            context = obj.context
            break
    return PowerExpression(_as_expr(base, context), _as_expr(exponent, context))


def d(expr, x=None):
    r"""Differentiate an expression.

    @param expr
        Expression or Variable to differentiate.
    @param x
        If given, return the numeric value of the derivative at `x`.
        Otherwise, return the symbolic derivative as new expression, wrapped
        in a Variable if `expr` is a Variable.
    """
    if x is None:
        if isinstance(expr, Variable):
            return Variable(expr.expr.derivative())
        return _as_expr(expr).derivative()
    return _as_expr(expr).derivative(x)
