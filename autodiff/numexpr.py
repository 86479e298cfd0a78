r"""@package autodiff.numexpr

Base of the NumericExpression system.

Each expression node represents one operation of a scalar function of a
single variable. Nodes are immutable once constructed and may be shared by
any number of parent nodes, so that an expression is in general a directed
acyclic graph rather than a tree.

Every node implements three operations:
    * evaluation at a point `x` (NumericExpression.evaluate())
    * symbolic differentiation, producing a new expression
      (NumericExpression.derivative() without arguments)
    * pointwise differentiation at `x` (NumericExpression.derivative() with
      an argument), which walks the expression once, evaluating children and
      their derivatives together (forward mode automatic differentiation)

The rules are applied unconditionally. Singularities (e.g. division by zero
or the logarithm of a non-positive number) do not raise but produce `inf` or
`nan` as dictated by IEEE-754 arithmetic.

As a simple example, let's build a polynomial from the identity and some
constants and evaluate it and its derivative:

~~~.py
x = VariableExpression()
f = x*x*x + 12.5*x + 35.2
print("f(5) =", f(5))
print("f'(5) =", f.derivative(5))
print("f' =", f.derivative())
~~~

Using operators on expression nodes (as above) or the functions in the
builder module is usually more convenient than calling the constructors of
the node classes directly.
"""

from abc import ABCMeta, abstractmethod
import logging

import numpy as np
import sympy as sp

from .common import is_literal, _check_same_context
from .contexts import get_context
from .utils import save_to_file, load_from_file


__all__ = [
    "NumericExpression",
    "UnaryExpression",
    "BinaryExpression",
]


_logger = logging.getLogger(__name__)


## Precedence of atoms and function applications when rendering expressions.
ATOM_PRECEDENCE = 100


class NumericExpression(metaclass=ABCMeta):
    """Parent class for numeric expressions.

    The methods a child has to override are:
        * _evaluate() computing the value at a point
        * _derivative() creating the symbolic derivative expression
        * _derivative_at() computing the derivative at a point
        * _expr_str() returning an infix representation
        * _sympy() converting the expression to SymPy

    The public methods evaluate() and derivative() take care of converting
    the argument to the numeric context of the expression and of silencing
    floating point warnings. The protected methods above are called
    recursively with already converted arguments.
    """

    ## Operator precedence used by str() to decide on parentheses.
    precedence = ATOM_PRECEDENCE

    # Let numpy scalars on the left of an operator defer to our reflected
    # operators instead of treating expressions as object arrays.
    __array_ufunc__ = None

    def __init__(self, dtype=None, name=None, **sub_exprs):
        r"""Base class init for numeric expressions.

        The ``**sub_exprs`` sub expressions given as keyword arguments here
        are stored in this object and are used when traversing through a
        complete expression hierarchy in e.g. print_tree() or traverse_tree().

        Args:
            dtype: Numeric context (or anything accepted by
                contexts.get_context()) for expressions without sub
                expressions. Expressions with sub expressions inherit the
                common context of these and must not specify `dtype`.
            name: (string, optional)
                Name for the expression. By default, the current class name
                is used as name.
        """
        if sub_exprs:
            if dtype is not None:
                raise TypeError("Composite expressions inherit their context.")
            for key, expr in sub_exprs.items():
                if not isinstance(expr, NumericExpression):
                    raise TypeError("Sub expression %s is not an expression: %r"
                                    % (key, expr))
            self.__context = _check_same_context(*sub_exprs.values())
        else:
            self.__context = get_context(dtype)
        self.__sub_expressions = dict(sub_exprs)
        self.__name = name if name else self.__class__.__name__

    @property
    def context(self):
        r"""Numeric context all values of this expression live in."""
        return self.__context

    @property
    def name(self):
        r"""Name given to this instance of the expression."""
        return self.__name

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        return self.__name

    def sub_expression(self, key):
        r"""Return the sub expression stored under the given key."""
        return self.__sub_expressions[key]

    def sub_expressions(self):
        r"""Return a list of `(key, expr)` pairs of the direct children."""
        return list(self.__sub_expressions.items())

    def evaluate(self, x):
        r"""Evaluate the expression at `x`.

        `x` may be a scalar or a numpy array (evaluated elementwise). Out of
        domain arguments result in `inf` or `nan` values.
        """
        ctx = self.__context
        x = ctx.convert(x)
        with ctx.errstate():
            return self._broadcast(self._evaluate(x), x)

    def __call__(self, x):
        return self.evaluate(x)

    def derivative(self, x=None):
        r"""Differentiate the expression symbolically or at a point.

        Without an argument, a new expression representing the derivative is
        returned. No simplification is performed, so repeated
        differentiation quickly leads to large expressions.

        With an argument `x`, the numeric value of the derivative at `x` is
        returned. No intermediate expression is built in this case.
        """
        if x is None:
            expr = self._derivative()
            if _logger.isEnabledFor(logging.DEBUG):
                _logger.debug("Derivative of %s: %d -> %d nodes",
                              self.name, self.node_count(), expr.node_count())
            return expr
        ctx = self.__context
        x = ctx.convert(x)
        with ctx.errstate():
            return self._broadcast(self._derivative_at(x), x)

    def _broadcast(self, value, x):
        r"""Expand a scalar result to the shape of an array argument."""
        if np.ndim(x) and not np.ndim(value):
            return np.full(np.shape(x), value, dtype=self.__context.dtype)
        return value

    @abstractmethod
    def _evaluate(self, x):
        r"""Compute the value at an already converted argument `x`."""
        pass

    @abstractmethod
    def _derivative(self):
        r"""Create a new expression representing the derivative."""
        pass

    @abstractmethod
    def _derivative_at(self, x):
        r"""Compute the derivative at an already converted argument `x`."""
        pass

    @abstractmethod
    def _expr_str(self):
        r"""String representing the expression in infix notation.

        Sub expressions should be converted using _sub_str() to get proper
        parentheses.
        """
        pass

    @abstractmethod
    def _sympy(self, symbol):
        r"""Return a SymPy expression with `symbol` as variable."""
        pass

    def is_zero_expression(self):
        r"""Return whether this expression is zero and constant.

        Child classes should override this if they can determine whether
        they're zero. By default, all expressions will deny being zero.
        """
        return False

    def str(self):
        r"""Return the expression in infix notation."""
        return self._expr_str()

    def _sub_str(self, expr, strict=False):
        r"""Convert a sub expression to a string, adding parentheses if needed.

        @param expr
            The sub expression.
        @param strict
            Whether parentheses are needed for sub expressions of the same
            precedence as this expression, as is the case for the right
            operand of non-associative operators.
        """
        s = expr.str()
        prec = expr.precedence
        if prec < self.precedence or (strict and prec == self.precedence):
            return "(%s)" % s
        return s

    def __str__(self):
        return self.str()

    def __repr__(self):
        r"""Return a string representing the whole expression tree.

        This string may become relatively large for e.g. repeated symbolic
        derivatives.
        """
        return "<%s(%s)>" % (self.__class__.__name__, self.str())

    def to_sympy(self, symbol=None):
        r"""Convert the expression to a SymPy expression.

        SymPy performs some automatic canonicalization (e.g. ``x*x`` becomes
        ``x**2``), so the result is mathematically but not structurally
        equivalent to this expression.

        Args:
            symbol: SymPy symbol to use for the variable. By default, a real
                symbol named `x` is used.
        """
        if symbol is None:
            symbol = sp.Symbol('x', real=True)
        return self._sympy(symbol)

    def traverse_tree(self, include_root=False, parents=None):
        r"""Generator that walks through a complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself. Shared nodes are
        visited once per parent referencing them.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, expr in root_expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode
        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, expr in self.__sub_expressions.items():
            yield parents, name, expr
            for node in expr.traverse_tree(include_root=False, parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True):
        r"""Print the whole expression tree.

        Each expression's key under which it is stored as sub expression will
        be shown as well as its actual name and the class name.

        Args:
            root_name: Key name to print for the root expression.
            nice_names: Whether to use the nice more descriptive name (when
                implemented) or the usually shorter abstract names.
        """
        def _p(expr, name, parents=()):
            n = expr.nice_name if nice_names else expr.name
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(expr).__name__
            ))
        _p(self, root_name)
        for parents, name, expr in self.traverse_tree():
            _p(expr, name, parents)

    def node_count(self, unique=False):
        r"""Count the nodes of this expression.

        Args:
            unique: If `False` (default), count every node as often as it is
                visited by traverse_tree(), i.e. shared sub expressions are
                counted once per reference. If `True`, count distinct node
                objects only.
        """
        if not unique:
            return 1 + sum(e.node_count() for e in self.__sub_expressions.values())
        seen = set()
        stack = [self]
        while stack:
            expr = stack.pop()
            if id(expr) in seen:
                continue
            seen.add(id(expr))
            stack.extend(e for _, e in expr.sub_expressions())
        return len(seen)

    def evaluator(self):
        r"""Create a callable evaluator supporting higher derivatives.

        See evaluators.ExpressionEvaluator.
        """
        from .evaluators import ExpressionEvaluator
        return ExpressionEvaluator(self)

    def save(self, filename, overwrite=False):
        r"""Save the expression object to disk.

        Args:
            filename: The file name to store the data in. An extension
                ``'.npy'`` will be added if not already there.
            overwrite: Whether to overwrite an existing file with the same
                name. If `False` (default) and such a file exists, a
                `RuntimeError` is raised.
        """
        return save_to_file(
            filename, self, overwrite=overwrite,
            showname="%s [%s]" % (self.nice_name, type(self).__name__)
        )

    @classmethod
    def load(cls, filename):
        r"""Static function to load an expression object from disk."""
        expr = load_from_file(filename)
        if not isinstance(expr, NumericExpression):
            raise TypeError("File does not contain an expression: %s" % filename)
        return expr

    def _as_operand(self, other):
        r"""Return `other` as expression or `None` if it cannot be one.

        Literals are promoted to fresh constants in this expression's context.
        """
        if isinstance(other, NumericExpression):
            return other
        if is_literal(other):
            from .basics import ConstantExpression
            return ConstantExpression(other, dtype=self.__context)
        return None

    def __neg__(self):
        from .basics import NegateExpression
        return NegateExpression(self)

    def __pos__(self):
        return self

    def __add__(self, other):
        from .basics import SumExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else SumExpression(self, other)

    def __radd__(self, other):
        from .basics import SumExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else SumExpression(other, self)

    def __sub__(self, other):
        other = self._as_operand(other)
        return NotImplemented if other is None else self + (-other)

    def __rsub__(self, other):
        other = self._as_operand(other)
        return NotImplemented if other is None else other + (-self)

    def __mul__(self, other):
        from .basics import ProductExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else ProductExpression(self, other)

    def __rmul__(self, other):
        from .basics import ProductExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else ProductExpression(other, self)

    def __truediv__(self, other):
        from .basics import DivisionExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else DivisionExpression(self, other)

    def __rtruediv__(self, other):
        from .basics import DivisionExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else DivisionExpression(other, self)

    def __pow__(self, other):
        from .elementary import PowerExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else PowerExpression(self, other)

    def __rpow__(self, other):
        from .elementary import PowerExpression
        other = self._as_operand(other)
        return NotImplemented if other is None else PowerExpression(other, self)


class UnaryExpression(NumericExpression):
    r"""Base class for expressions applying a function to one sub expression."""
    def __init__(self, expr, name=None):
        super(UnaryExpression, self).__init__(f=expr, name=name)

    @property
    def f(self):
        r"""The expression the function is applied to."""
        return self.sub_expression('f')


class BinaryExpression(NumericExpression):
    r"""Base class for expressions combining two sub expressions.

    Both sub expressions must share the same numeric context, otherwise a
    common.ContextMismatchError is raised.
    """
    def __init__(self, expr1, expr2, name=None):
        super(BinaryExpression, self).__init__(f=expr1, g=expr2, name=name)

    @property
    def f(self):
        r"""First (left) operand."""
        return self.sub_expression('f')

    @property
    def g(self):
        r"""Second (right) operand."""
        return self.sub_expression('g')
