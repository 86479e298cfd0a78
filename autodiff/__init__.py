r"""@package autodiff

Expressions of one variable with symbolic and pointwise derivatives.

Expressions are built from the independent variable, constants and the
operations `+ - * / **`, `sin`, `cos` and `ln`. Each expression can be
    * evaluated at a point,
    * differentiated symbolically, producing a new expression (no
      simplification is performed, so repeated differentiation leads to
      "expression swell"),
    * differentiated at a point, computing the derivative's value in a single
      walk through the expression (forward mode automatic differentiation).

~~~.py
from autodiff import Variable, sin, d

x = Variable()
f = x * sin(2.0 * x)
f(0.5)          # value at 0.5
d(f)            # symbolic derivative (new expression)
d(f, 0.5)       # derivative at 0.5
~~~

Evaluation never raises on singularities. Instead, IEEE-754 semantics apply,
e.g. `1/x` evaluates to `inf` at zero. All nodes of an expression share one
numeric context (`float64` by default, see the contexts module). Mixing
contexts is an error detected when building the expression.
"""

from .common import ContextMismatchError, ExpressionWarning
from .contexts import get_context, available_contexts
from .numexpr import NumericExpression
from .basics import ConstantExpression, VariableExpression, NegateExpression
from .basics import SumExpression, ProductExpression, DivisionExpression
from .trig import SinExpression, CosExpression
from .elementary import LogExpression, PowerExpression
from .builder import Variable, var, sin, cos, ln, pow, d
