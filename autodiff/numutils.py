r"""@package autodiff.numutils

Numerical helpers for checking expressions and their derivatives.

The functions here are independent of the expression system itself. They
provide reference values (e.g. finite difference derivatives) and error
measures used to verify that symbolic and pointwise derivatives agree with
each other and with the functions they are derived from.
"""

from contextlib import contextmanager
import math
import warnings

from mpmath import fp
from scipy import optimize
import numpy as np

from .common import ExpressionWarning


__all__ = [
    "isclose",
    "numerical_derivative",
    "inf_norm1d",
    "raise_all_warnings",
]


def isclose(a, b, rel_tol=1e-9, abs_tol=0.0, nan_ok=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    In contrast to `math.isclose()`, infinities of equal sign are considered
    close and, if `nan_ok` is `True`, two NaN values are considered close
    too.
    """
    a, b = float(a), float(b)
    if math.isnan(a) or math.isnan(b):
        return nan_ok and math.isnan(a) and math.isnan(b)
    if math.isinf(a) or math.isinf(b):
        return a == b
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


def numerical_derivative(func, x, h=None):
    r"""Approximate the first derivative of a function by finite differences.

    This uses the central difference formula of `mpmath`'s floating point
    context, i.e. \f$ (f(x+h) - f(x-h)) / 2h \f$.

    @param func
        Callable to differentiate. May also be a NumericExpression.
    @param x
        Point at which to compute the derivative.
    @param h
        Step size. By default, ``1e-6 * max(1, |x|)`` is used.
    """
    x = float(x)
    if h is None:
        h = 1e-6 * max(1.0, abs(x))
    return fp.diff(lambda t: float(func(t)), x, h=h)


def inf_norm1d(f1, f2=None, domain=(0.0, 1.0), Ns=50, xatol=1e-12):
    r"""Compute the L^inf norm of f1-f2 on an interval.

    The `scipy.optimize.brute` method is used to find a candidate close to the
    global maximum difference. This is then taken as starting point for a
    search for the local maximum difference. Setting the number of samples
    `Ns` high enough should lead to the global maximum difference being found.

    @param f1
        First function. May also be a NumericExpression.
    @param f2
        Second function. May also be a NumericExpression. If not given,
        simply finds the maximum absolute value of `f1`.
    @param domain
        Domain ``[a, b]`` inside which to search for the maximum difference.
    @param Ns
        Number of initial samples for the `scipy.optimize.brute` call. In case
        ``Ns <= 2``, the `brute()` step is skipped and a local extremum is
        found inside the given `domain`. Default is `50`.

    @return A pair ``(x, delta)``, where `x` is the point at which the maximum
        difference was found and `delta` is the difference at that point.
    """
    if f2 is None:
        f2 = lambda x: 0.0
    a, b = domain
    def func(x):
        x = float(np.squeeze(x))
        if not a <= x <= b:
            return 0.
        return -float(abs(f1(x) - f2(x)))
    if Ns <= 2:
        bounds = [a, b]
    else:
        x0 = float(np.squeeze(optimize.brute(func, [domain], Ns=Ns, finish=None)))
        step = (b-a)/(Ns-1)
        bounds = [max(a, x0-step), min(b, x0+step)]
    res = optimize.minimize_scalar(
        func, bounds=bounds, method='bounded',
        options=dict(xatol=xatol),
    )
    return float(res.x), -float(res.fun)


@contextmanager
def raise_all_warnings():
    r"""Context manager for turning numpy and package warnings into exceptions.

    For example:
    ```
        with raise_all_warnings():
            np.pi / np.linspace(0, 1, 10)
    ```
    Without the `raise_all_warnings()` context, the above code would just
    issue a warning but otherwise run fine. Inside the context, a
    `FloatingPointError` is raised instead. Similarly, a
    common.ExpressionWarning (e.g. about expression swell in an evaluator)
    is raised as exception.

    Note that evaluating expressions is not affected, since it always
    follows IEEE-754 semantics and silently produces `inf` or `nan`.
    """
    old_settings = np.seterr(divide='raise', over='raise', invalid='raise')
    try:
        with warnings.catch_warnings():
            warnings.filterwarnings('error', category=ExpressionWarning)
            yield
    finally:
        np.seterr(**old_settings)
