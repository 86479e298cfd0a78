#!/usr/bin/env python3

import unittest
import sys
import math
import warnings

import numpy as np

from testutils import ExprTestCase
from .common import ExpressionWarning
from .builder import Variable, sin, cos, ln, pow, d
from .numutils import isclose, numerical_derivative, inf_norm1d
from .numutils import raise_all_warnings


class TestIsclose(ExprTestCase):
    def test_finite(self):
        self.assertTrue(isclose(1.0, 1.0 + 1e-10))
        self.assertFalse(isclose(1.0, 1.0 + 1e-8))
        self.assertTrue(isclose(1.0, 1.0 + 1e-8, rel_tol=1e-7))
        self.assertFalse(isclose(0.0, 1e-12))
        self.assertTrue(isclose(0.0, 1e-12, abs_tol=1e-11))

    def test_non_finite(self):
        inf, nan = math.inf, math.nan
        self.assertTrue(isclose(inf, inf))
        self.assertFalse(isclose(inf, -inf))
        self.assertFalse(isclose(inf, 1e308))
        self.assertFalse(isclose(nan, nan))
        self.assertTrue(isclose(nan, nan, nan_ok=True))
        self.assertFalse(isclose(nan, 1.0, nan_ok=True))
        self.assertTrue(isclose(np.float32(np.inf), inf))


class TestNumericalDerivative(ExprTestCase):
    def test_functions(self):
        for t in (-2.0, 0.0, 0.5, 10.0):
            self.assertAlmostEqual(numerical_derivative(math.sin, t),
                                   math.cos(t), places=8)
            self.assertAlmostEqual(numerical_derivative(lambda s: s**3, t),
                                   3*t**2, delta=1e-7*max(1, 3*t**2))

    def test_expressions(self):
        x = Variable()
        f = pow(x, ln(x)) * cos(x)
        for t in (0.5, 1.0, 3.0):
            self.assertAlmostEqual(numerical_derivative(f, t), d(f, t), places=7)
            self.assertAlmostEqual(numerical_derivative(f, t, h=1e-5), d(f, t),
                                   places=7)


class TestInfNorm(ExprTestCase):
    def test_max_value(self):
        x = Variable()
        f = sin(x)
        pos, value = inf_norm1d(f, domain=(0, math.pi))
        self.assertAlmostEqual(pos, math.pi/2, places=5)
        self.assertAlmostEqual(value, 1.0, places=12)

    def test_difference(self):
        x = Variable()
        pos, value = inf_norm1d(sin(x), lambda t: 0.5, domain=(0, 1))
        self.assertAlmostEqual(pos, 0, places=5)
        self.assertAlmostEqual(value, 0.5, places=5)
        pos, value = inf_norm1d(sin(x), sin(x) + 1e-3 * x * x, domain=(0, 2),
                                Ns=2)
        self.assertAlmostEqual(value, 4e-3, places=7)

    def test_derivative_consistency(self):
        x = Variable()
        f = Variable(x * sin(x) / (x * x + 1) + ln(x * x + 2))
        _, delta = inf_norm1d(d(f), lambda t: d(f, t), domain=(-3, 3))
        self.assertLess(delta, 1e-14)
        _, delta = inf_norm1d(d(d(f)), lambda t: d(d(f), t), domain=(-3, 3))
        self.assertLess(delta, 1e-13)


class TestRaiseAllWarnings(ExprTestCase):
    def test_numpy_warnings(self):
        with raise_all_warnings():
            with self.assertRaises(FloatingPointError):
                np.float64(1.0) / np.float64(0.0)
        with np.errstate(all='ignore'):
            self.assertInf(np.float64(1.0) / np.float64(0.0))

    def test_expression_warning(self):
        with raise_all_warnings():
            with self.assertRaises(ExpressionWarning):
                warnings.warn("test", ExpressionWarning)

    def test_expressions_unaffected(self):
        x = Variable()
        with raise_all_warnings():
            self.assertInf((1 / x)(0))
            self.assertNan(ln(x)(-1))


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
