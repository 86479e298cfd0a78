#!/usr/bin/env python3
r"""@package autodiff.test_trig

Sine and cosine expression test suite.
"""

import unittest
import sys
import math

import numpy as np

from testutils import ExprTestCase
from .utils import lmap
from .basics import VariableExpression, ProductExpression, NegateExpression
from .trig import SinExpression, CosExpression


class TestSinExpression(ExprTestCase):
    r"""Test the SinExpression class."""
    def setUp(self):
        super(TestSinExpression, self).setUp()
        self.f = SinExpression(2.0 * VariableExpression())

    def test_evaluate(self):
        f, pi = self.f, math.pi
        self.assertAlmostEqual(f(0), 0, delta=1e-15)
        self.assertAlmostEqual(f(pi/8), 1/math.sqrt(2), delta=1e-15)
        self.assertAlmostEqual(f(pi/4), 1, delta=1e-15)
        self.assertAlmostEqual(f(pi/2), 0, delta=1e-15)

    def test_derivative(self):
        f, pi = self.f, math.pi
        df = f.derivative()
        for ev in (df, f.derivative):
            self.assertAlmostEqual(ev(0.0), 2, delta=1e-15)
            self.assertAlmostEqual(ev(pi/8), math.sqrt(2), delta=1e-15)
            self.assertAlmostEqual(ev(pi/4), 0, delta=1e-15)
            self.assertAlmostEqual(ev(pi/2), -2, delta=1e-15)

    def test_chain_rule_structure(self):
        f = self.f
        df = f.derivative()
        self.assertIsType(df, ProductExpression)
        self.assertIsType(df.f, CosExpression)
        self.assertIs(df.f.f, f.f)

    def test_space(self):
        space = np.linspace(-3, 3, 20)
        expected = lmap(lambda t: 2*math.cos(2*t), space)
        self.assertListAlmostEqual(lmap(self.f.derivative, space), expected, delta=1e-14)
        self.assertListAlmostEqual(lmap(self.f.derivative(), space), expected, delta=1e-14)

    def test_non_finite(self):
        x = VariableExpression()
        self.assertNan(SinExpression(x)(math.inf))
        self.assertNan(SinExpression(x).derivative(math.inf))


class TestCosExpression(ExprTestCase):
    r"""Test the CosExpression class."""
    def setUp(self):
        super(TestCosExpression, self).setUp()
        self.f = CosExpression(2.0 * VariableExpression())

    def test_evaluate(self):
        f, pi = self.f, math.pi
        self.assertAlmostEqual(f(0), 1, delta=1e-15)
        self.assertAlmostEqual(f(pi/8), 1/math.sqrt(2), delta=1e-15)
        self.assertAlmostEqual(f(pi/4), 0, delta=1e-15)
        self.assertAlmostEqual(f(pi/2), -1, delta=1e-15)

    def test_derivative(self):
        f, pi = self.f, math.pi
        df = f.derivative()
        for ev in (df, f.derivative):
            self.assertAlmostEqual(ev(0.0), 0, delta=1e-15)
            self.assertAlmostEqual(ev(pi/8), -math.sqrt(2), delta=1e-15)
            self.assertAlmostEqual(ev(pi/4), -2, delta=1e-15)
            self.assertAlmostEqual(ev(pi/2), 0, delta=1e-15)

    def test_chain_rule_structure(self):
        f = self.f
        df = f.derivative()
        self.assertIsType(df, ProductExpression)
        self.assertIsType(df.f, NegateExpression)
        self.assertIsType(df.f.f, SinExpression)
        self.assertIs(df.f.f.f, f.f)

    def test_nested(self):
        x = VariableExpression()
        f = CosExpression(SinExpression(x))
        for t in np.linspace(-2, 2, 9):
            expected = -math.sin(math.sin(t)) * math.cos(t)
            self.assertAlmostEqual(f.derivative(t), expected, places=14)
            self.assertAlmostEqual(f.derivative()(t), expected, places=14)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
