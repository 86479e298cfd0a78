#!/usr/bin/env python3

from tempfile import TemporaryDirectory
from unittest import mock
import unittest
import sys
import logging
import os.path as op

from testutils import ExprTestCase
from .common import ExpressionWarning
from .config import get_config, reload_config, config_files, setup_logging
from .contexts import get_context
from .basics import VariableExpression
from .evaluators import ExpressionEvaluator


class TestConfig(ExprTestCase):
    def setUp(self):
        super(TestConfig, self).setUp()
        self.addCleanup(reload_config)

    def _write_config(self, tmpdir, content):
        fname = op.join(tmpdir, 'autodiff.cfg')
        with open(fname, 'w') as f:
            f.write(content)
        return fname

    def test_defaults(self):
        with mock.patch.dict('os.environ', {'AUTODIFF_CONFIG': ''}):
            config = reload_config()
        self.assertIs(get_config(), config)
        self.assertIn(config.get('numeric', 'dtype'), ['float32', 'float64', 'longdouble'])
        self.assertGreater(config.getint('diagnostics', 'swell_warning_nodes'), 0)
        self.assertTrue(config.get('logging', 'level'))

    def test_environment_override(self):
        with TemporaryDirectory() as tmpdir:
            fname = self._write_config(tmpdir, "\n".join([
                "[numeric]",
                "dtype = float32",
                "[diagnostics]",
                "swell_warning_nodes = 7",
            ]))
            with mock.patch.dict('os.environ', {'AUTODIFF_CONFIG': fname}):
                self.assertEqual(config_files()[-1], fname)
                with self.assertLogs('autodiff.config', level='DEBUG') as cm:
                    reload_config()
                self.assertIn(fname, cm.output[0])
        config = get_config()
        self.assertEqual(config.get('numeric', 'dtype'), 'float32')
        self.assertIs(get_context(), get_context('float32'))
        self.assertIs(VariableExpression().context, get_context('float32'))
        x = VariableExpression()
        ev = ExpressionEvaluator(x * x * x)
        with self.assertWarns(ExpressionWarning):
            ev.derivative_expression(1)

    def test_explicit_context_unaffected(self):
        with TemporaryDirectory() as tmpdir:
            fname = self._write_config(tmpdir, "[numeric]\ndtype = longdouble\n")
            with mock.patch.dict('os.environ', {'AUTODIFF_CONFIG': fname}):
                reload_config()
        self.assertIs(VariableExpression(dtype='float64').context,
                      get_context('float64'))

    def test_missing_file(self):
        with mock.patch.dict('os.environ', {'AUTODIFF_CONFIG': '/nonexistent/autodiff.cfg'}):
            config = reload_config()
        self.assertTrue(config.has_section('numeric'))


class TestSetupLogging(ExprTestCase):
    def setUp(self):
        super(TestSetupLogging, self).setUp()
        logger = logging.getLogger('autodiff')
        level, handlers = logger.level, list(logger.handlers)
        def _restore():
            logger.setLevel(level)
            logger.handlers[:] = handlers
        self.addCleanup(_restore)

    def test_level(self):
        logger = setup_logging('debug')
        self.assertIs(logger, logging.getLogger('autodiff'))
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertTrue(logger.handlers)
        count = len(logger.handlers)
        setup_logging(logging.INFO)
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual(len(logger.handlers), count)

    def test_configured_level(self):
        logger = setup_logging()
        level = get_config().get('logging', 'level').upper()
        self.assertEqual(logging.getLevelName(logger.level), level)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
