r"""@package autodiff.config

Configuration of the autodiff package.

Settings are read using `configparser` in the following order, later files
overriding earlier ones:
    * the built-in defaults in this module
    * the `config.cfg` shipped next to this module
    * `~/.autodiff.cfg`
    * the file named by the `AUTODIFF_CONFIG` environment variable

Missing files are silently skipped. The parsed configuration is cached; use
reload_config() after changing any of the files at runtime.
"""

import logging
import os
import os.path as op
from configparser import ConfigParser


__all__ = [
    "get_config",
    "reload_config",
    "setup_logging",
]


_DEFAULTS = {
    'numeric': {
        'dtype': 'float64',
    },
    'diagnostics': {
        'swell_warning_nodes': '10000',
    },
    'logging': {
        'level': 'WARNING',
    },
}

_config = None


def config_files():
    r"""Return the list of configuration files considered (in order)."""
    files = [
        op.join(op.dirname(op.realpath(__file__)), 'config.cfg'),
        op.expanduser(op.join('~', '.autodiff.cfg')),
    ]
    env_file = os.environ.get('AUTODIFF_CONFIG')
    if env_file:
        files.append(op.expanduser(env_file))
    return files


def reload_config():
    r"""Re-read all configuration files and return the new configuration."""
    global _config
    config = ConfigParser()
    config.read_dict(_DEFAULTS)
    read = config.read(config_files())
    logging.getLogger(__name__).debug("Read config files: %s", read)
    _config = config
    return config


def get_config():
    r"""Return the (cached) `ConfigParser` holding the current settings."""
    if _config is None:
        return reload_config()
    return _config


def setup_logging(level=None):
    r"""Attach a stream handler to the package logger.

    @param level
        Logging level (name or number). By default, the `[logging] level`
        setting is used.
    """
    if level is None:
        level = get_config().get('logging', 'level')
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger('autodiff')
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s:%(name)s: %(message)s")
        )
        logger.addHandler(handler)
    return logger
