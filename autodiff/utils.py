r"""@package autodiff.utils

General utilities for storing objects on disk.
"""

from tempfile import NamedTemporaryFile
import logging
import os
import os.path as op

import numpy as np


__all__ = [
    "lmap",
    "save_to_file",
    "load_from_file",
]


_logger = logging.getLogger(__name__)


def lmap(func, *iterables):
    r"""Implementation of `map` that returns a list instead of a generator."""
    return list(map(func, *iterables))


def save_to_file(filename, data, overwrite=False, showname='data', mkpath=True):
    r"""Save an object to disk.

    This uses `numpy.save()` to store an object in a file. Use
    load_from_file() to restore the data afterwards.

    This operation is atomic for ``overwrite=True``. This means that any
    failure during saving will leave the original file untouched. This may
    happen e.g. when the data to save is not picklable.

    @param filename
        The file name to store the data in. An extension ``'.npy'`` will be
        added if not already there.
    @param overwrite
        Whether to overwrite an existing file with the same name. If `False`
        (default) and such a file exists, a `RuntimeError` is raised.
    @param showname
        Name to log in the confirmation message.
    @param mkpath
        If the parent folder(s) of the given filename don't exist, they are
        created if ``mkpath==True`` (default). Otherwise, an error is raised.

    @return The name of the written file.

    @b Notes

    The data will be put into a 1-element object array to avoid numpy
    converting it to a regular array.
    """
    filename = op.expanduser(filename)
    if not filename.endswith('.npy'):
        filename += '.npy'
    path = op.abspath(op.normpath(op.dirname(filename)))
    if mkpath:
        os.makedirs(path, exist_ok=True)
    if op.exists(filename) and not overwrite:
        raise RuntimeError("File already exists: %s" % filename)
    container = np.empty(1, dtype=object)
    container[0] = data
    tname = None
    try:
        with NamedTemporaryFile(dir=path, delete=False) as tfile:
            tname = tfile.name
            np.save(tfile, container, allow_pickle=True)
        # Check again, since writing may have taken some time.
        if op.exists(filename) and not overwrite:
            raise RuntimeError("File already exists: %s" % filename)
        os.replace(tname, filename)
        tname = None
        _logger.info("%s saved to: %s", showname, filename)
    finally:
        if tname is not None:
            try:
                os.unlink(tname) # clean up after any failures
            except OSError:
                pass
    return filename


def load_from_file(filename):
    r"""Load an object from disk.

    If the object had been stored using save_to_file(), the result should be a
    perfect copy of the object (including any sharing of sub-objects).

    @b Notes

    This assumes the object is the only element of an array stored in the
    file, which will be the case if the file was created using
    save_to_file(). If the data is not a single-element array, it is returned
    as is.
    """
    filename = op.expanduser(filename)
    result = np.load(filename, allow_pickle=True)
    _logger.info("Loaded: %s", filename)
    if result.shape == (1,):
        return result[0]
    return result
