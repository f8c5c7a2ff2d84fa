# ConsoleTools project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
ConsoleTools library: colored strings, a small format mini-language,
typed console input and validation.

"""

from __future__ import annotations

import logging as _logging
import os as _os
import sys as _sys
import warnings

__version__ = "1.0.0"

__all__ = [
    "ConsoleToolsWarning",
    "enable_internal_logging",
]


class ConsoleToolsWarning(RuntimeWarning):
    """
    Base class for all runtime warnings.

    """


_logger = _logging.getLogger("consoletools.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable internal logging.

    This function enables :func:`logging.captureWarnings`, enables printing
    of :class:`ConsoleToolsWarning` messages, and sets up logging channels
    ``consoletools.internal`` and ``py.warnings``.

    :param path:
        if given, adds handlers that output internal log messages to the given file.
    :param level:
        configures logging level for file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation
        from ``consoletools.internal`` and ``py.warnings`` to the root logger.

    """

    if path:
        if level is None:
            level = _os.environ.get("CONSOLETOOLS_DEBUG", "").strip().upper() or "DEBUG"
        if level in ["1", "Y", "YES", "TRUE"]:
            level = "DEBUG"
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.setLevel(level)
        _logger.addHandler(file_handler)
        _logging.getLogger("py.warnings").addHandler(file_handler)

    _logging.captureWarnings(True)
    warnings.simplefilter("default", category=ConsoleToolsWarning)

    if propagate is not None:
        _logging.getLogger("py.warnings").propagate = propagate
        _logger.propagate = propagate


_debug = (
    "CONSOLETOOLS_DEBUG" in _os.environ or "CONSOLETOOLS_DEBUG_FILE" in _os.environ
)
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("CONSOLETOOLS_DEBUG_FILE") or "consoletools.log",
        propagate=False,
    )
else:
    warnings.simplefilter("ignore", category=ConsoleToolsWarning, append=True)
