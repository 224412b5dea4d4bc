# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Miscellaneous helper functions"""

import logging
import warnings

from dcmcharset import config


LOGGER = logging.getLogger("dcmcharset")


def warn_and_log(
    msg: str, category: type[Warning] | None = None, stacklevel: int = 1
) -> None:
    """Send warning message `msg` to the logger.

    Parameters
    ----------
    msg : str
        The warning message.
    category : type[Warning] | None, optional
        The warning category class, defaults to ``UserWarning``.
    stacklevel : int, optional
        The stack level to refer to, relative to where `warn_and_log` is used.
    """
    LOGGER.warning(msg)
    warnings.warn(msg, category, stacklevel=stacklevel + 1)


def handle_invalid_value(
    msg: str, exc_type: type[Exception] | None = None, stacklevel: int = 1
) -> None:
    """Report a problem found while parsing or decoding, according to
    ``config.settings.reading_validation_mode``.

    Parameters
    ----------
    msg : str
        Description of the problem.
    exc_type : type[Exception] | None, optional
        The exception raised in ``RAISE`` mode. If ``None``, the problem is
        never fatal and only a warning is issued in ``RAISE`` mode.
    stacklevel : int, optional
        The stack level to refer to, relative to where this function is used.

    Raises
    ------
    Exception
        An instance of `exc_type` if the validation mode is ``RAISE``.
    """
    mode = config.settings.reading_validation_mode
    if mode == config.IGNORE:
        LOGGER.debug(msg)
        return

    if mode == config.RAISE and exc_type is not None:
        raise exc_type(msg)

    warn_and_log(msg, stacklevel=stacklevel + 1)
