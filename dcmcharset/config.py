# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""dcmcharset configuration options."""

# doc strings following items are picked up by sphinx for documentation

from collections.abc import Generator
from contextlib import contextmanager
import logging
import os
import threading


# Logging system and debug function to change logging level
logger = logging.getLogger("dcmcharset")
logger.addHandler(logging.NullHandler())


IGNORE = 0
"""If one of the validation modes is set to this value, no value validation
will be performed, problems are only logged at debug level.
"""

WARN = 1
"""If one of the validation modes is set to this value, a warning is issued if
a Specific Character Set value or an encoded string is invalid, and the best
partial result is returned.
"""

RAISE = 2
"""If one of the validation modes is set to this value, an exception is raised
if a Specific Character Set value or an encoded string is invalid.
"""

_MODE_NAMES = {"IGNORE": IGNORE, "WARN": WARN, "RAISE": RAISE}


def _default_validation_mode() -> int:
    """Return the validation mode set by the ``DCMCHARSET_VALIDATION``
    environment variable, or ``WARN`` if it isn't set.
    """
    name = os.environ.get("DCMCHARSET_VALIDATION", "WARN").strip().upper()
    try:
        return _MODE_NAMES[name]
    except KeyError:
        raise ValueError(
            f"Invalid value '{name}' for DCMCHARSET_VALIDATION, must be one "
            f"of {', '.join(_MODE_NAMES)}"
        )


def _check_mode(value: int) -> None:
    if value not in (IGNORE, WARN, RAISE):
        raise ValueError(
            f"Invalid validation mode {value!r}, must be one of "
            "config.IGNORE, config.WARN or config.RAISE"
        )


class Settings:
    """Collection of several configuration values.
    Accessed via the singleton :attr:`settings`.

    The validation mode is kept per thread, so decoding in one thread with
    ``RAISE`` doesn't change the behavior of another thread.
    """

    def __init__(self) -> None:
        self._local = threading.local()
        self._default_mode = _default_validation_mode()

    @property
    def reading_validation_mode(self) -> int:
        """Defines behavior of validation while decoding character strings.

        * :attr:`WARN`: a warning is issued, the string is decoded as far as
          possible (default).
        * :attr:`RAISE`: an exception is raised instead.
        * :attr:`IGNORE`: the string is decoded as far as possible, without
          a warning.
        """
        return getattr(self._local, "reading_validation_mode", self._default_mode)

    @reading_validation_mode.setter
    def reading_validation_mode(self, value: int) -> None:
        _check_mode(value)
        self._local.reading_validation_mode = value

    @property
    def writing_validation_mode(self) -> int:
        """Defines behavior of validation while encoding character strings.

        * :attr:`WARN`: a warning is issued, characters that can't be
          encoded are replaced (default).
        * :attr:`RAISE`: a :class:`UnicodeEncodeError` is raised instead.
        * :attr:`IGNORE`: characters that can't be encoded are replaced
          without a warning.
        """
        return getattr(self._local, "writing_validation_mode", self._default_mode)

    @writing_validation_mode.setter
    def writing_validation_mode(self, value: int) -> None:
        _check_mode(value)
        self._local.writing_validation_mode = value


settings = Settings()
"""The global configuration object of type :class:`Settings` to access some
of the settings. More settings may move here in later versions.
"""


@contextmanager
def strict_reading() -> Generator[None, None, None]:
    """Context manager to temporarily enable strict value validation
    for reading."""
    original_reading_mode = settings.reading_validation_mode
    try:
        settings.reading_validation_mode = RAISE
        yield
    finally:
        settings.reading_validation_mode = original_reading_mode


@contextmanager
def disable_value_validation() -> Generator[None, None, None]:
    """Context manager to temporarily disable value validation
    both for reading and writing.
    """
    original_reading_mode = settings.reading_validation_mode
    original_writing_mode = settings.writing_validation_mode
    try:
        settings.reading_validation_mode = IGNORE
        settings.writing_validation_mode = IGNORE
        yield
    finally:
        settings.reading_validation_mode = original_reading_mode
        settings.writing_validation_mode = original_writing_mode


debugging: bool


def debug(debug_on: bool = True, default_handler: bool = True) -> None:
    """Turn on/off debugging of decoding.

    When debugging is on, every code table switch and every decoded fragment
    is logged.

    Parameters
    ----------
    debug_on : bool, optional
        If ``True`` (default) then turn on debugging, ``False`` to turn off.
    default_handler : bool, optional
        If ``True`` (default) then use :class:`logging.StreamHandler` as the
        handler for log messages.
    """
    global debugging

    logger.handlers = []
    logger.addHandler(logging.NullHandler())

    if default_handler:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if debug_on:
        logger.setLevel(logging.DEBUG)
        debugging = True
    else:
        logger.setLevel(logging.WARNING)
        debugging = False


# force level=WARNING, in case logging default is set differently (issue 103)
debug(False, False)
