# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Module for dcmcharset exception classes"""


class CharsetError(Exception):
    """Base class for the errors raised when a character string can't be
    decoded with its Specific Character Set.

    These are only raised when ``config.settings.reading_validation_mode`` is
    ``RAISE``, otherwise the problem is logged and the best partial result
    is returned instead.
    """


class UnresolvableCharsetError(CharsetError, LookupError):
    """Raised when a defined term has no known converter charset.

    May happen either when parsing a Specific Character Set value or when an
    escape sequence selects a code table that isn't in the catalog.
    """

    def __init__(self, *args: object) -> None:
        if not args:
            args = ("Unknown Specific Character Set defined term",)
        super().__init__(*args)


class UndeclaredSwitchTargetError(CharsetError):
    """Raised when an escape sequence switches to a code table that wasn't
    declared in the Specific Character Set.
    """


class ConverterLifecycleError(CharsetError):
    """Raised when the underlying byte converter can't be opened or closed."""
