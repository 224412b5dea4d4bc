# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Single charset to UTF-8 byte converters.

The decoder only needs something that can be opened for a named source
charset, fed byte fragments and closed again. :class:`CodecsConverter` does
that with Python's :mod:`codecs` registry; any object implementing the
:class:`Converter` protocol may be used instead.
"""

import codecs
from typing import Protocol

from dcmcharset.config import logger
from dcmcharset.errors import ConverterLifecycleError


class ConverterHandle(Protocol):
    """An open conversion from one source charset to UTF-8."""

    def convert(self, data: bytes) -> bytes:
        """Return `data` converted to UTF-8.

        Conversion is best effort: output stops at the first byte that can't
        be converted, and no exception is raised.
        """
        ...  # pragma: no cover

    def close(self) -> None:
        """Release the handle, raising :class:`ConverterLifecycleError` on
        failure.
        """
        ...  # pragma: no cover


class Converter(Protocol):
    """Factory for :class:`ConverterHandle` instances."""

    def open(self, charset: str) -> ConverterHandle:
        """Return a handle converting from `charset` to UTF-8, raising
        :class:`ConverterLifecycleError` if `charset` isn't supported.
        """
        ...  # pragma: no cover


class CodecsHandle:
    """Converter handle wrapping an incremental decoder from :mod:`codecs`.

    The decoder state (e.g. the active shift state of ISO-2022-JP) carries
    over between calls to :meth:`convert` on the same handle.
    """

    def __init__(self, charset: str, decoder: codecs.IncrementalDecoder) -> None:
        self.charset = charset
        self._decoder: codecs.IncrementalDecoder | None = decoder

    @property
    def closed(self) -> bool:
        """Return ``True`` if the handle has been closed."""
        return self._decoder is None

    def convert(self, data: bytes) -> bytes:
        """Return the UTF-8 encoded conversion of `data`.

        If `data` contains bytes that aren't valid in the source charset,
        only the part preceding the first of them is converted.

        Parameters
        ----------
        data : bytes
            The bytes to convert.

        Returns
        -------
        bytes
            The UTF-8 encoded result, empty if the handle is closed.
        """
        decoder = self._decoder
        if decoder is None or not data:
            return b""

        state = decoder.getstate()
        try:
            text = decoder.decode(data, final=True)
        except UnicodeDecodeError as exc:
            logger.debug(
                f"Conversion from {self.charset} stopped at invalid byte "
                f"offset {exc.start}"
            )
            decoder.setstate(state)
            try:
                text = decoder.decode(data[: exc.start], final=True)
            except UnicodeDecodeError:
                decoder.reset()
                return b""

        return text.encode("utf-8")

    def close(self) -> None:
        """Close the handle.

        Raises
        ------
        ConverterLifecycleError
            If the handle has already been closed.
        """
        if self._decoder is None:
            raise ConverterLifecycleError(
                f"The converter for '{self.charset}' has already been closed"
            )

        self._decoder = None

    def __repr__(self) -> str:
        status = "closed" if self.closed else "open"
        return f"<{type(self).__name__} '{self.charset}' ({status})>"


class CodecsConverter:
    """Open :class:`CodecsHandle` instances for charset names known to
    :mod:`codecs`.
    """

    def open(self, charset: str) -> CodecsHandle:
        """Return a new handle converting from `charset` to UTF-8.

        Parameters
        ----------
        charset : str
            The source charset name, such as ``'ISO-8859-1'``.

        Raises
        ------
        ConverterLifecycleError
            If there is no codec for `charset`.
        """
        try:
            decoder = codecs.getincrementaldecoder(charset)(errors="strict")
        except LookupError as exc:
            raise ConverterLifecycleError(
                f"Unable to open a converter for '{charset}'"
            ) from exc

        return CodecsHandle(charset, decoder)


default_converter = CodecsConverter()
"""The :class:`CodecsConverter` used when no other converter is given."""
