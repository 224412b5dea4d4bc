# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Decode character strings that may switch code tables with ISO 2022
escape sequences.
"""

from collections.abc import Sequence

from dcmcharset import config
from dcmcharset.charset import (
    ESC,
    INLINE_ESCAPE_CHARSETS,
    converter_charset,
    escape_sequence_length,
    term_for_escape,
)
from dcmcharset.config import logger
from dcmcharset.converter import Converter, ConverterHandle, default_converter
from dcmcharset.declaration import (
    CharacterSetType,
    SpecificCharacterSet,
    as_character_set,
    parse_charset_declaration,
)
from dcmcharset.errors import (
    ConverterLifecycleError,
    UndeclaredSwitchTargetError,
    UnresolvableCharsetError,
)
from dcmcharset.misc import handle_invalid_value
from dcmcharset.util.buffers import UTF8Buffer


def _find_escape(value: bytes, start: int) -> int:
    """Return the offset of the first ESC at or after `start`, or the
    length of `value` if there is none.
    """
    offset = value.find(ESC, start)
    return len(value) if offset == -1 else offset


def _open(converter: Converter, charset: str) -> ConverterHandle | None:
    try:
        return converter.open(charset)
    except ConverterLifecycleError as exc:
        handle_invalid_value(str(exc), ConverterLifecycleError, stacklevel=3)

    return None


def decode_to_utf8(
    value: bytes,
    character_set: CharacterSetType,
    converter: Converter | None = None,
) -> str:
    """Return the decoded text of the encoded character string `value`.

    The string starts in the code table of the first term of
    `character_set`. If more than one term is declared, each ESC character
    starts an ISO 2022 escape sequence that switches to another declared
    code table for the rest of the string, or until the next escape
    sequence. See DICOM Standard Part 5, Sections 6.1.2.4 and 6.1.2.5.

    Parameters
    ----------
    value : bytes
        The encoded string value.
    character_set : SpecificCharacterSet | Sequence[str] | str | None
        The working set of defined terms, usually returned by
        :func:`~dcmcharset.declaration.parse_charset_declaration`. A str is
        parsed as the Specific Character Set element value.
    converter : Converter | None, optional
        The single charset converter to use, default
        :data:`~dcmcharset.converter.default_converter`.

    Returns
    -------
    str
        The decoded text, ending at the first null character. If the value
        can't be completely decoded, a warning is issued and the text decoded
        so far is returned.

    Raises
    ------
    CharsetError
        If ``config.settings.reading_validation_mode`` is ``RAISE`` and the
        value can't be completely decoded.
    """
    character_set = as_character_set(character_set)
    converter = converter or default_converter
    if config.debugging:
        logger.debug(
            f"Call to decode_to_utf8() with {len(value)} bytes and Specific "
            f"Character Set '{character_set}'"
        )

    if not character_set:
        handle_invalid_value(
            "Unable to decode a value with an empty Specific Character Set",
            UnresolvableCharsetError,
        )
        return ""

    term = character_set[0]
    charset = converter_charset(term)
    if charset is None:
        handle_invalid_value(
            f"Unable to decode a value with the unknown Specific Character "
            f"Set '{term}'",
            UnresolvableCharsetError,
        )
        return ""

    handle = _open(converter, charset)
    if handle is None:
        return ""

    value = bytes(value)
    output = UTF8Buffer(len(value))

    try:
        # a single code table can't be switched, so escape sequences are
        # left for the converter
        if len(character_set) == 1:
            output.write(handle.convert(value))
            return output.getvalue()

        length = len(value)
        cursor = 0
        # the ESC at the cursor is kept for ISO 2022 Japanese converters
        inline_escape = False
        while cursor < length:
            start = cursor + 1 if inline_escape else cursor
            fragment_end = _find_escape(value, start)
            if fragment_end > cursor:
                output.write(handle.convert(value[cursor:fragment_end]))

            logger.debug(
                f"{cursor:08x}: decoded {fragment_end - cursor} bytes as '{term}'"
            )
            if fragment_end == length:
                break

            sequence = value[fragment_end + 1 : fragment_end + 4]
            next_term = term_for_escape(sequence)
            next_charset = converter_charset(next_term) if next_term else None
            if next_charset is None:
                handle_invalid_value(
                    f"Found unknown escape sequence {ESC + sequence[:3]!r} at "
                    f"offset {fragment_end} in encoded string value - "
                    "ignoring the rest of the value",
                    UnresolvableCharsetError,
                )
                break

            if next_term not in character_set:
                handle_invalid_value(
                    f"Escape sequence at offset {fragment_end} switches to "
                    f"'{next_term}', which is not in Specific Character Set "
                    f"'{character_set}' - ignoring the rest of the value",
                    UndeclaredSwitchTargetError,
                )
                break

            closing, handle = handle, None
            try:
                closing.close()
            except ConverterLifecycleError as exc:
                handle_invalid_value(str(exc), ConverterLifecycleError)
                break

            handle = _open(converter, next_charset)
            if handle is None:
                break

            logger.debug(f"{fragment_end:08x}: switching to '{next_term}'")
            term = next_term
            if next_charset in INLINE_ESCAPE_CHARSETS:
                cursor = fragment_end
                inline_escape = True
            else:
                cursor = fragment_end + 1 + escape_sequence_length(sequence)
                inline_escape = False

        return output.getvalue()
    finally:
        if handle is not None:
            try:
                handle.close()
            except ConverterLifecycleError as exc:
                logger.debug(str(exc))


class CharStringDecoder:
    """Decode character strings with a fixed Specific Character Set.

    Parameters
    ----------
    specific_character_set : str | Sequence[str] | None
        The value of the Specific Character Set element, parsed with
        :func:`~dcmcharset.declaration.parse_charset_declaration`.
    converter : Converter | None, optional
        The single charset converter to use, default
        :data:`~dcmcharset.converter.default_converter`.

    Examples
    --------

    >>> decoder = CharStringDecoder("\\\\ISO 2022 IR 100")
    >>> decoder.decode(b"Buc^J\\x1b-A\\xe9r\\xf4me")
    'Buc^Jérôme'
    """

    def __init__(
        self,
        specific_character_set: str | Sequence[str] | None = None,
        converter: Converter | None = None,
    ) -> None:
        self.converter = converter
        self.specific_character_set = specific_character_set

    @property
    def specific_character_set(self) -> SpecificCharacterSet:
        """Return the working set of defined terms."""
        return self._character_set

    @specific_character_set.setter
    def specific_character_set(self, value: str | Sequence[str] | None) -> None:
        """Parse and set a new Specific Character Set element value."""
        if isinstance(value, SpecificCharacterSet):
            self._character_set = value
        else:
            self._character_set = parse_charset_declaration(value)

    def decode(self, value: bytes) -> str:
        """Return the decoded text of `value`, see :func:`decode_to_utf8`."""
        return decode_to_utf8(value, self._character_set, self.converter)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._character_set)!r})"
