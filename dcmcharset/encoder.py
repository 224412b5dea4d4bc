# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Encode text into character strings for a Specific Character Set,
adding the ISO 2022 escape sequences needed to switch code tables.
"""

import codecs

from dcmcharset import config
from dcmcharset.charset import (
    DEFAULT_CHARSET,
    INLINE_ESCAPE_CHARSETS,
    converter_charset,
    escape_sequence,
)
from dcmcharset.declaration import CharacterSetType, as_character_set
from dcmcharset.misc import warn_and_log


def _charsets(character_set: CharacterSetType) -> list[tuple[str, str]]:
    """Return the (term, charset) pairs of the known terms in
    `character_set` that have a codec.
    """
    pairs = []
    for term in as_character_set(character_set):
        charset = converter_charset(term)
        if charset is None:
            continue

        try:
            codecs.lookup(charset)
        except LookupError:
            continue

        pairs.append((term, charset))

    return pairs


def encode_string(value: str, character_set: CharacterSetType) -> bytes:
    """Convert a unicode string into a byte string using the given
    Specific Character Set.

    Parameters
    ----------
    value : str
        The unicode string as presented to the user.
    character_set : SpecificCharacterSet | Sequence[str] | str | None
        The working set of defined terms, a str is parsed as the Specific
        Character Set element value.

    Returns
    -------
    bytes
        The encoded string. If the value could not be encoded with any of
        the given code tables, and ``config.settings.writing_validation_mode``
        isn't ``RAISE``, a warning is issued, and the value is encoded using
        the first code table with replacement characters, resulting in data
        loss.

    Raises
    ------
    UnicodeEncodeError
        If ``config.settings.writing_validation_mode`` is ``RAISE`` and
        `value` could not be encoded with the given code tables.
    """
    charsets = _charsets(character_set)
    if not charsets:
        charsets = [("ISO_IR 6", DEFAULT_CHARSET)]

    for i, (term, charset) in enumerate(charsets):
        try:
            encoded = value.encode(charset)
        except UnicodeError:
            continue

        if i > 0 and charset not in INLINE_ESCAPE_CHARSETS:
            return escape_sequence(term) + encoded

        return encoded

    # if we have more than one code table, we retry encoding by splitting
    # `value` into chunks that can be encoded with one of them
    if len(charsets) > 1:
        try:
            return _encode_string_parts(value, charsets)
        except ValueError:
            pass

    # all attempts failed - raise or warn and encode with replacement
    # characters
    first_charset = charsets[0][1]
    mode = config.settings.writing_validation_mode
    if mode == config.RAISE:
        # force raising a valid UnicodeEncodeError
        value.encode(first_charset)

    if mode == config.WARN:
        warn_and_log(
            f"Failed to encode value with encodings: "
            f"{', '.join(c for _, c in charsets)} - using replacement "
            "characters in encoded string"
        )

    return value.encode(first_charset, errors="replace")


def _encode_string_parts(value: str, charsets: list[tuple[str, str]]) -> bytes:
    """Convert a unicode string into a byte string using the given
    code tables.

    This is invoked if :func:`encode_string` failed to encode `value` with a
    single code table. We try instead to use different code tables for
    different parts of the string, using the one that can encode the longest
    part of the rest of the string as we go along.

    Parameters
    ----------
    value : str
        The unicode string as presented to the user.
    charsets : list[tuple[str, str]]
        The (defined term, converter charset) pairs to choose from, the first
        one is active at the start of the string.

    Returns
    -------
    bytes
        The encoded string, including the escape sequences needed to switch
        between different code tables.

    Raises
    ------
    ValueError
        If `value` could not be encoded with the given code tables.
    """
    encoded = bytearray()
    active_charset = charsets[0][1]
    unencoded_part = value
    while unencoded_part:
        # find the code table that can encode the longest part of the rest
        # of the string still to be encoded
        max_index = 0
        best: tuple[str, str] | None = None
        for term, charset in charsets:
            try:
                unencoded_part.encode(charset)
                # if we get here, the whole rest of the value can be encoded
                best = (term, charset)
                max_index = len(unencoded_part)
                break
            except UnicodeEncodeError as e:
                if e.start > max_index:
                    # e.start is the index of first character failed to encode
                    max_index = e.start
                    best = (term, charset)

        # none of the code tables can encode the first character - give up
        if best is None:
            raise ValueError(
                f"Unable to encode {unencoded_part[0]!r} with any of "
                f"{', '.join(c for _, c in charsets)}"
            )

        term, charset = best
        encoded_part = unencoded_part[:max_index].encode(charset)
        if charset in INLINE_ESCAPE_CHARSETS:
            # the codec adds its own escape sequences and always switches
            # back to ASCII at the end
            active_charset = DEFAULT_CHARSET
        elif charset != active_charset:
            encoded += escape_sequence(term)
            active_charset = charset

        encoded += encoded_part
        unencoded_part = unencoded_part[max_index:]

    # unencoded_part is empty - we are done, return the encoded string
    return bytes(encoded)
