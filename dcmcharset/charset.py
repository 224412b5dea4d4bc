# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Defined terms of Specific Character Set and the ISO 2022 escape sequences
that switch between them.
"""

# default encoding if no encoding defined - corresponds to ISO IR 6 / ASCII
DEFAULT_ENCODING = "ISO_IR 6"

# the same code table, addressed by an ISO 2022 escape sequence
DEFAULT_ISO_2022_ENCODING = "ISO 2022 IR 6"

# converter charset name of the default code table
DEFAULT_CHARSET = "ASCII"

# Map DICOM Specific Character Set defined terms to converter charset names.
# The names are understood both by iconv and by Python's codecs registry.
# See DICOM Standard, Part 2, Section D.6.2 and Part 3, Tables C.12-2 to C.12-5
CONVERTER_CHARSETS = {
    "ISO_IR 6": DEFAULT_CHARSET,
    "ISO 2022 IR 6": DEFAULT_CHARSET,
    "ISO_IR 100": "ISO-8859-1",  # Latin 1
    "ISO 2022 IR 100": "ISO-8859-1",
    "ISO_IR 101": "ISO-8859-2",  # Latin 2
    "ISO 2022 IR 101": "ISO-8859-2",
    "ISO_IR 109": "ISO-8859-3",  # Latin 3
    "ISO 2022 IR 109": "ISO-8859-3",
    "ISO_IR 110": "ISO-8859-4",  # Latin 4
    "ISO 2022 IR 110": "ISO-8859-4",
    "ISO_IR 144": "ISO-8859-5",  # Cyrillic
    "ISO 2022 IR 144": "ISO-8859-5",
    "ISO_IR 127": "ISO-8859-6",  # Arabic
    "ISO 2022 IR 127": "ISO-8859-6",
    "ISO_IR 126": "ISO-8859-7",  # Greek
    "ISO 2022 IR 126": "ISO-8859-7",
    "ISO_IR 138": "ISO-8859-8",  # Hebrew
    "ISO 2022 IR 138": "ISO-8859-8",
    "ISO_IR 148": "ISO-8859-9",  # Latin 5, Turkish
    "ISO 2022 IR 148": "ISO-8859-9",
    # JIS X 0201; SHIFT_JIS is a superset of it
    "ISO_IR 13": "SHIFT_JIS",
    "ISO 2022 IR 13": "SHIFT_JIS",
    "ISO_IR 166": "TIS-620",  # Thai
    "ISO 2022 IR 166": "TIS-620",
    "ISO 2022 IR 87": "ISO-2022-JP",  # JIS X 0208
    "ISO 2022 IR 159": "ISO-2022-JP-1",  # JIS X 0212
    "ISO 2022 IR 149": "EUC-KR",  # KS X 1001
    "ISO 2022 IR 58": "EUC-CN",  # GB 2312
    "ISO_IR 192": "UTF-8",
    "GB18030": "GB18030",
    "GBK": "GBK",
}

# these encodings cannot be used with code extensions
# see DICOM Standard, Part 3, Table C.12-5
# and DICOM Standard, Part 5, Section 6.1.2.5.4, item d
STAND_ALONE_ENCODINGS = ("ISO_IR 192", "GBK", "GB18030")

# the escape character used to mark the start of escape sequences
ESC = b"\x1b"

# Map the bytes following ESC to the defined term they switch to, as defined
# in PS3.3 in tables C.12-3 (single-byte) and C.12-4 (multi-byte character
# sets).
ESCAPE_SEQUENCES = {
    b"(B": "ISO 2022 IR 6",  # used to switch to ASCII G0 code element
    b"-A": "ISO 2022 IR 100",
    b"-B": "ISO 2022 IR 101",
    b"-C": "ISO 2022 IR 109",
    b"-D": "ISO 2022 IR 110",
    b"-L": "ISO 2022 IR 144",
    b"-G": "ISO 2022 IR 127",
    b"-F": "ISO 2022 IR 126",
    b"-H": "ISO 2022 IR 138",
    b"-M": "ISO 2022 IR 148",
    b"-T": "ISO 2022 IR 166",
    # ISO-IR 13 (katakana, G1) and ISO-IR 14 (romaji, G0) are both handled
    # by SHIFT_JIS, so all four sequences select the same code table
    b"-I": "ISO 2022 IR 13",
    b"-J": "ISO 2022 IR 13",
    b")I": "ISO 2022 IR 13",
    b"(J": "ISO 2022 IR 13",
    b"$B": "ISO 2022 IR 87",
    b"$(D": "ISO 2022 IR 159",
    b"$)C": "ISO 2022 IR 149",
    b"$)A": "ISO 2022 IR 58",
}

# Escape sequences written by the encoder, one per defined term
TERMS_TO_ESCAPE_SEQUENCES = {
    "ISO 2022 IR 6": ESC + b"(B",
    "ISO 2022 IR 13": ESC + b")I",
    **{
        term: ESC + seq
        for seq, term in ESCAPE_SEQUENCES.items()
        if term not in ("ISO 2022 IR 6", "ISO 2022 IR 13")
    },
}

# ISO 2022 variants for Japanese define their own escape sequences. The
# converters for these need to see the escape sequences in the byte stream,
# so they must not be stripped before conversion.
INLINE_ESCAPE_CHARSETS = ("ISO-2022-JP", "ISO-2022-JP-1")


def normalize_term(term: str) -> str:
    """Return the defined term `term` with surrounding whitespace removed.

    Defined terms are compared strictly, so no other normalization (such
    as fixing common misspellings) is done.
    """
    return term.strip()


def converter_charset(term: str) -> str | None:
    """Return the converter charset name for the defined term `term`.

    Parameters
    ----------
    term : str
        A Specific Character Set defined term, e.g. ``'ISO_IR 100'`` or
        ``'ISO 2022 IR 100'``.

    Returns
    -------
    str | None
        The charset name used to open a converter, e.g. ``'ISO-8859-1'``,
        or ``None`` if the term is unknown.
    """
    return CONVERTER_CHARSETS.get(normalize_term(term))


def escape_sequence_length(seq: bytes) -> int:
    """Return the length of the escape sequence starting with `seq`.

    `seq` are the bytes following the ESC character; the returned length
    doesn't include ESC itself. All 3-byte sequences designate a multi-byte
    character set and start with ``$`` followed by one of ``(`` to ``/``.
    """
    if seq[:1] == b"$" and b"(" <= seq[1:2] <= b"/":
        return 3

    return 2


def term_for_escape(seq: bytes) -> str:
    """Return the defined term selected by the escape sequence `seq`.

    Parameters
    ----------
    seq : bytes
        The bytes following the ESC character. Bytes past the end of the
        escape sequence are ignored.

    Returns
    -------
    str
        The ISO 2022 defined term, e.g. ``'ISO 2022 IR 100'`` for ``b'-A'``,
        or an empty string if the escape sequence is unknown or truncated.
    """
    return ESCAPE_SEQUENCES.get(bytes(seq[: escape_sequence_length(seq)]), "")


def escape_sequence(term: str) -> bytes:
    """Return the full escape sequence (including ESC) that switches to the
    code table of the defined term `term`, or an empty byte string if there
    is none.

    Both the plain and the ISO 2022 spelling of a term are accepted.
    """
    term = normalize_term(term)
    if term.startswith("ISO_IR "):
        term = f"ISO 2022 IR {term[7:]}"

    return TERMS_TO_ESCAPE_SEQUENCES.get(term, b"")
