# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Parse the value of Specific Character Set (0008,0005)."""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from dcmcharset.charset import (
    CONVERTER_CHARSETS,
    DEFAULT_CHARSET,
    DEFAULT_ENCODING,
    DEFAULT_ISO_2022_ENCODING,
    STAND_ALONE_ENCODINGS,
    converter_charset,
    normalize_term,
)
from dcmcharset.config import logger
from dcmcharset.errors import UnresolvableCharsetError
from dcmcharset.misc import handle_invalid_value


# DICOM PS3.5 6.1.2.5.3 says:
#   if (0008,0005) is multi-valued, then value 1 (or the default if blank)
#   is used until a code extension escape sequence is hit; only the
#   values of (0008,0005) may be switched to.


class SpecificCharacterSet(Sequence[str]):
    """An ordered, immutable set of Specific Character Set defined terms.

    The first term is the code table active at the start of each string
    value, the others are the ones that escape sequences may switch to.
    Duplicate terms are dropped, keeping the first occurrence.

    Instances are usually created with :func:`parse_charset_declaration`,
    which applies the DICOM default encoding rules. Creating one directly
    only normalizes and de-duplicates the terms.

    Parameters
    ----------
    terms : Iterable[str], optional
        The defined terms, in declaration order.
    """

    __slots__ = ("_terms",)

    def __init__(self, terms: Iterable[str] = ()) -> None:
        if isinstance(terms, str):
            raise TypeError(
                "'terms' must be a sequence of defined terms, not a str - use "
                "parse_charset_declaration() to parse an element value"
            )

        self._terms = tuple(dict.fromkeys(normalize_term(t) for t in terms))

    @overload
    def __getitem__(self, index: int) -> str:
        pass  # pragma: no cover

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]:
        pass  # pragma: no cover

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        return self._terms[index]

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._terms

    def __eq__(self, other: Any) -> Any:
        if isinstance(other, SpecificCharacterSet):
            return self._terms == other._terms

        if isinstance(other, Sequence) and not isinstance(other, str | bytes):
            return self._terms == tuple(other)

        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._terms)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._terms)!r})"

    def __str__(self) -> str:
        return "\\".join(self._terms)

    @property
    def initial(self) -> str | None:
        """Return the term active at the start of a string value, or
        ``None`` if there are no terms.
        """
        return self._terms[0] if self._terms else None

    @property
    def charsets(self) -> list[str | None]:
        """Return the converter charset names of the terms, ``None`` for
        unknown terms.
        """
        return [converter_charset(term) for term in self._terms]


def _split_value(value: str | Sequence[str]) -> list[str]:
    """Return the values of a Specific Character Set element value."""
    if not isinstance(value, str):
        return list(value)

    if not value:
        return []

    # a trailing delimiter doesn't add an empty value, but a lone
    # delimiter is a single empty value
    tokens = value.split("\\")
    if len(tokens) > 1 and not tokens[-1]:
        tokens.pop()

    return tokens


def parse_charset_declaration(
    value: str | Sequence[str] | None,
) -> SpecificCharacterSet:
    """Return the working set of defined terms for a Specific Character Set
    element value.

    An empty first value means that the default character repertoire
    (ISO-IR 6) is active at the start of each string. In this case both the
    plain and the ISO 2022 spelling of the default term are added, so that
    escape sequences may switch back to it. Explicit ISO-IR 6 values aren't
    added, the default is always implied. Duplicate values are ignored with
    a warning.

    Parameters
    ----------
    value : str | Sequence[str] | None
        The element value, either as the backslash separated raw value
        (e.g. ``'\\\\ISO 2022 IR 87'``) or already split into its values.
        ``None`` or an empty value gives the default encoding.

    Returns
    -------
    SpecificCharacterSet
        The defined terms in declaration order, never empty. If none of the
        values is usable a warning is issued and the default encoding is
        used.

    Raises
    ------
    UnresolvableCharsetError
        If ``config.settings.reading_validation_mode`` is ``RAISE`` and a
        value isn't a known defined term.
    """
    if value is None:
        value = ""

    tokens = _split_value(value)
    if not tokens:
        return SpecificCharacterSet([DEFAULT_ENCODING])

    terms: list[str] = []
    has_default = False
    for index, token in enumerate(tokens):
        term = normalize_term(token)
        if index == 0 and not term:
            terms.append(DEFAULT_ENCODING)
            terms.append(DEFAULT_ISO_2022_ENCODING)
            has_default = True
            continue

        if term in terms:
            handle_invalid_value(
                f"Found duplicate Specific Character Set '{term}' - ignoring"
            )
            continue

        charset = CONVERTER_CHARSETS.get(term)
        if charset is None:
            handle_invalid_value(
                f"Unknown value for Specific Character Set '{term}' - ignoring",
                UnresolvableCharsetError,
            )
            continue

        # ISO-IR 6 isn't a formally recognized defined term
        if charset == DEFAULT_CHARSET:
            has_default = True
            continue

        terms.append(term)

    standalone = [t for t in terms if t in STAND_ALONE_ENCODINGS]
    if standalone and len(terms) > 1:
        handle_invalid_value(
            f"Value '{', '.join(standalone)}' for Specific Character Set does "
            "not allow code extensions"
        )

    if not terms:
        if not has_default:
            handle_invalid_value(
                f"Found no suitable Specific Character Set in '{value}' - "
                f"using '{DEFAULT_ENCODING}'"
            )
        terms.append(DEFAULT_ENCODING)

    logger.debug(f"Specific Character Set {tokens} -> {terms}")

    return SpecificCharacterSet(terms)


CharacterSetType = SpecificCharacterSet | Sequence[str] | str | None


def as_character_set(character_set: CharacterSetType) -> SpecificCharacterSet:
    """Return `character_set` as a :class:`SpecificCharacterSet`.

    A str (or ``None``) is parsed as a Specific Character Set element value,
    any other sequence is used as the list of terms as is.
    """
    if isinstance(character_set, SpecificCharacterSet):
        return character_set

    if character_set is None or isinstance(character_set, str):
        return parse_charset_declaration(character_set)

    return SpecificCharacterSet(character_set)
