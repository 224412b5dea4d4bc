# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Unit tests for encoding character strings."""

import warnings

import pytest

from dcmcharset.decoder import decode_to_utf8
from dcmcharset.encoder import encode_string


DEFAULTS_JP = ["ISO_IR 6", "ISO 2022 IR 6", "ISO 2022 IR 87"]
JAPANESE_NAME = "Yamada^Tarou=山田^太郎=やまだ^たろう"
KOREAN_NAME = "Hong^Gildong=洪^吉洞=홍^길동"
LATIN1_GREEK = ["ISO 2022 IR 100", "ISO 2022 IR 126"]

# a sample per single-byte code table
SINGLE_BYTE_VALUES = [
    ("ISO_IR 100", "Buc^Jérôme"),
    ("ISO_IR 101", "Wałęsa"),
    ("ISO_IR 109", "Għawdex"),
    ("ISO_IR 110", "Māris"),
    ("ISO_IR 144", "Люксембург"),
    ("ISO_IR 127", "قباني^لنزار"),
    ("ISO_IR 126", "Διονυσιος"),
    ("ISO_IR 138", "שרון^דבורה"),
    ("ISO_IR 148", "Çavuşoğlu"),
    ("ISO_IR 166", "ภาษาไทย"),
]


class TestEncodeString:
    def test_ascii(self):
        assert b"Wang^XiaoDong" == encode_string("Wang^XiaoDong", "ISO_IR 6")
        assert b"Wang^XiaoDong" == encode_string("Wang^XiaoDong", None)
        assert b"" == encode_string("", "ISO_IR 100")

    def test_single_code_table(self):
        assert b"Buc^J\xe9r\xf4me" == encode_string("Buc^Jérôme", "ISO_IR 100")
        assert b"Buc^J\xe9r\xf4me" == encode_string("Buc^Jérôme", ["ISO_IR 100"])

    def test_utf8(self):
        encoded = encode_string("Wang^XiaoDong=王^小东", "ISO_IR 192")
        assert b"Wang^XiaoDong=\xe7\x8e\x8b^\xe5\xb0\x8f\xe4\xb8\x9c" == encoded

    def test_gb18030(self):
        encoded = encode_string("Wang^XiaoDong=王^小东", "GB18030")
        assert b"Wang^XiaoDong=\xcd\xf5^\xd0\xa1\xb6\xab" == encoded

    def test_escape_sequence_added(self):
        """An escape sequence switches from the first code table"""
        encoded = encode_string("Buc^Jérôme", "\\ISO 2022 IR 100")
        assert b"\x1b-ABuc^J\xe9r\xf4me" == encoded

    def test_unknown_terms_use_default(self):
        assert b"abc" == encode_string("abc", ["ISO_IR 999"])

    def test_encode_parts(self):
        """Parts of the value are encoded with different code tables"""
        encoded = encode_string("Jérôme^Διονυσιος", LATIN1_GREEK)
        expected = b"J\xe9r\xf4me^\x1b-F\xc4\xe9\xef\xed\xf5\xf3\xe9\xef\xf2"
        assert expected == encoded

    def test_encode_parts_switch_back(self):
        encoded = encode_string("é^Δ^é", LATIN1_GREEK)
        assert b"\xe9^\x1b-F\xc4^\x1b-A\xe9" == encoded

    def test_japanese(self):
        encoded = encode_string(JAPANESE_NAME, DEFAULTS_JP)
        assert encoded.startswith(b"Yamada^Tarou=\x1b$B")
        assert JAPANESE_NAME == decode_to_utf8(encoded, DEFAULTS_JP)

    def test_korean(self):
        encoded = encode_string(KOREAN_NAME, "\\ISO 2022 IR 149")
        assert encoded.startswith(b"\x1b$)C")
        assert KOREAN_NAME == decode_to_utf8(encoded, "\\ISO 2022 IR 149")

    def test_invalid_character_warns(self, allow_writing_invalid_values):
        msg = (
            "Failed to encode value with encodings: ISO-8859-1 - using "
            "replacement characters in encoded string"
        )
        with pytest.warns(UserWarning, match=msg):
            encoded = encode_string("Buc^Jérôme 王", "ISO_IR 100")

        assert b"Buc^J\xe9r\xf4me ?" == encoded

    def test_invalid_character_in_parts_warns(self, allow_writing_invalid_values):
        msg = "ISO-8859-1, ISO-8859-7 - using replacement characters"
        with pytest.warns(UserWarning, match=msg):
            assert b"?" == encode_string("王", LATIN1_GREEK)

    def test_invalid_character_raises(self, enforce_writing_invalid_values):
        with pytest.raises(UnicodeEncodeError):
            encode_string("Buc^Jérôme 王", "ISO_IR 100")

        with pytest.raises(UnicodeEncodeError):
            encode_string("王", LATIN1_GREEK)

    def test_invalid_character_ignored(self, disable_value_validation):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert b"?" == encode_string("王", "ISO_IR 100")


class TestRoundTrip:
    @pytest.mark.parametrize("term, value", SINGLE_BYTE_VALUES)
    def test_single_code_table(self, term, value):
        encoded = encode_string(value, [term])
        assert value == decode_to_utf8(encoded, [term])

    @pytest.mark.parametrize("term, value", SINGLE_BYTE_VALUES)
    def test_code_extension(self, term, value):
        """Values switched to with an escape sequence decode again"""
        declaration = f"\\ISO 2022 {term[4:]}"
        encoded = encode_string(f"Name={value}", declaration)
        assert encoded.startswith(b"\x1b")
        assert f"Name={value}" == decode_to_utf8(encoded, declaration)

    def test_decoded_value(self):
        raw = b"Dionysios=\x1b-F\xc4\xe9\xef\xed\xf5\xf3\xe9\xef\xf2"
        declaration = "\\ISO 2022 IR 126"
        value = decode_to_utf8(raw, declaration)
        assert "Dionysios=Διονυσιος" == value
        assert value == decode_to_utf8(encode_string(value, declaration), declaration)
