# Copyright 2024 dcmcharset authors. See LICENSE file for details.
r"""dcmcharset package -- decode DICOM character strings.
   See Quick Start below.

-----------
Quick Start
-----------

1. Parse the value of Specific Character Set (0008,0005) once, then decode
   each string value with it::

    from dcmcharset import parse_charset_declaration, decode_to_utf8
    charsets = parse_charset_declaration("\\ISO 2022 IR 100")
    name = decode_to_utf8(b"Buc^J\x1b-A\xe9r\xf4me", charsets)

2. Problems with the encoded value are reported as warnings by default, and
   the part of the value that could be decoded is returned. Set
   ``config.settings.reading_validation_mode = config.RAISE`` to raise
   exceptions instead.

3. Use ``encode_string()`` to go the other way.

"""

from dcmcharset.declaration import SpecificCharacterSet, parse_charset_declaration
from dcmcharset.decoder import CharStringDecoder, decode_to_utf8
from dcmcharset.encoder import encode_string

from ._version import __version__, __version_info__, __dicom_version__

__all__ = [
    "CharStringDecoder",
    "SpecificCharacterSet",
    "decode_to_utf8",
    "encode_string",
    "parse_charset_declaration",
    "__version__",
    "__version_info__",
    "__dicom_version__",
]
