"""Decode DICOM character strings declared by Specific Character Set."""

import re
from typing import cast
from re import Match
from importlib.metadata import version, PackageNotFoundError

try:
    __version__: str = version("dcmcharset")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0.dev0"

result = cast(Match[str], re.match(r"(\d+\.\d+\.\d+).*", __version__))
__version_info__ = tuple(result.group(1).split("."))


# DICOM Standard version used for the Specific Character Set defined terms
#   and escape sequences in charset.py
__dicom_version__: str = "2024c"
