"""
Utilities to help with collecting the converted output of a character string.
"""

MAX_UTF8_BYTES_PER_BYTE = 4
"""The maximum number of UTF-8 bytes produced by converting one input byte.

A single-byte code table maps each byte to a single code point, which takes
at most 4 bytes in UTF-8. Multi-byte code tables use at least 2 input bytes
per code point and so stay within this bound.
"""


class UTF8Buffer:
    """Fixed capacity buffer for UTF-8 encoded output.

    The capacity is :data:`MAX_UTF8_BYTES_PER_BYTE` times the length of the
    input being converted. Writes are bounds-checked: anything that doesn't
    fit in the remaining capacity is dropped.

    Parameters
    ----------
    source_length : int
        The length of the input bytes, must be >= 0.
    """

    def __init__(self, source_length: int) -> None:
        assert source_length >= 0, f"source_length must be >= 0: {source_length}"

        self.capacity = source_length * MAX_UTF8_BYTES_PER_BYTE
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        """Return the number of bytes that can still be written."""
        return self.capacity - len(self._data)

    def write(self, data: bytes) -> int:
        """Append `data` to the buffer.

        Parameters
        ----------
        data : bytes
            UTF-8 encoded output.

        Returns
        -------
        int
            The number of bytes actually written, less than ``len(data)`` if
            the buffer is full.
        """
        data = data[: self.remaining]
        self._data.extend(data)

        return len(data)

    def getvalue(self) -> str:
        """Return the buffer contents as text.

        The text ends at the first null character, if any. A multi-byte
        sequence cut off by the capacity limit is dropped.
        """
        text = self._data.decode("utf-8", errors="ignore")

        return text.split("\x00", 1)[0]
