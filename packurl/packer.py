"""
Packing of documents into URL-safe text: brotli compression in text mode
followed by Q85 encoding.
"""

from typing import Optional, Union

import brotli

from .codec.q85 import q85_decode, q85_encode
from .codec.util import as_bytes

DEFAULT_QUALITY = 11
MAX_QUALITY = 11


class PackError(Exception):
    pass


def pack(data: Union[str, bytes], *, quality: int = DEFAULT_QUALITY) -> str:
    if not isinstance(quality, int) or not 0 <= quality <= MAX_QUALITY:
        raise PackError(f"invalid quality: {quality!r}")
    try:
        compressed = brotli.compress(
            as_bytes(data), mode=brotli.MODE_TEXT, quality=quality
        )
    except brotli.error as ex:
        raise PackError(f"compression failed: {ex}") from None
    return q85_encode(compressed)


def unpack(text: Union[str, bytes], *, max_length: Optional[int] = None) -> bytes:
    """Reverse `pack`.

    Text longer than `max_length` symbols is rejected before decoding.
    Codec errors propagate unchanged; a corrupt compressed payload raises
    `PackError`.
    """
    if max_length is not None and len(text) > max_length:
        raise PackError(f"packed text exceeds {max_length} symbols")
    compressed = q85_decode(text)
    try:
        return brotli.decompress(compressed)
    except brotli.error:
        raise PackError("invalid compressed payload") from None


def unpack_text(text: Union[str, bytes], **kwargs) -> str:
    data = unpack(text, **kwargs)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise PackError("packed document is not valid UTF-8") from None
