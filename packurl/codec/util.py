from typing import Union

from .error import InvalidSymbol


def as_bytes(data: Union[str, bytes, bytearray, memoryview]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected str or bytes-like data, got {type(data).__name__}")


def as_symbols(text: Union[str, bytes], offset: int = 0) -> bytes:
    """Convert encoded text to its ASCII byte form.

    `offset` is the stream position of the first character, used when
    reporting a non-ASCII character.
    """
    if isinstance(text, str):
        try:
            return text.encode("ascii")
        except UnicodeEncodeError as ex:
            raise InvalidSymbol(text[ex.start], offset + ex.start) from None
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"expected str or bytes text, got {type(text).__name__}")
