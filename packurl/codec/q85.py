"""
Q85: a base-85 binary-to-text codec whose output is safe to embed in a URL.

Input is read as little-endian 32-bit words, each written as five symbols
with the least-significant digit first. A sentinel byte (1) is appended
before encoding so the final, partial group can drop its trailing zero
digits without losing genuine trailing zero bytes.
"""

import struct

from typing import Union

from .error import InvalidSymbol, MalformedStream, OutOfRange, Q85Error
from .util import as_bytes, as_symbols

MAP_ENCODE = (
    b"!&()*+,-.0123456789:;=?@ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    b"[]^_`abcdefghijklmnopqrstuvwxyz{|}~"
)
MAP_DECODE = {c: idx for (idx, c) in enumerate(MAP_ENCODE)}

BASE = len(MAP_ENCODE)
GROUP_BYTES = 4
GROUP_SYMBOLS = 5
SENTINEL = 1
WORD_MAX = 0xFFFFFFFF

ZERO_SYMBOL = MAP_ENCODE[:1]


def symbol_of(index: int) -> str:
    if not 0 <= index < BASE:
        raise OutOfRange(index)
    return chr(MAP_ENCODE[index])


def index_of(symbol: Union[str, bytes, int]) -> int:
    key = symbol
    if isinstance(key, (str, bytes)) and len(key) == 1:
        key = ord(key)
    idx = MAP_DECODE.get(key) if isinstance(key, int) else None
    if idx is None:
        raise InvalidSymbol(symbol)
    return idx


def _push_word(out: bytearray, val: int):
    for _ in range(GROUP_SYMBOLS):
        out.append(MAP_ENCODE[val % BASE])
        val //= BASE


def encode_word(data: bytes) -> bytes:
    """Encode 1 to 4 little-endian bytes as exactly 5 symbols."""
    if not 1 <= len(data) <= GROUP_BYTES:
        raise Q85Error("word must be 1 to 4 bytes")
    out = bytearray()
    _push_word(out, int.from_bytes(data, "little"))
    return bytes(out)


def decode_word(symbols: Union[str, bytes], offset: int = 0) -> int:
    """Decode 1 to 5 symbols, least-significant first, to an integer.

    Missing high-order symbols count as zero. `offset` is the stream
    position of the first symbol, reported on error.
    """
    symbols = as_symbols(symbols, offset)
    if not 1 <= len(symbols) <= GROUP_SYMBOLS:
        raise Q85Error("word must be 1 to 5 symbols")
    val = 0
    weight = 1
    for (pos, char) in enumerate(symbols):
        idx = MAP_DECODE.get(char)
        if idx is None:
            raise InvalidSymbol(chr(char), offset + pos)
        val += idx * weight
        weight *= BASE
    return val


def _encode_words(data: bytes) -> str:
    out = bytearray()
    for (val,) in struct.iter_unpack("<L", data):
        _push_word(out, val)
    return out.decode("ascii")


def _decode_words(symbols: bytes, offset: int) -> bytes:
    out = bytearray()
    for start in range(0, len(symbols), GROUP_SYMBOLS):
        val = decode_word(symbols[start : start + GROUP_SYMBOLS], offset + start)
        if val > WORD_MAX:
            raise MalformedStream(f"group at offset {offset + start} exceeds 32 bits")
        out.extend(val.to_bytes(GROUP_BYTES, "little"))
    return bytes(out)


class Q85Encoder:
    """Incremental encoder.

    Each call to `update` returns the symbols for the complete 4-byte
    groups received so far; `finish` appends the sentinel and flushes the
    final group. The concatenated output equals `q85_encode` of the
    concatenated input, whatever the chunking.
    """

    def __init__(self):
        self._pending = b""
        self._finished = False

    def update(self, data: Union[str, bytes]) -> str:
        self._check_open()
        data = self._pending + as_bytes(data)
        split = len(data) - len(data) % GROUP_BYTES
        self._pending = data[split:]
        return _encode_words(data[:split])

    def finish(self) -> str:
        self._check_open()
        self._finished = True
        tail = self._pending + bytes((SENTINEL,))
        self._pending = b""
        if len(tail) == GROUP_BYTES:
            return _encode_words(tail)
        # the sentinel keeps at least one non-zero digit in the group
        return encode_word(tail).rstrip(ZERO_SYMBOL).decode("ascii")

    def _check_open(self):
        if self._finished:
            raise Q85Error("encoder already finished")


class Q85Decoder:
    """Incremental decoder.

    The last decoded byte is always held back until more input arrives
    or `finish` is called, since it may be the sentinel.
    """

    def __init__(self):
        self._pending = b""
        self._held = b""
        self._offset = 0
        self._finished = False

    @property
    def offset(self) -> int:
        return self._offset + len(self._pending)

    def update(self, text: Union[str, bytes]) -> bytes:
        self._check_open()
        try:
            symbols = self._pending + as_symbols(text, self.offset)
            split = len(symbols) - len(symbols) % GROUP_SYMBOLS
            decoded = self._held + _decode_words(symbols[:split], self._offset)
        except Q85Error:
            # a corrupt stream cannot be resumed
            self._finished = True
            raise
        self._pending = symbols[split:]
        if not split:
            return b""
        self._offset += split
        self._held = decoded[-1:]
        return decoded[:-1]

    def finish(self) -> bytes:
        self._check_open()
        self._finished = True
        tail = self._pending
        self._pending = b""
        if not tail and not self._offset:
            return b""
        decoded = self._held
        if tail:
            val = decode_word(tail, self._offset)
            decoded += val.to_bytes(GROUP_BYTES, "little").rstrip(b"\x00")
        if not decoded:
            raise MalformedStream("missing end-of-stream marker")
        if decoded[-1] != SENTINEL:
            raise MalformedStream(f"invalid end-of-stream marker: {decoded[-1]}")
        return decoded[:-1]

    def _check_open(self):
        if self._finished:
            raise Q85Error("decoder already finished")


def q85_encode(data: Union[str, bytes]) -> str:
    encoder = Q85Encoder()
    return encoder.update(data) + encoder.finish()


def q85_decode(text: Union[str, bytes]) -> bytes:
    decoder = Q85Decoder()
    return decoder.update(text) + decoder.finish()
