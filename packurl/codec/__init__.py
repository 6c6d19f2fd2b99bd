from .error import InvalidSymbol, MalformedStream, OutOfRange, Q85Error
from .q85 import (
    Q85Decoder,
    Q85Encoder,
    decode_word,
    encode_word,
    index_of,
    q85_decode,
    q85_encode,
    symbol_of,
)
