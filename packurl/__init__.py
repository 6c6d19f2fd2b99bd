from .codec import (
    InvalidSymbol,
    MalformedStream,
    OutOfRange,
    Q85Decoder,
    Q85Encoder,
    Q85Error,
    q85_decode,
    q85_encode,
)
from .packer import PackError, pack, unpack, unpack_text
