from typing import Optional


class Q85Error(Exception):
    pass


class InvalidSymbol(Q85Error, ValueError):
    def __init__(self, symbol, position: Optional[int] = None):
        self.symbol = symbol
        self.position = position
        if position is None:
            super().__init__(f"invalid symbol: {symbol!r}")
        else:
            super().__init__(f"invalid symbol at offset {position}: {symbol!r}")


class MalformedStream(Q85Error, ValueError):
    pass


class OutOfRange(Q85Error, IndexError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"symbol index out of range: {index}")
