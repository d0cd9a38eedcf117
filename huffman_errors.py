class HuffmanError(Exception): # base class for every error the coder raises
    pass


class EmptyInputError(HuffmanError, ValueError):
    def __init__(self, message="cannot build a Huffman code from empty input"):
        super().__init__(message)


class QueueUnderflowError(HuffmanError, IndexError):
    def __init__(self, message="extract_min called on an empty priority queue"):
        super().__init__(message)


class UnknownSymbolError(HuffmanError, LookupError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"symbol {symbol!r} has no entry in the code table")


class InvalidBitSequenceError(HuffmanError, ValueError):
    def __init__(self, message, position=None):
        self.position = position # index of the offending bit, if known
        super().__init__(message)


class TruncatedBitSequenceError(InvalidBitSequenceError):
    def __init__(self, position, pending_bits=""):
        self.pending_bits = pending_bits
        super().__init__(
            f"bit sequence ends mid-code after {position} bits (dangling prefix {pending_bits!r})",
            position=position,
        )
