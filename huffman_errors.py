# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised by the codec."""


class EmptyInputError(HuffmanError):
    def __init__(self, message="cannot build a Huffman tree from empty input"):
        super().__init__(message)


class UnknownSymbolError(HuffmanError, KeyError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"symbol {symbol!r} has no code in the code table")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class NoStoredTreeError(HuffmanError):
    def __init__(self, message="No Huffman tree found for decompression. Please compress a file first."):
        super().__init__(message)


class CorruptTreeError(HuffmanError, ValueError):
    pass


class TruncatedStreamError(HuffmanError, ValueError):
    pass
