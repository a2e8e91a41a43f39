# filename: huffman_core.py

import heapq
from collections import Counter

from bitarray import bitarray

from huffman_errors import (
    CorruptTreeError,
    EmptyInputError,
    TruncatedStreamError,
    UnknownSymbolError,
)

# Wire header of a PackedBuffer: exact bit count before padding, big-endian
BIT_LENGTH_BYTES = 8


class HuffmanNode:
    """A leaf (symbol set, no children) or an internal node (two child indices).

    Children are indices into the owning HuffmanTree's node arena.
    """

    __slots__ = ("symbol", "freq", "left", "right")

    def __init__(self, symbol, freq, left=None, right=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.freq})"
        return f"HuffmanNode(None, {self.freq}, left={self.left}, right={self.right})"


class HuffmanTree:
    """Immutable arena of HuffmanNodes with the index of the root."""

    __slots__ = ("nodes", "root")

    def __init__(self, nodes, root):
        self.nodes = tuple(nodes)
        self.root = root

    @property
    def root_node(self):
        return self.nodes[self.root]

    def leaves(self):
        """Yield leaf nodes left to right."""
        stack = [self.root]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf:
                yield node
            else:
                stack.append(node.right)
                stack.append(node.left)

    def __len__(self):
        return len(self.nodes)

    def __eq__(self, other):
        if not isinstance(other, HuffmanTree):
            return NotImplemented
        # Compare reachable shape, not arena layout
        stack = [(self.root, other.root)]
        while stack:
            i, j = stack.pop()
            a, b = self.nodes[i], other.nodes[j]
            if a.symbol != b.symbol or a.freq != b.freq or a.is_leaf != b.is_leaf:
                return False
            if not a.is_leaf:
                stack.append((a.left, b.left))
                stack.append((a.right, b.right))
        return True

    __hash__ = None

    def __repr__(self):
        return f"HuffmanTree(nodes={len(self.nodes)}, root={self.root_node!r})"


class PackedBuffer:
    """Byte-aligned bit stream plus the exact number of meaningful bits."""

    __slots__ = ("data", "bit_length")

    def __init__(self, data, bit_length):
        self.data = bytes(data)
        self.bit_length = bit_length

    @property
    def pad_bits(self):
        return 8 * len(self.data) - self.bit_length

    def to_bytes(self):
        return self.bit_length.to_bytes(BIT_LENGTH_BYTES, "big") + self.data

    @classmethod
    def from_bytes(cls, blob):
        blob = bytes(blob)
        if len(blob) < BIT_LENGTH_BYTES:
            raise TruncatedStreamError("packed stream is shorter than its header")
        bit_length = int.from_bytes(blob[:BIT_LENGTH_BYTES], "big")
        payload = blob[BIT_LENGTH_BYTES:]
        if bit_length > 8 * len(payload):
            raise TruncatedStreamError(
                f"header announces {bit_length} bits but only {8 * len(payload)} are present"
            )
        return cls(payload, bit_length)

    def __eq__(self, other):
        if not isinstance(other, PackedBuffer):
            return NotImplemented
        return self.data == other.data and self.bit_length == other.bit_length

    __hash__ = None

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return f"PackedBuffer({len(self.data)} bytes, bit_length={self.bit_length})"


class HuffmanLogic:
    def analyze(self, data):
        # Counter keeps first-occurrence order, which build_tree relies on for ties
        return Counter(data)

    def build_tree(self, freqs):
        if not freqs:
            raise EmptyInputError()

        nodes = []
        heap = []
        for symbol, freq in freqs.items():
            if not isinstance(freq, int) or freq <= 0:
                raise ValueError(f"frequency of {symbol!r} must be a positive integer, got {freq!r}")
            nodes.append(HuffmanNode(symbol, freq))
            # (weight, creation order, arena index)
            heap.append((freq, len(nodes) - 1, len(nodes) - 1))
        heapq.heapify(heap)

        while len(heap) > 1:
            left_freq, _, left = heapq.heappop(heap)
            right_freq, _, right = heapq.heappop(heap)
            nodes.append(HuffmanNode(None, left_freq + right_freq, left, right))
            index = len(nodes) - 1
            heapq.heappush(heap, (left_freq + right_freq, index, index))

        return HuffmanTree(nodes, heap[0][2])

    def generate_codes(self, tree):
        root = tree.root_node
        if root.is_leaf:
            # lone leaf still needs a one-bit code
            return {root.symbol: "0"}

        codes = {}

        def walk(index, current_code):
            node = tree.nodes[index]
            if node.is_leaf:
                codes[node.symbol] = current_code
                return
            walk(node.left, current_code + "0")
            walk(node.right, current_code + "1")

        walk(tree.root, "")
        return codes

    def pack(self, data, codes):
        table = {symbol: bitarray(code, endian="big") for symbol, code in codes.items()}
        bits = bitarray(endian="big")
        try:
            bits.encode(table, data)
        except (ValueError, KeyError):
            unknown = next(symbol for symbol in data if symbol not in table)
            raise UnknownSymbolError(unknown) from None
        bit_length = len(bits)
        bits.fill()
        return PackedBuffer(bits.tobytes(), bit_length)

    def decode(self, data, tree, bit_length=None):
        if not isinstance(tree, HuffmanTree):
            raise CorruptTreeError(f"decoding requires a Huffman tree, got {tree!r}")

        bits = bitarray(endian="big")
        bits.frombytes(bytes(data))
        if bit_length is not None:
            if bit_length < 0 or bit_length > len(bits):
                raise TruncatedStreamError(
                    f"expected {bit_length} bits but the stream holds {len(bits)}"
                )
            del bits[bit_length:]

        nodes = tree.nodes
        root = tree.root_node
        if root.is_leaf:
            # every "0" code is one symbol
            return [root.symbol] * len(bits)

        out = []
        current = root
        for bit in bits:
            current = nodes[current.right if bit else current.left]
            if current.is_leaf:
                out.append(current.symbol)
                current = root

        if current is not root and bit_length is not None:
            raise TruncatedStreamError("bit stream ended in the middle of a code")
        return out

    def join(self, symbols, tree):
        sample = next(tree.leaves()).symbol
        if isinstance(sample, str):
            return "".join(symbols)
        return bytes(symbols)
