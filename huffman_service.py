# // filename: huffman_service.py

from huffman_core import HuffmanLogic, PackedBuffer
from huffman_store import MemoryTreeStore
from huffman_tree_codec import deserialize, serialize


class HuffmanService:
    def __init__(self, store=None):
        self.logic = HuffmanLogic()
        self.store = store if store is not None else MemoryTreeStore()

    def encode(self, data):
        """Pack data without touching the store; returns (packed, serialized tree)."""
        freqs = self.logic.analyze(data)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)
        packed = self.logic.pack(data, codes)
        return packed, serialize(tree)

    def compress(self, data):
        packed, serialized_tree = self.encode(data)
        # Persist only once packing has succeeded
        self.store.save(serialized_tree)
        return packed

    def decompress(self, packed):
        tree = deserialize(self.store.load())

        # Raw bytes carry no bit length; trailing pad bits may decode as symbols
        if isinstance(packed, PackedBuffer):
            symbols = self.logic.decode(packed.data, tree, packed.bit_length)
        else:
            symbols = self.logic.decode(packed, tree)
        return self.logic.join(symbols, tree)

    def code_table(self):
        return self.logic.generate_codes(deserialize(self.store.load()))
