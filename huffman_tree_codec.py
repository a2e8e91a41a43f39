# filename: huffman_tree_codec.py
"""
Tree persistence between a compress and a later decompress call.

A serialized tree is a plain nested dict mirroring the node structure:

    {"symbol": 97, "freq": 4, "left": None, "right": None}

All four keys are always present. A missing child is an explicit None
(``null`` once dumped to JSON) so that "no child" is never confused with
a field that went missing in storage.
"""
import json

from huffman_core import HuffmanNode, HuffmanTree
from huffman_errors import CorruptTreeError

FIELDS = ("symbol", "freq", "left", "right")


def serialize(tree):
    if not isinstance(tree, HuffmanTree):
        raise CorruptTreeError(f"cannot serialize {tree!r}: not a Huffman tree")

    def to_record(index):
        if index is None:
            return None
        node = tree.nodes[index]
        return {
            "symbol": node.symbol,
            "freq": node.freq,
            "left": to_record(node.left),
            "right": to_record(node.right),
        }

    return to_record(tree.root)


def deserialize(record):
    if record is None:
        raise CorruptTreeError("serialized tree is empty")

    nodes = []
    seen = set()
    kinds = set()

    def from_record(obj, path):
        if not isinstance(obj, dict):
            raise CorruptTreeError(f"{path}: expected a node object, got {type(obj).__name__}")
        missing = [field for field in FIELDS if field not in obj]
        if missing:
            raise CorruptTreeError(f"{path}: missing field(s) {', '.join(missing)}")

        symbol, freq = obj["symbol"], obj["freq"]
        # bool is an int subclass but never a valid weight
        if not isinstance(freq, int) or isinstance(freq, bool) or freq <= 0:
            raise CorruptTreeError(f"{path}: frequency must be a positive integer, got {freq!r}")

        left, right = obj["left"], obj["right"]
        if left is None and right is None:
            _check_symbol(symbol, path)
            if symbol in seen:
                raise CorruptTreeError(f"{path}: symbol {symbol!r} appears on more than one leaf")
            kinds.add(type(symbol))
            if len(kinds) > 1:
                raise CorruptTreeError(f"{path}: tree mixes text and byte symbols")
            seen.add(symbol)
            nodes.append(HuffmanNode(symbol, freq))
            return len(nodes) - 1

        if symbol is not None:
            raise CorruptTreeError(f"{path}: internal node carries symbol {symbol!r}")
        if left is None or right is None:
            raise CorruptTreeError(f"{path}: internal node needs two children")

        left_index = from_record(left, path + ".left")
        right_index = from_record(right, path + ".right")
        if nodes[left_index].freq + nodes[right_index].freq != freq:
            raise CorruptTreeError(f"{path}: frequency {freq} is not the sum of its children")
        nodes.append(HuffmanNode(None, freq, left_index, right_index))
        return len(nodes) - 1

    root = from_record(record, "root")
    return HuffmanTree(nodes, root)


def _check_symbol(symbol, path):
    if isinstance(symbol, str):
        if len(symbol) != 1:
            raise CorruptTreeError(f"{path}: text symbol must be one character, got {symbol!r}")
    elif isinstance(symbol, int) and not isinstance(symbol, bool):
        if not 0 <= symbol <= 255:
            raise CorruptTreeError(f"{path}: byte symbol out of range: {symbol}")
    else:
        raise CorruptTreeError(f"{path}: leaf has no valid symbol ({symbol!r})")


def dumps(tree):
    return json.dumps(serialize(tree))


def loads(text):
    try:
        record = json.loads(text)
    except ValueError as e:
        raise CorruptTreeError(f"stored tree is not valid JSON: {e}") from e
    return deserialize(record)
