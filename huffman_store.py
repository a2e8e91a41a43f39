# filename: huffman_store.py

import json
import os
from pathlib import Path

from huffman_errors import CorruptTreeError, NoStoredTreeError

DEFAULT_KEY = "huffmanTree"


class TreeStore:
    """Holds one serialized tree between compression and decompression."""

    def save(self, serialized_tree):
        raise NotImplementedError

    def load(self):
        raise NotImplementedError


class MemoryTreeStore(TreeStore):
    def __init__(self, key=DEFAULT_KEY):
        self.key = key
        self._items = {}

    def save(self, serialized_tree):
        self._items[self.key] = serialized_tree

    def load(self):
        try:
            return self._items[self.key]
        except KeyError:
            raise NoStoredTreeError() from None

    def clear(self):
        self._items.pop(self.key, None)


class JsonFileTreeStore(TreeStore):
    """Key/value JSON file; other keys in the file are left untouched."""

    def __init__(self, path, key=DEFAULT_KEY):
        self.path = Path(path)
        self.key = key

    def _read_all(self):
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                items = json.load(f)
        except ValueError as e:
            raise CorruptTreeError(f"tree store {self.path} is not valid JSON: {e}") from e
        if not isinstance(items, dict):
            raise CorruptTreeError(f"tree store {self.path} must hold a JSON object")
        return items

    def save(self, serialized_tree):
        items = self._read_all()
        items[self.key] = serialized_tree
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # old store stays intact until os.replace
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def load(self):
        items = self._read_all()
        if self.key not in items:
            raise NoStoredTreeError()
        return items[self.key]
