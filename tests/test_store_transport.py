import base64
import binascii
import json

import pytest

from huffman_errors import CorruptTreeError, NoStoredTreeError
from huffman_store import DEFAULT_KEY, JsonFileTreeStore, MemoryTreeStore
from huffman_transport import from_base64, to_base64

RECORD = {"symbol": None, "freq": 2,
	"left": {"symbol": "a", "freq": 1, "left": None, "right": None},
	"right": {"symbol": "b", "freq": 1, "left": None, "right": None}}


def test_memory_store_roundtrip_and_clear():
	store = MemoryTreeStore()
	with pytest.raises(NoStoredTreeError):
		store.load()
	store.save(RECORD)
	assert store.load() == RECORD
	store.clear()
	with pytest.raises(NoStoredTreeError):
		store.load()


def test_json_file_store_roundtrip(tmp_path):
	path = tmp_path / "nested" / "trees.json"
	store = JsonFileTreeStore(path)
	store.save(RECORD)
	assert json.loads(path.read_text(encoding="utf-8")) == {DEFAULT_KEY: RECORD}
	assert JsonFileTreeStore(path).load() == RECORD


def test_json_file_store_missing_file_or_key(tmp_path):
	path = tmp_path / "trees.json"
	with pytest.raises(NoStoredTreeError):
		JsonFileTreeStore(path).load()

	JsonFileTreeStore(path, key="other").save(RECORD)
	with pytest.raises(NoStoredTreeError):
		JsonFileTreeStore(path).load()


def test_json_file_store_keeps_other_keys(tmp_path):
	path = tmp_path / "trees.json"
	JsonFileTreeStore(path, key="other").save({"symbol": "z", "freq": 1, "left": None, "right": None})
	JsonFileTreeStore(path).save(RECORD)
	assert set(json.loads(path.read_text(encoding="utf-8"))) == {"other", DEFAULT_KEY}


def test_json_file_store_rejects_garbage(tmp_path):
	path = tmp_path / "trees.json"
	path.write_text("{oops", encoding="utf-8")
	with pytest.raises(CorruptTreeError):
		JsonFileTreeStore(path).load()

	path.write_text("[1, 2]", encoding="utf-8")
	with pytest.raises(CorruptTreeError):
		JsonFileTreeStore(path).load()


def test_base64_roundtrip():
	data = bytes(range(256))
	text = to_base64(data)
	assert text == base64.b64encode(data).decode("ascii")
	assert from_base64(text) == data
	assert to_base64(b"") == ""
	assert from_base64("") == b""


def test_base64_accepts_data_url():
	assert from_base64("data:text/plain;base64,TJw=") == b"\x4c\x9c"
	assert from_base64("  TJw=\n") == b"\x4c\x9c"


def test_base64_rejects_invalid_text():
	with pytest.raises(binascii.Error):
		from_base64("not*base64")


def test_json_file_store_failed_save_keeps_old_contents(tmp_path):
	path = tmp_path / "trees.json"
	store = JsonFileTreeStore(path)
	store.save(RECORD)
	before = path.read_bytes()

	# not JSON serializable: json.dump fails halfway
	with pytest.raises(TypeError):
		JsonFileTreeStore(path, key="other").save({"symbol": object()})
	assert path.read_bytes() == before
	assert store.load() == RECORD
	assert list(tmp_path.iterdir()) == [path]
