#!/usr/bin/env python3
"""
Command line front end for the Huffman codec.

Compression writes the packed stream (bit-length header + payload) and
saves the code tree to a JSON tree store; decompression needs that same
store to rebuild the input.

Run with:
    huffman compress notes.txt --text
    huffman decompress compressed_file.txt
    huffman compress image.png -o image.huff --base64 --store trees.json
    huffman inspect --store trees.json
"""
import argparse
import sys
from pathlib import Path

from huffman_core import PackedBuffer
from huffman_errors import HuffmanError
from huffman_service import HuffmanService
from huffman_store import DEFAULT_KEY, JsonFileTreeStore
from huffman_transport import from_base64, to_base64

DEFAULT_STORE = "huffman_tree.json"
DEFAULT_COMPRESSED = "compressed_file.txt"
DEFAULT_DECOMPRESSED = "decompressed_file.txt"


def build_parser():
    parser = argparse.ArgumentParser(prog="huffman", description="Huffman coding compressor")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_store_options(p):
        p.add_argument("--store", default=DEFAULT_STORE, help=f"tree store file (default: {DEFAULT_STORE})")
        p.add_argument("--key", default=DEFAULT_KEY, help=f"key of the tree inside the store (default: {DEFAULT_KEY})")

    compress = sub.add_parser("compress", help="compress a file and store its code tree")
    compress.add_argument("input")
    compress.add_argument("-o", "--output", default=DEFAULT_COMPRESSED)
    compress.add_argument("--text", action="store_true", help="read the input as UTF-8 text")
    compress.add_argument("--base64", action="store_true", help="write base64 text instead of raw bytes")
    add_store_options(compress)

    decompress = sub.add_parser("decompress", help="decompress a file with the stored code tree")
    decompress.add_argument("input")
    decompress.add_argument("-o", "--output", default=DEFAULT_DECOMPRESSED)
    decompress.add_argument("--base64", action="store_true", help="input is base64 text or a data: URL")
    add_store_options(decompress)

    inspect = sub.add_parser("inspect", help="print the code table of the stored tree")
    add_store_options(inspect)
    return parser


def run_compress(service, args):
    source = Path(args.input)
    data = source.read_bytes()
    if args.text:
        # no newline translation: CR and CRLF are symbols too
        data = data.decode("utf-8")
    packed, serialized_tree = service.encode(data)

    output = Path(args.output)
    blob = packed.to_bytes()
    if args.base64:
        output.write_text(to_base64(blob), encoding="ascii")
    else:
        output.write_bytes(blob)
    # store only once the output is on disk
    service.store.save(serialized_tree)

    original_size = source.stat().st_size
    written = output.stat().st_size
    print(f"Compressed {source} -> {output}")
    print(f"  {original_size} bytes -> {written} bytes ({packed.bit_length} bits, {packed.pad_bits} pad bits)")
    if written:
        print(f"  ratio: {original_size / written:.3f}")
    print(f"  tree saved to {args.store} [{args.key}]")


def run_decompress(service, args):
    source = Path(args.input)
    blob = from_base64(source.read_text(encoding="ascii")) if args.base64 else source.read_bytes()
    result = service.decompress(PackedBuffer.from_bytes(blob))

    output = Path(args.output)
    if isinstance(result, str):
        output.write_bytes(result.encode("utf-8"))
    else:
        output.write_bytes(result)
    print(f"Decompressed {source} -> {output} ({len(result)} symbols)")


def run_inspect(service, args):
    codes = service.code_table()
    for symbol, code in sorted(codes.items(), key=lambda item: (len(item[1]), item[1])):
        print(f"  {symbol!r:>8}  {code}")
    print(f"{len(codes)} symbols")


COMMANDS = {
    "compress": run_compress,
    "decompress": run_decompress,
    "inspect": run_inspect,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    service = HuffmanService(store=JsonFileTreeStore(args.store, key=args.key))

    try:
        COMMANDS[args.command](service, args)
    except (HuffmanError, OSError, ValueError) as e:
        # ValueError also covers bad base64 and undecodable text
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
