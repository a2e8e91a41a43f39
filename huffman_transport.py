# filename: huffman_transport.py

import base64


def to_base64(data):
    return base64.b64encode(bytes(data)).decode("ascii")


def from_base64(text):
    """Decode base64 text, or the payload of a ``data:<mime>;base64,`` URL."""
    text = text.strip()
    if text.startswith("data:"):
        _, _, text = text.partition(",")
    return base64.b64decode(text, validate=True)
