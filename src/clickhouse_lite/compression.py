"""Request body compression.

Statements are gzip-compressed once per call and sent with
`Content-Encoding: gzip`, which the server decompresses before parsing.
"""

import gzip

CONTENT_ENCODING = "gzip"


def compress(text: str | bytes) -> bytes:
    if isinstance(text, str):
        text = text.encode("utf-8")
    return gzip.compress(text)


def decompress(data: bytes) -> bytes:
    return gzip.decompress(data)
