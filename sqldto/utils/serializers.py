"""JSON serialization utilities for sqldto.

Thin wrappers around :mod:`msgspec.json` used by the JSON value codec and the
structured log formatter.
"""

from typing import Any, Literal, overload

import msgspec

__all__ = ("from_json", "to_json")

_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


@overload
def to_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def to_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def to_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON string or bytes.

    Args:
        data: Data to encode.
        as_bytes: Whether to return bytes instead of string.

    Returns:
        Compact JSON string or bytes representation based on as_bytes parameter.
    """
    encoded = _encoder.encode(data)
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")


def from_json(data: "str | bytes") -> Any:
    """Decode JSON string or bytes to Python object.

    Args:
        data: JSON string or bytes to decode.

    Returns:
        Decoded Python object.
    """
    return _decoder.decode(data)
