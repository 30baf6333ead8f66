"""Hex framing used for every payload exchanged with the rollup server.

Incoming payloads may carry a ``0x`` prefix and either digit case; outgoing
payloads are always ``0x`` followed by lowercase digits.
"""

import binascii

from rollup.exceptions import DecodeError

HEX_PREFIX = "0x"


def hex_to_str(hex_text: str) -> str:
    if not isinstance(hex_text, str):
        raise DecodeError(f"Expected hex string, got {type(hex_text).__name__}")
    digits = hex_text[2:] if hex_text[:2] in ("0x", "0X") else hex_text
    try:
        raw = bytes.fromhex(digits) if digits.isascii() else None
    except ValueError as e:
        raise DecodeError(f"Invalid hex payload: {e}") from e
    # bytes.fromhex skips whitespace between pairs; the wire format never has any
    if raw is None or len(digits) != 2 * len(raw):
        raise DecodeError(f"Invalid hex payload: {hex_text!r}")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Payload is not UTF-8 text: {e}") from e


def str_to_hex(text: str) -> str:
    return HEX_PREFIX + binascii.hexlify(text.encode("utf-8")).decode("ascii")
