"""Character-level helpers shared by the trace generators.

All generators work on Python strings whose characters stand in for bytes.
Every helper is total over its input: no parsing, nothing can fail.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import base64
from typing import List, Tuple


def pad_block(text: str, size: int) -> str:
    """Truncate or right-pad with spaces to exactly ``size`` characters."""
    return text[:size].ljust(size, " ")


def cycle_to(text: str, length: int) -> str:
    """Repeat (or truncate) ``text`` until it is exactly ``length`` long."""
    if not text:
        raise ValueError("cycle_to needs a non-empty pattern")
    reps = -(-length // len(text))
    return (text * reps)[:length]


def xor_text(data: str, key: str) -> str:
    """XOR each character code with the key, cycling the key as needed."""
    key = cycle_to(key, len(data)) if data else ""
    return "".join(chr(ord(a) ^ ord(b)) for a, b in zip(data, key))


def add_codes(text: str, amount: int) -> str:
    """Add ``amount`` to every character code, mod 256."""
    return "".join(chr((ord(ch) + amount) % 256) for ch in text)


def reverse(text: str) -> str:
    return text[::-1]


def chunk(text: str, width: int) -> List[str]:
    """Split into ``width``-sized pieces; the last may be shorter, never padded."""
    return [text[i:i + width] for i in range(0, len(text), width)]


def to_bits(text: str) -> Tuple[str, ...]:
    """Binary group per character (8 bits, wider for code points above 255)."""
    return tuple(format(ord(ch), "08b") for ch in text)


def encode_result(text: str) -> str:
    """Text-safe encoding of a transformed block (Base64 over UTF-8)."""
    return base64.b64encode(text.encode("utf-8", errors="surrogatepass")).decode("ascii")


def decode_result(encoded: str) -> str:
    """Inverse of :func:`encode_result`."""
    return base64.b64decode(encoded.encode("ascii")).decode("utf-8", errors="surrogatepass")
