"""Summation checksum narrated as four steps.

chunk -> character codes -> per-chunk sums -> 16-bit one's complement.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import List

from .model import TextDiagram, TraceRecorder, TraceResult
from .textops import chunk

ALGORITHM_ID = "checksum"
CHUNK_WIDTH = 8
MASK_16 = 0xFFFF
SEPARATOR = " | "


def _render_lists(groups: List[List[int]]) -> str:
    return SEPARATOR.join("[" + ", ".join(str(c) for c in g) + "]" for g in groups)


def compute_checksum(text: str) -> int:
    """16-bit one's complement of the sum of all character codes."""
    return (~sum(ord(ch) for ch in text)) & MASK_16


def generate(input_text: str, mode: str = "forward") -> TraceResult:
    """Build the checksum trace. ``mode`` is accepted for a uniform signature
    and ignored: a checksum only runs one way. Empty text is allowed and
    yields ``FFFF``.
    """
    rec = TraceRecorder(ALGORITHM_ID, mode)

    chunks = chunk(input_text, CHUNK_WIDTH)
    chunked = rec.record(
        title="Chunking",
        description=f"Divide the input into chunks of {CHUNK_WIDTH} characters.",
        input_snapshot=input_text,
        output_snapshot=SEPARATOR.join(chunks),
        explanation=(
            f"The {len(input_text)}-character input is split into {len(chunks)} chunk(s) of up to "
            f"{CHUNK_WIDTH} characters. The last chunk keeps whatever is left over and is never padded, "
            "so the checksum only ever sums real data."
        ),
        visualization=TextDiagram(
            "\n".join(f"chunk {i + 1}: {c!r}" for i, c in enumerate(chunks)) or "(no chunks)"
        ),
    )

    codes = [[ord(ch) for ch in c] for c in chunks]
    coded = rec.record(
        title="Numeric Conversion",
        description="Convert every character to its numeric code point.",
        input_snapshot=chunked,
        output_snapshot=_render_lists(codes),
        explanation=(
            "Computers add numbers, not letters, so each character is replaced by its code point "
            + (f"(for example {chunks[0][0]!r} becomes {codes[0][0]})." if chunks else "(nothing to convert).")
        ),
        visualization=TextDiagram(
            "\n".join(
                "  ".join(f"{ch}={code}" for ch, code in zip(c, cs)) for c, cs in zip(chunks, codes)
            ) or "(no characters)"
        ),
    )

    sums = [sum(cs) for cs in codes]
    summed = rec.record(
        title="Chunk Summation",
        description="Add up the codes inside each chunk independently.",
        input_snapshot=coded,
        output_snapshot=SEPARATOR.join(str(s) for s in sums),
        explanation=(
            "Each chunk collapses to a single number. "
            + ", ".join(f"chunk {i + 1} sums to {s}" for i, s in enumerate(sums))
            + ("." if sums else "There are no chunks, so there are no sums.")
        ),
        visualization=TextDiagram(
            "\n".join(" + ".join(str(c) for c in cs) + f" = {s}" for cs, s in zip(codes, sums)) or "(empty)"
        ),
    )

    total = sum(sums)
    checksum = (~total) & MASK_16
    rendered = f"{checksum:04X}"
    rec.record(
        title="Final Checksum",
        description="Sum the chunk totals and take the 16-bit one's complement.",
        input_snapshot=summed,
        output_snapshot=rendered,
        explanation=(
            f"The chunk sums add up to {total} (0x{total & MASK_16:04X} in the low 16 bits). Flipping every bit "
            f"and keeping 16 of them gives 0x{rendered}. A receiver who adds the data and the checksum "
            "together gets all ones, which is how corruption is spotted."
        ),
        visualization=TextDiagram(
            f"total    = {total}\n"
            f"total    = {format(total & MASK_16, '016b')}\n"
            f"~total   = {format(checksum, '016b')}\n"
            f"checksum = 0x{rendered}"
        ),
    )
    return rec.finish()
