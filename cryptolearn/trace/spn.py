"""Substitution-permutation walkthrough in the spirit of AES.

The 16-character block is laid out as a 4x4 state (row-major) and taken
through an initial key XOR and three rounds of:

1. Substitute (add round index, mod 256)
2. Row-Shift (row r rotated left by r)
3. Column-Mix (code * 2 + round, mod 256) - skipped in the final round
4. Key-Combine (XOR with a round key)

Like AES, the last round has no column mixing. The state arithmetic runs on a
numpy integer grid; snapshots are the row-major string of that grid.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from .model import BitGroups, CombineTriad, MatrixGrid, TraceRecorder, TraceResult, hex_codes
from .textops import encode_result, pad_block, to_bits

ALGORITHM_ID = "spn-cipher"
BLOCK_SIZE = 16
SIDE = 4
ROUNDS = 3

# Fixed demonstration key (the classic AES worked-example key text)
DEMO_KEY = "Thats my Kung Fu"


def to_grid(text: str) -> np.ndarray:
    """Row-major 4x4 grid of code points. ``text`` must be 16 characters."""
    return np.array([ord(ch) for ch in text], dtype=np.int64).reshape(SIDE, SIDE)


def from_grid(grid: np.ndarray) -> str:
    return "".join(chr(int(v)) for v in grid.flatten())


def _cells(grid: np.ndarray) -> Tuple[Tuple[int, ...], ...]:
    return tuple(tuple(int(v) for v in row) for row in grid)


def round_key(r: int, key: str = DEMO_KEY) -> str:
    """Round key r: the base key rotated left by r characters, each code plus r (mod 256)."""
    rotated = key[r % len(key):] + key[:r % len(key)]
    return "".join(chr((ord(ch) + r) % 256) for ch in rotated)


def substitute(grid: np.ndarray, r: int) -> np.ndarray:
    return (grid + r) % 256


def shift_rows(grid: np.ndarray) -> np.ndarray:
    return np.stack([np.roll(grid[row], -row) for row in range(SIDE)])


def mix_columns(grid: np.ndarray, r: int) -> np.ndarray:
    return (grid * 2 + r) % 256


def add_key(grid: np.ndarray, key: str) -> np.ndarray:
    # key cycled over the 16 cells
    key_codes = np.array([ord(key[i % len(key)]) for i in range(grid.size)], dtype=np.int64)
    return np.bitwise_xor(grid, key_codes.reshape(grid.shape))


def generate(input_text: str, mode: str = "forward") -> TraceResult:
    rec = TraceRecorder(ALGORITHM_ID, mode)
    block = pad_block(input_text, BLOCK_SIZE)
    state = to_grid(block)

    snapshot = rec.record(
        title="State Matrix Formation",
        description="Arrange the 16 input characters into a 4x4 state grid, row by row.",
        input_snapshot=block,
        output_snapshot=from_grid(state),
        explanation=(
            f"The input is fitted to exactly {BLOCK_SIZE} characters ({block!r}) and written into the grid "
            "one row at a time. Every later operation works on this grid."
        ),
        visualization=MatrixGrid(_cells(state), caption="state"),
    )

    key_grid = to_grid(DEMO_KEY)
    snapshot = rec.record(
        title="Key Expansion",
        description=f"Lay the built-in key {DEMO_KEY!r} into a matching 4x4 grid.",
        input_snapshot=snapshot,
        output_snapshot=snapshot,
        explanation=(
            "AES expands its key into one round key per round. This walkthrough only shows the key laid "
            "out like the state; each round later derives its own key by rotating it and shifting the codes "
            "by the round number. The state passes through unchanged."
        ),
        visualization=MatrixGrid(_cells(key_grid), caption="key"),
    )

    before = state
    state = add_key(state, DEMO_KEY)
    snapshot = rec.record(
        title="Initial Round Key Addition",
        description="XOR every state cell with the matching key cell.",
        input_snapshot=snapshot,
        output_snapshot=from_grid(state),
        explanation=(
            f"Before any round, the key is mixed in so nothing downstream sees raw input. The first cell "
            f"becomes {int(before[0, 0])} XOR {int(key_grid[0, 0])} = {int(state[0, 0])}."
        ),
        visualization=CombineTriad(hex_codes(from_grid(before)), hex_codes(DEMO_KEY), hex_codes(from_grid(state))),
    )

    for r in range(1, ROUNDS + 1):
        last = r == ROUNDS

        before = state
        state = substitute(state, r)
        snapshot = rec.record(
            title=f"Round {r}: Substitute Bytes",
            description=f"Replace every byte by adding {r} to its code, mod 256.",
            input_snapshot=snapshot,
            output_snapshot=from_grid(state),
            explanation=(
                f"AES looks each byte up in a fixed S-box. Here the lookup is stood in for by adding the "
                f"round number, so {int(before[0, 0])} becomes {int(state[0, 0])}."
            ),
            visualization=BitGroups(to_bits(from_grid(before)), to_bits(from_grid(state)), caption="S-box stand-in"),
        )

        before = state
        state = shift_rows(state)
        snapshot = rec.record(
            title=f"Round {r}: Shift Rows",
            description="Rotate row n of the grid left by n positions.",
            input_snapshot=snapshot,
            output_snapshot=from_grid(state),
            explanation=(
                "Row 0 stays put, row 1 moves one place left, row 2 two places and row 3 three. Bytes from "
                "one column are spread over all four columns, so the next mixing step blends them."
            ),
            visualization=MatrixGrid(_cells(state), caption="after shift", previous=_cells(before)),
        )

        if not last:
            before = state
            state = mix_columns(state, r)
            snapshot = rec.record(
                title=f"Round {r}: Mix Columns",
                description=f"Transform every byte as (code * 2 + {r}) mod 256.",
                input_snapshot=snapshot,
                output_snapshot=from_grid(state),
                explanation=(
                    "AES multiplies each column by a fixed matrix over GF(2^8). The stand-in doubles each "
                    f"code and adds the round number: {int(before[0, 0])} * 2 + {r} = {int(state[0, 0])} (mod 256)."
                ),
                visualization=MatrixGrid(_cells(state), caption="after mix", previous=_cells(before)),
            )

        key = round_key(r)
        before = state
        state = add_key(state, key)
        final = from_grid(state)
        encoded = last and mode == "forward"
        output = encode_result(final) if encoded else final
        snapshot = rec.record(
            title=f"Round {r}: Add Round Key",
            description=f"XOR the state with round key {r}.",
            input_snapshot=snapshot,
            output_snapshot=output,
            explanation=(
                f"Round key {r} is the base key rotated left by {r} with {r} added to each code "
                f"({hex_codes(key)}). "
                + (
                    "This was the final round, so Mix Columns was skipped, as in AES. "
                    + (
                        f"The final state {hex_codes(final)} is Base64-encoded into printable text."
                        if encoded
                        else "The final state is reported as raw characters."
                    )
                    if last
                    else "The state moves on to the next round."
                )
            ),
            visualization=CombineTriad(hex_codes(from_grid(before)), hex_codes(key), hex_codes(final)),
        )

    return rec.finish()
