"""Feistel-network walkthrough in the spirit of DES.

An 8-character block goes through a reversal "permutation", three rounds of
expand / key-mix / substitute / permute / swap, and a final reversal. Each
sub-operation becomes its own step so a learner can follow the halves.

Inputs longer than 8 characters are truncated and shorter ones are
space-padded on the right. That is lossy; callers should say so.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from typing import List, Tuple

from .model import BitGroups, CombineTriad, TextDiagram, TraceRecorder, TraceResult, hex_codes
from .textops import add_codes, cycle_to, encode_result, pad_block, reverse, to_bits, xor_text

ALGORITHM_ID = "feistel-cipher"
BLOCK_SIZE = 8
HALF = BLOCK_SIZE // 2
ROUNDS = 3
EXPANDED = HALF + 1

# Fixed demonstration key; never a secret
DEMO_KEY = "K3YDES42"


def derive_subkeys(key: str = DEMO_KEY, rounds: int = ROUNDS) -> List[str]:
    """Subkey r adds r (1-based) to every key character code, mod 256."""
    return [add_codes(key, r) for r in range(1, rounds + 1)]


def expand(half: str) -> str:
    """Grow a 4-character half to 5 by repeating its first character at the end."""
    return half + half[:1]


def substitute(data: str, round_no: int) -> str:
    """Add (position + round) to each code, mod 256."""
    return "".join(chr((ord(ch) + i + round_no) % 256) for i, ch in enumerate(data))


def _split(block: str) -> Tuple[str, str]:
    return block[:HALF], block[HALF:]


def generate(input_text: str, mode: str = "forward") -> TraceResult:
    rec = TraceRecorder(ALGORITHM_ID, mode)
    block = pad_block(input_text, BLOCK_SIZE)

    permuted = rec.record(
        title="Initial Permutation",
        description="Rearrange the 8-character block by reversing its order.",
        input_snapshot=block,
        output_snapshot=reverse(block),
        explanation=(
            f"The input is first fitted to exactly {BLOCK_SIZE} characters ({block!r}). Real DES shuffles the "
            "64 bits with a fixed table; here the characters are simply reversed so the movement is easy to see. "
            "Like the real table, this step adds no secrecy on its own."
        ),
        visualization=TextDiagram(f"{hex_codes(block)}\n  reversed\n{hex_codes(reverse(block))}"),
    )

    subkeys = derive_subkeys()
    shown = ", ".join(f"K{i + 1}={k!r}" for i, k in enumerate(subkeys)) + ", ..."
    block = rec.record(
        title="Key Schedule",
        description=f"Derive one subkey per round from the built-in key {DEMO_KEY!r}.",
        input_snapshot=permuted,
        output_snapshot=permuted,
        explanation=(
            f"Each round needs its own key. Subkey r is the base key with r added to every character code: "
            f"{shown} The block itself passes through unchanged. Real DES derives 16 subkeys with "
            "rotations and compression tables; only the first three are needed here."
        ),
        visualization=TextDiagram(
            "\n".join(f"K{i + 1}: {hex_codes(k)}" for i, k in enumerate(subkeys)) + "\n..."
        ),
    )

    for r, subkey in enumerate(subkeys, start=1):
        left, right = _split(block)

        expanded = rec.record(
            title=f"Round {r}: Expansion",
            description="Expand the right half from 4 to 5 characters.",
            input_snapshot=right,
            output_snapshot=expand(right),
            explanation=(
                f"The block splits into L={left!r} and R={right!r}. The round function only reads R, and it "
                f"first stretches it to {EXPANDED} characters by repeating {right[:1]!r} at the end, so it can be "
                "mixed with a longer key."
            ),
            visualization=BitGroups(to_bits(right), to_bits(expand(right)), caption="R -> E(R)"),
        )

        round_key = cycle_to(subkey, len(expanded))
        mixed = rec.record(
            title=f"Round {r}: Key Mixing",
            description=f"Combine the expanded half with subkey K{r} using XOR.",
            input_snapshot=expanded,
            output_snapshot=xor_text(expanded, round_key),
            explanation=(
                f"K{r} is cut to {len(round_key)} characters ({hex_codes(round_key)}) and XOR-ed position by "
                "position. XOR is its own inverse, which is what lets the same key undo the mixing later."
            ),
            visualization=CombineTriad(hex_codes(expanded), hex_codes(round_key), hex_codes(xor_text(expanded, round_key))),
        )

        substituted = rec.record(
            title=f"Round {r}: Substitution",
            description="Replace each character by shifting its code by position and round.",
            input_snapshot=mixed,
            output_snapshot=substitute(mixed, r),
            explanation=(
                f"Character i gets (i + {r}) added to its code, wrapping at 256. DES uses eight lookup "
                "tables here; the shift is a stand-in that still changes every position differently."
            ),
            visualization=BitGroups(to_bits(mixed), to_bits(substitute(mixed, r)), caption="S-box stand-in"),
        )

        f_out = rec.record(
            title=f"Round {r}: Permutation",
            description="Permute the substituted characters by reversing them.",
            input_snapshot=substituted,
            output_snapshot=reverse(substituted),
            explanation=(
                "Reversing spreads the influence of each position across the output, the job the P-box "
                f"does in DES. The result {hex_codes(reverse(substituted))} is the round function output F."
            ),
            visualization=TextDiagram(f"{hex_codes(substituted)}\n  reversed\n{hex_codes(reverse(substituted))}"),
        )

        new_left = right
        new_right = xor_text(left, cycle_to(f_out, HALF))
        block = rec.record(
            title=f"Round {r}: Swap and Combine",
            description="The old right half becomes the new left; the old left XOR F becomes the new right.",
            input_snapshot=f_out,
            output_snapshot=new_left + new_right,
            explanation=(
                f"F is cut to {HALF} characters and XOR-ed into L, giving the new right half "
                f"{hex_codes(new_right)}. The untouched R moves left. Only half the block changes per round, "
                "which is why Feistel ciphers can be undone even when F itself cannot."
            ),
            visualization=CombineTriad(hex_codes(left), hex_codes(cycle_to(f_out, HALF)), hex_codes(new_right)),
        )

    final = reverse(block)
    encoded = mode == "forward"
    output = encode_result(final) if encoded else final
    rec.record(
        title="Final Permutation",
        description="Reverse the combined halves to undo the initial rearrangement.",
        input_snapshot=block,
        output_snapshot=output,
        explanation=(
            f"After {ROUNDS} rounds the halves are joined and reversed, mirroring the inverse table at the "
            "end of DES. "
            + (
                f"The raw bytes {hex_codes(final)} are then Base64-encoded so the result is printable text."
                if encoded
                else "The raw transformed characters are returned without any text encoding."
            )
        ),
        visualization=TextDiagram(f"{hex_codes(block)}\n  reversed\n{hex_codes(final)}" + (f"\n  base64\n{output}" if encoded else "")),
    )
    return rec.finish()
