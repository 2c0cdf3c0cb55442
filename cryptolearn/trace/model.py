"""Step Record Model shared by every trace generator.

A trace is a non-empty, ordered, immutable tuple of :class:`StepRecord`.
Each record carries before/after snapshots of the working data, prose for
the learner, and a display-only visualization payload drawn from a closed
set of variants (:data:`Visualization`).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Mode = Literal["forward", "inverse", "both"]

# Vocabulary of the original encrypt/decrypt selector
MODE_ALIASES: Dict[str, str] = {
    "encrypt": "forward",
    "decrypt": "inverse",
}


def hex_codes(text: str) -> str:
    """Render each character as a hex code point, at least two digits."""
    return " ".join(f"{ord(ch):02X}" for ch in text)


# ============================================================================
# VISUALIZATION VARIANTS
# ============================================================================

@dataclass(frozen=True)
class TextDiagram:
    """Plain-text diagram, rendered verbatim in a monospace block."""
    kind: ClassVar[str] = "text"
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class MatrixGrid:
    """4x4 grid of character codes, row-major.

    ``previous`` holds the grid before the operation when the operation moves
    cells around (row shifting), so a renderer can animate the move.
    """
    kind: ClassVar[str] = "matrix"
    cells: Tuple[Tuple[int, ...], ...]
    caption: str = ""
    previous: Optional[Tuple[Tuple[int, ...], ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "cells": [list(row) for row in self.cells],
            "caption": self.caption,
            "previous": [list(row) for row in self.previous] if self.previous is not None else None,
        }


@dataclass(frozen=True)
class BitGroups:
    """Per-character 8-bit groups before and after a bit-level operation."""
    kind: ClassVar[str] = "bits"
    before: Tuple[str, ...]
    after: Tuple[str, ...]
    caption: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "before": list(self.before), "after": list(self.after), "caption": self.caption}


@dataclass(frozen=True)
class CombineTriad:
    """Two operands and the result of combining them (XOR)."""
    kind: ClassVar[str] = "triad"
    left: str
    right: str
    result: str
    operator: str = "XOR"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


Visualization = Union[TextDiagram, MatrixGrid, BitGroups, CombineTriad]


# ============================================================================
# STEP RECORD / TRACE RESULT
# ============================================================================

@dataclass(frozen=True)
class StepRecord:
    """One named, explained stage of a trace.

    Attributes:
        ordinal: 1-based position in the trace, contiguous
        title: Short label, unique within the trace
        description: One sentence saying what the step does
        input_snapshot: Exact working data entering the step
        output_snapshot: Exact working data leaving the step
        explanation: Longer rationale, may quote concrete values
        visualization: Display-only payload
    """
    ordinal: int
    title: str
    description: str
    input_snapshot: str
    output_snapshot: str
    explanation: str
    visualization: Visualization

    @property
    def input_hex(self) -> str:
        return hex_codes(self.input_snapshot)

    @property
    def output_hex(self) -> str:
        return hex_codes(self.output_snapshot)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            "title": self.title,
            "description": self.description,
            "input_snapshot": self.input_snapshot,
            "output_snapshot": self.output_snapshot,
            "input_hex": self.input_hex,
            "output_hex": self.output_hex,
            "explanation": self.explanation,
            "visualization": self.visualization.to_dict(),
        }


@dataclass(frozen=True)
class TraceResult:
    """Ordered steps of one request plus the reported result."""
    algorithm: str
    mode: str
    steps: Tuple[StepRecord, ...]
    result: str

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def final_step(self) -> StepRecord:
        return self.steps[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "mode": self.mode,
            "result": self.result,
            "steps": [s.to_dict() for s in self.steps],
        }

    def summary(self) -> str:
        return f"{self.algorithm} ({self.mode}): {len(self.steps)} steps -> {self.result!r}"


class TraceRecorder:
    """Accumulates steps for one generator run and freezes them.

    Ordinals are assigned here so generators never number steps by hand.
    """

    def __init__(self, algorithm: str, mode: str):
        self.algorithm = algorithm
        self.mode = mode
        self._steps: List[StepRecord] = []
        self._titles: set = set()

    def record(
        self,
        title: str,
        description: str,
        input_snapshot: str,
        output_snapshot: str,
        explanation: str,
        visualization: Visualization,
    ) -> str:
        """Append a step and return its output snapshot for chaining."""
        if title in self._titles:
            raise ValueError(f"Duplicate step title in trace: {title}")
        self._titles.add(title)
        self._steps.append(
            StepRecord(
                ordinal=len(self._steps) + 1,
                title=title,
                description=description,
                input_snapshot=input_snapshot,
                output_snapshot=output_snapshot,
                explanation=explanation,
                visualization=visualization,
            )
        )
        return output_snapshot

    def finish(self) -> TraceResult:
        if not self._steps:
            raise ValueError("A trace must contain at least one step")
        steps = tuple(self._steps)
        return TraceResult(
            algorithm=self.algorithm,
            mode=self.mode,
            steps=steps,
            result=steps[-1].output_snapshot,
        )


# ============================================================================
# TRACE REQUEST
# ============================================================================

class TraceRequest(BaseModel):
    """Caller-supplied request; constructed once per user action.

    ``input_text`` is checked for emptiness by the dispatcher rather than
    here, so callers get :class:`~cryptolearn.exceptions.EmptyInput` instead
    of a pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    algorithm: str
    input_text: str
    mode: Mode = Field(default="forward")

    @field_validator("algorithm")
    @classmethod
    def _normalize_algorithm(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return MODE_ALIASES.get(v, v)
        return v
