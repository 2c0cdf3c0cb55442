"""Step-trace generators and the shared step model.

Research / education only. Do NOT use in production.
"""

from .model import (
    BitGroups,
    CombineTriad,
    MatrixGrid,
    Mode,
    StepRecord,
    TextDiagram,
    TraceRecorder,
    TraceRequest,
    TraceResult,
    Visualization,
)
from . import checksum, feistel, spn

__all__ = [
    "BitGroups",
    "CombineTriad",
    "MatrixGrid",
    "Mode",
    "StepRecord",
    "TextDiagram",
    "TraceRecorder",
    "TraceRequest",
    "TraceResult",
    "Visualization",
    "checksum",
    "feistel",
    "spn",
]
