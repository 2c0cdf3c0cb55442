"""cryptolearn: step-by-step traces of teaching ciphers and checksums.

The generators here are simplified, non-standard stand-ins for AES, DES and
a summation checksum, built so every intermediate value can be shown to a
learner. They are not cryptographically secure and must never be used to
protect data.

Research / education only. Do NOT use in production.
"""

from .dispatcher import AlgorithmEntry, AlgorithmRegistry, dispatch, get_entry, list_algorithms
from .exceptions import CryptoLearnError, EmptyInput, EmptyTrace, SequencerIdle, UnsupportedAlgorithm
from .playback import PlaybackSequencer, SequencerState
from .trace.model import StepRecord, TraceRequest, TraceResult

__all__ = [
    "AlgorithmEntry",
    "AlgorithmRegistry",
    "dispatch",
    "get_entry",
    "list_algorithms",
    "CryptoLearnError",
    "EmptyInput",
    "EmptyTrace",
    "SequencerIdle",
    "UnsupportedAlgorithm",
    "PlaybackSequencer",
    "SequencerState",
    "StepRecord",
    "TraceRequest",
    "TraceResult",
]
