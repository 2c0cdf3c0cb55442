"""Algorithm catalog and trace dispatch.

``dispatch`` is pure: every call validates the request and recomputes the
trace from scratch. Nothing is cached.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .exceptions import EmptyInput, UnsupportedAlgorithm
from .trace import checksum, feistel, spn
from .trace.model import TraceRequest, TraceResult

logger = logging.getLogger(__name__)

Generator = Callable[[str, str], TraceResult]

# Identifiers used by the original selector screen
ALIASES: Dict[str, str] = {
    "aes": spn.ALGORITHM_ID,
    "des": feistel.ALGORITHM_ID,
}


@dataclass(frozen=True)
class AlgorithmEntry:
    """A registered generator plus the metadata a selection screen shows."""
    algorithm_id: str
    title: str
    description: str
    step_overview: str
    complexity: str
    example_input: str
    generate: Generator
    uses_mode: bool = True
    block_size: Optional[int] = None


def builtin_algorithms() -> Dict[str, AlgorithmEntry]:
    entries: Dict[str, AlgorithmEntry] = {}

    entries[spn.ALGORITHM_ID] = AlgorithmEntry(
        algorithm_id=spn.ALGORITHM_ID,
        title="AES-style Substitution-Permutation Network",
        description="A 4x4 byte state taken through substitution, row shifts, column mixing and key addition",
        step_overview="AddRoundKey -> SubBytes -> ShiftRows -> MixColumns",
        complexity="Advanced",
        example_input="Hello, this is a secret message!",
        generate=spn.generate,
        block_size=spn.BLOCK_SIZE,
    )
    entries[feistel.ALGORITHM_ID] = AlgorithmEntry(
        algorithm_id=feistel.ALGORITHM_ID,
        title="DES-style Feistel Network",
        description="An 8-character block split into halves that trade places over three rounds",
        step_overview="Initial Permutation -> 3 Rounds -> Final Permutation",
        complexity="Intermediate",
        example_input="Secret123",
        generate=feistel.generate,
        block_size=feistel.BLOCK_SIZE,
    )
    entries[checksum.ALGORITHM_ID] = AlgorithmEntry(
        algorithm_id=checksum.ALGORITHM_ID,
        title="Checksum Algorithm",
        description="Simple error detection using summation and a one's complement",
        step_overview="Block Division -> Sum Calculation -> Checksum Generation",
        complexity="Beginner",
        example_input="This is sample data for checksum calculation.",
        generate=checksum.generate,
        uses_mode=False,
    )
    return entries


class AlgorithmRegistry:
    """Lookup of trace generators by identifier (aliases accepted)."""

    def __init__(self):
        self._entries: Dict[str, AlgorithmEntry] = builtin_algorithms()

    def resolve(self, algorithm: str) -> str:
        key = algorithm.strip().lower()
        key = ALIASES.get(key, key)
        if key not in self._entries:
            raise UnsupportedAlgorithm(algorithm)
        return key

    def get(self, algorithm: str) -> AlgorithmEntry:
        return self._entries[self.resolve(algorithm)]

    def list_ids(self) -> List[str]:
        return list(self._entries.keys())

    def list(self) -> List[AlgorithmEntry]:
        return list(self._entries.values())

    def exists(self, algorithm: str) -> bool:
        try:
            self.resolve(algorithm)
        except UnsupportedAlgorithm:
            return False
        return True


_DEFAULT_REGISTRY = AlgorithmRegistry()


def list_algorithms() -> List[str]:
    return _DEFAULT_REGISTRY.list_ids()


def get_entry(algorithm: str) -> AlgorithmEntry:
    return _DEFAULT_REGISTRY.get(algorithm)


def validate_request(request: TraceRequest, registry: Optional[AlgorithmRegistry] = None) -> AlgorithmEntry:
    """Boundary checks run before any generator: algorithm first, then input."""
    reg = registry or _DEFAULT_REGISTRY
    try:
        entry = reg.get(request.algorithm)
    except UnsupportedAlgorithm:
        logger.warning("Rejected trace request: unsupported algorithm %r", request.algorithm)
        raise
    if not request.input_text.strip():
        logger.warning("Rejected trace request for %s: empty input", entry.algorithm_id)
        raise EmptyInput()
    return entry


def dispatch(request: TraceRequest, registry: Optional[AlgorithmRegistry] = None) -> TraceResult:
    """Route ``request`` to its generator and return the trace unchanged.

    Leading and trailing whitespace is stripped from the input before it
    reaches the generator, as the input form does; inner whitespace is kept.

    Raises:
        UnsupportedAlgorithm: the identifier matches no registered generator.
        EmptyInput: the input text is empty or whitespace only.
    """
    entry = validate_request(request, registry)
    mode = request.mode if entry.uses_mode else "forward"
    text = request.input_text.strip()
    logger.debug("Dispatching %s (mode=%s, %d chars)", entry.algorithm_id, mode, len(text))
    result = entry.generate(text, mode)
    logger.debug("Generated %s", result.summary())
    return result
