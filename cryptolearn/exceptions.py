"""Error taxonomy for trace generation and playback.

Every error here is recoverable: the caller shows ``str(err)`` to the user
and returns to input selection. Nothing in this module should ever be fatal.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations


class CryptoLearnError(Exception):
    """Base class for user-facing, recoverable failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedAlgorithm(CryptoLearnError, KeyError):
    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(
            f"Unsupported algorithm: {algorithm!r}. "
            "Choose one of spn-cipher, feistel-cipher or checksum."
        )


class EmptyInput(CryptoLearnError, ValueError):
    def __init__(self):
        super().__init__("Input text is empty. Please enter some text to process.")


class EmptyTrace(CryptoLearnError, ValueError):
    def __init__(self):
        super().__init__("Cannot play back an empty trace.")


class SequencerIdle(CryptoLearnError, RuntimeError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no trace is loaded.")
