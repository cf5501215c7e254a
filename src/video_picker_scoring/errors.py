from __future__ import annotations


class ScoringError(RuntimeError):
    """Base class for every failure raised by an analysis invocation."""

    code = 0


class InvalidArgumentError(ScoringError):
    code = 1


class AllocError(ScoringError):
    code = 2


class DecodeError(ScoringError):
    code = 4


class UnsupportedError(ScoringError):
    code = 5
