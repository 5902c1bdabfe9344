"""Exception hierarchy for building and restoring domain sets.

Every failure during parse, build or restore is terminal for that attempt:
no partially-built DomainSet is ever handed back. Matching itself never
raises.
"""
from __future__ import annotations


class DomainSetError(Exception):
    """Base class for all rule-set build and restore failures."""


class EmptyRuleset(DomainSetError):
    """Raised when the text holds no rule lines after hints, comments and blanks."""

    def __init__(self) -> None:
        super().__init__("empty ruleset: no rule lines found")


class MalformedHint(DomainSetError):
    """Raised when the capacity hint marker is present but its counts are bad."""

    def __init__(self, line: str, detail: str) -> None:
        super().__init__(f"bad capacity hint ({detail}): {line}")
        self.line = line
        self.detail = detail


class InvalidLine(DomainSetError):
    """Raised for a line that is neither a comment nor a tagged rule."""

    def __init__(self, line: str) -> None:
        super().__init__(f"invalid line: {line}")
        self.line = line


class PatternCompileError(DomainSetError):
    """Raised when a regexp rule does not compile.

    The underlying re.error is chained as __cause__.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"bad regexp {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class BuildConversionError(DomainSetError):
    """Raised when a builder's finalize step finds an invalid internal state."""


class SnapshotError(DomainSetError):
    """Raised when a binary snapshot cannot be decoded."""
