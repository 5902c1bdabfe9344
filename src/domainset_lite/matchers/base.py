"""Abstract bases for per-kind builders and matchers.

Every rule kind has one or more strategies. Each strategy is a pair: a
mutable builder that accumulates rules during the parse pass, and the
immutable matcher it freezes into. Callers depend only on these two
interfaces, so strategies can be swapped per build and benchmarked
against each other without touching the parser or the DomainSet.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from domainset_lite.rules import RuleKind


class Matcher(ABC):
    """Read-only predicate over one rule kind.

    Implementations hold only immutable state once constructed, so a
    single instance may serve any number of threads without locking.
    """

    __slots__ = ()

    kind: RuleKind

    @abstractmethod
    def match(self, domain: str) -> bool:
        """Return True if domain is covered by any rule of this matcher."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of rules held (after deduplication or pruning)."""
        ...

    @abstractmethod
    def rules(self) -> list[str]:
        """Rules sufficient to rebuild an equivalent matcher."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rules={self.count()})"


class MatcherBuilder(ABC):
    """Write-only accumulator for one rule kind.

    Not thread-safe. freeze() consumes the builder: after it returns, any
    further insert() or freeze() raises RuntimeError.

    Args:
        capacity: expected number of rules, taken from the capacity hint.
            Advisory only.
    """

    kind: RuleKind

    def __init__(self, capacity: int = 0) -> None:
        self._capacity = capacity
        self._inserted = 0
        self._frozen = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def frozen(self) -> bool:
        return self._frozen

    def count(self) -> int:
        """Number of insert() calls accepted so far, duplicates included."""
        return self._inserted

    def insert(self, value: str) -> None:
        if self._frozen:
            raise RuntimeError(f"{type(self).__name__} already frozen")
        self._add(value)
        self._inserted += 1

    def freeze(self) -> Matcher:
        """Convert into the immutable matcher. Callable exactly once."""
        if self._frozen:
            raise RuntimeError(f"{type(self).__name__} already frozen")
        self._frozen = True
        return self._build()

    @abstractmethod
    def _add(self, value: str) -> None:
        ...

    @abstractmethod
    def _build(self) -> Matcher:
        ...
