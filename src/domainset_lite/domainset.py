"""Build configuration, the four-kind Builder, and the frozen DomainSet.

A build picks one strategy per rule kind (where there is a choice) plus a
string materializer, via BuildOptions. The presets mirror the classic
configurations:

    BuildOptions.linear()   lists everywhere; cheapest setup, O(n) queries
    BuildOptions.fast()     hash sets for domains and suffixes
    BuildOptions()          hash set for domains, label trie for suffixes

Usage:
    builder = Builder(BuildOptions.fast())
    builder.insert(RuleKind.SUFFIX, "example.com")
    builder.insert(RuleKind.KEYWORD, "dev")
    ds = builder.freeze()

    ds.match("www.example.com")   # True
    ds.match("go.dev")            # True
    ds.match("example.org")       # False

Most callers build from rule text instead; see parser.parse().
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from domainset_lite.materialize import MaterializeStrategy
from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.matchers.exact import DomainHashBuilder, DomainLinearBuilder
from domainset_lite.matchers.keyword import KeywordLinearBuilder
from domainset_lite.matchers.regexp import RegexpLinearBuilder
from domainset_lite.matchers.suffix import SuffixHashBuilder, SuffixLinearBuilder
from domainset_lite.matchers.trie import SuffixTrieBuilder
from domainset_lite.rules import NO_HINT, CapacityHint, RuleKind

log = logging.getLogger(__name__)


class DomainStrategy(Enum):
    LINEAR = "linear"
    HASH = "hash"


class SuffixStrategy(Enum):
    LINEAR = "linear"
    HASH = "hash"
    TRIE = "trie"
    TRIE_RECURSIVE = "trie-recursive"


DEFAULT_ORDER: tuple[RuleKind, ...] = (
    RuleKind.DOMAIN,
    RuleKind.SUFFIX,
    RuleKind.KEYWORD,
    RuleKind.REGEXP,
)


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """How a DomainSet is built.

    order is the sequence in which frozen matchers are consulted. It never
    changes the answer, only how much work precedes a hit; put the kind
    most likely to match first.
    """
    domain_strategy: DomainStrategy = DomainStrategy.HASH
    suffix_strategy: SuffixStrategy = SuffixStrategy.TRIE
    materialize: MaterializeStrategy = MaterializeStrategy.ALIAS
    order: tuple[RuleKind, ...] = DEFAULT_ORDER

    def __post_init__(self) -> None:
        if sorted(k.value for k in self.order) != sorted(k.value for k in RuleKind):
            raise ValueError(
                f"order must list every RuleKind exactly once, got {self.order}"
            )

    @classmethod
    def linear(cls, **overrides) -> BuildOptions:
        """Linear scan for every kind."""
        base = cls(
            domain_strategy=DomainStrategy.LINEAR,
            suffix_strategy=SuffixStrategy.LINEAR,
        )
        return replace(base, **overrides)

    @classmethod
    def fast(cls, **overrides) -> BuildOptions:
        """Hash sets for domains and suffixes; quickest to build."""
        base = cls(
            domain_strategy=DomainStrategy.HASH,
            suffix_strategy=SuffixStrategy.HASH,
        )
        return replace(base, **overrides)

    @classmethod
    def from_names(
        cls,
        domain: str | None = None,
        suffix: str | None = None,
        materialize: str | None = None,
    ) -> BuildOptions:
        """Build options from strategy names, e.g. from CLI flags.

        Unset names keep their defaults.

        Raises:
            ValueError: a name does not denote a known strategy.
        """
        fields = {}
        try:
            if domain is not None:
                fields["domain_strategy"] = DomainStrategy(domain)
            if suffix is not None:
                fields["suffix_strategy"] = SuffixStrategy(suffix)
            if materialize is not None:
                fields["materialize"] = MaterializeStrategy(materialize)
        except ValueError as exc:
            raise ValueError(f"unknown strategy: {exc}") from exc
        return cls(**fields)

    def describe(self) -> str:
        return (
            f"domain={self.domain_strategy.value} "
            f"suffix={self.suffix_strategy.value} "
            f"materialize={self.materialize.value}"
        )


def new_builder(
    kind: RuleKind,
    options: BuildOptions,
    capacity: int = 0,
) -> MatcherBuilder:
    """Factory: the builder for `kind` under `options`."""
    if kind is RuleKind.DOMAIN:
        if options.domain_strategy is DomainStrategy.LINEAR:
            return DomainLinearBuilder(capacity)
        return DomainHashBuilder(capacity)
    if kind is RuleKind.SUFFIX:
        strategy = options.suffix_strategy
        if strategy is SuffixStrategy.LINEAR:
            return SuffixLinearBuilder(capacity)
        if strategy is SuffixStrategy.HASH:
            return SuffixHashBuilder(capacity)
        return SuffixTrieBuilder(
            capacity, recursive=strategy is SuffixStrategy.TRIE_RECURSIVE
        )
    if kind is RuleKind.KEYWORD:
        return KeywordLinearBuilder(capacity)
    if kind is RuleKind.REGEXP:
        return RegexpLinearBuilder(capacity)
    raise ValueError(f"unknown rule kind: {kind!r}")


class DomainSet:
    """Immutable set of matchers; a domain matches if any member matches.

    Safe to share between threads once built: members hold only frozen
    state and match() has no side effects.
    """

    __slots__ = ("_matchers",)

    def __init__(self, matchers: Iterable[Matcher] = ()) -> None:
        self._matchers: tuple[Matcher, ...] = tuple(matchers)

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        return self._matchers

    def match(self, domain: str) -> bool:
        for matcher in self._matchers:
            if matcher.match(domain):
                return True
        return False

    def count(self, kind: RuleKind | None = None) -> int:
        """Rules held for `kind`, or across all kinds when kind is None."""
        return sum(
            m.count() for m in self._matchers if kind is None or m.kind is kind
        )

    def rules(self, kind: RuleKind) -> list[str]:
        """Rules of one kind, enough to rebuild an equivalent set."""
        out: list[str] = []
        for matcher in self._matchers:
            if matcher.kind is kind:
                out.extend(matcher.rules())
        return out

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        members = ", ".join(repr(m) for m in self._matchers)
        return f"DomainSet([{members}])"


class Builder:
    """Accumulates rules of all four kinds, then freezes into a DomainSet.

    Args:
        options: strategies to use (default BuildOptions()).
        hint: expected rule counts, forwarded to each per-kind builder.

    Single-use: freeze() may be called once. Inserting afterwards raises
    RuntimeError.
    """

    def __init__(
        self,
        options: BuildOptions | None = None,
        hint: CapacityHint = NO_HINT,
    ) -> None:
        self._options = options or BuildOptions()
        self._hint = hint
        self._builders: dict[RuleKind, MatcherBuilder] = {
            kind: new_builder(kind, self._options, hint.for_kind(kind))
            for kind in RuleKind
        }
        self._frozen = False

    @property
    def options(self) -> BuildOptions:
        return self._options

    @property
    def capacity_hint(self) -> CapacityHint:
        return self._hint

    def builder(self, kind: RuleKind) -> MatcherBuilder:
        return self._builders[kind]

    def insert(self, kind: RuleKind, value: str) -> None:
        if self._frozen:
            raise RuntimeError("Builder already frozen")
        self._builders[kind].insert(value)

    def count(self, kind: RuleKind | None = None) -> int:
        """Values inserted for `kind`, or for all kinds when kind is None."""
        if kind is not None:
            return self._builders[kind].count()
        return sum(b.count() for b in self._builders.values())

    def freeze(self) -> DomainSet:
        """Convert every non-empty builder into its matcher, in options.order.

        Raises:
            BuildConversionError: a builder's finalize step rejected its
                internal state.
            RuntimeError: freeze() was already called.
        """
        if self._frozen:
            raise RuntimeError("Builder already frozen")
        self._frozen = True

        if self._hint != NO_HINT:
            for kind in RuleKind:
                expected = self._hint.for_kind(kind)
                actual = self._builders[kind].count()
                if expected != actual:
                    log.debug(
                        "capacity hint for %s was %d, got %d rules",
                        kind.value, expected, actual,
                    )

        matchers: list[Matcher] = []
        for kind in self._options.order:
            builder = self._builders[kind]
            if builder.count() == 0:
                continue
            matchers.append(builder.freeze())

        ds = DomainSet(matchers)
        log.debug(
            "froze domain set (%s): %s",
            self._options.describe(),
            ", ".join(f"{m.kind.value}={m.count()}" for m in ds.matchers) or "empty",
        )
        return ds
