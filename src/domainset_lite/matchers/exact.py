"""Exact-name matchers: byte-for-byte equality against inserted domains.

Two strategies with the same contract:

    linear -- tuple, O(n) membership. Cheapest to build.
    hash   -- frozenset, O(1) average membership. Pays hashing at build.
"""
from __future__ import annotations

from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.rules import RuleKind


class DomainLinearMatcher(Matcher):
    __slots__ = ("_domains",)

    kind = RuleKind.DOMAIN

    def __init__(self, domains: tuple[str, ...]) -> None:
        self._domains = domains

    def match(self, domain: str) -> bool:
        return domain in self._domains

    def count(self) -> int:
        return len(self._domains)

    def rules(self) -> list[str]:
        return list(self._domains)


class DomainLinearBuilder(MatcherBuilder):
    kind = RuleKind.DOMAIN

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._domains: list[str] = []

    def _add(self, value: str) -> None:
        self._domains.append(value)

    def _build(self) -> DomainLinearMatcher:
        return DomainLinearMatcher(tuple(self._domains))


class DomainHashMatcher(Matcher):
    __slots__ = ("_domains",)

    kind = RuleKind.DOMAIN

    def __init__(self, domains: frozenset[str]) -> None:
        self._domains = domains

    def match(self, domain: str) -> bool:
        return domain in self._domains

    def count(self) -> int:
        return len(self._domains)

    def rules(self) -> list[str]:
        return sorted(self._domains)


class DomainHashBuilder(MatcherBuilder):
    kind = RuleKind.DOMAIN

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._domains: set[str] = set()

    def _add(self, value: str) -> None:
        self._domains.add(value)

    def _build(self) -> DomainHashMatcher:
        return DomainHashMatcher(frozenset(self._domains))
