"""Suffix matchers backed by a list or a hash set.

A domain d matches suffix s when d == s, or when d is longer, ends with s,
and the character just before that tail is a dot. "notcube.com" does not
match "cube.com"; "www.cube.com" does.

The linear matcher applies that predicate to every suffix. The hash
matcher flips it around: it enumerates the domain's own boundary suffixes
(shortest first, then the whole domain) and looks each one up in a set.
The trie in trie.py gives a third, label-by-label answer to the same
question; all three must agree.
"""
from __future__ import annotations

from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.rules import RuleKind


def match_domain_suffix(domain: str, suffix: str) -> bool:
    """Boundary-aware suffix test for a single rule."""
    if domain == suffix:
        return True
    n = len(domain) - len(suffix)
    return n > 0 and domain[n - 1] == "." and domain.endswith(suffix)


class SuffixLinearMatcher(Matcher):
    __slots__ = ("_suffixes",)

    kind = RuleKind.SUFFIX

    def __init__(self, suffixes: tuple[str, ...]) -> None:
        self._suffixes = suffixes

    def match(self, domain: str) -> bool:
        for suffix in self._suffixes:
            if match_domain_suffix(domain, suffix):
                return True
        return False

    def count(self) -> int:
        return len(self._suffixes)

    def rules(self) -> list[str]:
        return list(self._suffixes)


class SuffixLinearBuilder(MatcherBuilder):
    kind = RuleKind.SUFFIX

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._suffixes: list[str] = []

    def _add(self, value: str) -> None:
        self._suffixes.append(value)

    def _build(self) -> SuffixLinearMatcher:
        return SuffixLinearMatcher(tuple(self._suffixes))


class SuffixHashMatcher(Matcher):
    __slots__ = ("_suffixes",)

    kind = RuleKind.SUFFIX

    def __init__(self, suffixes: frozenset[str]) -> None:
        self._suffixes = suffixes

    def match(self, domain: str) -> bool:
        suffixes = self._suffixes
        i = domain.rfind(".")
        while i != -1:
            if domain[i + 1:] in suffixes:
                return True
            i = domain.rfind(".", 0, i)
        return domain in suffixes

    def count(self) -> int:
        return len(self._suffixes)

    def rules(self) -> list[str]:
        return sorted(self._suffixes)


class SuffixHashBuilder(MatcherBuilder):
    kind = RuleKind.SUFFIX

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._suffixes: set[str] = set()

    def _add(self, value: str) -> None:
        self._suffixes.add(value)

    def _build(self) -> SuffixHashMatcher:
        return SuffixHashMatcher(frozenset(self._suffixes))
