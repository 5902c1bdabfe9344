"""Keyword matcher: case-sensitive substring containment.

Keyword lists are short in practice, so a plain scan with `in` beats the
setup cost of a multi-pattern automaton.
"""
from __future__ import annotations

from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.rules import RuleKind


class KeywordLinearMatcher(Matcher):
    __slots__ = ("_keywords",)

    kind = RuleKind.KEYWORD

    def __init__(self, keywords: tuple[str, ...]) -> None:
        self._keywords = keywords

    def match(self, domain: str) -> bool:
        for keyword in self._keywords:
            if keyword in domain:
                return True
        return False

    def count(self) -> int:
        return len(self._keywords)

    def rules(self) -> list[str]:
        return list(self._keywords)


class KeywordLinearBuilder(MatcherBuilder):
    kind = RuleKind.KEYWORD

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._keywords: list[str] = []

    def _add(self, value: str) -> None:
        self._keywords.append(value)

    def _build(self) -> KeywordLinearMatcher:
        return KeywordLinearMatcher(tuple(self._keywords))
