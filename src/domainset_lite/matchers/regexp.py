"""Regexp matcher backed by the standard re module.

Patterns compile once, at insert time, so a bad pattern fails the build
rather than surfacing on the first lookup. Matching uses search(), not
fullmatch(): a pattern matches anywhere in the domain unless it anchors
itself with ^ or $.
"""
from __future__ import annotations

import re

from domainset_lite.errors import PatternCompileError
from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.rules import RuleKind


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile pattern, wrapping re.error in PatternCompileError."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(pattern, str(exc)) from exc


class RegexpLinearMatcher(Matcher):
    __slots__ = ("_patterns",)

    kind = RuleKind.REGEXP

    def __init__(self, patterns: tuple[re.Pattern[str], ...]) -> None:
        self._patterns = patterns

    def match(self, domain: str) -> bool:
        for pattern in self._patterns:
            if pattern.search(domain) is not None:
                return True
        return False

    def count(self) -> int:
        return len(self._patterns)

    def rules(self) -> list[str]:
        return [p.pattern for p in self._patterns]


class RegexpLinearBuilder(MatcherBuilder):
    kind = RuleKind.REGEXP

    def __init__(self, capacity: int = 0) -> None:
        super().__init__(capacity)
        self._patterns: list[re.Pattern[str]] = []

    def _add(self, value: str) -> None:
        self._patterns.append(compile_pattern(value))

    def _build(self) -> RegexpLinearMatcher:
        return RegexpLinearMatcher(tuple(self._patterns))
