"""Tests for boundary-aware suffix matching and its three strategies."""

import pytest

from domainset_lite.matchers.suffix import (
    SuffixHashBuilder,
    SuffixHashMatcher,
    SuffixLinearBuilder,
    SuffixLinearMatcher,
    match_domain_suffix,
)
from domainset_lite.matchers.trie import SuffixTrieBuilder
from domainset_lite.rules import RuleKind
from tests.matchers.conftest import random_domains, random_suffixes


def _reference(domain: str, suffix: str) -> bool:
    return domain == suffix or domain.endswith("." + suffix)


def _all_builders():
    return [
        SuffixLinearBuilder(),
        SuffixHashBuilder(),
        SuffixTrieBuilder(),
        SuffixTrieBuilder(recursive=True),
    ]


class TestBoundaryPredicate:
    @pytest.mark.parametrize("domain,suffix,expected", [
        ("example.com", "example.com", True),
        ("www.example.com", "example.com", True),
        ("a.b.example.com", "example.com", True),
        ("gobyexample.com", "example.com", False),
        ("notcube64128.xyz", "cube64128.xyz", False),
        ("com", "example.com", False),
        ("example.com.cn", "example.com", False),
        (".example.com", "example.com", True),
        ("", "", True),
        ("a.", "", True),
        ("a.b", "", False),
        ("a..com", ".com", True),
        ("x.com", ".com", False),
    ])
    def test_cases(self, domain, suffix, expected):
        assert match_domain_suffix(domain, suffix) is expected

    def test_agrees_with_endswith_dot_form(self):
        suffixes = random_suffixes(200)
        domains = random_domains(400)
        for s in suffixes:
            for d in domains:
                assert match_domain_suffix(d, s) == _reference(d, s), (d, s)


class TestLinearAndHash:
    def test_linear_matches(self, sample_suffixes):
        b = SuffixLinearBuilder()
        for s in sample_suffixes:
            b.insert(s)
        m = b.freeze()
        assert isinstance(m, SuffixLinearMatcher)
        assert m.kind is RuleKind.SUFFIX
        assert m.match("api.github.com")
        assert m.match("archlinux.org")
        assert not m.match("raw.githubusercontent.com")
        assert not m.match("api64.ipify.org")
        assert not m.match("ipify.org")

    def test_hash_matches(self, sample_suffixes):
        b = SuffixHashBuilder()
        for s in sample_suffixes:
            b.insert(s)
        m = b.freeze()
        assert isinstance(m, SuffixHashMatcher)
        assert m.match("www.cube64128.xyz")
        assert m.match("api6.ipify.org")
        assert not m.match("www.ipify.org")
        assert not m.match("notcube64128.xyz")
        assert not m.match("org")

    def test_hash_dedups(self):
        b = SuffixHashBuilder()
        for s in ["a.com", "a.com", "b.com"]:
            b.insert(s)
        assert b.count() == 3
        m = b.freeze()
        assert m.count() == 2
        assert m.rules() == ["a.com", "b.com"]

    def test_linear_keeps_duplicates(self):
        b = SuffixLinearBuilder()
        for s in ["a.com", "a.com"]:
            b.insert(s)
        assert b.freeze().count() == 2

    def test_empty_matcher_matches_nothing(self):
        for b in _all_builders():
            m = b.freeze()
            assert m.count() == 0
            assert not m.match("example.com")
            assert not m.match("")


class TestStrategyConsistency:
    """Every strategy must give the same answer as the linear predicate."""

    @pytest.mark.parametrize("order", ["given", "short_first", "long_first"])
    def test_random_rules_agree(self, order):
        suffixes = random_suffixes(60)
        if order == "short_first":
            suffixes.sort(key=lambda s: s.count("."))
        elif order == "long_first":
            suffixes.sort(key=lambda s: -s.count("."))
        domains = random_domains(2000)

        matchers = []
        for b in _all_builders():
            for s in suffixes:
                b.insert(s)
            matchers.append(b.freeze())

        for d in domains:
            expected = any(_reference(d, s) for s in suffixes)
            answers = [m.match(d) for m in matchers]
            assert answers == [expected] * len(matchers), (d, answers)

    def test_sample_rules_agree(self, sample_suffixes):
        domains = [
            "com", "example.com", "www.example.com", "gobyexample.com",
            "example.org", "github.com", "api.github.com",
            "raw.githubusercontent.com", "github.blog", "cube64128.xyz",
            "www.cube64128.xyz", "notcube64128.xyz", "org", "ipify.org",
            "api.ipify.org", "api6.ipify.org", "api64.ipify.org",
            "www.ipify.org", "archlinux.org", "aur.archlinux.org",
            "wikipedia.org",
        ]
        matchers = []
        for b in _all_builders():
            for s in sample_suffixes:
                b.insert(s)
            matchers.append(b.freeze())
        for d in domains:
            assert len({m.match(d) for m in matchers}) == 1, d
