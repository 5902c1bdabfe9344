"""Shared fixtures for DomainSet tests."""

from __future__ import annotations

import pytest

from domainset_lite.domainset import BuildOptions, SuffixStrategy
from domainset_lite.materialize import MaterializeStrategy

SAMPLE_RULES = """\
# domain set capacity hint 1 6 1 1 DSKR
domain:www.example.net
suffix:example.com
suffix:github.com
suffix:cube64128.xyz
suffix:api.ipify.org
suffix:api6.ipify.org
suffix:archlinux.org
keyword:dev
regexp:^adservice\\.google\\.([a-z]{2}|com?)(\\.[a-z]{2})?$
"""

# (domain, expected) for SAMPLE_RULES
EXPECTED = [
    ("net", False),
    ("example.net", False),
    ("www.example.net", True),
    ("wwww.example.net", False),
    ("test.www.example.net", False),
    ("com", False),
    ("example.com", True),
    ("www.example.com", True),
    ("gobyexample.com", False),
    ("example.org", False),
    ("github.com", True),
    ("api.github.com", True),
    ("raw.githubusercontent.com", False),
    ("github.blog", False),
    ("cube64128.xyz", True),
    ("www.cube64128.xyz", True),
    ("notcube64128.xyz", False),
    ("org", False),
    ("ipify.org", False),
    ("api.ipify.org", True),
    ("api6.ipify.org", True),
    ("api64.ipify.org", False),
    ("www.ipify.org", False),
    ("archlinux.org", True),
    ("aur.archlinux.org", True),
    ("wikipedia.org", False),
    ("dev", True),
    ("go.dev", True),
    ("drewdevault.com", True),
    ("developer.mozilla.org", True),
    ("adservice.google.com", True),
]

ALL_OPTIONS = {
    "linear": BuildOptions.linear(),
    "fast": BuildOptions.fast(),
    "trie": BuildOptions(),
    "trie-recursive": BuildOptions(suffix_strategy=SuffixStrategy.TRIE_RECURSIVE),
    "clone": BuildOptions(materialize=MaterializeStrategy.CLONE),
    "arena": BuildOptions.linear(materialize=MaterializeStrategy.ARENA),
}


@pytest.fixture(params=list(ALL_OPTIONS), ids=list(ALL_OPTIONS))
def options(request) -> BuildOptions:
    """Every build configuration worth distinguishing."""
    return ALL_OPTIONS[request.param]


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text(SAMPLE_RULES, encoding="utf-8")
    return path
