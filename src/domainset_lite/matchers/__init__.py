"""Per-kind builders and matchers: exact, suffix (list/hash/trie), keyword, regexp."""

from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.matchers.exact import (
    DomainHashBuilder,
    DomainHashMatcher,
    DomainLinearBuilder,
    DomainLinearMatcher,
)
from domainset_lite.matchers.keyword import KeywordLinearBuilder, KeywordLinearMatcher
from domainset_lite.matchers.regexp import RegexpLinearBuilder, RegexpLinearMatcher
from domainset_lite.matchers.suffix import (
    SuffixHashBuilder,
    SuffixHashMatcher,
    SuffixLinearBuilder,
    SuffixLinearMatcher,
    match_domain_suffix,
)
from domainset_lite.matchers.trie import (
    DomainSuffixTrie,
    FrozenSuffixTrie,
    FrozenSuffixTrieR,
    SuffixTrieBuilder,
    TrieNode,
)

__all__ = [
    "DomainHashBuilder",
    "DomainHashMatcher",
    "DomainLinearBuilder",
    "DomainLinearMatcher",
    "DomainSuffixTrie",
    "FrozenSuffixTrie",
    "FrozenSuffixTrieR",
    "KeywordLinearBuilder",
    "KeywordLinearMatcher",
    "Matcher",
    "MatcherBuilder",
    "RegexpLinearBuilder",
    "RegexpLinearMatcher",
    "SuffixHashBuilder",
    "SuffixHashMatcher",
    "SuffixLinearBuilder",
    "SuffixLinearMatcher",
    "SuffixTrieBuilder",
    "TrieNode",
    "match_domain_suffix",
]
