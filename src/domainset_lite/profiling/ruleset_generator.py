"""Synthetic rule lists and query streams for benchmarking.

Ruleset shape:
  - num_suffixes suffix rules, one or two labels under a shared TLD pool,
    so the trie gets real branching and some suffixes nest inside others
  - num_domains exact rules built the same way plus a host label
  - a handful of keywords and anchored regexps
  - capacity hint header with the exact counts

Query stream: a Zipf-like mix of hits (subdomains of suffix rules, exact
domains, keyword carriers) and misses (near-miss names that share a
suffix's text but not its label boundary, and unrelated hosts). The
first tenth of the candidate pool gets most of the traffic, like real
resolver logs.
"""
from __future__ import annotations

import random

from domainset_lite.rules import CapacityHint

_TLD = ["com", "org", "io", "net", "dev", "cn", "xyz"]
_WORDS = [
    "example", "github", "google", "archlinux", "ipify", "cloudflare",
    "mozilla", "wikipedia", "kernel", "debian", "fedora", "python",
    "rust", "golang", "docker", "npmjs", "cdn", "static", "media", "edge",
]
_HOSTS = ["www", "api", "cdn", "mail", "ws", "auth", "img", "dl"]


class RulesetGenerator:
    """Generate a reproducible ruleset and matching query workload."""

    __slots__ = (
        "_rng", "_domains", "_suffixes", "_keywords", "_regexps",
        "_zipf_weights", "_candidates",
    )

    def __init__(
        self,
        num_domains: int = 200,
        num_suffixes: int = 2_000,
        num_keywords: int = 4,
        num_regexps: int = 2,
        seed: int = 42,
    ) -> None:
        self._rng = random.Random(seed)
        self._suffixes = self._generate_suffixes(num_suffixes)
        self._domains = [
            f"{self._rng.choice(_HOSTS)}.{self._rng.choice(self._suffixes)}"
            for _ in range(num_domains)
        ] if self._suffixes else [f"host{i}.example.net" for i in range(num_domains)]
        self._keywords = [f"kw{i}track" for i in range(num_keywords)]
        self._regexps = [
            rf"^ad{i}\.[a-z]+\.(com|net)$" for i in range(num_regexps)
        ]
        self._candidates = self._generate_candidates()
        # candidate i has weight 1/(i+1)
        self._zipf_weights = [1.0 / (i + 1) for i in range(len(self._candidates))]

    def _generate_suffixes(self, n: int) -> list[str]:
        suffixes = []
        for i in range(n):
            tld = self._rng.choice(_TLD)
            word = self._rng.choice(_WORDS)
            roll = self._rng.random()
            if roll < 0.5:
                suffixes.append(f"{word}{i}.{tld}")
            elif roll < 0.8:
                suffixes.append(f"{self._rng.choice(_HOSTS)}.{word}{i // 2}.{tld}")
            else:
                suffixes.append(f"{word}.{tld}")
        return suffixes

    def _generate_candidates(self) -> list[str]:
        rng = self._rng
        pool: list[str] = []
        for suffix in self._suffixes[:200]:
            pool.append(f"{rng.choice(_HOSTS)}.{suffix}")
            pool.append(f"not{suffix}")
        pool.extend(self._domains[:100])
        pool.extend(f"{rng.choice(_HOSTS)}.{kw}.example.org" for kw in self._keywords)
        pool.extend(f"{rng.choice(_HOSTS)}.miss{i}.invalid" for i in range(100))
        rng.shuffle(pool)
        return pool

    @property
    def domains(self) -> list[str]:
        return self._domains

    @property
    def suffixes(self) -> list[str]:
        return self._suffixes

    @property
    def keywords(self) -> list[str]:
        return self._keywords

    @property
    def regexps(self) -> list[str]:
        return self._regexps

    def text(self, capacity_hint: bool = True) -> str:
        """The ruleset as rule text."""
        lines: list[str] = []
        if capacity_hint:
            hint = CapacityHint(
                len(self._domains), len(self._suffixes),
                len(self._keywords), len(self._regexps),
            )
            lines.append(hint.format_line())
        lines.extend(f"domain:{d}" for d in self._domains)
        lines.extend(f"suffix:{s}" for s in self._suffixes)
        lines.extend(f"keyword:{k}" for k in self._keywords)
        lines.extend(f"regexp:{r}" for r in self._regexps)
        return "\n".join(lines) + "\n"

    def queries(self, count: int) -> list[str]:
        """Draw count query domains (list, not iterator, for timing loops)."""
        if not self._candidates:
            return []
        return self._rng.choices(self._candidates, weights=self._zipf_weights, k=count)
