"""Benchmark harness: setup and lookup cost per build configuration.

For each BuildOptions preset the harness measures:

  1. setup   -- parse + freeze of the full rule text, averaged over
                `iterations` builds
  2. restore -- deserialize() of a snapshot of the same set, averaged
                the same way (the "skip parsing" path)
  3. lookups -- DomainSet.match for three fixed names of different depth
                (short / medium / long) plus a mixed workload, reported in
                nanoseconds per call

Every preset is checked against the first one on the mixed workload before
timings are reported, so a fast-but-wrong strategy fails loudly instead of
winning the table.
"""
from __future__ import annotations

import cProfile
import io
import logging
import pstats
import time
from dataclasses import dataclass, field

from domainset_lite.domainset import BuildOptions, DomainSet, SuffixStrategy
from domainset_lite.materialize import MaterializeStrategy
from domainset_lite.parser import decode_text, parse
from domainset_lite.snapshot import deserialize, serialize

log = logging.getLogger(__name__)

SHORT_DOMAIN = "localhost"
MEDIUM_DOMAIN = "www.example.com"
LONG_DOMAIN = "cant.come.up.with.a.long.domain.name"

FIXED_DOMAINS: dict[str, str] = {
    "short": SHORT_DOMAIN,
    "medium": MEDIUM_DOMAIN,
    "long": LONG_DOMAIN,
}

PRESETS: dict[str, BuildOptions] = {
    "linear": BuildOptions.linear(),
    "suffix-map": BuildOptions.fast(),
    "trie": BuildOptions(),
    "trie-recursive": BuildOptions(suffix_strategy=SuffixStrategy.TRIE_RECURSIVE),
    "trie-clone": BuildOptions(materialize=MaterializeStrategy.CLONE),
    "trie-arena": BuildOptions(materialize=MaterializeStrategy.ARENA),
}


@dataclass(slots=True)
class BenchmarkResult:
    """Timings from one configuration."""
    label: str
    options: str
    rules: int
    iterations: int
    setup_ms: float
    restore_ms: float
    snapshot_bytes: int
    lookup_ns: dict[str, float] = field(default_factory=dict)
    cprofile_stats: str | None = None


def _time_lookups(ds: DomainSet, domains: list[str], rounds: int) -> float:
    """Average ns per match() over rounds passes through domains."""
    match = ds.match
    t0 = time.perf_counter()
    for _ in range(rounds):
        for d in domains:
            match(d)
    elapsed = time.perf_counter() - t0
    calls = rounds * len(domains)
    return elapsed / calls * 1e9 if calls else 0.0


def run_benchmark(
    text: str | bytes,
    options: BuildOptions,
    iterations: int = 20,
    lookups: int = 100_000,
    workload: list[str] | None = None,
    label: str = "",
    profile: bool = False,
) -> BenchmarkResult:
    """Benchmark one configuration over the given rule text.

    lookups is the number of match() calls per fixed domain; the mixed
    workload (if given) is replayed until roughly the same count is hit.
    If profile=True, the setup loop runs under cProfile and the top
    functions by cumulative time are attached to the result.
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")
    text = decode_text(text)

    def _setup() -> DomainSet:
        ds = None
        for _ in range(iterations):
            ds = parse(text, options=options).freeze()
        return ds

    cprofile_text = None
    t0 = time.perf_counter()
    if profile:
        pr = cProfile.Profile()
        pr.enable()
        ds = _setup()
        pr.disable()
        s = io.StringIO()
        ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
        ps.print_stats(20)
        cprofile_text = s.getvalue()
    else:
        ds = _setup()
    setup_ms = (time.perf_counter() - t0) * 1000 / iterations

    blob = serialize(ds)
    t0 = time.perf_counter()
    for _ in range(iterations):
        deserialize(blob, options)
    restore_ms = (time.perf_counter() - t0) * 1000 / iterations

    lookup_ns: dict[str, float] = {}
    for name, domain in FIXED_DOMAINS.items():
        lookup_ns[name] = _time_lookups(ds, [domain], lookups)
    if workload:
        rounds = max(1, lookups // len(workload))
        lookup_ns["mixed"] = _time_lookups(ds, workload, rounds)

    log.debug("benchmarked %s: setup %.2f ms", label or options.describe(), setup_ms)
    return BenchmarkResult(
        label=label or options.describe(),
        options=options.describe(),
        rules=ds.count(),
        iterations=iterations,
        setup_ms=setup_ms,
        restore_ms=restore_ms,
        snapshot_bytes=len(blob),
        lookup_ns=lookup_ns,
        cprofile_stats=cprofile_text,
    )


def check_agreement(
    text: str | bytes,
    domains: list[str],
    presets: dict[str, BuildOptions] | None = None,
) -> list[str]:
    """Build every preset and return domains on which any two disagree."""
    presets = presets or PRESETS
    text = decode_text(text)
    sets = [parse(text, options=o).freeze() for o in presets.values()]
    mismatches: list[str] = []
    for d in domains:
        answers = {ds.match(d) for ds in sets}
        if len(answers) > 1:
            mismatches.append(d)
    return mismatches


def compare_presets(
    text: str | bytes,
    iterations: int = 20,
    lookups: int = 100_000,
    workload: list[str] | None = None,
    presets: dict[str, BuildOptions] | None = None,
) -> list[BenchmarkResult]:
    """Run run_benchmark() for every preset.

    Raises:
        AssertionError: two presets disagree on some workload domain.
    """
    presets = presets or PRESETS
    domains = list(FIXED_DOMAINS.values()) + list(workload or [])
    mismatches = check_agreement(text, domains, presets)
    if mismatches:
        raise AssertionError(
            f"presets disagree on {len(mismatches)} domains, e.g. {mismatches[:5]}"
        )
    return [
        run_benchmark(text, options, iterations, lookups, workload, label=name)
        for name, options in presets.items()
    ]
