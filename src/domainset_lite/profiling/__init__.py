"""Benchmark harness and synthetic workloads for domainset-lite."""

from domainset_lite.profiling.harness import (
    PRESETS,
    BenchmarkResult,
    check_agreement,
    compare_presets,
    run_benchmark,
)
from domainset_lite.profiling.report import format_comparison, format_report
from domainset_lite.profiling.ruleset_generator import RulesetGenerator

__all__ = [
    "PRESETS",
    "BenchmarkResult",
    "RulesetGenerator",
    "check_agreement",
    "compare_presets",
    "format_comparison",
    "format_report",
    "run_benchmark",
]
