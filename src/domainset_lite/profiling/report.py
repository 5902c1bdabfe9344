"""Report generation for benchmark results.

Formats BenchmarkResult data into human-readable tables for terminal
output.
"""
from __future__ import annotations

from domainset_lite.profiling.harness import BenchmarkResult


def format_report(result: BenchmarkResult) -> str:
    """Format a single BenchmarkResult as a readable report string."""
    lines = [
        f"=== {result.label} ===",
        f"Options:           {result.options}",
        f"Rules:             {result.rules:,}",
        f"Setup:             {result.setup_ms:.2f} ms (avg of {result.iterations})",
        f"Snapshot restore:  {result.restore_ms:.2f} ms ({result.snapshot_bytes:,} bytes)",
        f"",
        f"Lookups:",
    ]
    for name, ns in result.lookup_ns.items():
        lines.append(f"  {name:<16} {ns:>10.0f} ns/op")
    return "\n".join(lines)


def format_comparison(results: list[BenchmarkResult]) -> str:
    """Side-by-side table, one row per configuration.

    The speedup column is setup time relative to the first row.
    """
    if not results:
        return ""
    lookup_names: list[str] = []
    for r in results:
        for name in r.lookup_ns:
            if name not in lookup_names:
                lookup_names.append(name)

    base_setup = results[0].setup_ms

    def _speedup(new: float) -> str:
        if new <= 0:
            return "inf"
        return f"{base_setup / new:.1f}x"

    header = f"{'Config':<16} {'Setup ms':>10} {'Restore ms':>11} {'vs first':>9}"
    for name in lookup_names:
        header += f" {name + ' ns':>12}"
    lines = [header, "-" * len(header)]
    for r in results:
        row = (
            f"{r.label:<16} {r.setup_ms:>10.2f} {r.restore_ms:>11.2f} "
            f"{_speedup(r.setup_ms):>9}"
        )
        for name in lookup_names:
            ns = r.lookup_ns.get(name)
            row += f" {ns:>12.0f}" if ns is not None else f" {'-':>12}"
        lines.append(row)
    return "\n".join(lines)
