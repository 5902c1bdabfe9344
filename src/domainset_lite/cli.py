"""domainset-lite CLI entry point.

Usage: domainset-lite [-v] {match,compile,bench} ...
"""
import argparse
import logging
import sys

from domainset_lite.domainset import (
    BuildOptions,
    DomainSet,
    DomainStrategy,
    SuffixStrategy,
)
from domainset_lite.errors import DomainSetError
from domainset_lite.materialize import MaterializeStrategy

log = logging.getLogger("domainset_lite")


def _add_build_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--domain-strategy", choices=[s.value for s in DomainStrategy],
        default=DomainStrategy.HASH.value,
        help="Exact-domain matcher (default: hash)",
    )
    p.add_argument(
        "--suffix-strategy", choices=[s.value for s in SuffixStrategy],
        default=SuffixStrategy.TRIE.value,
        help="Suffix matcher (default: trie)",
    )
    p.add_argument(
        "--materialize", choices=[s.value for s in MaterializeStrategy],
        default=MaterializeStrategy.ALIAS.value,
        help="How rule strings are stored (default: alias)",
    )
    p.add_argument(
        "--no-capacity-hint", action="store_true",
        help="Treat a capacity hint header as an ordinary comment.",
    )
    p.add_argument(
        "--mmap", action="store_true",
        help="Read the rule file through mmap instead of a plain read.",
    )


def _add_match_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "match",
        help="Check domains against a rule file.",
    )
    p.add_argument("rules", help="Rule text file (or snapshot with --snapshot)")
    p.add_argument("domains", nargs="+", help="Domains to check")
    p.add_argument(
        "--snapshot", action="store_true",
        help="RULES is a binary snapshot written by 'compile'.",
    )
    _add_build_arguments(p)


def _add_compile_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "compile",
        help="Parse a rule file and write a binary snapshot.",
    )
    p.add_argument("rules", help="Rule text file")
    p.add_argument("output", help="Snapshot file to write")
    _add_build_arguments(p)


def _add_bench_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "bench",
        help="Compare setup and lookup cost across build presets.",
    )
    p.add_argument(
        "rules", nargs="?",
        help="Rule text file (default: a generated ruleset)",
    )
    p.add_argument(
        "--iterations", type=int, default=20,
        help="Builds to average setup time over (default: 20)",
    )
    p.add_argument(
        "--lookups", type=int, default=100_000,
        help="match() calls per timed domain (default: 100000)",
    )
    p.add_argument(
        "--suffixes", type=int, default=2_000,
        help="Suffix rules in the generated ruleset (default: 2000)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for the generated ruleset and workload (default: 42)",
    )
    p.add_argument(
        "--cprofile", action="store_true",
        help="Profile setup of the default preset and print top functions.",
    )
    p.add_argument(
        "--mmap", action="store_true",
        help="Read the rule file through mmap instead of a plain read.",
    )


def _options_from_args(args: argparse.Namespace) -> BuildOptions:
    return BuildOptions.from_names(
        domain=args.domain_strategy,
        suffix=args.suffix_strategy,
        materialize=args.materialize,
    )


def _load(args: argparse.Namespace) -> DomainSet:
    from domainset_lite.loader import load_domain_set

    return load_domain_set(
        args.rules,
        _options_from_args(args),
        use_mmap=args.mmap,
        capacity_hint=not args.no_capacity_hint,
    )


def _run_match(args: argparse.Namespace) -> int:
    if args.snapshot:
        from domainset_lite.snapshot import load_snapshot

        ds = load_snapshot(args.rules, _options_from_args(args))
    else:
        ds = _load(args)

    all_matched = True
    for domain in args.domains:
        matched = ds.match(domain)
        all_matched = all_matched and matched
        print(f"{domain}\t{'true' if matched else 'false'}")
    return 0 if all_matched else 1


def _run_compile(args: argparse.Namespace) -> int:
    from domainset_lite.snapshot import save_snapshot

    ds = _load(args)
    size = save_snapshot(args.output, ds)
    print(f"wrote {ds.count():,} rules ({size:,} bytes) to {args.output}")
    return 0


def _run_bench(args: argparse.Namespace) -> int:
    from domainset_lite.loader import read_rules
    from domainset_lite.profiling.harness import compare_presets, run_benchmark
    from domainset_lite.profiling.report import format_comparison
    from domainset_lite.profiling.ruleset_generator import RulesetGenerator

    gen = RulesetGenerator(num_suffixes=args.suffixes, seed=args.seed)
    text = read_rules(args.rules, use_mmap=args.mmap) if args.rules else gen.text()
    workload = gen.queries(1_000)

    results = compare_presets(
        text,
        iterations=args.iterations,
        lookups=args.lookups,
        workload=workload,
    )
    print(format_comparison(results))

    if args.cprofile:
        profiled = run_benchmark(
            text, BuildOptions(), iterations=args.iterations,
            lookups=1, label="trie", profile=True,
        )
        print()
        print("--- cProfile top functions (setup) ---")
        print(profiled.cprofile_stats)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="domainset-lite",
        description="Domain rule-set matcher: exact, suffix, keyword and regexp rules.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log build details to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_match_parser(subparsers)
    _add_compile_parser(subparsers)
    _add_bench_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers = {
        "match": _run_match,
        "compile": _run_compile,
        "bench": _run_bench,
    }
    try:
        code = handlers[args.command](args)
    except (DomainSetError, OSError, UnicodeDecodeError) as exc:
        log.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)
    sys.exit(code)
