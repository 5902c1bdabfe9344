"""domainset-lite: match domain names against exact, suffix, keyword and regexp rules.

    from domainset_lite import build

    ds = build("suffix:example.com\\nkeyword:dev\\n")
    ds.match("www.example.com")   # True
"""

from domainset_lite.domainset import (
    BuildOptions,
    Builder,
    DomainSet,
    DomainStrategy,
    SuffixStrategy,
    new_builder,
)
from domainset_lite.errors import (
    BuildConversionError,
    DomainSetError,
    EmptyRuleset,
    InvalidLine,
    MalformedHint,
    PatternCompileError,
    SnapshotError,
)
from domainset_lite.loader import load_domain_set, read_rules
from domainset_lite.materialize import MaterializeStrategy, StringArena, make_materializer
from domainset_lite.parser import build, parse, parse_lines, write_text
from domainset_lite.rules import CapacityHint, RuleKind, parse_capacity_hint
from domainset_lite.snapshot import deserialize, load_snapshot, save_snapshot, serialize

__all__ = [
    "BuildConversionError",
    "BuildOptions",
    "Builder",
    "CapacityHint",
    "DomainSet",
    "DomainSetError",
    "DomainStrategy",
    "EmptyRuleset",
    "InvalidLine",
    "MalformedHint",
    "MaterializeStrategy",
    "PatternCompileError",
    "RuleKind",
    "SnapshotError",
    "StringArena",
    "SuffixStrategy",
    "build",
    "deserialize",
    "load_domain_set",
    "load_snapshot",
    "make_materializer",
    "new_builder",
    "parse",
    "parse_capacity_hint",
    "parse_lines",
    "read_rules",
    "save_snapshot",
    "serialize",
    "write_text",
]
