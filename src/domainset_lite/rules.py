"""Rule kinds, their text tags, and the capacity hint header.

A rule file is line oriented. Each rule line starts with one of four
case-sensitive tags and the payload follows the colon directly:

    domain:www.example.net
    suffix:example.com
    keyword:dev
    regexp:^adservice\\.google\\.

The optional first line is a capacity hint. It is a comment to any reader
that does not understand it, so hinted files stay valid everywhere:

    # domain set capacity hint 1 6 1 1 DSKR

The four numbers are the expected counts of domain, suffix, keyword and
regexp rules, in that order (hence the DSKR trailer).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domainset_lite.errors import MalformedHint

CAPACITY_HINT_PREFIX = "# domain set capacity hint "
CAPACITY_HINT_SUFFIX = "DSKR"


class RuleKind(Enum):
    DOMAIN = "domain"
    SUFFIX = "suffix"
    KEYWORD = "keyword"
    REGEXP = "regexp"

    @property
    def tag(self) -> str:
        """The line prefix that introduces a rule of this kind."""
        return self.value + ":"


# Every tag is "<name>:" with no other colon, so the text before the first
# colon identifies the kind.
KIND_BY_NAME: dict[str, RuleKind] = {kind.value: kind for kind in RuleKind}


@dataclass(frozen=True, slots=True)
class CapacityHint:
    """Expected rule counts per kind. Zero means "no idea"."""
    domains: int = 0
    suffixes: int = 0
    keywords: int = 0
    regexps: int = 0

    @property
    def total(self) -> int:
        return self.domains + self.suffixes + self.keywords + self.regexps

    def for_kind(self, kind: RuleKind) -> int:
        if kind is RuleKind.DOMAIN:
            return self.domains
        if kind is RuleKind.SUFFIX:
            return self.suffixes
        if kind is RuleKind.KEYWORD:
            return self.keywords
        return self.regexps

    def format_line(self) -> str:
        """Render this hint as a header line (no line terminator)."""
        return (
            f"{CAPACITY_HINT_PREFIX}{self.domains} {self.suffixes} "
            f"{self.keywords} {self.regexps} {CAPACITY_HINT_SUFFIX}"
        )


NO_HINT = CapacityHint()


def parse_capacity_hint(line: str) -> tuple[CapacityHint, bool]:
    """Parse a capacity hint line.

    Returns (hint, found). When the marker is absent the result is
    (NO_HINT, False) and the caller must treat the line as ordinary input.

    Raises:
        MalformedHint: marker present but the four counts are not
            non-negative integers followed by the DSKR trailer.
    """
    if not line.startswith(CAPACITY_HINT_PREFIX):
        return NO_HINT, False

    fields = line[len(CAPACITY_HINT_PREFIX):].split(" ")
    if len(fields) != 5:
        raise MalformedHint(line, f"expected 4 counts and {CAPACITY_HINT_SUFFIX}")
    if fields[4] != CAPACITY_HINT_SUFFIX:
        raise MalformedHint(line, f"missing {CAPACITY_HINT_SUFFIX} trailer")

    counts: list[int] = []
    for field in fields[:4]:
        # int() would also accept "+1", " 1" and "1_000"
        if not field.isascii() or not field.isdigit():
            if field.startswith("-") and field[1:].isdigit():
                raise MalformedHint(line, f"negative count {field}")
            raise MalformedHint(line, f"non-numeric count {field!r}")
        counts.append(int(field))

    return CapacityHint(*counts), True
