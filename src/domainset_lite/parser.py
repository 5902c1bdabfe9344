"""Rule text parser and writer.

Parsing turns line-oriented rule text into a Builder:

    1. Optionally read a capacity hint from the first non-blank line.
    2. Skip blank lines and lines starting with "#".
    3. Split every other line at its first ":"; the text before it must
       name a rule kind, the text after it is the payload, untrimmed.
    4. Run the payload through the build's materializer and insert it.

Lines may end in "\\n" or "\\r\\n"; a last line without a terminator still
counts. A "\\r" at the very end of the input is dropped as well, whether
the text is parsed whole or streamed line by line.

Any line that is not blank, not a comment and not a tagged rule aborts
the parse with InvalidLine. So does a regexp that fails to compile
(PatternCompileError). Text with no rule lines at all raises
EmptyRuleset.

write_text() goes the other way, rendering a frozen DomainSet back into
text that parses to an equivalent set.
"""
from __future__ import annotations

import itertools
import logging
from typing import Iterable, Iterator, Union

from domainset_lite.domainset import BuildOptions, Builder, DomainSet
from domainset_lite.errors import EmptyRuleset, InvalidLine
from domainset_lite.materialize import make_materializer
from domainset_lite.rules import (
    KIND_BY_NAME,
    NO_HINT,
    CapacityHint,
    RuleKind,
    parse_capacity_hint,
)

log = logging.getLogger(__name__)

# str, or anything exposing the buffer protocol (bytes, bytearray,
# memoryview, mmap.mmap), holding UTF-8.
RuleText = Union[str, bytes, bytearray, memoryview]


def _strip_eol(line: str) -> str:
    """Drop a trailing "\\n", "\\r\\n" or lone "\\r", as iter_lines() does."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of text without their terminators.

    Only "\\n" and "\\r\\n" end a line. str.splitlines() also breaks on
    "\\v", "\\x1c", "\\u2028" and friends, which would split payloads.
    """
    start = 0
    n = len(text)
    while start < n:
        end = text.find("\n", start)
        if end == -1:
            end = n
        stop = end - 1 if end > start and text[end - 1] == "\r" else end
        yield text[start:stop]
        start = end + 1


def decode_text(text: RuleText) -> str:
    """Return text as str, decoding buffers as UTF-8."""
    if isinstance(text, str):
        return text
    return str(text, "utf-8")


def parse(
    text: RuleText,
    capacity_hint: bool = True,
    options: BuildOptions | None = None,
) -> Builder:
    """Parse rule text into a Builder ready to freeze.

    Raises:
        EmptyRuleset, MalformedHint, InvalidLine, PatternCompileError
    """
    return _parse(iter_lines(decode_text(text)), capacity_hint, options)


def parse_lines(
    lines: Iterable[str],
    capacity_hint: bool = True,
    options: BuildOptions | None = None,
) -> Builder:
    """Parse an iterable of lines, each with or without its terminator.

    Same contract as parse(); used by the file loader to stream lines.
    """
    return _parse(map(_strip_eol, lines), capacity_hint, options)


def _parse(
    lines: Iterable[str],
    capacity_hint: bool,
    options: BuildOptions | None,
) -> Builder:
    # lines arrive without terminators
    options = options or BuildOptions()
    it = iter(lines)
    hint = NO_HINT

    if capacity_hint:
        for line in it:
            if not line:
                continue
            hint, found = parse_capacity_hint(line)
            if not found:
                it = itertools.chain((line,), it)
            break

    builder = Builder(options, hint)
    materialize = make_materializer(options.materialize, hint.total)
    insert = builder.insert

    seen = 0
    rules = 0
    for line in it:
        seen += 1
        if not line or line[0] == "#":
            continue
        name, sep, payload = line.partition(":")
        kind = KIND_BY_NAME.get(name) if sep else None
        if kind is None:
            raise InvalidLine(line)
        insert(kind, materialize(payload))
        rules += 1

    if rules == 0:
        raise EmptyRuleset()

    log.debug(
        "parsed %d rules from %d lines (domain=%d suffix=%d keyword=%d regexp=%d)",
        rules, seen,
        builder.count(RuleKind.DOMAIN), builder.count(RuleKind.SUFFIX),
        builder.count(RuleKind.KEYWORD), builder.count(RuleKind.REGEXP),
    )
    return builder


def build(
    text: RuleText,
    capacity_hint: bool = True,
    options: BuildOptions | None = None,
) -> DomainSet:
    """parse() then freeze(), for callers that don't need the Builder."""
    return parse(text, capacity_hint, options).freeze()


def write_text(domain_set: DomainSet, capacity_hint: bool = True) -> str:
    """Render domain_set as rule text, hint line first when requested.

    Raises:
        ValueError: a rule contains a line break and cannot be written as
            a single line.
    """
    by_kind = {kind: domain_set.rules(kind) for kind in RuleKind}
    lines: list[str] = []
    if capacity_hint:
        hint = CapacityHint(
            domains=len(by_kind[RuleKind.DOMAIN]),
            suffixes=len(by_kind[RuleKind.SUFFIX]),
            keywords=len(by_kind[RuleKind.KEYWORD]),
            regexps=len(by_kind[RuleKind.REGEXP]),
        )
        lines.append(hint.format_line())
    for kind in RuleKind:
        tag = kind.tag
        for rule in by_kind[kind]:
            if "\n" in rule or rule.endswith("\r"):
                raise ValueError(f"{kind.value} rule cannot be written as a line: {rule!r}")
            lines.append(tag + rule)
    return "\n".join(lines) + "\n"
