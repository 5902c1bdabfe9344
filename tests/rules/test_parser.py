"""Tests for rule text parsing and writing."""

import re

import pytest

from domainset_lite.domainset import BuildOptions, Builder
from domainset_lite.errors import EmptyRuleset, InvalidLine, PatternCompileError
from domainset_lite.parser import build, iter_lines, parse, parse_lines, write_text
from domainset_lite.rules import RuleKind
from tests.domainset.conftest import ALL_OPTIONS, EXPECTED, SAMPLE_RULES


class TestIterLines:
    @pytest.mark.parametrize("text,lines", [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\nb", ["a", "b"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("\n\n", ["", ""]),
        ("a\rb\n", ["a\rb"]),
        ("a\vb c\n", ["a\vb c"]),
    ])
    def test_splits_only_on_newline(self, text, lines):
        assert list(iter_lines(text)) == lines


class TestParse:
    def test_kinds_dispatched(self):
        b = parse("domain:a.com\nsuffix:b.com\nkeyword:c\nregexp:^d$\n")
        assert [b.count(k) for k in RuleKind] == [1, 1, 1, 1]

    def test_comments_and_blanks_skipped(self):
        text = "# header\n\nsuffix:example.com\n   \n#suffix:skipped.com\n"
        # a whitespace-only line is not blank
        with pytest.raises(InvalidLine):
            parse(text)
        b = parse(text.replace("   \n", ""))
        assert b.count() == 1
        assert not b.freeze().match("skipped.com")

    def test_last_line_without_newline(self):
        b = parse("suffix:a.com\nsuffix:b.com")
        assert b.count(RuleKind.SUFFIX) == 2

    def test_payload_is_not_trimmed(self):
        ds = build("keyword: dev \n")
        assert ds.match("a dev b")
        assert not ds.match("go.dev")

    def test_payload_may_contain_colons(self):
        ds = build("domain:host:8080\n")
        assert ds.match("host:8080")

    def test_empty_payload(self):
        ds = build("keyword:\n")
        assert ds.match("anything")

    @pytest.mark.parametrize("line", [
        "foo:bar",
        "Domain:example.com",
        "DOMAIN:example.com",
        " domain:example.com",
        "domain",
        "example.com",
        "suffix",
        ":example.com",
    ])
    def test_invalid_lines(self, line):
        with pytest.raises(InvalidLine) as exc_info:
            parse(f"suffix:ok.com\n{line}\n")
        assert exc_info.value.line == line
        assert str(exc_info.value) == f"invalid line: {line}"

    def test_invalid_line_is_reported_without_terminator(self):
        with pytest.raises(InvalidLine) as exc_info:
            parse("foo:bar\r\n")
        assert exc_info.value.line == "foo:bar"

    def test_bad_regexp(self):
        with pytest.raises(PatternCompileError) as exc_info:
            parse("suffix:ok.com\nregexp:([a-z\n")
        assert exc_info.value.pattern == "([a-z"
        assert isinstance(exc_info.value.__cause__, re.error)

    @pytest.mark.parametrize("text", [
        "",
        "\n\n\n",
        "# only a comment\n",
        "# a\n\r\n# b",
    ])
    def test_empty_ruleset(self, text):
        with pytest.raises(EmptyRuleset, match="empty ruleset"):
            parse(text)

    @pytest.mark.parametrize("convert", [
        lambda s: s.encode("utf-8"),
        lambda s: bytearray(s.encode("utf-8")),
        lambda s: memoryview(s.encode("utf-8")),
    ])
    def test_buffer_input(self, convert):
        ds = build(convert(SAMPLE_RULES))
        for domain, expected in EXPECTED:
            assert ds.match(domain) is expected, domain

    def test_parse_lines_strips_terminators(self):
        b = parse_lines(["suffix:a.com\r\n", "\n", "keyword:x\n", "domain:b.com"])
        ds = b.freeze()
        assert ds.match("www.a.com")
        assert ds.match("b.com")
        assert b.count() == 3

    @pytest.mark.parametrize("text", [
        "domain:b.com\r",
        "keyword:x\r\r\n",
        "keyword:a\rb\r\n",
        "suffix:a.com\r\n\r",
        "domain:a.com\ndomain:b.com",
    ])
    def test_parse_lines_agrees_with_parse(self, text):
        lines = re.findall(r"[^\n]*\n|[^\n]+$", text)
        whole = parse(text, options=BuildOptions.linear()).freeze()
        streamed = parse_lines(lines, options=BuildOptions.linear()).freeze()
        for kind in RuleKind:
            assert whole.rules(kind) == streamed.rules(kind), kind

    def test_options_forwarded(self):
        b = parse("suffix:a.com\n", options=BuildOptions.fast())
        assert b.options == BuildOptions.fast()


class TestWriteText:
    @pytest.mark.parametrize("name", list(ALL_OPTIONS))
    def test_round_trip(self, name):
        options = ALL_OPTIONS[name]
        ds = build(SAMPLE_RULES, options=options)
        text = write_text(ds)
        again = build(text, options=options)
        for domain, expected in EXPECTED:
            assert again.match(domain) is expected, domain

    def test_hint_reflects_counts(self):
        ds = build("suffix:a.b.c\nsuffix:b.c\ndomain:x.com\n")
        lines = write_text(ds).splitlines()
        assert lines[0] == "# domain set capacity hint 1 1 0 0 DSKR"
        assert lines[1:] == ["domain:x.com", "suffix:b.c"]

    def test_without_hint(self):
        ds = build("keyword:dev\n")
        assert write_text(ds, capacity_hint=False) == "keyword:dev\n"

    def test_other_control_characters_survive(self):
        ds = build("keyword:a\vb\n")
        assert ds.match("xa\vbx")
        ds = build(b"keyword:a\rb\n")
        assert "keyword:a\rb" in write_text(ds)

    def test_rule_with_line_break_rejected(self):
        b = Builder()
        b.insert(RuleKind.KEYWORD, "a\nb")
        with pytest.raises(ValueError, match="cannot be written"):
            write_text(b.freeze())
