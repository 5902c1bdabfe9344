"""Tests for loading rule files from disk."""

import pytest

from domainset_lite.domainset import BuildOptions
from domainset_lite.errors import EmptyRuleset, InvalidLine
from domainset_lite.loader import iter_mmap_lines, load_domain_set, read_rules
from domainset_lite.rules import RuleKind
from tests.domainset.conftest import EXPECTED, SAMPLE_RULES


class TestReadRules:
    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_reads_utf8(self, tmp_path, use_mmap):
        path = tmp_path / "rules.txt"
        path.write_bytes("suffix:例子.测试\r\nkeyword:x".encode("utf-8"))
        assert read_rules(path, use_mmap=use_mmap) == "suffix:例子.测试\r\nkeyword:x"

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_empty_file(self, tmp_path, use_mmap):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert read_rules(path, use_mmap=use_mmap) == ""

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_invalid_utf8(self, tmp_path, use_mmap):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"suffix:\xff.com\n")
        with pytest.raises(UnicodeDecodeError):
            read_rules(path, use_mmap=use_mmap)

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_missing_file(self, tmp_path, use_mmap):
        with pytest.raises(FileNotFoundError):
            read_rules(tmp_path / "nope.txt", use_mmap=use_mmap)


class TestMmapLines:
    def test_lines_keep_terminators(self, tmp_path):
        path = tmp_path / "rules.txt"
        path.write_bytes(b"domain:a\r\nsuffix:b\nkeyword:c")
        assert list(iter_mmap_lines(path)) == ["domain:a\r\n", "suffix:b\n", "keyword:c"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert list(iter_mmap_lines(path)) == []


class TestLoadDomainSet:
    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_sample_file(self, rules_file, options, use_mmap):
        ds = load_domain_set(rules_file, options, use_mmap=use_mmap)
        for domain, expected in EXPECTED:
            assert ds.match(domain) is expected, domain

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_crlf_file(self, tmp_path, use_mmap):
        path = tmp_path / "crlf.txt"
        path.write_bytes(SAMPLE_RULES.replace("\n", "\r\n").encode("utf-8"))
        ds = load_domain_set(path, use_mmap=use_mmap)
        assert ds.match("www.example.net")
        assert ds.match("aur.archlinux.org")
        assert not ds.match("www.example.net\r")

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_trailing_carriage_return_without_newline(self, tmp_path, use_mmap):
        path = tmp_path / "cr.txt"
        path.write_bytes(b"suffix:a.com\r\nkeyword:x\r\r\ndomain:b.com\r")
        ds = load_domain_set(path, BuildOptions.linear(), use_mmap=use_mmap)
        assert ds.rules(RuleKind.DOMAIN) == ["b.com"]
        assert ds.rules(RuleKind.KEYWORD) == ["x\r"]
        assert ds.match("b.com")
        assert ds.match("www.a.com")

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_empty_file(self, tmp_path, use_mmap):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        with pytest.raises(EmptyRuleset):
            load_domain_set(path, use_mmap=use_mmap)

    @pytest.mark.parametrize("use_mmap", [False, True])
    def test_invalid_line_reported(self, tmp_path, use_mmap):
        path = tmp_path / "bad.txt"
        path.write_text("suffix:example.com\nfoo:bar\n", encoding="utf-8")
        with pytest.raises(InvalidLine) as exc_info:
            load_domain_set(path, use_mmap=use_mmap)
        assert exc_info.value.line == "foo:bar"

    def test_hint_disabled(self, rules_file):
        ds = load_domain_set(rules_file, BuildOptions.fast(), capacity_hint=False)
        assert ds.count() == 9
