"""Binary snapshot of a frozen DomainSet.

A snapshot stores rules, not data structures, so it is independent of the
strategies used to build the set and can be restored under any
BuildOptions. Restoring skips text parsing; matchers are still rebuilt
(regexps recompiled, tries re-inserted).

Layout (all integers big-endian):
    4 bytes: magic b"DSET"
    1 byte:  format version (1)
    then, for each kind in order DOMAIN, SUFFIX, KEYWORD, REGEXP:
        4 bytes: rule count (uint32)
        per rule: 4-byte length (uint32) + UTF-8 bytes

Suffix rules come from the frozen set, so a trie-backed set writes its
pruned, minimal suffix list.
"""
from __future__ import annotations

import logging
import os
import struct

from domainset_lite.domainset import BuildOptions, Builder, DomainSet
from domainset_lite.errors import SnapshotError
from domainset_lite.rules import RuleKind

log = logging.getLogger(__name__)

MAGIC = b"DSET"
VERSION = 1

_HEADER = struct.Struct("!4sB")
_U32 = struct.Struct("!I")


def serialize(domain_set: DomainSet) -> bytes:
    """Encode every rule of domain_set into snapshot bytes."""
    parts: list[bytes] = [_HEADER.pack(MAGIC, VERSION)]
    total = 0
    for kind in RuleKind:
        rules = domain_set.rules(kind)
        parts.append(_U32.pack(len(rules)))
        for rule in rules:
            raw = rule.encode("utf-8")
            parts.append(_U32.pack(len(raw)))
            parts.append(raw)
        total += len(rules)
    data = b"".join(parts)
    log.debug("serialized %d rules into %d bytes", total, len(data))
    return data


def _read_u32(view: memoryview, offset: int) -> tuple[int, int]:
    if offset + _U32.size > len(view):
        raise SnapshotError(f"truncated snapshot at offset {offset}")
    (value,) = _U32.unpack_from(view, offset)
    return value, offset + _U32.size


def deserialize(
    data: bytes | bytearray | memoryview,
    options: BuildOptions | None = None,
) -> DomainSet:
    """Restore a DomainSet from snapshot bytes.

    Raises:
        SnapshotError: bad magic, unsupported version, truncated data,
            trailing bytes, or a rule that is not valid UTF-8.
        PatternCompileError: a stored regexp no longer compiles.
    """
    view = memoryview(data)
    if len(view) < _HEADER.size:
        raise SnapshotError("truncated snapshot header")
    magic, version = _HEADER.unpack_from(view, 0)
    if magic != MAGIC:
        raise SnapshotError(f"bad snapshot magic {bytes(magic)!r}")
    if version != VERSION:
        raise SnapshotError(f"unsupported snapshot version {version}")

    builder = Builder(options)
    offset = _HEADER.size
    for kind in RuleKind:
        count, offset = _read_u32(view, offset)
        for _ in range(count):
            length, offset = _read_u32(view, offset)
            end = offset + length
            if end > len(view):
                raise SnapshotError(
                    f"truncated {kind.value} rule at offset {offset}"
                )
            try:
                rule = str(view[offset:end], "utf-8")
            except UnicodeDecodeError as exc:
                raise SnapshotError(
                    f"{kind.value} rule at offset {offset} is not UTF-8"
                ) from exc
            builder.insert(kind, rule)
            offset = end

    if offset != len(view):
        raise SnapshotError(f"{len(view) - offset} trailing bytes after snapshot")

    log.debug("restored %d rules from %d bytes", builder.count(), len(view))
    return builder.freeze()


def save_snapshot(path: str | os.PathLike, domain_set: DomainSet) -> int:
    """Write domain_set to path. Returns the number of bytes written."""
    data = serialize(domain_set)
    with open(path, "wb") as f:
        f.write(data)
    return len(data)


def load_snapshot(
    path: str | os.PathLike,
    options: BuildOptions | None = None,
) -> DomainSet:
    with open(path, "rb") as f:
        return deserialize(f.read(), options)
