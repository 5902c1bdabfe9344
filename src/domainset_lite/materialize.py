"""String materialization: how a rule payload becomes the string a builder keeps.

The parser slices every payload out of the input text and hands that slice
to a materializer before inserting it. The materializer is chosen once per
build and applied to every payload, so builders and the parser never know
which one is in use.

Three strategies:

    ALIAS   -- keep the parser's slice as is. No extra work, nothing
               extra held.
    CLONE   -- force a fresh allocation per string. Highest allocation
               count; every stored rule is its own object.
    ARENA   -- pool strings in a byte-budgeted chunk shared by the whole
               build. The first occurrence of a payload is kept as is
               and every repeat inside the chunk gets that same object,
               so the only allocation per new payload is its pool slot.
               When a chunk is full a new one is started; the old chunk
               is dropped, never rewritten, so strings already issued
               stay valid.

CPython strings are immutable and own their storage, so none of these can
leave a DomainSet pointing into a freed buffer. The strategies differ in
allocation count and in how much duplicate storage the frozen set keeps.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

log = logging.getLogger(__name__)

Materializer = Callable[[str], str]

DEFAULT_CHUNK_SIZE = 64 * 1024  # bytes (UTF-8) per arena chunk


class MaterializeStrategy(Enum):
    ALIAS = "alias"
    CLONE = "clone"
    ARENA = "arena"


def alias_string(value: str) -> str:
    """Return the slice unchanged."""
    return value


def clone_string(value: str) -> str:
    """Return an independent copy of value.

    Slicing or str() can hand back the very same object, the codec round
    trip cannot (except for the interpreter's cached empty and 1-char
    strings).
    """
    return value.encode("utf-8").decode("utf-8")


class StringArena:
    """Bulk materializer backed by a chunked string pool.

    Args:
        chunk_size: byte budget (UTF-8) of a regular chunk. A single string
            larger than that gets a chunk of twice its size.

    Each chunk is a dict mapping payload -> the first object seen with that
    text. A payload already present in the current chunk is returned from
    it; a new one is stored without copying, since a slice of the rule text
    is already an independent str.

    A payload that would overflow the chunk starts a fresh chunk instead;
    the previous dict is released, but the strings it issued are normal
    objects and remain valid for as long as the builders reference them.
    """

    __slots__ = ("_chunk_size", "_pool", "_capacity", "_used", "_chunks", "_issued")

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size
        self._pool: dict[str, str] = {}
        self._capacity = chunk_size
        self._used = 0
        self._chunks = 1
        self._issued = 0

    @property
    def chunks(self) -> int:
        """Number of chunks allocated so far (including the current one)."""
        return self._chunks

    @property
    def bytes_used(self) -> int:
        """UTF-8 bytes pooled in the current chunk."""
        return self._used

    @property
    def capacity(self) -> int:
        """Byte budget of the current chunk."""
        return self._capacity

    @property
    def issued(self) -> int:
        """Total strings handed out, duplicates included."""
        return self._issued

    def __call__(self, value: str) -> str:
        self._issued += 1
        stored = self._pool.get(value)
        if stored is not None:
            return stored

        size = len(value) if value.isascii() else len(value.encode("utf-8"))
        if self._used + size > self._capacity:
            self._rotate(size)

        self._pool[value] = value
        self._used += size
        return value

    def _rotate(self, needed: int) -> None:
        """Abandon the current chunk and start a fresh one."""
        log.debug(
            "arena chunk %d full (%d/%d bytes), starting a new one",
            self._chunks, self._used, self._capacity,
        )
        self._pool = {}
        self._capacity = max(self._chunk_size, 2 * needed)
        self._used = 0
        self._chunks += 1


def make_materializer(
    strategy: MaterializeStrategy,
    size_hint: int = 0,
) -> Materializer:
    """Return a materializer for strategy.

    size_hint is the expected number of strings. The arena uses it to size
    its first chunk (assuming ~32 bytes per rule); the other strategies
    are stateless and ignore it. A fresh arena is created on every call,
    so one build never shares a pool with another.
    """
    if strategy is MaterializeStrategy.ALIAS:
        return alias_string
    if strategy is MaterializeStrategy.CLONE:
        return clone_string
    if strategy is MaterializeStrategy.ARENA:
        return StringArena(max(DEFAULT_CHUNK_SIZE, size_hint * 32))
    raise ValueError(f"unknown materialize strategy: {strategy!r}")
