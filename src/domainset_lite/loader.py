"""Reading rule files from disk: whole-file read or memory-mapped streaming.

The plain path reads the file into one bytes object and decodes it in one
go. The mmap path leaves the file in the page cache and decodes it line
by line, so peak memory stays around one line plus the builders.
"""
from __future__ import annotations

import logging
import mmap
import os
from contextlib import closing
from typing import Iterator

from domainset_lite.domainset import BuildOptions, DomainSet
from domainset_lite.parser import decode_text, parse, parse_lines

log = logging.getLogger(__name__)


def read_rules(path: str | os.PathLike, use_mmap: bool = False) -> str:
    """Read a whole rule file and decode it as UTF-8.

    With use_mmap the text is decoded straight from the mapping, without
    first copying the file into a bytes object.
    """
    with open(path, "rb") as f:
        if not use_mmap:
            return decode_text(f.read())
        if os.fstat(f.fileno()).st_size == 0:
            return ""
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mm:
            # the view must be released before the map closes
            with memoryview(mm) as view:
                return decode_text(view)


def iter_mmap_lines(path: str | os.PathLike) -> Iterator[str]:
    """Yield the decoded lines of path via mmap, terminators included."""
    with open(path, "rb") as f:
        if os.fstat(f.fileno()).st_size == 0:
            return
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mm:
            while True:
                raw = mm.readline()
                if not raw:
                    return
                yield raw.decode("utf-8")


def load_domain_set(
    path: str | os.PathLike,
    options: BuildOptions | None = None,
    use_mmap: bool = False,
    capacity_hint: bool = True,
) -> DomainSet:
    """Parse the rule file at path and freeze it."""
    if use_mmap:
        with closing(iter_mmap_lines(path)) as lines:
            builder = parse_lines(lines, capacity_hint, options)
    else:
        builder = parse(read_rules(path), capacity_hint, options)
    log.debug("loaded %s (mmap=%s)", path, use_mmap)
    return builder.freeze()
