"""Label trie for hierarchical suffix rules.

Suffixes are stored right to left by label: "api.github.com" becomes the
path com -> github -> api. A node flagged `included` means "every domain
ending in the suffix spelled by the path from the root to here matches".
Such a node needs no children, because anything below it is already
covered. Keeping it that way is the pruning invariant:

    * inserting "b.c" when "a.b.c" is present marks the "b" node included
      and drops its subtree ("a" and anything else below);
    * inserting "a.b.c" when "b.c" is present stops at the included "b"
      node and adds nothing.

The result is minimal regardless of insertion order, and lookups finish in
at most one dictionary lookup per label of the query. They usually finish
earlier, at the first missing or included node.

Both operations come in two equivalent shapes: an iterative walk that
moves an `end` index leftwards with str.rfind, and a recursive one that
peels the rightmost label and recurses on the remainder. They build the
same node graph and answer the same way; the recursive pair exists as a
cross-check and for benchmarking (see profiling/harness.py).

The builder form (DomainSuffixTrie, mutable TrieNode objects) is compacted
on freeze into FrozenSuffixTrie: nested plain dicts where an included node
is stored as None. Compaction re-checks the invariants and refuses to
produce a matcher from a graph that violates them.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TypeAlias

from domainset_lite.errors import BuildConversionError
from domainset_lite.matchers.base import Matcher, MatcherBuilder
from domainset_lite.rules import RuleKind

# Share of sys.getrecursionlimit() a recursive insert or match may use;
# the rest is left to its callers.
RECURSION_SHARE = 2

_MISSING = object()


def recursive_label_limit() -> int:
    """Deepest suffix, in labels, the recursive trie accepts right now.

    Follows sys.getrecursionlimit(), so raising the interpreter limit
    raises this one.
    """
    return max(1, sys.getrecursionlimit() // RECURSION_SHARE)


@dataclass(slots=True)
class TrieNode:
    """A node in the suffix trie.

    children maps a single label to the next node, rightmost label first.
    An included node must have no children.
    """
    included: bool = False
    children: dict[str, TrieNode] = field(default_factory=dict)


def _mark_included(parent: TrieNode, label: str) -> None:
    """Final step of an insert: include parent's child `label`, pruning below it."""
    child = parent.children.get(label)
    if child is None:
        parent.children[label] = TrieNode(included=True)
    elif not child.included:
        child.included = True
        child.children.clear()


class DomainSuffixTrie:
    """Mutable suffix trie with iterative and recursive insert/match."""

    __slots__ = ("_root",)

    def __init__(self) -> None:
        self._root = TrieNode()

    @property
    def root(self) -> TrieNode:
        return self._root

    def insert(self, suffix: str) -> None:
        """Insert suffix, walking labels right to left without recursion."""
        node = self._root
        end = len(suffix)
        while True:
            dot = suffix.rfind(".", 0, end)
            if dot == -1:
                _mark_included(node, suffix[:end])
                return
            label = suffix[dot + 1:end]
            child = node.children.get(label)
            if child is None:
                child = TrieNode()
                node.children[label] = child
            elif child.included:
                return  # a shorter suffix already covers this one
            node = child
            end = dot

    def insert_recursive(self, suffix: str) -> None:
        """Insert suffix by peeling the rightmost label and recursing.

        Raises:
            BuildConversionError: suffix has more labels than
                recursive_label_limit() allows. insert() and the hash and
                linear strategies have no depth limit and accept it.
        """
        labels = suffix.count(".") + 1
        limit = recursive_label_limit()
        if labels > limit:
            raise BuildConversionError(
                f"suffix too deep for recursive insert ({labels} labels, "
                f"limit {limit}); the iterative trie, hash and linear "
                f"strategies accept it: {suffix[:64]}..."
            )
        _insert_r(self._root, suffix)

    def match(self, domain: str) -> bool:
        """Return True if some inserted suffix covers domain (iterative)."""
        node = self._root
        end = len(domain)
        while True:
            dot = domain.rfind(".", 0, end)
            child = node.children.get(domain[dot + 1:end])
            if child is None:
                return False
            if child.included:
                return True
            if dot == -1:
                return False
            node = child
            end = dot

    def match_recursive(self, domain: str) -> bool:
        """Same answer as match(), computed recursively."""
        return _match_r(self._root, domain)

    def rules(self) -> list[str]:
        """The minimal suffix set: one entry per included node."""
        return _collect_rules(self._root)

    def node_count(self) -> int:
        """Count total nodes in the trie, root included."""
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count


def _insert_r(node: TrieNode, suffix: str) -> None:
    dot = suffix.rfind(".")
    if dot == -1:
        _mark_included(node, suffix)
        return
    label = suffix[dot + 1:]
    child = node.children.get(label)
    if child is None:
        child = TrieNode()
        node.children[label] = child
    elif child.included:
        return
    _insert_r(child, suffix[:dot])


def _match_r(node: TrieNode, domain: str) -> bool:
    dot = domain.rfind(".")
    child = node.children.get(domain[dot + 1:])
    if child is None:
        return False
    if child.included:
        return True
    if dot == -1:
        return False
    return _match_r(child, domain[:dot])


def _collect_rules(root: TrieNode) -> list[str]:
    rules: list[str] = []
    # (node, suffix spelled so far); None marks the root, which spells
    # nothing. An empty string is a legitimate one-label suffix.
    stack: list[tuple[TrieNode, str | None]] = [(root, None)]
    while stack:
        node, tail = stack.pop()
        for label, child in node.children.items():
            name = label if tail is None else f"{label}.{tail}"
            if child.included:
                rules.append(name)
            else:
                stack.append((child, name))
    return rules


# --- Frozen form ---

# label -> child mapping, or None for an included node
CompactTrie: TypeAlias = "dict[str, CompactTrie | None]"


class FrozenSuffixTrie(Matcher):
    """Immutable, compacted suffix trie. Lookup is iterative."""

    __slots__ = ("_root", "_count")

    kind = RuleKind.SUFFIX

    def __init__(self, root: CompactTrie, count: int) -> None:
        self._root = root
        self._count = count

    def match(self, domain: str) -> bool:
        children = self._root
        end = len(domain)
        while True:
            dot = domain.rfind(".", 0, end)
            child = children.get(domain[dot + 1:end], _MISSING)
            if child is _MISSING:
                return False
            if child is None:
                return True
            if dot == -1:
                return False
            children = child
            end = dot

    def count(self) -> int:
        return self._count

    def rules(self) -> list[str]:
        rules: list[str] = []
        stack: list[tuple[CompactTrie, str | None]] = [(self._root, None)]
        while stack:
            children, tail = stack.pop()
            for label, child in children.items():
                name = label if tail is None else f"{label}.{tail}"
                if child is None:
                    rules.append(name)
                else:
                    stack.append((child, name))
        return rules


class FrozenSuffixTrieR(FrozenSuffixTrie):
    """FrozenSuffixTrie whose lookup recurses label by label."""

    __slots__ = ()

    def match(self, domain: str) -> bool:
        return _match_compact_r(self._root, domain)


def _match_compact_r(children: CompactTrie, domain: str) -> bool:
    dot = domain.rfind(".")
    child = children.get(domain[dot + 1:], _MISSING)
    if child is _MISSING:
        return False
    if child is None:
        return True
    if dot == -1:
        return False
    return _match_compact_r(child, domain[:dot])


def compact(root: TrieNode) -> tuple[CompactTrie, int]:
    """Convert a TrieNode graph into nested dicts.

    Returns (compact_root, included_count).

    Raises:
        BuildConversionError: an included node still has children, or a
            non-root node is neither included nor has children. Neither
            state is reachable through insert(); seeing one means the
            graph was modified some other way.
    """
    if root.included:
        raise BuildConversionError("trie root must not be marked included")

    compact_root: CompactTrie = {}
    included = 0
    stack: list[tuple[TrieNode, CompactTrie, str]] = [(root, compact_root, "")]
    while stack:
        node, out, path = stack.pop()
        for label, child in node.children.items():
            where = f"{label}.{path}" if path else label
            if child.included:
                if child.children:
                    raise BuildConversionError(
                        f"included node {where!r} still has "
                        f"{len(child.children)} children"
                    )
                out[label] = None
                included += 1
            elif not child.children:
                raise BuildConversionError(
                    f"dangling node {where!r}: not included and no children"
                )
            else:
                sub: CompactTrie = {}
                out[label] = sub
                stack.append((child, sub, where))
    return compact_root, included


class SuffixTrieBuilder(MatcherBuilder):
    """Builds a DomainSuffixTrie, then compacts it on freeze.

    Args:
        capacity: advisory expected suffix count.
        recursive: use the recursive insert, and freeze into a matcher
            whose lookup is recursive too.
    """

    kind = RuleKind.SUFFIX

    def __init__(self, capacity: int = 0, recursive: bool = False) -> None:
        super().__init__(capacity)
        self._trie = DomainSuffixTrie()
        self._recursive = recursive
        self._insert = self._trie.insert_recursive if recursive else self._trie.insert

    @property
    def trie(self) -> DomainSuffixTrie:
        return self._trie

    @property
    def recursive(self) -> bool:
        return self._recursive

    def _add(self, value: str) -> None:
        self._insert(value)

    def _build(self) -> FrozenSuffixTrie:
        root, included = compact(self._trie.root)
        cls = FrozenSuffixTrieR if self._recursive else FrozenSuffixTrie
        return cls(root, included)
