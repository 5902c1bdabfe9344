"""Shared fixtures for matcher tests."""

from __future__ import annotations

import random

import pytest

SEED = 42

# Small label alphabet so random suffixes and domains collide often:
# nested suffixes, shared tails and near misses ("ab" vs "b") all show up.
# The empty label exercises leading, trailing and doubled dots.
LABELS = ["a", "b", "c", "ab", "ba", "com", ""]


def random_name(rng: random.Random, max_labels: int = 4) -> str:
    """Join 1..max_labels random labels with dots."""
    n = rng.randint(1, max_labels)
    return ".".join(rng.choice(LABELS) for _ in range(n))


def random_suffixes(count: int, seed: int = SEED) -> list[str]:
    rng = random.Random(seed)
    return [random_name(rng, 3) for _ in range(count)]


def random_domains(count: int, seed: int = SEED + 1) -> list[str]:
    rng = random.Random(seed)
    domains = [random_name(rng, 5) for _ in range(count)]
    # unsplit near misses: same text, no label boundary
    domains.extend(rng.choice(LABELS) + random_name(rng, 3) for _ in range(count // 4))
    return domains


@pytest.fixture
def sample_suffixes() -> list[str]:
    return [
        "example.com",
        "github.com",
        "cube64128.xyz",
        "api.ipify.org",
        "api6.ipify.org",
        "archlinux.org",
    ]
