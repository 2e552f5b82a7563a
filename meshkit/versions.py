"""Ordering of version-like dotted strings."""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

_KEPT = frozenset("0123456789.")
_MARKERS = (("alpha", ".0"), ("beta", ".1"), ("rc", ".2"), ("stable", ".4"))
_PAD = 3


def _normalize(version: str) -> str:
    if version.startswith("stable"):
        version = version[len("stable"):] + "stable"
    for word, rank in _MARKERS:
        version = version.replace(word, rank)
    return "".join(ch for ch in version if ch in _KEPT)


def _parts(version: str) -> list[int]:
    return [int(part) if part else 0 for part in _normalize(version).split(".")]


def _compare(left: str, right: str) -> int:
    a, b = _parts(left), _parts(right)
    width = max(len(a), len(b))
    a += [_PAD] * (width - len(a))
    b += [_PAD] * (width - len(b))
    return (a > b) - (a < b)


def sort_dotted_strings_by_digits(versions: Iterable[str]) -> list[str]:
    """Return the versions sorted by their dotted digits.

    Letters are ignored except for the markers alpha, beta, rc and stable,
    which rank in that order; a plain release ranks above rc but below stable.
    """
    return sorted(versions, key=cmp_to_key(_compare))