"""Pure comparison primitives shared by the built-in scorers."""

import math
import re
from collections.abc import Mapping
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")

type LeafMap = dict[str, Any]


def normalize_text(value: str) -> str:
    """Trim, collapse internal whitespace runs to one space, and lowercase."""
    return _WHITESPACE_RUN.sub(" ", value.strip()).lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost for insert, delete and substitute.

    Keeps two rolling rows of length ``len(b) + 1``; O(len(a) * len(b)) time.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)

    for i, a_char in enumerate(a, start=1):
        current[0] = i
        for j, b_char in enumerate(b, start=1):
            cost = 0 if a_char == b_char else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous, current = current, previous

    return previous[len(b)]


def is_structured(value: Any) -> bool:
    """True for mappings and lists/tuples, the shapes the object scorers accept."""
    return isinstance(value, (Mapping, list, tuple))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def same_value(a: Any, b: Any) -> bool:
    """Leaf equality used by the object scorers.

    Numbers compare by value across int and float, NaN equals NaN, and 0.0 is
    distinct from -0.0. Booleans only equal booleans, so ``True`` is not ``1``.
    """
    if _is_number(a) and _is_number(b):
        fa, fb = float(a), float(b)
        if math.isnan(fa) or math.isnan(fb):
            return math.isnan(fa) and math.isnan(fb)
        if fa == 0.0 and fb == 0.0:
            return math.copysign(1.0, fa) == math.copysign(1.0, fb)
        return a == b
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return bool(a == b)


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality over nested mappings and sequences."""
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if is_structured(a) or is_structured(b):
        return False

    return same_value(a, b)


def flatten_leaves(value: Any, path: str = "") -> LeafMap:
    """Map each leaf of a nested structure to its dotted path.

    Sequence elements use their index as the path segment and mapping entries
    their key. Empty containers contribute no leaves.
    """
    leaves: LeafMap = {}
    _flatten_into(value=value, path=path, out=leaves)
    return leaves


def _flatten_into(value: Any, path: str, out: LeafMap) -> None:
    if isinstance(value, Mapping):
        children = ((str(key), child) for key, child in value.items())
    elif isinstance(value, (list, tuple)):
        children = ((str(index), child) for index, child in enumerate(value))
    else:
        out[path] = value
        return

    for segment, child in children:
        child_path = f"{path}.{segment}" if path else segment
        _flatten_into(value=child, path=child_path, out=out)
