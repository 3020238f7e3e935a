"""Built-in scorers — exact and fuzzy matching for strings and nested objects."""

from typing import Any

from eval_express.scoring.domain.comparison import (
    deep_equal,
    flatten_leaves,
    is_structured,
    levenshtein_distance,
    normalize_text,
    same_value,
)
from eval_express.scoring.domain.score import ScoreContext, ScoreResult
from eval_express.scoring.domain.scorer import Scorer
from eval_express.scoring.infrastructure.errors import ScorerInputError

STRING_FUZZY_THRESHOLD = 0.9
OBJECT_FUZZY_THRESHOLD = 0.85


def _require_strings(scorer: str, output: Any, expected: Any) -> None:
    if not isinstance(output, str):
        raise ScorerInputError(scorer=scorer, label="output", expected_type="a string")
    if not isinstance(expected, str):
        raise ScorerInputError(
            scorer=scorer, label="expected output", expected_type="a string"
        )


def _require_structured(scorer: str, output: Any, expected: Any) -> None:
    if not is_structured(output):
        raise ScorerInputError(
            scorer=scorer, label="output", expected_type="an object or array"
        )
    if not is_structured(expected):
        raise ScorerInputError(
            scorer=scorer, label="expected output", expected_type="an object or array"
        )


def string_exact_match(ctx: ScoreContext, output: Any, expected: Any) -> ScoreResult:
    _require_strings(scorer="string_exact_match", output=output, expected=expected)
    passed = output == expected
    return ScoreResult(score=1.0 if passed else 0.0, passed=passed, label="exact_match")


def string_fuzzy_match(ctx: ScoreContext, output: Any, expected: Any) -> ScoreResult:
    """Similarity of the normalized strings, 1 - distance / max_length.

    Two strings that are both empty after normalization are a perfect match.
    Details carry ``distance`` and ``max_length`` (snake_case; other tools
    reading saved runs may know the latter as ``maxLength``).
    """
    _require_strings(scorer="string_fuzzy_match", output=output, expected=expected)
    a = normalize_text(output)
    b = normalize_text(expected)
    max_length = max(len(a), len(b))

    if max_length == 0:
        return ScoreResult(
            score=1.0,
            passed=True,
            label="fuzzy_match",
            details={"distance": 0, "max_length": 0},
        )

    distance = levenshtein_distance(a, b)
    score = min(1.0, max(0.0, 1.0 - distance / max_length))
    return ScoreResult(
        score=score,
        passed=score >= STRING_FUZZY_THRESHOLD,
        label="fuzzy_match",
        details={"distance": distance, "max_length": max_length},
    )


def object_exact_match(ctx: ScoreContext, output: Any, expected: Any) -> ScoreResult:
    _require_structured(scorer="object_exact_match", output=output, expected=expected)
    passed = deep_equal(output, expected)
    return ScoreResult(score=1.0 if passed else 0.0, passed=passed, label="exact_match")


def object_fuzzy_match(ctx: ScoreContext, output: Any, expected: Any) -> ScoreResult:
    """Fraction of leaf paths present on both sides with equal values.

    The denominator is the union of leaf paths from both structures; when
    neither side has any leaves the score is 1.
    """
    _require_structured(scorer="object_fuzzy_match", output=output, expected=expected)
    output_leaves = flatten_leaves(output)
    expected_leaves = flatten_leaves(expected)
    all_paths = output_leaves.keys() | expected_leaves.keys()

    if not all_paths:
        return ScoreResult(
            score=1.0,
            passed=True,
            label="fuzzy_match",
            details={"matched": 0, "total": 0},
        )

    matched = sum(
        1
        for path in all_paths
        if path in output_leaves
        and path in expected_leaves
        and same_value(output_leaves[path], expected_leaves[path])
    )
    score = matched / len(all_paths)
    return ScoreResult(
        score=score,
        passed=score >= OBJECT_FUZZY_THRESHOLD,
        label="fuzzy_match",
        details={"matched": matched, "total": len(all_paths)},
    )


BUILTIN_SCORERS: dict[str, Scorer] = {
    "string_exact_match": string_exact_match,
    "string_fuzzy_match": string_fuzzy_match,
    "object_exact_match": object_exact_match,
    "object_fuzzy_match": object_fuzzy_match,
}
