"""Edit-distance helpers for "did you mean" suggestions."""

from __future__ import annotations

from collections.abc import Iterable

MAX_SUGGESTION_DISTANCE = 3


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def suggest_commands(
    name: str,
    names: Iterable[str],
    *,
    max_distance: int = MAX_SUGGESTION_DISTANCE,
) -> list[str]:
    """Return known names within ``max_distance`` edits, closest first."""
    scored = [
        (levenshtein(name, candidate), index, candidate)
        for index, candidate in enumerate(names)
    ]
    return [
        candidate
        for distance, _, candidate in sorted(scored)
        if distance <= max_distance
    ]
