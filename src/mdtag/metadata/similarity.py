"""Edit-distance matching of candidate tags against the vocabulary."""

from typing import Sequence

DEFAULT_THRESHOLD = 2


def levenshtein(a: str, b: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Uses two rolling rows instead of the full matrix.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for j, b_char in enumerate(b, start=1):
        current = [j]
        for i, a_char in enumerate(a, start=1):
            cost = 0 if a_char == b_char else 1
            current.append(
                min(
                    current[i - 1] + 1,
                    previous[i] + 1,
                    previous[i - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def find_similar(
    candidate: str,
    vocabulary: Sequence[str],
    threshold: int = DEFAULT_THRESHOLD,
) -> list[str]:
    """Find vocabulary entries within ``threshold`` edits of ``candidate``.

    Exact matches (distance 0) are excluded; callers accept those
    directly.

    Args:
        candidate: Tag to look up.
        vocabulary: Known tags, in first-seen order.
        threshold: Maximum edit distance (inclusive).

    Returns:
        Matching entries ordered by ascending distance. Ties keep
        vocabulary order.
    """
    scored: list[tuple[int, int, str]] = []
    for position, existing in enumerate(vocabulary):
        # Length difference is a lower bound on the distance
        if abs(len(existing) - len(candidate)) > threshold:
            continue
        distance = levenshtein(candidate, existing)
        if 0 < distance <= threshold:
            scored.append((distance, position, existing))

    scored.sort()
    return [existing for _, _, existing in scored]
