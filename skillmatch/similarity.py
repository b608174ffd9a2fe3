"""
String similarity primitives.

Levenshtein edit distance and a normalized similarity ratio in [0, 1].
Callers are expected to normalize case and whitespace first.
"""


def edit_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions and
    substitutions needed to turn `a` into `b`.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Two-row dynamic programming over the shorter string
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity: 1.0 for identical strings (including two empty
    strings), otherwise 1 - distance / longest length.
    """
    if a == b:
        return 1.0

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0

    return 1.0 - edit_distance(a, b) / longest
