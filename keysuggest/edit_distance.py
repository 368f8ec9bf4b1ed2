"""Bounded Levenshtein distance."""

# Returned when lengths differ by more than MAX_LENGTH_GAP.
TOO_DIFFERENT = 3
MAX_LENGTH_GAP = 2


def distance(a: str, b: str) -> int:
    """Levenshtein distance between a and b (unit costs).

    Callers only care about distances up to 2, so strings whose lengths
    differ by more than 2 short-circuit to TOO_DIFFERENT without building
    the table.
    """
    la, lb = len(a), len(b)
    if abs(la - lb) > MAX_LENGTH_GAP:
        return TOO_DIFFERENT
    return full_distance(a, b)


def full_distance(a: str, b: str) -> int:
    """Unbounded Levenshtein distance."""
    la, lb = len(a), len(b)
    d = [[0] * (lb + 1) for _ in range(la + 1)]

    for i in range(la + 1):
        d[i][0] = i
    for j in range(lb + 1):
        d[0][j] = j

    for i in range(1, la + 1):
        for j in range(1, lb + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,       # deletion
                d[i][j - 1] + 1,       # insertion
                d[i - 1][j - 1] + cost  # substitution
            )

    return d[la][lb]
