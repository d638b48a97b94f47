"""Edit-distance similarity between function names.

    similarity(a, b) = 1 - levenshtein(a, b) / max(len(a), len(b))

Turning ``a`` into ``b`` needs at least ``max_len - min_len`` insertions or
deletions, so no pair can score above ``min_len / max_len``. When that bound
is already below a threshold the O(len(a)·len(b)) distance is skipped; the
skip never changes a classification.
"""


def levenshtein(a: str, b: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the shorter string on the inner axis
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]; 1.0 means identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    # Same form as length_bound so the bound compares exactly in floats
    return (max_len - levenshtein(a, b)) / max_len


def length_bound(a: str, b: str) -> float:
    """Highest similarity two strings of these lengths could reach."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return min(len(a), len(b)) / max_len


def can_meet_threshold(a: str, b: str, threshold: float) -> bool:
    return length_bound(a, b) >= threshold


def strip_prefix(name: str) -> str:
    """Drop the module prefix of a function name.

    One leading underscore goes first, then everything up to and including
    the first remaining underscore:

        >>> strip_prefix("git_check_valid")
        'check_valid'
        >>> strip_prefix("_private_init")
        'init'
        >>> strip_prefix("noprefix")
        'noprefix'
    """
    if name.startswith("_"):
        name = name[1:]
    _, sep, rest = name.partition("_")
    return rest if sep else name
