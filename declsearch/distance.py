"""Levenshtein edit distance."""

from __future__ import annotations

from typing import List


def levenshtein(a: str, b: str) -> int:
    """Calculate the Levenshtein distance between *a* and *b*.

    Unit cost for insertion, deletion and substitution. Keeps two rolling
    rows of the distance grid, sized by the shorter string.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous_row: List[int] = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current_row = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current_row.append(previous_row[j - 1])
            else:
                current_row.append(1 + min(
                    current_row[j - 1],   # insertion
                    previous_row[j],      # deletion
                    previous_row[j - 1],  # substitution
                ))
        previous_row = current_row

    return previous_row[-1]
