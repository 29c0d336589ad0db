"""Rank declarations by edit distance to a normalized query."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .distance import levenshtein
from .errors import EmptyCandidateSetError
from .lexer import normalize_query
from .models import Category, Declaration, EntityAggregate, Score

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def score_all(declarations: Sequence[Declaration], normalized_query: str) -> List[Score]:
    """Score every declaration, keeping input order."""
    scores: List[Score] = []
    for decl in declarations:
        if not isinstance(decl, Declaration):
            raise TypeError(f"Cannot rank {type(decl).__name__!r}: not a declaration.")
        scores.append(Score(
            id=decl.full_display_form(),
            score=levenshtein(decl.normal_form(), normalized_query),
        ))
    return scores


def rank(
    declarations: Sequence[Declaration],
    normalized_query: str,
    limit: int = DEFAULT_LIMIT,
) -> List[Score]:
    """Return up to *limit* scores, closest first.

    Equal scores keep extraction order (``sorted`` is stable). An empty
    input yields an empty list.
    """
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    scores = sorted(score_all(declarations, normalized_query), key=lambda s: s.score)
    logger.debug("Ranked %d declarations against %r", len(scores), normalized_query)
    return scores[:limit]


def best_match(
    declarations: Sequence[Declaration],
    normalized_query: str,
    category: str = "declarations",
) -> str:
    """Return the display id of the closest declaration."""
    if not declarations:
        raise EmptyCandidateSetError(category)
    return rank(declarations, normalized_query, limit=1)[0].id


def search(
    entities: EntityAggregate,
    category: object,
    query: str,
    limit: int = DEFAULT_LIMIT,
) -> List[Score]:
    """Tokenize *query* and rank the chosen category of *entities*.

    Raises ``UnknownCategoryError`` for an unrecognised *category* and
    ``EmptyCandidateSetError`` when that category holds no declarations.
    """
    kind = Category.parse(category)
    declarations = entities.of(kind)
    if not declarations:
        raise EmptyCandidateSetError(kind.value)
    return rank(declarations, normalize_query(query), limit=limit)
