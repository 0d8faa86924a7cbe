from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from .models import CategoryCount

# A category scoring at least this fraction of the leader's score is co-dominant.
# TODO: expose through configuration once product settles on a value.
SIMILARITY_THRESHOLD = 0.8


def detect_divergence(ranked: Sequence[CategoryCount] | None) -> int | Literal[False]:
    """Return how many leading categories are near-tied, or ``False``.

    *ranked* must already be ordered by descending score. The scan stops at
    the first category below the threshold; later entries are never looked at.
    """
    if not ranked or len(ranked) < 2:
        return False

    reference = ranked[0].score
    if reference <= 0:
        return False

    group_size = 1
    for item in ranked[1:]:
        if item.score / reference >= SIMILARITY_THRESHOLD:
            group_size += 1
        else:
            break

    return group_size if group_size > 1 else False
