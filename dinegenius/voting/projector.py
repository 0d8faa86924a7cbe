from __future__ import annotations

import logging

from ..exceptions import InvalidAnalysis
from .dietary import extract_dietary_restrictions
from .divergence import detect_divergence
from .models import (
    AggregateResult,
    DominantPreference,
    MultiPreference,
    SinglePreference,
)

logger = logging.getLogger(__name__)


def project_preferences(result: AggregateResult) -> SinglePreference | MultiPreference:
    """Turn an aggregate into the preference shape consumed by the prompt composer.

    A near-tie between leading categories yields :class:`MultiPreference`,
    otherwise :class:`SinglePreference` anchored on the top category.
    """
    if not isinstance(result, AggregateResult):
        raise InvalidAnalysis(f"expected AggregateResult, got {type(result).__name__}")
    if not result.ranked_categories or not result.most_popular:
        raise InvalidAnalysis("aggregate result has no ranked categories")

    restrictions = extract_dietary_restrictions(result.comments)
    top = result.top_categories
    dominant_count = detect_divergence(top)

    if dominant_count:
        logger.info("Divergent preferences detected across %d categories", dominant_count)
        return MultiPreference(
            participant_count=result.participant_count,
            dominant_preferences=[
                DominantPreference(category=item.category, score=item.score)
                for item in top[:dominant_count]
            ],
            budget_range=result.budget_range,
            spiciness=result.average_spiciness,
            sweetness=result.average_sweetness,
            dietary_restrictions=restrictions,
        )

    return SinglePreference(
        participant_count=result.participant_count,
        primary_category=result.most_popular,
        top_categories=result.top_categories,
        budget_range=result.budget_range,
        spiciness=result.average_spiciness,
        sweetness=result.average_sweetness,
        dietary_restrictions=restrictions,
    )
