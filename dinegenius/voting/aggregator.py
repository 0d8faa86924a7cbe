from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..exceptions import InvalidInput
from .models import AggregateResult, BudgetRange, CategoryCount, Vote


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator: 2.5 -> 3, 0.25 -> 0.3 (one digit)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _coerce_budget(value: Any) -> float:
    """Return *value* as a non-negative number, or 0 when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return max(0.0, number)


def _mean(values: list[int]) -> float:
    if not values:
        return 0.0
    return _round_half_up(sum(values) / len(values), 1)


def aggregate_votes(votes: Sequence[Vote] | None) -> AggregateResult:
    """Reduce raw votes to counts, averages and a ranked category list.

    Categories are ranked by descending count; equal counts keep the order
    in which the category was first seen. The input is never mutated.
    """
    if not votes:
        raise InvalidInput("vote sequence is empty")

    participant_count = len(votes)

    # dict preserves insertion order, which doubles as the tie-break
    category_counts: dict[str, int] = {}
    spiciness: list[int] = []
    sweetness: list[int] = []
    budgets: list[float] = []
    comments: list[str] = []

    for vote in votes:
        if not isinstance(vote, Vote):
            raise InvalidInput(f"expected Vote, got {type(vote).__name__}")

        category_counts[vote.food_type] = category_counts.get(vote.food_type, 0) + 1
        if vote.spiciness is not None:
            spiciness.append(vote.spiciness)
        if vote.sweetness is not None:
            sweetness.append(vote.sweetness)
        budgets.append(_coerce_budget(vote.budget))
        if vote.comments and vote.comments.strip():
            comments.append(vote.comments)

    # sorted() is stable, so ties stay in first-seen order
    ranked = [
        CategoryCount(
            category=category,
            count=count,
            percentage=int(_round_half_up(count / participant_count * 100)),
        )
        for category, count in sorted(
            category_counts.items(), key=lambda item: item[1], reverse=True
        )
    ]

    average_budget = int(_round_half_up(sum(budgets) / participant_count))

    return AggregateResult(
        participant_count=participant_count,
        ranked_categories=ranked,
        most_popular=ranked[0].category,
        budget_range=BudgetRange(
            min=min(budgets),
            max=max(budgets),
            average=average_budget,
        ),
        average_spiciness=_mean(spiciness),
        average_sweetness=_mean(sweetness),
        comments=comments or None,
    )


def summarize_votes(result: AggregateResult) -> str:
    """One-line human-readable summary of an aggregate, used in logs."""
    return (
        f"{result.participant_count} participants, "
        f"most popular: {result.most_popular or 'none'}, "
        f"average budget: {result.budget_range.average}, "
        f"spiciness {result.average_spiciness}/5, "
        f"sweetness {result.average_sweetness}/5"
    )
