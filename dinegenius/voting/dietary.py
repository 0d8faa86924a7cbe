"""Keyword-based extraction of dietary restrictions from free-text comments.

Matching is a plain case-sensitive substring search. Negations are not
understood: "not vegetarian" still yields ``vegetarian``.
"""
from __future__ import annotations

from collections.abc import Iterable

from .models import DietaryRestriction

DIETARY_KEYWORDS: dict[DietaryRestriction, tuple[str, ...]] = {
    DietaryRestriction.vegetarian: ("素食", "不吃肉", "菜食", "vegetarian", "no meat"),
    DietaryRestriction.vegan: ("全素", "純素", "vegan"),
    DietaryRestriction.gluten_free: ("無麩質", "不含麩質", "gluten-free", "gluten free"),
    DietaryRestriction.nut_free: ("堅果過敏", "不吃堅果", "nut allergy", "nut-free", "no nuts"),
    DietaryRestriction.seafood_allergy: ("海鮮過敏", "不吃海鮮", "seafood allergy", "no seafood"),
    DietaryRestriction.lactose_free: ("乳糖不耐", "不吃奶製品", "lactose", "dairy-free", "no dairy"),
}

_GUIDANCE: dict[DietaryRestriction, str] = {
    DietaryRestriction.vegetarian: (
        "Make sure the recommendations offer enough vegetarian options; "
        'add "vegetarian friendly" to your searches.'
    ),
    DietaryRestriction.vegan: (
        "Make sure the recommendations are vegan friendly; "
        'add "vegan" to your searches.'
    ),
    DietaryRestriction.gluten_free: (
        "Prefer restaurants with gluten-free options; "
        'add "gluten-free" to your searches.'
    ),
    DietaryRestriction.nut_free: (
        "Make sure the restaurants can serve nut-free dishes; "
        'add "nut-free" to your searches.'
    ),
    DietaryRestriction.seafood_allergy: (
        "Avoid seafood-focused restaurants or make sure there are enough "
        "non-seafood dishes; exclude \"seafood\" from your searches."
    ),
    DietaryRestriction.lactose_free: (
        "Prefer restaurants with dairy-free options; "
        'add "lactose-free" to your searches.'
    ),
}


def extract_dietary_restrictions(
    comments: Iterable[str] | None,
) -> list[DietaryRestriction]:
    """Return the unique restrictions mentioned anywhere in *comments*."""
    if not comments:
        return []

    found: list[DietaryRestriction] = []
    for comment in comments:
        if not comment:
            continue
        for restriction, keywords in DIETARY_KEYWORDS.items():
            if restriction in found:
                continue
            if any(keyword in comment for keyword in keywords):
                found.append(restriction)
    return found


def dietary_guidance(restriction: DietaryRestriction) -> str:
    return _GUIDANCE.get(restriction, "")
