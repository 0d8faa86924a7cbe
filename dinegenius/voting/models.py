from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Number of ranked categories surfaced as "top" categories.
TOP_CATEGORY_LIMIT = 3


class _CamelModel(BaseModel):
    """Immutable model that reads and writes the camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DietaryRestriction(str, Enum):
    vegetarian = "vegetarian"
    vegan = "vegan"
    gluten_free = "gluten-free"
    nut_free = "nut-free"
    seafood_allergy = "seafood-allergy"
    lactose_free = "lactose-free"


class Vote(_CamelModel):
    participant_id: str = Field(..., min_length=1)
    participant_name: str | None = None
    food_type: str = Field(..., min_length=1)
    # Non-numeric values count as 0 in aggregation.
    budget: float | str | None = None
    spiciness: int | None = Field(default=None, ge=0, le=5)
    sweetness: int | None = Field(default=None, ge=0, le=5)
    comments: str | None = None


class CategoryCount(_CamelModel):
    category: str
    count: int = Field(..., ge=0)
    percentage: int = Field(default=0, ge=0)

    @property
    def score(self) -> int:
        """Percentage when known, raw count otherwise."""
        return self.percentage or self.count


class BudgetRange(_CamelModel):
    min: float
    max: float
    average: int


class AggregateResult(_CamelModel):
    participant_count: int = Field(..., gt=0)
    ranked_categories: list[CategoryCount]
    most_popular: str | None = None
    budget_range: BudgetRange
    average_spiciness: float = 0.0
    average_sweetness: float = 0.0
    comments: list[str] | None = None

    @property
    def top_categories(self) -> list[CategoryCount]:
        return self.ranked_categories[:TOP_CATEGORY_LIMIT]


class DominantPreference(_CamelModel):
    category: str
    score: int


class SinglePreference(_CamelModel):
    kind: Literal["single"] = "single"
    participant_count: int
    primary_category: str
    top_categories: list[CategoryCount] = Field(default_factory=list, max_length=TOP_CATEGORY_LIMIT)
    budget_range: BudgetRange
    spiciness: float
    sweetness: float
    dietary_restrictions: list[DietaryRestriction] = Field(default_factory=list)


class MultiPreference(_CamelModel):
    kind: Literal["multi"] = "multi"
    participant_count: int
    dominant_preferences: list[DominantPreference] = Field(
        ..., min_length=2, max_length=TOP_CATEGORY_LIMIT
    )
    budget_range: BudgetRange
    spiciness: float
    sweetness: float
    dietary_restrictions: list[DietaryRestriction] = Field(default_factory=list)


PreferenceProjection = Annotated[
    Union[SinglePreference, MultiPreference],
    Field(discriminator="kind"),
]
