from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..prompts.composer import PromptOptions
from ..voting.models import AggregateResult, Vote


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VoteIn(Vote):
    budget: float = Field(..., ge=0, description="Per-person budget in the caller's currency")


class RecommendationRequest(_ApiModel):
    votes: list[VoteIn] = Field(..., min_length=1)
    options: PromptOptions = Field(default_factory=PromptOptions)
    room_id: str | None = Field(
        default=None, description="Room to store the recommendations in, if any"
    )


class Rating(_ApiModel):
    score: float = 0.0
    out_of: float = 5.0
    source: str = "unknown source"
    count: str = "0"


class RestaurantRecommendation(_ApiModel):
    name: str
    type: str
    address: str
    map_url: str | None = None
    photo_url: str | None = None
    price_range: str
    rating: Rating | None = None
    reasons: list[str] = Field(default_factory=list)
    dishes: list[str] = Field(default_factory=list)


class RecommendationData(_ApiModel):
    recommendations: list[RestaurantRecommendation]
    analysis_stats: AggregateResult


class ResponseMeta(_ApiModel):
    timestamp: str
    processing_time: str | None = None
    ai_model: str | None = None
    places_api_used: bool = False


class RecommendationResponse(_ApiModel):
    success: bool = True
    data: RecommendationData
    meta: ResponseMeta
