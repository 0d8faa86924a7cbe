from __future__ import annotations

import logging
import time

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import generate_with_retry
from ..places.client import enrich_recommendations
from ..places.config import DEFAULT_PLACES_CONFIG, PlacesConfig
from ..prompts.composer import compose_recommendation_prompt
from ..voting.aggregator import aggregate_votes, summarize_votes
from ..voting.projector import project_preferences
from .formatter import parse_ai_response, utc_timestamp
from .models import (
    RecommendationData,
    RecommendationRequest,
    RecommendationResponse,
    ResponseMeta,
)

logger = logging.getLogger(__name__)


def get_recommendations(
    request: RecommendationRequest,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    places_config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> RecommendationResponse:
    start_time = time.time()

    # --- Vote analysis ---
    analysis = aggregate_votes(request.votes)
    logger.info("Vote summary: %s", summarize_votes(analysis))

    # --- Prompt ---
    preferences = project_preferences(analysis)
    prompt = compose_recommendation_prompt(preferences, request.options)

    # --- Model call ---
    raw_reply = generate_with_retry(prompt, config=llm_config)
    recommendations = parse_ai_response(raw_reply)

    # --- Places enrichment ---
    recommendations, places_used = enrich_recommendations(
        recommendations, request.options.location_context, config=places_config
    )

    elapsed = time.time() - start_time
    logger.info("Recommendations ready in %.2fs", elapsed)

    return RecommendationResponse(
        data=RecommendationData(
            recommendations=recommendations,
            analysis_stats=analysis,
        ),
        meta=ResponseMeta(
            timestamp=utc_timestamp(),
            processing_time=f"{elapsed:.2f}s",
            ai_model=llm_config.model,
            places_api_used=places_used,
        ),
    )
