"""Google Places (New) text-search client used to enrich AI recommendations."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests

from ..recommendations.formatter import ADDRESS_PLACEHOLDER
from ..recommendations.models import RestaurantRecommendation
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaceDetails:
    id: str
    display_name: str
    formatted_address: str = ""
    google_maps_uri: str | None = None
    photo_url: str | None = None


def build_photo_url(
    photo_reference: str | None,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> str | None:
    if not photo_reference:
        return None
    return (
        f"{config.base_url}/{photo_reference}/media"
        f"?key={config.api_key}&maxWidthPx={config.photo_max_width}"
    )


def find_place_details(
    name: str,
    location_context: str = "",
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> PlaceDetails | None:
    """Look up the first text-search match for *name*.

    Returns ``None`` when nothing matches or the call fails; errors are logged.
    """
    if not config.enabled or not config.api_key:
        return None

    query = f"{name} {location_context}".strip()
    try:
        resp = requests.post(
            f"{config.base_url}/places:searchText",
            headers={
                "Content-Type": "application/json",
                "X-Goog-Api-Key": config.api_key,
                "X-Goog-FieldMask": config.field_mask,
            },
            json={"textQuery": query, "languageCode": config.language},
            timeout=config.timeout,
        )
        resp.raise_for_status()
        places = resp.json().get("places") or []
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Places lookup for %r failed: %s", name, exc)
        return None

    if not places:
        logger.info("No place found for %r", name)
        return None

    place = places[0]
    photos = place.get("photos") or []
    details = PlaceDetails(
        id=place.get("id", ""),
        display_name=(place.get("displayName") or {}).get("text") or name,
        formatted_address=place.get("formattedAddress") or "",
        google_maps_uri=place.get("googleMapsUri"),
        photo_url=build_photo_url(photos[0].get("name"), config) if photos else None,
    )
    logger.info("Place found for %r: %s", name, details.display_name)
    return details


def _merge(
    recommendation: RestaurantRecommendation,
    details: PlaceDetails | None,
) -> RestaurantRecommendation:
    if details is None:
        return recommendation

    update: dict[str, object] = {
        "photo_url": details.photo_url or recommendation.photo_url,
        "map_url": details.google_maps_uri or recommendation.map_url,
    }
    if recommendation.address == ADDRESS_PLACEHOLDER and details.formatted_address:
        update["address"] = details.formatted_address
    return recommendation.model_copy(update=update)


def enrich_recommendations(
    recommendations: list[RestaurantRecommendation],
    location_context: str = "",
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> tuple[list[RestaurantRecommendation], bool]:
    """
    Overlay Places data (photo, map link, missing address) on each recommendation.

    Lookups run concurrently; a failed lookup leaves its recommendation as is.
    Returns the new list and whether the Places API was consulted.
    """
    if not recommendations or not config.enabled or not config.api_key:
        return list(recommendations), False

    workers = max(1, min(config.max_workers, len(recommendations)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(find_place_details, rec.name, location_context, config)
            for rec in recommendations
        ]

    enriched: list[RestaurantRecommendation] = []
    for rec, future in zip(recommendations, futures):
        try:
            details = future.result()
        except Exception:
            logger.warning("Places lookup for %r raised", rec.name, exc_info=True)
            details = None
        enriched.append(_merge(rec, details))

    return enriched, True
