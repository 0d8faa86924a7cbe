"""Normalise raw model replies into :class:`RestaurantRecommendation` objects."""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from .models import Rating, RestaurantRecommendation

logger = logging.getLogger(__name__)

ADDRESS_PLACEHOLDER = "Address not provided"
UNSPECIFIED = "Unspecified"
UNNAMED = "Unnamed restaurant"
PARSE_FAILED_NAME = "Could not parse the reply, see raw response"

# ---------------------------------------------------------------------------
# JSON extraction
# ---------------------------------------------------------------------------

_FENCED_JSON_RE = re.compile(r"```json([\s\S]*?)```")
_FENCED_ANY_RE = re.compile(r"```([\s\S]*?)```")

_IMAGE_URL_RE = re.compile(r"^https?://.+\.(jpg|jpeg|png|webp)", re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# ---------------------------------------------------------------------------
# Free-text fallback
# ---------------------------------------------------------------------------

_RESTAURANT_RE = re.compile(
    r"(?:推薦|建議|Recommendation)(?:\s*\d+\s*[:：.])?\s*([^,，.。\n]+)"
)
_TYPE_RE = re.compile(r"(?:類型|Type)[:：]?\s*([^,，.。\n]+)")
_PRICE_RE = re.compile(r"(?:價格|預算|Price|Budget)[:：]?\s*([^,，.。\n]+)")
_ADDRESS_RE = re.compile(r"(?:地址|位於|位置|Address)[:：]?\s*([^,，。\n]+)")
_MAP_RE = re.compile(r"(https://maps\.google\.com[^\s]+)")
_PHOTO_RE = re.compile(r"(https?://[^\s]+\.(?:jpg|jpeg|png|webp)[^\s]*)", re.IGNORECASE)
_REASON_RE = re.compile(r"(?:因為|原因|理由|Reason)[:：]?\s*([^,，.。\n]+)")
_DISH_RE = re.compile(r"(?:推薦菜品|招牌菜|特色菜|Dishes)[:：]?\s*([^,，.。\n]+)")

_CONTEXT_BEFORE = 100
_CONTEXT_AFTER = 200


def _extract_json_text(text: str) -> str:
    match = _FENCED_JSON_RE.search(text) or _FENCED_ANY_RE.search(text)
    return (match.group(1) if match else text).strip()


def _load_recommendation_list(text: str) -> list[Any]:
    data = json.loads(_extract_json_text(text))
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("recommendations"), list):
        return data["recommendations"]
    raise ValueError("AI reply is neither a list nor an object with 'recommendations'")


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def _parse_from_text(text: str) -> list[dict[str, Any]]:
    results: list[dict[str, Any]] = []
    for match in _RESTAURANT_RE.finditer(text):
        name = match.group(1).strip()
        if not name:
            continue
        context = text[
            max(0, match.start() - _CONTEXT_BEFORE) : min(len(text), match.start() + _CONTEXT_AFTER)
        ]
        results.append({
            "name": name,
            "type": _first_group(_TYPE_RE, context),
            "address": _first_group(_ADDRESS_RE, context),
            "mapUrl": _first_group(_MAP_RE, context),
            "photoUrl": _first_group(_PHOTO_RE, context),
            "priceRange": _first_group(_PRICE_RE, context),
            "reasons": [m.strip() for m in _REASON_RE.findall(context)],
            "dishes": [m.strip() for m in _DISH_RE.findall(context)],
        })

    if not results:
        results.append({"name": PARSE_FAILED_NAME, "type": "Unknown", "priceRange": "Unknown"})
    return results


def _to_float(value: Any, default: float) -> float:
    """Read the leading number, so "4.5/5.0" and "4.2 stars" still parse."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _LEADING_NUMBER_RE.match(str(value)) if value is not None else None
    return float(match.group(0)) if match else default


def _normalize_rating(raw: Any) -> Rating | None:
    if not raw:
        return None
    if isinstance(raw, dict):
        return Rating(
            score=_to_float(raw.get("score"), 0.0),
            out_of=_to_float(raw.get("outOf"), 5.0) or 5.0,
            source=str(raw.get("source") or "unknown source"),
            count=str(raw.get("count") or "0"),
        )
    return Rating(score=_to_float(raw, 0.0))


def _as_str_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def ensure_recommendation_format(raw: Any) -> RestaurantRecommendation:
    """Map the many field spellings a model may use onto one shape."""
    if not isinstance(raw, dict):
        raw = {"name": str(raw)}

    name = raw.get("name") or raw.get("restaurantName") or UNNAMED
    address = raw.get("address") or raw.get("location") or ADDRESS_PLACEHOLDER

    map_url = raw.get("mapUrl") or raw.get("googleMapUrl") or raw.get("mapLink")
    if not map_url and address != ADDRESS_PLACEHOLDER:
        map_url = f"https://maps.google.com/?q={quote(f'{name} {address}', safe='')}"

    photo_url = (
        raw.get("photoUrl") or raw.get("image") or raw.get("imageUrl") or raw.get("picture")
    )
    if photo_url and not _IMAGE_URL_RE.match(str(photo_url)):
        photo_url = None

    return RestaurantRecommendation(
        name=str(name),
        type=str(raw.get("type") or raw.get("cuisine") or raw.get("foodType") or UNSPECIFIED),
        address=str(address),
        map_url=map_url or None,
        photo_url=photo_url or None,
        price_range=str(
            raw.get("priceRange") or raw.get("price") or raw.get("budget") or UNSPECIFIED
        ),
        rating=_normalize_rating(raw.get("rating")),
        reasons=_as_str_list(raw.get("reasons") or raw.get("reasonsForRecommendation")),
        dishes=_as_str_list(raw.get("dishes") or raw.get("recommendedDishes")),
    )


def parse_ai_response(raw_text: str) -> list[RestaurantRecommendation]:
    """
    Parse the model's raw reply.

    JSON (fenced or bare) is preferred; anything else goes through a
    pattern-based text extraction that always yields at least one entry.
    """
    try:
        items = _load_recommendation_list(raw_text)
    except ValueError:
        # json.JSONDecodeError is a ValueError
        logger.warning("AI reply was not valid JSON, falling back to text extraction")
        items = _parse_from_text(raw_text)

    return [ensure_recommendation_format(item) for item in items]


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_success_envelope(data: Any, meta: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "success": True,
        "data": data,
        "meta": {"timestamp": utc_timestamp(), **(meta or {})},
    }


def build_error_envelope(
    message: str,
    status_code: int = 500,
    details: Any = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"message": message, "statusCode": status_code}
    if details:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "meta": {"timestamp": utc_timestamp()},
    }
