"""Utilities for transforming Google Places responses into domain records."""

import logging
from typing import Any, Dict, Optional, Tuple

from partyscout.models import Coordinates, RawPlace

logger = logging.getLogger(__name__)

PRICE_LEVELS: Dict[str, int] = {
    "PRICE_LEVEL_FREE": 0,
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}
DEFAULT_PRICE_LEVEL = 2


def parse_price_level(token: Optional[str]) -> int:
    """Map a Places price level token to 0-4, assuming moderate when unknown."""
    return PRICE_LEVELS.get(token, DEFAULT_PRICE_LEVEL)


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_location(location: Any) -> Optional[Coordinates]:
    if not isinstance(location, dict):
        return None
    lat = _safe_float(location.get("latitude"))
    lng = _safe_float(location.get("longitude"))
    if lat is None or lng is None:
        return None
    return Coordinates(lat=lat, lng=lng)


def _photo_names(photos: Any) -> Tuple[str, ...]:
    if not isinstance(photos, list):
        return ()
    return tuple(
        photo["name"] for photo in photos if isinstance(photo, dict) and isinstance(photo.get("name"), str)
    )


def _place_types(types: Any) -> Tuple[str, ...]:
    # Non-string entries are dropped so type matching never sees None.
    if not isinstance(types, list):
        return ()
    return tuple(place_type for place_type in types if isinstance(place_type, str))


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def to_raw_place(result: Dict[str, Any]) -> RawPlace:
    display_name = result.get("displayName") or {}
    return RawPlace(
        id=_optional_str(result.get("id")),
        display_name=_optional_str(display_name.get("text")) if isinstance(display_name, dict) else None,
        formatted_address=_optional_str(result.get("formattedAddress")),
        location=_parse_location(result.get("location")),
        rating=_safe_float(result.get("rating")),
        user_rating_count=_safe_int(result.get("userRatingCount")),
        price_level=_optional_str(result.get("priceLevel")),
        types=_place_types(result.get("types")),
        phone=_optional_str(result.get("internationalPhoneNumber")),
        website=_optional_str(result.get("websiteUri")),
        photo_names=_photo_names(result.get("photos")),
    )
