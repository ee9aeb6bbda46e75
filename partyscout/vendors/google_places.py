"""Client utilities for the Google Geocoding and Places (v1) APIs."""

import logging
from typing import Any, Dict, Iterable, List, Sequence

import requests

from partyscout.models import Coordinates

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
_SEARCH_NEARBY_URL = "https://places.googleapis.com/v1/places:searchNearby"
_PHOTO_URL = "https://places.googleapis.com/v1/{name}/media"

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_RESULTS = 20
FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.rating",
        "places.userRatingCount",
        "places.priceLevel",
        "places.types",
        "places.photos",
        "places.googleMapsUri",
        "places.websiteUri",
        "places.internationalPhoneNumber",
    ]
)

# Coarse search keywords used by the simple searches, expanded to Places types.
KEYWORD_TYPES: Dict[str, List[str]] = {
    "playground": ["park", "playground"],
    "amusement_park": ["amusement_park", "amusement_center"],
    "bowling_alley": ["bowling_alley"],
    "arcade": ["amusement_center"],
    "movie_theater": ["movie_theater"],
    "sports_complex": ["gym", "stadium", "sports_complex"],
    "restaurant": ["restaurant"],
    "bar": ["bar", "night_club"],
    "banquet_hall": ["banquet_hall", "event_venue"],
}


class PlacesProviderError(RuntimeError):
    """Raised when the Places API call fails or returns a non-successful response."""


class GeocodeError(PlacesProviderError):
    """Raised when a ZIP code cannot be resolved to coordinates."""


class ProviderTimeoutError(PlacesProviderError):
    """Raised when a provider call exceeds its timeout."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} timed out after {timeout}s")
        self.operation = operation
        self.timeout = timeout


def geocode(zip_code: str, api_key: str, timeout: float = DEFAULT_TIMEOUT) -> Coordinates:
    """Resolve a ZIP code to the coordinates of its first geocoding result."""
    logger.info("Geocoding ZIP code %s", zip_code)
    params = {"address": zip_code, "key": api_key}
    try:
        response = _SESSION.get(_GEOCODE_URL, params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.Timeout as exc:
        logger.error("geocode timed out for zip=%s", zip_code)
        raise ProviderTimeoutError("geocode", timeout) from exc
    except (requests.RequestException, ValueError) as exc:
        logger.error("geocode request failed for zip=%s: %s", zip_code, exc)
        raise GeocodeError(f"Geocoding request failed: {exc}") from exc

    status = payload.get("status")
    results = payload.get("results") or []
    if status != "OK" or not results:
        error_message = payload.get("error_message")
        logger.error("geocode failed: status=%s, error_message=%s", status, error_message)
        if error_message:
            raise GeocodeError(f"Geocoding failed: {status} - {error_message}")
        raise GeocodeError(f"Geocoding failed: {status}")

    location = (results[0].get("geometry") or {}).get("location") or {}
    try:
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodeError("Geocoding result is missing a location") from exc


def search_nearby(
    center: Coordinates,
    included_types: Sequence[str],
    radius_meters: int,
    api_key: str,
    timeout: float = DEFAULT_TIMEOUT,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[Dict[str, Any]]:
    """Return the raw ``places`` entries of a searchNearby call."""
    logger.info(
        "Searching nearby places at (%s, %s) radius=%dm types=%s",
        center.lat,
        center.lng,
        radius_meters,
        list(included_types),
    )
    body = {
        "includedTypes": list(included_types),
        "maxResultCount": max_results,
        "locationRestriction": {
            "circle": {
                "center": {"latitude": center.lat, "longitude": center.lng},
                "radius": float(radius_meters),
            }
        },
    }
    headers = {
        "Content-Type": "application/json",
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": FIELD_MASK,
    }
    try:
        response = _SESSION.post(_SEARCH_NEARBY_URL, json=body, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.Timeout as exc:
        logger.error("search_nearby timed out")
        raise ProviderTimeoutError("search_nearby", timeout) from exc
    except (requests.RequestException, ValueError) as exc:
        logger.error("search_nearby failed: %s", exc)
        raise PlacesProviderError(f"Nearby search failed: {exc}") from exc

    if "error" in payload:
        error = payload.get("error") or {}
        logger.error("search_nearby failed: status=%s, message=%s", error.get("status"), error.get("message"))
        raise PlacesProviderError(error.get("message") or error.get("status") or "Nearby search failed")

    places = payload.get("places") or []
    logger.info("Found %d places", len(places))
    return places


def expand_keywords_to_types(keywords: Iterable[str]) -> List[str]:
    expanded = (place_type for keyword in keywords for place_type in KEYWORD_TYPES.get(keyword, [keyword]))
    return list(dict.fromkeys(expanded))


def photo_url(photo_name: str, max_width_px: int = 400) -> str:
    """Media URL for a photo resource; callers append their own ``key``."""
    base = _PHOTO_URL.format(name=photo_name)
    return f"{base}?maxWidthPx={max_width_px}"
