"""Party wizard venue search: geocode, search nearby, score, enrich and rank."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from partyscout.core.config import get_settings
from partyscout.etl.transform import parse_price_level, to_raw_place
from partyscout.models import (
    Coordinates,
    EnrichedVenue,
    PartyDetails,
    PartyRequest,
    PartySearchCriteria,
    PartySearchResult,
    PartyTypeDefinition,
    PartyTypeSuggestion,
    RawPlace,
)
from partyscout.services import budget, details, geo, scoring, taxonomy
from partyscout.vendors import google_places

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TYPES = ["amusement_center", "bowling_alley", "park"]
MAX_PHOTOS = 5

OUTDOOR_MARKERS = ("park", "zoo", "garden")
MIXED_MARKERS = ("pool", "water")

# First matching marker wins; (min, max) guests.
CAPACITY_RANGES: Tuple[Tuple[Tuple[str, ...], Tuple[int, int]], ...] = (
    (("banquet", "event_venue"), (20, 200)),
    (("restaurant",), (10, 80)),
    (("amusement_park",), (10, 100)),
    (("bowling",), (8, 50)),
    (("amusement_center",), (8, 60)),
    (("movie_theater",), (10, 40)),
    (("park",), (5, 100)),
    (("gym",), (10, 40)),
)
DEFAULT_CAPACITY_RANGE = (10, 40)


def resolve_search_types(party_types: Sequence[str]) -> List[str]:
    if not party_types:
        return list(DEFAULT_SEARCH_TYPES)
    return taxonomy.places_types_for_types(party_types)


def infer_setting(place_types: Sequence[str]) -> str:
    lowered = [place_type.lower() for place_type in place_types]
    if any(marker in place_type for place_type in lowered for marker in OUTDOOR_MARKERS):
        return "outdoor"
    if any(marker in place_type for place_type in lowered for marker in MIXED_MARKERS):
        return "both"
    return "indoor"


def estimate_capacity_range(place_types: Sequence[str]) -> Tuple[int, int]:
    for markers, capacity in CAPACITY_RANGES:
        if any(marker in place_type for place_type in place_types for marker in markers):
            return capacity
    return DEFAULT_CAPACITY_RANGE


def matches_setting(venue_setting: str, requested_setting: str) -> bool:
    if requested_setting == "indoor":
        return venue_setting in ("indoor", "both")
    if requested_setting == "outdoor":
        return venue_setting in ("outdoor", "both")
    return True


def fetch_places(
    zip_code: str,
    included_types: Sequence[str],
    radius_meters: int,
    *,
    api_key: str,
    timeout: float,
    max_results: int = google_places.DEFAULT_MAX_RESULTS,
) -> Tuple[Coordinates, List[Dict[str, Any]]]:
    """Geocode ``zip_code`` then search around it. Provider errors propagate.

    Payloads are returned unmapped; callers map them one at a time.
    """
    center = google_places.geocode(zip_code, api_key, timeout=timeout)
    payloads = google_places.search_nearby(
        center,
        included_types,
        radius_meters,
        api_key,
        timeout=timeout,
        max_results=max_results,
    )
    return center, payloads


def _payload_id(payload: Any) -> Optional[Any]:
    return payload.get("id") if isinstance(payload, dict) else None


def require_location(place: RawPlace) -> Coordinates:
    if place.location is None:
        raise ValueError(f"Place {place.id or place.display_name or '?'} is missing a location")
    return place.location


def build_enriched_venue(place: RawPlace, center: Coordinates, request: PartyRequest) -> EnrichedVenue:
    location = require_location(place)
    distance = geo.distance_miles(center.lat, center.lng, location.lat, location.lng)

    place_types = list(place.types)
    price_level = parse_price_level(place.price_level)
    min_capacity, max_capacity = estimate_capacity_range(place_types)

    match = scoring.calculate_match_score(
        request=request,
        venue_place_types=place_types,
        venue_rating=place.rating,
        venue_user_ratings_total=place.user_rating_count,
        venue_price_level=price_level,
        venue_distance_miles=distance,
        venue_min_capacity=min_capacity,
        venue_max_capacity=max_capacity,
    )

    return EnrichedVenue(
        id=place.id or f"unknown-{uuid.uuid4().hex}",
        name=place.display_name or "Unknown Venue",
        address=place.formatted_address or "Address not available",
        rating=place.rating if place.rating is not None else 0.0,
        user_ratings_total=place.user_rating_count or 0,
        phone_number=place.phone,
        website=place.website,
        distance_in_miles=round(distance, 1),
        price_level=price_level,
        place_types=place_types,
        photos=[google_places.photo_url(name) for name in place.photo_names[:MAX_PHOTOS]],
        match_score=match.total_score,
        match_reasons=match.reasons,
        estimated_total=budget.estimate_party_cost(request.party_types, request.guest_count, price_level),
        estimated_price_per_person=budget.estimate_cost_per_person(request.party_types, price_level),
        included_items=details.included_items(request.party_types, price_level),
        not_included=details.not_included_items(request.party_types, price_level),
        suggested_add_ons=details.suggested_add_ons(request.party_types, request.guest_count),
        popular_for_ages=details.age_appropriateness_description(request.party_types),
        typical_party_duration=details.typical_duration(request.party_types),
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        setting=infer_setting(place_types),
    )


def search_party_venues(
    request: PartyRequest,
    *,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
) -> PartySearchResult:
    """Rich wizard search.

    Geocoding and provider failures are raised to the caller
    (:class:`~partyscout.vendors.google_places.GeocodeError`,
    :class:`~partyscout.vendors.google_places.PlacesProviderError`,
    :class:`~partyscout.vendors.google_places.ProviderTimeoutError`).
    Places that cannot be mapped are logged and dropped.
    """
    settings = get_settings()
    api_key = api_key if api_key is not None else settings.google_api_key
    timeout = timeout if timeout is not None else settings.places_timeout_seconds

    logger.info(
        "Party wizard search: age=%d types=%s guests=%d zip=%s",
        request.age,
        request.party_types,
        request.guest_count,
        request.zip_code,
    )

    search_types = resolve_search_types(request.party_types)
    radius_meters = geo.miles_to_meters(request.max_distance_miles)

    center, payloads = fetch_places(
        request.zip_code,
        search_types,
        radius_meters,
        api_key=api_key,
        timeout=timeout,
        max_results=settings.places_max_results,
    )

    venues: List[EnrichedVenue] = []
    for payload in payloads:
        try:
            venue = build_enriched_venue(to_raw_place(payload), center, request)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Skipping place %s: %s", _payload_id(payload), exc)
            continue
        if not matches_setting(venue.setting, request.setting):
            continue
        if venue.distance_in_miles > request.max_distance_miles:
            continue
        venues.append(venue)

    venues.sort(key=lambda venue: venue.match_score, reverse=True)
    logger.info("Returning %d venue options", len(venues))

    return PartySearchResult(
        venues=venues,
        search_criteria=PartySearchCriteria.from_request(request),
        party_type_suggestions=taxonomy.definitions_for_age(request.age),
    )


def estimate_budget(party_types: Sequence[str], guest_count: int, price_level: Optional[int] = None):
    return budget.estimate_budget(party_types, guest_count, price_level)


def party_details(party_types: Sequence[str], guest_count: int, price_level: Optional[int] = None) -> PartyDetails:
    return details.party_details(party_types, guest_count, price_level)


def party_types_for_age(age: int) -> List[PartyTypeSuggestion]:
    return taxonomy.definitions_for_age(age)


def all_party_types() -> List[PartyTypeDefinition]:
    return taxonomy.all_definitions()
