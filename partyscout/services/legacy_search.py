"""Simple age + ZIP venue searches behind the birthday and party-options endpoints.

Unlike the party wizard search these never raise provider failures; a failed
lookup is logged and answered with an empty list.
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from partyscout.core.config import get_settings
from partyscout.etl.transform import parse_price_level, to_raw_place
from partyscout.models import BirthdayVenueOption, Coordinates, KidFriendlyFeatures, RawPlace, VenueOption
from partyscout.services import geo
from partyscout.vendors import google_places

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (marker, label); every place type is checked against the markers in order.
ENTERTAINMENT_MARKERS = (
    ("amusement_park", "Rides and attractions"),
    ("bowling", "Bowling lanes"),
    ("arcade", "Video games"),
    ("movie", "Movie screenings"),
    ("sports", "Sports activities"),
)
VENUE_TYPE_MARKERS = (
    (("amusement",), "Amusement Park"),
    (("bowling",), "Bowling Alley"),
    (("arcade",), "Arcade"),
    (("movie",), "Movie Theater"),
    (("restaurant",), "Restaurant"),
    (("bar",), "Bar & Lounge"),
    (("banquet",), "Banquet Hall"),
    (("park",), "Park"),
)
CAPACITY_MARKERS = (
    (("banquet", "hall"), 200),
    (("restaurant",), 80),
    (("amusement", "park"), 100),
    (("bowling",), 50),
    (("arcade", "movie"), 40),
)
DEFAULT_CAPACITY = 30

PRICE_RANGES = {1: "$100-$300", 2: "$300-$600", 3: "$600-$1200", 4: "$1200-$2500"}
DEFAULT_PRICE_RANGE = "$200-$500"
COSTS = {1: 200.0, 2: 450.0, 3: 900.0, 4: 1800.0}
DEFAULT_COST = 400.0


def keywords_for_age(age: int) -> List[str]:
    if age <= 12:
        return ["playground", "amusement_park", "bowling_alley"]
    if age <= 18:
        return ["arcade", "movie_theater", "sports_complex"]
    return ["restaurant", "bar", "banquet_hall"]


def _has_marker(place_types: Sequence[str], markers: Sequence[str]) -> bool:
    return any(marker in place_type for place_type in place_types for marker in markers)


def entertainment_options(place_types: Sequence[str], age: int) -> List[str]:
    options: List[str] = []
    for place_type in place_types:
        label = next((label for marker, label in ENTERTAINMENT_MARKERS if marker in place_type), None)
        if label is None:
            if "restaurant" in place_type and age > 18:
                label = "Live music"
            elif "bar" in place_type:
                label = "Bar service"
        if label is not None:
            options.append(label)
    return options or ["Various entertainment options"]


def kid_friendly_features(place_types: Sequence[str], age: int) -> KidFriendlyFeatures:
    lowered = [place_type.lower() for place_type in place_types]
    entertainment = entertainment_options(lowered, age)

    if age <= 12:
        return KidFriendlyFeatures(
            is_kid_friendly=True,
            age_range="3-12",
            has_play_area=_has_marker(lowered, ("playground", "park")),
            has_kids_menu=_has_marker(lowered, ("restaurant", "cafe")),
            has_high_chairs=_has_marker(lowered, ("restaurant",)),
            has_changing_station=_has_marker(lowered, ("shopping", "mall")),
            entertainment_options=entertainment,
            safety_features=["Supervised area", "Safe environment"],
            special_accommodations=["Wheelchair accessible"],
        )
    if age <= 18:
        return KidFriendlyFeatures(
            is_kid_friendly=True,
            age_range="13-18",
            entertainment_options=entertainment,
            special_accommodations=["Group-friendly", "Teen-appropriate"],
        )
    return KidFriendlyFeatures(
        is_kid_friendly=False,
        age_range="18+",
        entertainment_options=entertainment,
        special_accommodations=["Full bar", "Catering available"],
    )


def venue_type(place_types: Sequence[str]) -> str:
    for markers, label in VENUE_TYPE_MARKERS:
        if _has_marker(place_types, markers):
            return label
    return "Entertainment Venue"


def amenities(place_types: Sequence[str]) -> List[str]:
    found: List[str] = []
    for place_type in place_types:
        if "parking" in place_type:
            found.append("Parking")
        elif "restaurant" in place_type:
            found.append("Dining")
        elif "bar" in place_type:
            found.append("Bar")
    return found or ["Standard amenities"]


def estimate_capacity(place_types: Sequence[str]) -> int:
    for markers, capacity in CAPACITY_MARKERS:
        if _has_marker(place_types, markers):
            return capacity
    return DEFAULT_CAPACITY


def format_price_range(price_level: Optional[int]) -> str:
    return PRICE_RANGES.get(price_level, DEFAULT_PRICE_RANGE)


def estimate_cost(price_level: Optional[int]) -> float:
    return COSTS.get(price_level, DEFAULT_COST)


def generate_description(rating: Optional[float], place_types: Sequence[str]) -> str:
    rating_text = f"Rated {rating:.1f} stars" if rating is not None else "Popular venue"
    return f"{venue_type(place_types)} - {rating_text} with great amenities for celebrations"


def _distance_to(place: RawPlace, center: Coordinates) -> float:
    if place.location is None:
        raise ValueError(f"Place {place.id or place.display_name or '?'} is missing a location")
    return geo.distance_miles(center.lat, center.lng, place.location.lat, place.location.lng)


def to_birthday_option(place: RawPlace, center: Coordinates, age: int) -> BirthdayVenueOption:
    distance = _distance_to(place, center)
    place_types = list(place.types)
    return BirthdayVenueOption(
        name=place.display_name or "Unknown Venue",
        address=place.formatted_address or "Address not available",
        rating=place.rating if place.rating is not None else 0.0,
        kid_friendly_features=kid_friendly_features(place_types, age),
        estimated_capacity=estimate_capacity(place_types),
        description=generate_description(place.rating, place_types),
        price_range=format_price_range(parse_price_level(place.price_level)),
        phone_number=place.phone,
        website=place.website,
        distance_in_miles=distance,
    )


def to_venue_option(place: RawPlace, center: Coordinates) -> VenueOption:
    distance = _distance_to(place, center)
    place_types = list(place.types)
    price_level = parse_price_level(place.price_level)
    return VenueOption(
        id=place.id or "unknown",
        name=place.display_name or "Unknown Venue",
        type=venue_type(place_types),
        address=place.formatted_address or "Address not available",
        distance=distance,
        rating=place.rating if place.rating is not None else 0.0,
        price_level=price_level,
        amenities=amenities(place_types),
        available_capacity=estimate_capacity(place_types),
        estimated_cost=estimate_cost(price_level),
        description=generate_description(place.rating, place_types),
    )


def _run_simple_search(
    age: int,
    zip_code: str,
    label: str,
    mapper: Callable[[RawPlace, Coordinates], T],
) -> List[T]:
    settings = get_settings()
    keywords = keywords_for_age(age)
    try:
        center = google_places.geocode(zip_code, settings.google_api_key, timeout=settings.places_timeout_seconds)
        payloads = google_places.search_nearby(
            center,
            google_places.expand_keywords_to_types(keywords),
            settings.default_search_radius_meters,
            settings.google_api_key,
            timeout=settings.places_timeout_seconds,
            max_results=settings.places_max_results,
        )
    except google_places.PlacesProviderError:
        logger.exception("%s failed for age %d, ZIP %s", label, age, zip_code)
        return []

    options: List[T] = []
    for payload in payloads:
        try:
            options.append(mapper(to_raw_place(payload), center))
        except Exception as exc:  # noqa: BLE001
            place_id = payload.get("id") if isinstance(payload, dict) else None
            logger.warning("Failed to map place %s: %s", place_id, exc)
    return options


def search_venues(age: int, zip_code: str) -> List[BirthdayVenueOption]:
    """Detailed birthday venue options for an age and ZIP code."""
    logger.info("Searching venues for age: %d, ZIP: %s", age, zip_code)
    return _run_simple_search(
        age,
        zip_code,
        "Venue search",
        lambda place, center: to_birthday_option(place, center, age),
    )


def search_party_options(age: int, zip_code: str) -> List[VenueOption]:
    logger.info("Searching party options for age: %d, ZIP: %s", age, zip_code)
    return _run_simple_search(age, zip_code, "Party options search", to_venue_option)
