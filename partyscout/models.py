"""Core data models shared by the party venue search pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(slots=True)
class PartyRequest:
    """Structured party wizard request, validated by the HTTP layer."""

    age: int
    party_types: List[str]
    guest_count: int
    zip_code: str
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    setting: str = "any"
    max_distance_miles: int = 10
    date: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PartyTypeDefinition:
    type: str
    display_name: str
    description: str
    icon: str
    min_age: int
    max_age: int
    places_types: Tuple[str, ...]
    search_keywords: Tuple[str, ...]
    typical_duration: str
    average_cost_per_person: Tuple[int, int]
    setting: str


@dataclass(frozen=True, slots=True)
class PartyTypeSuggestion:
    type: str
    display_name: str
    description: str
    icon: str
    age_range: str
    average_cost: str
    popularity_score: int


@dataclass(frozen=True, slots=True)
class RawPlace:
    """Normalized snapshot of a place returned by the Places searchNearby call."""

    id: Optional[str] = None
    display_name: Optional[str] = None
    formatted_address: Optional[str] = None
    location: Optional[Coordinates] = None
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    price_level: Optional[str] = None
    types: Tuple[str, ...] = ()
    phone: Optional[str] = None
    website: Optional[str] = None
    photo_names: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AddOn:
    name: str
    description: str
    estimated_cost: int
    is_recommended: bool


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    age_score: int
    budget_score: int
    capacity_score: int
    distance_score: int
    rating_score: int
    type_match_score: int


@dataclass(frozen=True, slots=True)
class MatchScoreResult:
    total_score: int
    reasons: List[str]
    breakdown: ScoreBreakdown


@dataclass(frozen=True, slots=True)
class EnrichedVenue:
    """Venue annotated with match score, cost estimate and party content."""

    id: str
    name: str
    address: str
    rating: float
    user_ratings_total: int
    phone_number: Optional[str]
    website: Optional[str]
    distance_in_miles: float
    price_level: int
    place_types: List[str]
    photos: List[str]
    match_score: int
    match_reasons: List[str]
    estimated_total: int
    estimated_price_per_person: int
    included_items: List[str]
    not_included: List[str]
    suggested_add_ons: List[AddOn]
    popular_for_ages: str
    typical_party_duration: str
    min_capacity: int
    max_capacity: int
    setting: str
    is_open_on_date: Optional[bool] = None
    opening_hours: Optional[List[str]] = None


@dataclass(frozen=True, slots=True)
class PartySearchCriteria:
    age: int
    party_types: List[str]
    guest_count: int
    budget_min: Optional[int]
    budget_max: Optional[int]
    zip_code: str
    setting: str
    max_distance_miles: int
    date: Optional[str]

    @classmethod
    def from_request(cls, request: PartyRequest) -> "PartySearchCriteria":
        return cls(
            age=request.age,
            party_types=list(request.party_types),
            guest_count=request.guest_count,
            budget_min=request.budget_min,
            budget_max=request.budget_max,
            zip_code=request.zip_code,
            setting=request.setting,
            max_distance_miles=request.max_distance_miles,
            date=request.date,
        )


@dataclass(frozen=True, slots=True)
class PartySearchResult:
    venues: List[EnrichedVenue]
    search_criteria: PartySearchCriteria
    party_type_suggestions: List[PartyTypeSuggestion]


@dataclass(frozen=True, slots=True)
class BudgetEstimate:
    estimated_total: int
    estimated_per_person: int
    budget_category: str


@dataclass(frozen=True, slots=True)
class PartyDetails:
    included_items: List[str]
    not_included: List[str]
    suggested_add_ons: List[AddOn]
    what_to_bring: List[str]
    typical_duration: str
    age_appropriateness_description: str


@dataclass(frozen=True, slots=True)
class KidFriendlyFeatures:
    is_kid_friendly: bool
    age_range: Optional[str] = None
    has_play_area: bool = False
    has_kids_menu: bool = False
    has_high_chairs: bool = False
    has_changing_station: bool = False
    entertainment_options: List[str] = field(default_factory=list)
    safety_features: List[str] = field(default_factory=list)
    special_accommodations: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class BirthdayVenueOption:
    """Legacy birthday search result with inferred kid-friendly features."""

    name: str
    address: str
    rating: float
    kid_friendly_features: KidFriendlyFeatures
    estimated_capacity: int
    description: Optional[str] = None
    price_range: Optional[str] = None
    phone_number: Optional[str] = None
    website: Optional[str] = None
    distance_in_miles: Optional[float] = None


@dataclass(frozen=True, slots=True)
class VenueOption:
    """Legacy party options search result."""

    id: str
    name: str
    type: str
    address: str
    distance: float
    rating: float
    price_level: int
    amenities: List[str]
    available_capacity: int
    estimated_cost: float
    description: str


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _camelize(value):
    if isinstance(value, dict):
        return {_camel(key): _camelize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_camelize(item) for item in value]
    return value


def to_json_dict(record) -> dict:
    """Serialise a dataclass record with the camelCase keys used by the HTTP API."""
    return _camelize(asdict(record))
