"""Static party type taxonomy and age-based suggestions."""

from typing import Dict, Iterable, List, Optional, Tuple

from partyscout.models import PartyTypeDefinition, PartyTypeSuggestion

DEFAULT_DURATION = "2 hours"
DEFAULT_SETTING = "indoor"

PARTY_TYPES: Tuple[PartyTypeDefinition, ...] = (
    PartyTypeDefinition(
        type="active_play",
        display_name="Active Play",
        description="Jump, run, and burn energy with physical fun",
        icon="rocket",
        min_age=3,
        max_age=16,
        places_types=("amusement_center", "gym", "bowling_alley", "swimming_pool"),
        search_keywords=(
            "trampoline park", "bounce house", "jump zone", "gymnastics",
            "skating rink", "roller skating", "ice skating", "ninja warrior",
            "obstacle course", "rock climbing", "sports center", "swim party",
            "pool party", "aquatic center",
        ),
        typical_duration="2 hours",
        average_cost_per_person=(20, 45),
        setting="indoor",
    ),
    PartyTypeDefinition(
        type="creative",
        display_name="Creative",
        description="Arts, crafts, cooking, and hands-on activities",
        icon="palette",
        min_age=4,
        max_age=14,
        places_types=("art_studio", "museum"),
        search_keywords=(
            "art studio", "pottery painting", "craft party", "painting party",
            "cooking class", "baking party", "science center", "STEM party",
            "slime party", "jewelry making", "canvas painting",
        ),
        typical_duration="2 hours",
        average_cost_per_person=(25, 50),
        setting="indoor",
    ),
    PartyTypeDefinition(
        type="amusement",
        display_name="Amusement",
        description="Arcades, movies, escape rooms, and games galore",
        icon="gamepad",
        min_age=5,
        max_age=18,
        places_types=("amusement_center", "movie_theater", "bowling_alley"),
        search_keywords=(
            "arcade", "game center", "chuck e cheese", "dave and busters",
            "movie theater", "cinema", "private screening",
            "escape room", "puzzle room", "VR experience", "virtual reality",
            "bowling", "laser tag", "go kart", "racing", "mini golf", "putt putt",
        ),
        typical_duration="2 hours",
        average_cost_per_person=(25, 55),
        setting="indoor",
    ),
    PartyTypeDefinition(
        type="outdoor",
        display_name="Outdoor",
        description="Parks, zoos, farms, and nature adventures",
        icon="tree",
        min_age=3,
        max_age=16,
        places_types=("park", "zoo", "amusement_park", "campground"),
        search_keywords=(
            "park pavilion", "nature center", "zoo", "botanical garden",
            "farm party", "petting zoo", "pumpkin patch", "adventure park",
            "climbing", "zip line", "ropes course", "picnic area",
            "outdoor party venue", "garden party",
        ),
        typical_duration="3 hours",
        average_cost_per_person=(15, 40),
        setting="outdoor",
    ),
    PartyTypeDefinition(
        type="characters_performers",
        display_name="Characters & Performers",
        description="Magicians, princesses, superheroes, and entertainers",
        icon="sparkles",
        min_age=2,
        max_age=10,
        places_types=("event_venue", "amusement_center"),
        search_keywords=(
            "party entertainer", "magician", "magic show",
            "princess party", "superhero party", "character party",
            "clown", "face painter", "balloon artist", "balloon twister",
            "costumed character", "themed party entertainment",
        ),
        typical_duration="2 hours",
        average_cost_per_person=(20, 45),
        setting="both",
    ),
    PartyTypeDefinition(
        type="social_dining",
        display_name="Social & Dining",
        description="Restaurants, cafes, and food-focused celebrations",
        icon="utensils",
        min_age=1,
        max_age=18,
        places_types=("restaurant", "cafe", "bakery"),
        search_keywords=(
            "restaurant party room", "private dining", "pizza party",
            "play cafe", "kids cafe", "party room rental",
            "ice cream party", "dessert bar", "themed restaurant",
        ),
        typical_duration="2 hours",
        average_cost_per_person=(15, 35),
        setting="indoor",
    ),
)

_BY_TYPE: Dict[str, PartyTypeDefinition] = {entry.type: entry for entry in PARTY_TYPES}


def popularity_for_age(entry: PartyTypeDefinition, age: int) -> int:
    """Score 1-5 favouring party types whose age band is centred on ``age``."""
    midpoint = (entry.min_age + entry.max_age) / 2.0
    half_range = (entry.max_age - entry.min_age) / 2.0
    if half_range == 0:
        return 5
    normalized_distance = abs(age - midpoint) / half_range

    if normalized_distance <= 0.3:
        return 5
    if normalized_distance <= 0.5:
        return 4
    if normalized_distance <= 0.7:
        return 3
    if normalized_distance <= 0.9:
        return 2
    return 1


def _to_suggestion(entry: PartyTypeDefinition, age: int) -> PartyTypeSuggestion:
    low, high = entry.average_cost_per_person
    return PartyTypeSuggestion(
        type=entry.type,
        display_name=entry.display_name,
        description=entry.description,
        icon=entry.icon,
        age_range=f"Ages {entry.min_age}-{entry.max_age}",
        average_cost=f"${low * 10}-{high * 10}",
        popularity_score=popularity_for_age(entry, age),
    )


def definitions_for_age(age: int) -> List[PartyTypeSuggestion]:
    """Party types whose age band contains ``age``, most popular first."""
    suggestions = [
        _to_suggestion(entry, age)
        for entry in PARTY_TYPES
        if entry.min_age <= age <= entry.max_age
    ]
    # sorted() is stable, so equal scores keep catalog order.
    return sorted(suggestions, key=lambda suggestion: suggestion.popularity_score, reverse=True)


def definition(type_id: str) -> Optional[PartyTypeDefinition]:
    return _BY_TYPE.get(type_id)


def all_definitions() -> List[PartyTypeDefinition]:
    return list(PARTY_TYPES)


def places_types_for(type_id: str) -> List[str]:
    found = definition(type_id)
    return list(found.places_types) if found else []


def keywords_for(type_id: str) -> List[str]:
    found = definition(type_id)
    return list(found.search_keywords) if found else []


def _distinct(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def places_types_for_types(type_ids: Iterable[str]) -> List[str]:
    return _distinct(place_type for type_id in type_ids for place_type in places_types_for(type_id))


def keywords_for_types(type_ids: Iterable[str]) -> List[str]:
    return _distinct(keyword for type_id in type_ids for keyword in keywords_for(type_id))


def typical_duration_for(type_id: str) -> str:
    found = definition(type_id)
    return found.typical_duration if found else DEFAULT_DURATION


def setting_for(type_id: str) -> str:
    found = definition(type_id)
    return found.setting if found else DEFAULT_SETTING
