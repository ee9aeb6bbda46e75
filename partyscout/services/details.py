"""What's included, what's not, add-ons and packing lists for a party."""

import logging
import re
from typing import Dict, List, Optional, Sequence

from partyscout.models import AddOn, PartyDetails
from partyscout.services import taxonomy

logger = logging.getLogger(__name__)

PER_PERSON_ADD_ON_LIMIT = 15
PREMIUM_PRICE_LEVEL = 3
PREMIUM_EXTRA_ITEMS = 2
PREMIUM_EXCLUSION_LIMIT = 3
BUDGET_PRICE_LEVEL = 1
DEFAULT_AGE_TEXT = "Suitable for various ages"

# Party type identifiers that share a content table with a venue style.
CONTENT_ALIASES: Dict[str, str] = {
    "active_play": "bounce_house",
    "creative": "arts_crafts",
    "amusement": "arcade",
    "characters_performers": "character_party",
}

POOL_PARTY_KEYS = frozenset({"pool_party"})
OUTDOOR_KEYS = frozenset({"outdoor"})
HIGH_ACTIVITY_KEYS = frozenset({"bounce_house", "adventure_park", "go_karts"})

INCLUDED_BY_TYPE: Dict[str, List[str]] = {
    "toddler_play": ["Supervised play time", "Party room access", "Basic paper goods (plates, napkins)", "Table setup"],
    "character_party": ["Character appearance", "Photo opportunities", "Party favors", "Themed decorations"],
    "bounce_house": ["Unlimited jump time", "Party room access", "Socks included", "Basic party supplies"],
    "arcade": ["Game tokens/credits", "Pizza and drinks", "Party host", "Prize tickets"],
    "sports": ["Lane/court rental", "Equipment (shoes, balls)", "Scoring system", "Party area"],
    "arts_crafts": ["Art supplies and materials", "Instructor guidance", "Take-home project", "Aprons provided"],
    "outdoor": ["Pavilion or area rental", "Picnic tables", "Trash receptacles", "Open play space"],
    "escape_room": ["Private room booking", "Game master", "Team photos", "Lobby gathering area"],
    "movies": ["Private screening room", "Popcorn and drinks", "Reserved seating", "Movie selection assistance"],
    "pool_party": ["Pool access", "Lifeguard on duty", "Party area", "Locker room access"],
    "go_karts": ["Races included", "Safety gear", "Party room access", "Winner recognition"],
    "adventure_park": ["Admission to attractions", "Safety equipment", "Instructor/guide", "Group photos"],
    "social_dining": ["Reserved tables", "Set party menu", "Server for the group", "Cake cutting service"],
}

PREMIUM_INCLUSIONS: Dict[str, List[str]] = {
    "toddler_play": ["Extended play time", "Themed decorations", "Party host assistance", "Digital invitations"],
    "character_party": ["Extended character time", "Face painting", "Balloon artist", "Custom party favors"],
    "bounce_house": ["Extended time", "Pizza and drinks", "Party host", "Goody bags"],
    "arcade": ["Unlimited play", "VIP experience", "Exclusive games access", "Custom cake"],
    "sports": ["Extra game time", "Private lanes/courts", "Food and drinks", "Trophies/medals"],
    "arts_crafts": ["Premium materials", "Additional project", "Snacks and drinks", "Custom frames"],
    "outdoor": ["Tent/canopy", "Setup and cleanup", "Grill access", "Activity equipment"],
    "escape_room": ["Multiple rooms", "Extended time", "Snacks and drinks", "Commemorative photo"],
    "movies": ["Premium snacks", "Multiple movie choice", "Party decorations", "VIP seating"],
    "pool_party": ["Private pool time", "Pool toys", "Snacks and drinks", "Party coordinator"],
    "go_karts": ["Extra races", "VIP pit area", "Food package", "Trophies"],
    "adventure_park": ["All-access pass", "Extra activities", "Lunch included", "Commemorative gear"],
    "social_dining": ["Private dining room", "Dessert platter", "Table decorations", "Dedicated party host"],
}

NOT_INCLUDED_BY_TYPE: Dict[str, List[str]] = {
    "toddler_play": ["Cake/cupcakes", "Custom decorations", "Party favors", "Additional food"],
    "character_party": ["Venue rental", "Cake", "Additional entertainment", "Food service"],
    "bounce_house": ["Cake", "Custom decorations", "Additional food", "Party favors"],
    "arcade": ["Birthday cake", "Custom decorations", "Additional food items", "Party favors"],
    "sports": ["Food beyond basic", "Custom cake", "Decorations", "Party favors"],
    "arts_crafts": ["Food and drinks", "Cake", "Decorations", "Party favors"],
    "outdoor": ["Food and drinks", "Entertainment", "Decorations", "Party supplies", "Cleanup service"],
    "escape_room": ["Food", "Cake", "Decorations", "Party favors"],
    "movies": ["Birthday cake", "Custom decorations", "Party favors", "Meal service"],
    "pool_party": ["Food beyond snacks", "Cake", "Decorations", "Pool toys (some venues)", "Towels"],
    "go_karts": ["Cake", "Decorations", "Party favors", "Additional food"],
    "adventure_park": ["Cake", "Custom decorations", "Party favors", "Souvenirs"],
    "social_dining": ["Entertainment", "Custom decorations", "Party favors", "Gratuity"],
}

ADD_ONS_BY_TYPE: Dict[str, List[AddOn]] = {
    "toddler_play": [
        AddOn("Character visit", "Add a costumed character appearance", 75, True),
        AddOn("Extra play time", "30 additional minutes of play", 40, False),
        AddOn("Face painting", "Simple designs for all guests", 60, True),
        AddOn("Balloon twisting", "Custom balloon animals", 50, False),
    ],
    "character_party": [
        AddOn("Second character", "Add another character to the party", 100, False),
        AddOn("Magic show", "15-minute magic performance", 75, True),
        AddOn("Princess makeovers", "Hair, nails, and makeup", 15, False),
        AddOn("Superhero training", "Interactive activity session", 50, False),
    ],
    "bounce_house": [
        AddOn("Pizza package", "2 slices + drink per child", 8, True),
        AddOn("Extra time", "30 additional minutes", 50, False),
        AddOn("Goody bags", "Pre-made party favors", 5, True),
        AddOn("Glow party upgrade", "UV lights and glow items", 40, False),
    ],
    "arcade": [
        AddOn("Extra tokens", "25 additional game tokens", 15, True),
        AddOn("Prize upgrade", "Guaranteed prize tier", 10, False),
        AddOn("VIP lane", "Private bowling/attraction access", 50, False),
        AddOn("Custom cake", "Themed birthday cake", 40, True),
    ],
    "sports": [
        AddOn("Extra game", "Additional bowling game or court time", 35, True),
        AddOn("Shoe upgrade", "Premium rental shoes", 5, False),
        AddOn("Trophy package", "Winner trophies and medals", 25, True),
        AddOn("Food upgrade", "Premium food package", 8, False),
    ],
    "arts_crafts": [
        AddOn("Second project", "Additional art activity", 10, True),
        AddOn("Premium canvas", "Upgrade to gallery canvas", 8, False),
        AddOn("Frame it", "Take-home display frames", 6, True),
        AddOn("Instructor demo", "Live painting demonstration", 30, False),
    ],
    "outdoor": [
        AddOn("Bounce house rental", "Inflatable entertainment", 150, True),
        AddOn("Face painting", "Artist for 2 hours", 100, True),
        AddOn("Sports equipment", "Soccer, frisbee, etc.", 30, False),
        AddOn("Tent rental", "Shade canopy 10x10", 75, False),
    ],
    "escape_room": [
        AddOn("Second room", "Book an additional escape room", 150, False),
        AddOn("Extended time", "15 extra minutes per room", 30, False),
        AddOn("Hint package", "Extra hints available", 15, False),
        AddOn("Photo package", "Professional in-game photos", 25, True),
    ],
    "movies": [
        AddOn("Candy bar", "Assorted movie candy", 4, True),
        AddOn("Premium seating", "Recliner upgrades", 5, False),
        AddOn("Popcorn refills", "Unlimited popcorn", 15, False),
        AddOn("3D movie upgrade", "3D glasses included", 3, False),
    ],
    "pool_party": [
        AddOn("Pool toys", "Floats and water toys package", 30, True),
        AddOn("Swim instructor", "Games and water activities", 75, False),
        AddOn("Extra pool time", "Additional hour", 50, False),
        AddOn("Cabana rental", "Private shaded area", 100, False),
    ],
    "go_karts": [
        AddOn("Extra races", "2 additional races per person", 12, True),
        AddOn("VIP experience", "Priority lane access", 10, False),
        AddOn("Trophy ceremony", "Winner celebration package", 30, True),
        AddOn("Group photo", "Professional race day photo", 20, False),
    ],
    "adventure_park": [
        AddOn("Additional attraction", "Access to bonus activities", 15, True),
        AddOn("Photo package", "Action shots of all guests", 40, True),
        AddOn("Lunch upgrade", "Premium meal option", 8, False),
        AddOn("Souvenir package", "T-shirt for birthday child", 20, False),
    ],
    "social_dining": [
        AddOn("Dessert bar", "Build-your-own sundae station", 6, True),
        AddOn("Kids mocktails", "Signature party drinks", 4, False),
        AddOn("Balloon bouquet", "Table balloon arrangement", 35, True),
        AddOn("Custom cake", "Themed birthday cake", 40, False),
    ],
}

BASE_WHAT_TO_BRING = ["Birthday cake or cupcakes", "Candles and cake server", "Camera for photos"]


def content_key(party_type: str) -> str:
    return CONTENT_ALIASES.get(party_type, party_type)


def _content_keys(party_types: Sequence[str]) -> List[str]:
    return [content_key(party_type) for party_type in party_types]


def _distinct(values) -> List:
    return list(dict.fromkeys(values))


def _effective_level(price_level: Optional[int]) -> int:
    return 2 if price_level is None else price_level


def included_items(party_types: Sequence[str], price_level: Optional[int]) -> List[str]:
    keys = _content_keys(party_types)
    base_items = _distinct(item for key in keys for item in INCLUDED_BY_TYPE.get(key, []))

    premium_items: List[str] = []
    if _effective_level(price_level) >= PREMIUM_PRICE_LEVEL:
        premium_pool = _distinct(item for key in keys for item in PREMIUM_INCLUSIONS.get(key, []))
        premium_items = premium_pool[:PREMIUM_EXTRA_ITEMS]

    return _distinct(base_items + premium_items)


def not_included_items(party_types: Sequence[str], price_level: Optional[int]) -> List[str]:
    items = _distinct(item for key in _content_keys(party_types) for item in NOT_INCLUDED_BY_TYPE.get(key, []))
    if _effective_level(price_level) >= PREMIUM_PRICE_LEVEL:
        # Premium venues bundle more, so fewer exclusions apply.
        return items[:PREMIUM_EXCLUSION_LIMIT]
    return items


def suggested_add_ons(party_types: Sequence[str], guest_count: int) -> List[AddOn]:
    seen = set()
    add_ons: List[AddOn] = []
    for key in _content_keys(party_types):
        for add_on in ADD_ONS_BY_TYPE.get(key, []):
            if add_on.name in seen:
                continue
            seen.add(add_on.name)
            add_ons.append(_scale_add_on(add_on, guest_count))
    return add_ons


def _scale_add_on(add_on: AddOn, guest_count: int) -> AddOn:
    # Cheap add-ons are priced per guest.
    if add_on.estimated_cost > PER_PERSON_ADD_ON_LIMIT:
        return add_on
    return AddOn(
        name=add_on.name,
        description=f"{add_on.description} ({add_on.estimated_cost}/person)",
        estimated_cost=add_on.estimated_cost * guest_count,
        is_recommended=add_on.is_recommended,
    )


def what_to_bring(party_types: Sequence[str], price_level: Optional[int]) -> List[str]:
    keys = set(_content_keys(party_types))
    suggestions = list(BASE_WHAT_TO_BRING)

    if keys & POOL_PARTY_KEYS:
        suggestions.extend(["Towels", "Sunscreen", "Change of clothes"])
    if keys & OUTDOOR_KEYS:
        suggestions.extend(["Cooler with ice", "Sunscreen", "Bug spray"])
    if keys & HIGH_ACTIVITY_KEYS:
        suggestions.append("Comfortable clothes for activity")

    # Budget venues expect the host to supply more.
    if _effective_level(price_level) <= BUDGET_PRICE_LEVEL:
        suggestions.extend(["Paper goods", "Drinks", "Snacks"])

    return _distinct(suggestions)


_DURATION_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _duration_hours(duration: str) -> float:
    match = _DURATION_NUMBER.search(duration)
    return float(match.group()) if match else 2.0


def typical_duration(party_types: Sequence[str]) -> str:
    durations = [
        found.typical_duration
        for found in (taxonomy.definition(party_type) for party_type in party_types)
        if found is not None
    ]
    if not durations:
        return taxonomy.DEFAULT_DURATION
    return max(durations, key=_duration_hours)


def age_appropriateness_description(party_types: Sequence[str]) -> str:
    definitions = [found for found in map(taxonomy.definition, party_types) if found is not None]
    if not definitions:
        return DEFAULT_AGE_TEXT
    min_age = min(entry.min_age for entry in definitions)
    max_age = max(entry.max_age for entry in definitions)
    return f"Best for ages {min_age}-{max_age}"


def party_details(party_types: Sequence[str], guest_count: int, price_level: Optional[int] = None) -> PartyDetails:
    logger.debug("Building party details types=%s guests=%d price_level=%s", party_types, guest_count, price_level)
    return PartyDetails(
        included_items=included_items(party_types, price_level),
        not_included=not_included_items(party_types, price_level),
        suggested_add_ons=suggested_add_ons(party_types, guest_count),
        what_to_bring=what_to_bring(party_types, price_level),
        typical_duration=typical_duration(party_types),
        age_appropriateness_description=age_appropriateness_description(party_types),
    )
