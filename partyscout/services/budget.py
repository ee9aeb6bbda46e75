"""Party cost estimation from party types, guest count and venue price level.

Per-person and fixed costs are truncated to whole dollars *before* they are
combined. Estimates shown to users depend on that order, so keep it.
"""

from typing import Dict, Iterable, Optional, Sequence

from partyscout.models import BudgetEstimate

DEFAULT_BASE_COST = 25.0
DEFAULT_FIXED_COST = 75.0

# Dollars per guest at price level 2 (moderate).
BASE_COST_PER_PERSON: Dict[str, int] = {
    "active_play": 25,
    "creative": 32,
    "amusement": 33,
    "outdoor": 15,
    "characters_performers": 35,
    "social_dining": 22,
}

# Room rental, setup and performer fees that do not scale with guests.
FIXED_COSTS: Dict[str, int] = {
    "active_play": 75,
    "creative": 60,
    "amusement": 100,
    "outdoor": 25,
    "characters_performers": 150,
    "social_dining": 50,
}

PRICE_LEVEL_MULTIPLIERS: Dict[int, float] = {
    0: 0.6,
    1: 0.8,
    2: 1.0,
    3: 1.3,
    4: 1.6,
}

BUDGET_CATEGORIES = (
    (150, "Budget-Friendly"),
    (300, "Moderate"),
    (500, "Premium"),
    (800, "Deluxe"),
)


def price_multiplier(price_level: Optional[int]) -> float:
    return PRICE_LEVEL_MULTIPLIERS.get(price_level, 1.0)


def _average(values: Iterable[int], default: float) -> float:
    known = list(values)
    if not known:
        return default
    return sum(known) / len(known)


def average_base_cost(party_types: Sequence[str]) -> float:
    return _average((BASE_COST_PER_PERSON[t] for t in party_types if t in BASE_COST_PER_PERSON), DEFAULT_BASE_COST)


def average_fixed_cost(party_types: Sequence[str]) -> float:
    return _average((FIXED_COSTS[t] for t in party_types if t in FIXED_COSTS), DEFAULT_FIXED_COST)


def estimate_party_cost(party_types: Sequence[str], guest_count: int, price_level: Optional[int]) -> int:
    multiplier = price_multiplier(price_level)
    if not party_types:
        return int(DEFAULT_BASE_COST * guest_count * multiplier + DEFAULT_FIXED_COST)

    per_person_cost = int(average_base_cost(party_types) * multiplier)
    total_fixed_cost = int(average_fixed_cost(party_types) * multiplier)
    return per_person_cost * guest_count + total_fixed_cost


def estimate_cost_per_person(party_types: Sequence[str], price_level: Optional[int]) -> int:
    multiplier = price_multiplier(price_level)
    if not party_types:
        return int(DEFAULT_BASE_COST * multiplier)
    return int(average_base_cost(party_types) * multiplier)


def budget_category(estimated_cost: int) -> str:
    for ceiling, label in BUDGET_CATEGORIES:
        if estimated_cost < ceiling:
            return label
    return "Luxury"


def is_within_budget(estimated_cost: int, budget_min: Optional[int] = None, budget_max: Optional[int] = None) -> bool:
    low = budget_min if budget_min is not None else 0
    if estimated_cost < low:
        return False
    return budget_max is None or estimated_cost <= budget_max


def budget_variance_percent(estimated_cost: int, budget_max: Optional[int]) -> Optional[int]:
    """Percent over (positive) or under (negative) ``budget_max``."""
    if budget_max is None:
        return None
    if budget_max <= 0:
        # Zero budget: any cost above it is fully over.
        return 100 if estimated_cost > budget_max else 0
    return int((estimated_cost - budget_max) / budget_max * 100)


def suggest_guest_count_for_budget(party_types: Sequence[str], price_level: Optional[int], budget_max: int) -> int:
    per_person_cost = estimate_cost_per_person(party_types, price_level)
    fixed_cost = int(average_fixed_cost(party_types) * price_multiplier(price_level))
    available_for_guests = budget_max - fixed_cost
    return max(1, int(available_for_guests / per_person_cost))


def estimate_budget(party_types: Sequence[str], guest_count: int, price_level: Optional[int] = None) -> BudgetEstimate:
    estimated_total = estimate_party_cost(party_types, guest_count, price_level)
    return BudgetEstimate(
        estimated_total=estimated_total,
        estimated_per_person=estimate_cost_per_person(party_types, price_level),
        budget_category=budget_category(estimated_total),
    )
