"""Venue match scoring against a party request.

Six independently capped components add up to a 0-100 score:

- age appropriateness: 25 points
- budget fit: 25 points
- capacity fit: 20 points
- distance: 15 points
- rating quality: 10 points
- venue type match: 5 points
"""

from typing import List, Optional, Sequence, Tuple

from partyscout.models import MatchScoreResult, PartyRequest, ScoreBreakdown
from partyscout.services import budget, taxonomy

DEFAULT_RATING = 3.5

QUALITY_LABELS = (
    (85, "Excellent Match"),
    (70, "Great Match"),
    (55, "Good Match"),
    (40, "Possible Match"),
)


def calculate_match_score(
    request: PartyRequest,
    venue_place_types: Sequence[str],
    venue_rating: Optional[float],
    venue_user_ratings_total: Optional[int],
    venue_price_level: Optional[int],
    venue_distance_miles: float,
    venue_min_capacity: int,
    venue_max_capacity: int,
) -> MatchScoreResult:
    reasons: List[str] = []

    age_score = score_age(request.age, request.party_types, venue_place_types)
    if age_score >= 20:
        reasons.append(f"Perfect for {request.age}-year-olds")
    elif age_score >= 15:
        reasons.append("Good for this age group")

    estimated_cost = budget.estimate_party_cost(request.party_types, request.guest_count, venue_price_level)
    budget_score = score_budget(estimated_cost, request.budget_min, request.budget_max)
    if budget_score >= 20:
        reasons.append("Within your budget")
    elif budget_score >= 10:
        reasons.append("Close to budget")
    elif request.budget_max is not None:
        reasons.append("May exceed budget")

    capacity_score = score_capacity(request.guest_count, venue_min_capacity, venue_max_capacity)
    if capacity_score >= 18:
        reasons.append(f"Ideal for {request.guest_count} guests")
    elif capacity_score >= 12:
        reasons.append("Can accommodate your group")
    elif capacity_score < 10:
        reasons.append("Group size may be tight fit")

    distance_score = score_distance(venue_distance_miles, request.max_distance_miles)
    if distance_score >= 12:
        reasons.append("Very close by")
    elif venue_distance_miles <= 5:
        reasons.append("Convenient location")

    rating_score = score_rating(venue_rating, venue_user_ratings_total)
    if rating_score >= 8:
        reasons.append("Highly rated")
    elif rating_score >= 6:
        reasons.append("Good reviews")

    type_match_score = score_type_match(request.party_types, venue_place_types)
    if type_match_score == 5:
        reasons.append("Matches your party style")

    breakdown = ScoreBreakdown(
        age_score=age_score,
        budget_score=budget_score,
        capacity_score=capacity_score,
        distance_score=distance_score,
        rating_score=rating_score,
        type_match_score=type_match_score,
    )
    total = age_score + budget_score + capacity_score + distance_score + rating_score + type_match_score
    return MatchScoreResult(total_score=max(0, min(100, total)), reasons=reasons, breakdown=breakdown)


def _expected_place_types(party_types: Sequence[str]) -> List[str]:
    return taxonomy.places_types_for_types(party_types)


def score_age(age: int, party_types: Sequence[str], venue_place_types: Sequence[str]) -> int:
    """0-25: requested types suitable for the age, and venue tags matching those types."""
    age_appropriate = {suggestion.type for suggestion in taxonomy.definitions_for_age(age)}
    has_age_match = any(party_type in age_appropriate for party_type in party_types)

    expected = _expected_place_types(party_types)
    has_place_match = any(place_type in expected for place_type in venue_place_types)

    if has_age_match and has_place_match:
        return 25
    if has_age_match:
        return 20
    if has_place_match:
        return 15
    return 10


def score_budget(estimated_cost: int, budget_min: Optional[int], budget_max: Optional[int]) -> int:
    """0-25: within budget scores best; under budget beats over budget."""
    if budget_min is None and budget_max is None:
        return 15

    if budget.is_within_budget(estimated_cost, budget_min, budget_max):
        return 25

    if budget_min is not None and estimated_cost < budget_min:
        under_by = int((budget_min - estimated_cost) / budget_min * 100)
        return 22 if under_by <= 20 else 18

    if budget_max <= 0:
        return 2
    over_by = int((estimated_cost - budget_max) / budget_max * 100)
    if over_by <= 10:
        return 18
    if over_by <= 25:
        return 12
    if over_by <= 50:
        return 6
    return 2


def score_capacity(guest_count: int, min_capacity: int, max_capacity: int) -> int:
    """0-20: best when guests fill 50-80% of the venue."""
    ideal_low = int(max_capacity * 0.5)
    ideal_high = int(max_capacity * 0.8)

    if guest_count < min_capacity:
        ratio = guest_count / min_capacity
        return min(10, max(2, int(ratio * 10)))

    if guest_count > max_capacity:
        over_by = int((guest_count - max_capacity) / max_capacity * 100)
        if over_by <= 10:
            return 10
        if over_by <= 20:
            return 5
        return 0

    if ideal_low <= guest_count <= ideal_high:
        return 20
    if guest_count < ideal_low:
        return 16
    return 14


_DISTANCE_STEPS: Tuple[Tuple[float, int], ...] = (
    (0.2, 15),
    (0.4, 13),
    (0.6, 11),
    (0.8, 9),
    (1.0, 7),
    (1.2, 4),
)


def score_distance(distance_miles: float, max_distance_miles: int) -> int:
    """0-15 by distance relative to the requested radius."""
    if max_distance_miles <= 0:
        return 1
    ratio = distance_miles / max_distance_miles
    for ceiling, points in _DISTANCE_STEPS:
        if ratio <= ceiling:
            return points
    return 1


def score_rating(rating: Optional[float], user_ratings_total: Optional[int]) -> int:
    """0-10: up to 7 for the rating itself plus up to 3 for review volume."""
    effective_rating = rating if rating is not None else DEFAULT_RATING
    review_count = user_ratings_total or 0

    if effective_rating >= 4.5:
        rating_points = 7
    elif effective_rating >= 4.0:
        rating_points = 6
    elif effective_rating >= 3.5:
        rating_points = 4
    elif effective_rating >= 3.0:
        rating_points = 2
    else:
        rating_points = 1

    if review_count >= 500:
        volume_bonus = 3
    elif review_count >= 200:
        volume_bonus = 2
    elif review_count >= 50:
        volume_bonus = 1
    else:
        volume_bonus = 0

    return min(10, rating_points + volume_bonus)


def score_type_match(party_types: Sequence[str], venue_place_types: Sequence[str]) -> int:
    expected = _expected_place_types(party_types)
    match_count = sum(1 for place_type in venue_place_types if place_type in expected)
    if match_count >= 2:
        return 5
    if match_count == 1:
        return 3
    return 1


def match_quality_label(score: int) -> str:
    for floor, label in QUALITY_LABELS:
        if score >= floor:
            return label
    return "Limited Match"
