import pytest

from partyscout.models import Coordinates, PartyRequest
from partyscout.services import venue_search
from partyscout.vendors import google_places

CENTER = Coordinates(lat=37.7897, lng=-122.3942)


class DummySettings:
    def __init__(self, api_key="test-key"):
        self.google_api_key = api_key
        self.places_timeout_seconds = 5.0
        self.places_max_results = 20
        self.default_search_radius_meters = 5000


def place(place_id, *, lat_offset=0.0, types=("amusement_center",), rating=4.5, reviews=100, price=None, photos=0):
    payload = {
        "id": place_id,
        "displayName": {"text": f"Venue {place_id}"},
        "formattedAddress": f"{place_id} Main St",
        "location": {"latitude": CENTER.lat + lat_offset, "longitude": CENTER.lng},
        "rating": rating,
        "userRatingCount": reviews,
        "types": list(types),
        "photos": [{"name": f"places/{place_id}/photos/{i}"} for i in range(photos)],
    }
    if price is not None:
        payload["priceLevel"] = price
    return payload


@pytest.fixture
def provider(monkeypatch):
    calls = {}

    def fake_geocode(zip_code, api_key, timeout=None):
        calls["geocode"] = (zip_code, api_key, timeout)
        return CENTER

    def fake_search_nearby(center, included_types, radius_meters, api_key, timeout=None, max_results=None):
        calls["search"] = (center, list(included_types), radius_meters, api_key, timeout, max_results)
        return calls.get("places", [])

    monkeypatch.setattr(venue_search, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(venue_search.google_places, "geocode", fake_geocode)
    monkeypatch.setattr(venue_search.google_places, "search_nearby", fake_search_nearby)
    return calls


def make_request(**overrides):
    values = dict(age=7, party_types=["active_play"], guest_count=15, zip_code="94105")
    values.update(overrides)
    return PartyRequest(**values)


def test_search_builds_provider_query(provider):
    venue_search.search_party_venues(make_request(max_distance_miles=10))

    assert provider["geocode"] == ("94105", "test-key", 5.0)
    center, included_types, radius, api_key, timeout, max_results = provider["search"]
    assert center == CENTER
    assert included_types == ["amusement_center", "gym", "bowling_alley", "swimming_pool"]
    assert radius == 16093
    assert api_key == "test-key"
    assert max_results == 20


def test_search_without_party_types_uses_default_filters(provider):
    venue_search.search_party_venues(make_request(party_types=[]))
    assert provider["search"][1] == ["amusement_center", "bowling_alley", "park"]


def test_explicit_api_key_and_timeout_override_settings(provider):
    venue_search.search_party_venues(make_request(), api_key="other", timeout=1.5)
    assert provider["geocode"] == ("94105", "other", 1.5)


def test_search_enriches_venues(provider):
    provider["places"] = [place("a", price="PRICE_LEVEL_MODERATE", photos=7)]

    result = venue_search.search_party_venues(make_request())

    venue = result.venues[0]
    assert venue.id == "a"
    assert venue.name == "Venue a"
    assert venue.distance_in_miles == 0.0
    assert venue.price_level == 2
    assert venue.estimated_total == 450
    assert venue.estimated_price_per_person == 25
    assert (venue.min_capacity, venue.max_capacity) == (8, 60)
    assert venue.setting == "indoor"
    assert len(venue.photos) == 5
    assert venue.photos[0].endswith("places/a/photos/0/media?maxWidthPx=400")
    assert 0 <= venue.match_score <= 100
    assert "Very close by" in venue.match_reasons
    assert venue.included_items[0] == "Unlimited jump time"
    assert venue.typical_party_duration == "2 hours"
    assert venue.popular_for_ages == "Best for ages 3-16"
    assert venue.is_open_on_date is None
    assert venue.opening_hours is None

    assert result.search_criteria.zip_code == "94105"
    assert result.search_criteria.party_types == ["active_play"]
    assert [s.type for s in result.party_type_suggestions][0] == "characters_performers"


def test_places_without_location_are_skipped(provider, caplog):
    broken = place("broken")
    del broken["location"]
    provider["places"] = [broken, place("ok")]

    with caplog.at_level("WARNING"):
        result = venue_search.search_party_venues(make_request())

    assert [venue.id for venue in result.venues] == ["ok"]
    assert "broken" in " ".join(caplog.messages)


def test_malformed_places_are_skipped_without_aborting(provider, caplog):
    bad_location = place("bad-location")
    bad_location["location"] = "nowhere"
    bad_types = place("bad-types", types=(None, "park"))
    provider["places"] = [bad_location, "not-a-place", bad_types, place("ok")]

    with caplog.at_level("WARNING"):
        result = venue_search.search_party_venues(make_request())

    assert sorted(venue.id for venue in result.venues) == ["bad-types", "ok"]
    assert "bad-location" in " ".join(caplog.messages)
    assert sum("Skipping place" in message for message in caplog.messages) == 2


def test_filters_by_distance_and_setting(provider):
    provider["places"] = [
        place("near-indoor"),
        place("near-park", types=("park",)),
        place("near-pool", types=("swimming_pool",)),
        place("far", lat_offset=0.5),  # ~34 miles north
    ]

    indoor = venue_search.search_party_venues(make_request(setting="indoor"))
    assert {venue.id for venue in indoor.venues} == {"near-indoor", "near-pool"}

    outdoor = venue_search.search_party_venues(make_request(setting="outdoor"))
    assert {venue.id for venue in outdoor.venues} == {"near-park", "near-pool"}

    anywhere = venue_search.search_party_venues(make_request())
    assert {venue.id for venue in anywhere.venues} == {"near-indoor", "near-park", "near-pool"}
    assert all(venue.distance_in_miles <= 10 for venue in anywhere.venues)


def test_results_are_sorted_by_score_and_stable(provider):
    provider["places"] = [
        place("low", types=("bar",), rating=2.0, reviews=0),
        place("tie-1"),
        place("tie-2"),
        place("high", types=("amusement_center", "gym"), reviews=800),
    ]

    result = venue_search.search_party_venues(make_request())
    ids = [venue.id for venue in result.venues]
    scores = [venue.match_score for venue in result.venues]

    assert scores == sorted(scores, reverse=True)
    assert ids[0] == "high"
    assert ids.index("tie-1") < ids.index("tie-2")
    assert ids[-1] == "low"


def test_geocode_failure_propagates(provider, monkeypatch):
    def failing_geocode(*args, **kwargs):
        raise google_places.GeocodeError("Geocoding failed: ZERO_RESULTS")

    monkeypatch.setattr(venue_search.google_places, "geocode", failing_geocode)

    with pytest.raises(google_places.GeocodeError):
        venue_search.search_party_venues(make_request())


def test_provider_failure_propagates(provider, monkeypatch):
    def failing_search(*args, **kwargs):
        raise google_places.PlacesProviderError("Nearby search failed")

    monkeypatch.setattr(venue_search.google_places, "search_nearby", failing_search)

    with pytest.raises(google_places.PlacesProviderError):
        venue_search.search_party_venues(make_request())


def test_provider_timeout_propagates(provider, monkeypatch):
    def slow_search(*args, **kwargs):
        raise google_places.ProviderTimeoutError("search_nearby", 5.0)

    monkeypatch.setattr(venue_search.google_places, "search_nearby", slow_search)

    with pytest.raises(google_places.ProviderTimeoutError):
        venue_search.search_party_venues(make_request())


def test_bar_venue_for_adult_is_indoor_with_default_capacity():
    assert venue_search.infer_setting(["bar"]) == "indoor"
    assert venue_search.estimate_capacity_range(["bar"]) == (10, 40)


@pytest.mark.parametrize(
    "types,expected",
    [
        (["banquet_hall"], (20, 200)),
        (["event_venue"], (20, 200)),
        (["restaurant", "bar"], (10, 80)),
        (["amusement_park"], (10, 100)),
        (["bowling_alley"], (8, 50)),
        (["amusement_center"], (8, 60)),
        (["movie_theater"], (10, 40)),
        (["park"], (5, 100)),
        (["gym"], (10, 40)),
    ],
)
def test_estimate_capacity_range(types, expected):
    assert venue_search.estimate_capacity_range(types) == expected


def test_infer_setting():
    assert venue_search.infer_setting(["Botanical_Garden"]) == "outdoor"
    assert venue_search.infer_setting(["zoo", "swimming_pool"]) == "outdoor"
    assert venue_search.infer_setting(["swimming_pool"]) == "both"
    assert venue_search.infer_setting([]) == "indoor"


def test_thin_entry_points():
    assert venue_search.estimate_budget(["active_play"], 15, 2).estimated_total == 450
    assert venue_search.party_details(["outdoor"], 10).typical_duration == "3 hours"
    assert len(venue_search.all_party_types()) == 6
    assert venue_search.party_types_for_age(25) == []
