import pytest

from partyscout.models import Coordinates
from partyscout.services import legacy_search
from partyscout.vendors import google_places

CENTER = Coordinates(lat=40.0, lng=-75.0)


class DummySettings:
    google_api_key = "test-key"
    places_timeout_seconds = 5.0
    places_max_results = 20
    default_search_radius_meters = 5000


def place(place_id, types, *, price=None, rating=4.3, with_location=True):
    payload = {
        "id": place_id,
        "displayName": {"text": place_id.title()},
        "formattedAddress": "1 Party Ln",
        "rating": rating,
        "types": list(types),
    }
    if with_location:
        payload["location"] = {"latitude": 40.01, "longitude": -75.0}
    if price is not None:
        payload["priceLevel"] = price
    return payload


@pytest.fixture
def provider(monkeypatch):
    calls = {"places": []}

    def fake_geocode(zip_code, api_key, timeout=None):
        calls["geocode"] = zip_code
        return CENTER

    def fake_search_nearby(center, included_types, radius_meters, api_key, timeout=None, max_results=None):
        calls["search"] = (list(included_types), radius_meters)
        return calls["places"]

    monkeypatch.setattr(legacy_search, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(legacy_search.google_places, "geocode", fake_geocode)
    monkeypatch.setattr(legacy_search.google_places, "search_nearby", fake_search_nearby)
    return calls


@pytest.mark.parametrize(
    "age,keywords",
    [
        (5, ["playground", "amusement_park", "bowling_alley"]),
        (12, ["playground", "amusement_park", "bowling_alley"]),
        (13, ["arcade", "movie_theater", "sports_complex"]),
        (18, ["arcade", "movie_theater", "sports_complex"]),
        (30, ["restaurant", "bar", "banquet_hall"]),
    ],
)
def test_keywords_for_age(age, keywords):
    assert legacy_search.keywords_for_age(age) == keywords


def test_search_venues_uses_keywords_and_default_radius(provider):
    legacy_search.search_venues(8, "19103")

    included_types, radius = provider["search"]
    assert provider["geocode"] == "19103"
    assert included_types == ["park", "playground", "amusement_park", "amusement_center", "bowling_alley"]
    assert radius == 5000


def test_search_venues_maps_birthday_options(provider):
    provider["places"] = [place("fun park", ["amusement_park", "park"], price="PRICE_LEVEL_EXPENSIVE")]

    options = legacy_search.search_venues(8, "19103")

    option = options[0]
    assert option.name == "Fun Park"
    assert option.rating == 4.3
    assert option.estimated_capacity == 100
    assert option.price_range == "$600-$1200"
    assert option.description == "Amusement Park - Rated 4.3 stars with great amenities for celebrations"
    assert 0.6 < option.distance_in_miles < 0.8
    features = option.kid_friendly_features
    assert features.is_kid_friendly is True
    assert features.age_range == "3-12"
    assert features.has_play_area is True
    assert features.entertainment_options == ["Rides and attractions"]
    assert features.safety_features == ["Supervised area", "Safe environment"]


def test_search_party_options_maps_simple_options(provider):
    provider["places"] = [place("grill", ["restaurant", "bar"])]

    options = legacy_search.search_party_options(30, "19103")

    option = options[0]
    assert option.id == "grill"
    assert option.type == "Restaurant"
    assert option.price_level == 2
    assert option.amenities == ["Dining", "Bar"]
    assert option.available_capacity == 80
    assert option.estimated_cost == 450.0


def test_places_without_location_are_skipped(provider):
    provider["places"] = [place("nowhere", ["park"], with_location=False), place("somewhere", ["park"])]

    options = legacy_search.search_party_options(8, "19103")

    assert [option.id for option in options] == ["somewhere"]


def test_malformed_places_do_not_abort_simple_searches(provider, caplog):
    bad_location = place("bad-location", ["park"])
    bad_location["location"] = "nowhere"
    provider["places"] = [place("good", ["park"]), bad_location, place("bad-types", [None, "bowling_alley"]), None]

    with caplog.at_level("WARNING"):
        birthday_options = legacy_search.search_venues(8, "19103")
        party_options = legacy_search.search_party_options(8, "19103")

    assert [option.name for option in birthday_options] == ["Good", "Bad-Types"]
    assert [option.id for option in party_options] == ["good", "bad-types"]
    assert party_options[1].type == "Bowling Alley"
    assert "bad-location" in " ".join(caplog.messages)


@pytest.mark.parametrize(
    "error",
    [
        google_places.GeocodeError("Geocoding failed: ZERO_RESULTS"),
        google_places.PlacesProviderError("Nearby search failed"),
        google_places.ProviderTimeoutError("geocode", 5.0),
    ],
)
def test_provider_failures_return_empty_list(provider, monkeypatch, caplog, error):
    def failing(*args, **kwargs):
        raise error

    monkeypatch.setattr(legacy_search.google_places, "geocode", failing)

    with caplog.at_level("ERROR"):
        assert legacy_search.search_venues(8, "19103") == []
        assert legacy_search.search_party_options(8, "19103") == []

    assert any(record.levelname == "ERROR" for record in caplog.records)


def test_adult_bar_is_not_kid_friendly():
    features = legacy_search.kid_friendly_features(["bar"], 25)

    assert features.is_kid_friendly is False
    assert features.age_range == "18+"
    assert features.entertainment_options == ["Bar service"]
    assert features.special_accommodations == ["Full bar", "Catering available"]


def test_teen_features():
    features = legacy_search.kid_friendly_features(["movie_theater"], 15)

    assert features.age_range == "13-18"
    assert features.has_play_area is False
    assert features.entertainment_options == ["Movie screenings"]


def test_entertainment_options_default():
    assert legacy_search.entertainment_options(["store"], 8) == ["Various entertainment options"]
    assert legacy_search.entertainment_options(["restaurant"], 30) == ["Live music"]
    assert legacy_search.entertainment_options(["restaurant"], 8) == ["Various entertainment options"]


@pytest.mark.parametrize(
    "types,expected",
    [
        (["banquet_hall"], 200),
        (["restaurant"], 80),
        (["park"], 100),
        (["bowling_alley"], 50),
        (["movie_theater"], 40),
        (["bar"], 30),
    ],
)
def test_estimate_capacity(types, expected):
    assert legacy_search.estimate_capacity(types) == expected


def test_price_tables():
    assert legacy_search.format_price_range(1) == "$100-$300"
    assert legacy_search.format_price_range(0) == "$200-$500"
    assert legacy_search.estimate_cost(4) == 1800.0
    assert legacy_search.estimate_cost(None) == 400.0


def test_generate_description_without_rating():
    assert legacy_search.generate_description(None, ["bowling_alley"]) == (
        "Bowling Alley - Popular venue with great amenities for celebrations"
    )
    assert legacy_search.venue_type(["store"]) == "Entertainment Venue"
