import json

import pytest

from partyscout.core.config import Settings
from partyscout.jobs import search_cli
from partyscout.models import PartySearchCriteria, PartySearchResult
from partyscout.vendors import google_places


def fake_result(request):
    return PartySearchResult(
        venues=[],
        search_criteria=PartySearchCriteria.from_request(request),
        party_type_suggestions=[],
    )


def test_build_parser_defaults():
    args = search_cli.build_parser().parse_args(["--age", "7", "--zip", "94105"])

    assert args.age == 7
    assert args.zip_code == "94105"
    assert args.party_types == []
    assert args.guest_count == 10
    assert args.setting == "any"
    assert args.max_distance_miles == 10


def test_main_prints_json(monkeypatch, capsys):
    captured = {}

    def fake_search(request, *, api_key=None, timeout=None):
        captured["request"] = request
        captured["api_key"] = api_key
        return fake_result(request)

    monkeypatch.setattr(search_cli, "get_settings", lambda: Settings(google_api_key="abc"))
    monkeypatch.setattr(search_cli, "search_party_venues", fake_search)

    search_cli.main(["--age", "7", "--zip", "94105", "--type", "active_play", "--type", "outdoor", "--guests", "15"])

    output = json.loads(capsys.readouterr().out)
    assert output["searchCriteria"]["partyTypes"] == ["active_play", "outdoor"]
    assert output["searchCriteria"]["guestCount"] == 15
    assert captured["api_key"] == "abc"
    assert captured["request"].zip_code == "94105"


def test_main_requires_api_key(monkeypatch):
    monkeypatch.setattr(search_cli, "get_settings", lambda: Settings(google_api_key=""))

    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--age", "7", "--zip", "94105"])

    assert excinfo.value.code == 2


def test_main_exits_on_provider_failure(monkeypatch):
    def failing_search(request, *, api_key=None, timeout=None):
        raise google_places.GeocodeError("Geocoding failed: ZERO_RESULTS")

    monkeypatch.setattr(search_cli, "get_settings", lambda: Settings(google_api_key="abc"))
    monkeypatch.setattr(search_cli, "search_party_venues", failing_search)

    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--age", "7", "--zip", "00000"])

    assert excinfo.value.code == 1


def test_main_rejects_non_positive_guests():
    with pytest.raises(SystemExit) as excinfo:
        search_cli.main(["--age", "7", "--zip", "94105", "--guests", "0"])

    assert excinfo.value.code == 2
