"""HTTP entrypoint for the party venue search API."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from partyscout.core.config import get_settings
from partyscout.models import PartyRequest, to_json_dict
from partyscout.services import legacy_search, venue_search
from partyscout.vendors.google_places import GeocodeError, PlacesProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)

app = Flask(__name__)

_ZIP_PATTERN = re.compile(r"^\d{5}$")
_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
_SETTINGS = ("any", "indoor", "outdoor")
_CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


class ApiError(Exception):
    """An error answered with a JSON ``{error, message, details}`` body."""

    def __init__(self, status: int, error: str, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.error = error
        self.message = message
        self.details = details


def _error_response(status: int, error: str, message: str, details: Optional[str] = None) -> Any:
    return jsonify({"error": error, "message": message, "details": details}), status


# ---------- Request parsing ----------


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ApiError(400, "BAD_REQUEST", "Malformed or unreadable request body", "Expected a JSON object")
    return payload


def _validation_error(errors: List[str]) -> ApiError:
    return ApiError(400, "VALIDATION_ERROR", "Invalid request parameters", ", ".join(errors))


def _int_field(
    payload: Dict[str, Any],
    key: str,
    errors: List[str],
    *,
    required: bool = True,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        if required:
            errors.append(f"{key}: is required")
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{key}: must be an integer")
        return default
    if minimum is not None and value < minimum:
        errors.append(f"{key}: must be at least {minimum}")
    if maximum is not None and value > maximum:
        errors.append(f"{key}: must be at most {maximum}")
    return value


def _party_types_field(payload: Dict[str, Any], errors: List[str], *, required: bool) -> List[str]:
    value = payload.get("partyTypes")
    if value is None:
        value = []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        errors.append("partyTypes: must be a list of strings")
        return []
    if required and not value:
        errors.append("partyTypes: At least one party type is required")
    return value


def _parse_party_request(payload: Dict[str, Any]) -> PartyRequest:
    errors: List[str] = []

    age = _int_field(payload, "age", errors, minimum=1)
    party_types = _party_types_field(payload, errors, required=False)
    guest_count = _int_field(payload, "guestCount", errors, minimum=1)
    budget_min = _int_field(payload, "budgetMin", errors, required=False, minimum=0)
    budget_max = _int_field(payload, "budgetMax", errors, required=False, minimum=0)
    max_distance = _int_field(payload, "maxDistanceMiles", errors, required=False, default=10, minimum=1)

    zip_code = payload.get("zipCode")
    if not isinstance(zip_code, str) or not zip_code.strip():
        errors.append("zipCode: is required")

    setting = payload.get("setting") or "any"
    if setting not in _SETTINGS:
        errors.append(f"setting: must be one of {', '.join(_SETTINGS)}")

    date = payload.get("date")
    if date is not None and not isinstance(date, str):
        errors.append("date: must be an ISO date-time string")

    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        errors.append("budgetMin: must not exceed budgetMax")

    if errors:
        raise _validation_error(errors)

    return PartyRequest(
        age=age,
        party_types=party_types,
        guest_count=guest_count,
        zip_code=zip_code.strip(),
        budget_min=budget_min,
        budget_max=budget_max,
        setting=setting,
        max_distance_miles=max_distance,
        date=date,
    )


def _parse_simple_request(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate the ``{age, areaCode, time}`` body of the simple searches."""
    errors: List[str] = []
    age = _int_field(payload, "age", errors, minimum=1, maximum=150)

    area_code = payload.get("areaCode")
    if not isinstance(area_code, str) or not area_code.strip():
        errors.append("areaCode: Area code is required")
    elif not _ZIP_PATTERN.match(area_code):
        errors.append("areaCode: Area code must be a valid 5-digit US ZIP code")

    time_raw = payload.get("time")
    time_value = None
    if time_raw is None:
        errors.append("time: Time is required")
    else:
        try:
            time_value = datetime.strptime(str(time_raw), _TIME_FORMAT)
        except ValueError:
            errors.append("time: must match yyyy-MM-ddTHH:mm:ss")

    if errors:
        raise _validation_error(errors)

    return {"age": age, "areaCode": area_code, "time": time_value.strftime(_TIME_FORMAT)}


def _query_int(name: str, *, required: bool) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        if required:
            raise _validation_error([f"{name}: is required"])
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ApiError(
            400,
            "BAD_REQUEST",
            f"Invalid parameter type: '{raw}' for parameter '{name}'",
            str(exc),
        ) from exc


def _query_party_types() -> List[str]:
    values = request.args.getlist("partyTypes")
    party_types = [item.strip() for value in values for item in value.split(",") if item.strip()]
    if not party_types:
        raise _validation_error(["partyTypes: is required"])
    return party_types


# ---------- Routes ----------


@app.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok"}), 200


@app.post("/api/birthdays/search")
def search_birthday_venues() -> Any:
    params = _parse_simple_request(_json_body())
    logger.info("Received birthday venue search request: age=%s, areaCode=%s", params["age"], params["areaCode"])

    options = legacy_search.search_venues(params["age"], params["areaCode"])
    logger.info("Returning %d venue options", len(options))
    return jsonify(
        {
            "venueOptions": [to_json_dict(option) for option in options],
            "totalResults": len(options),
            "searchParameters": params,
        }
    )


@app.post("/api/v1/party-options")
def party_options() -> Any:
    params = _parse_simple_request(_json_body())
    logger.info("Received party options request: age=%s, areaCode=%s", params["age"], params["areaCode"])

    options = legacy_search.search_party_options(params["age"], params["areaCode"])
    logger.info("Returning %d party options", len(options))
    return jsonify(
        {
            "venueOptions": [to_json_dict(option) for option in options],
            "searchCriteria": params,
        }
    )


@app.post("/api/v2/party-wizard/search")
def party_wizard_search() -> Any:
    party_request = _parse_party_request(_json_body())
    result = venue_search.search_party_venues(party_request)
    return jsonify(to_json_dict(result))


@app.get("/api/v2/party-wizard/party-types/<age>")
def party_types_for_age(age: str) -> Any:
    try:
        age_value = int(age)
    except ValueError as exc:
        raise ApiError(400, "BAD_REQUEST", f"Invalid parameter type: '{age}' for parameter 'age'", str(exc)) from exc
    return jsonify([to_json_dict(suggestion) for suggestion in venue_search.party_types_for_age(age_value)])


@app.get("/api/v2/party-wizard/party-types")
def all_party_types() -> Any:
    return jsonify([to_json_dict(entry) for entry in venue_search.all_party_types()])


@app.post("/api/v2/party-wizard/estimate-budget")
def estimate_budget() -> Any:
    payload = _json_body()
    errors: List[str] = []
    party_types = _party_types_field(payload, errors, required=True)
    guest_count = _int_field(payload, "guestCount", errors, minimum=1)
    price_level = _int_field(payload, "priceLevel", errors, required=False)
    if errors:
        raise _validation_error(errors)

    estimate = venue_search.estimate_budget(party_types, guest_count, price_level)
    return jsonify(to_json_dict(estimate))


@app.get("/api/v2/party-wizard/party-details")
def party_details() -> Any:
    party_types = _query_party_types()
    guest_count = _query_int("guestCount", required=True)
    price_level = _query_int("priceLevel", required=False)
    return jsonify(to_json_dict(venue_search.party_details(party_types, guest_count, price_level)))


# ---------- Errors & CORS ----------


@app.errorhandler(ApiError)
def handle_api_error(exc: ApiError) -> Any:
    if exc.status >= 500:
        logger.error("%s: %s", exc.error, exc.details)
    else:
        logger.warning("%s: %s", exc.error, exc.details)
    return _error_response(exc.status, exc.error, exc.message, exc.details)


@app.errorhandler(GeocodeError)
def handle_geocode_error(exc: GeocodeError) -> Any:
    logger.warning("Geocoding failed: %s", exc)
    return _error_response(400, "GEOCODE_FAILED", "Could not resolve your location", str(exc))


@app.errorhandler(ProviderTimeoutError)
def handle_provider_timeout(exc: ProviderTimeoutError) -> Any:
    logger.error("Google Places timed out: %s", exc)
    return _error_response(504, "PLACES_TIMEOUT", "Google Places did not respond in time", str(exc))


@app.errorhandler(PlacesProviderError)
def handle_places_error(exc: PlacesProviderError) -> Any:
    logger.exception("Google Places API error")
    return _error_response(
        503,
        "GOOGLE_PLACES_ERROR",
        "Unable to fetch venue data from Google Places API",
        str(exc),
    )


@app.errorhandler(HTTPException)
def handle_http_exception(exc: HTTPException) -> Any:
    if exc.code == 404:
        return _error_response(404, "NOT_FOUND", "The requested resource was not found", exc.description)
    error = (exc.name or "error").upper().replace(" ", "_")
    return _error_response(exc.code or 500, error, exc.name or "HTTP error", exc.description)


@app.errorhandler(Exception)
def handle_unexpected_error(exc: Exception) -> Any:
    logger.exception("Unexpected error")
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def init_cors(flask_app: Flask, origins: Sequence[str]) -> Flask:
    """Allow the configured origins; a ``*`` entry opens the API to any origin without credentials."""
    if "*" in origins:
        CORS(flask_app, origins="*", send_wildcard=True, methods=_CORS_METHODS)
    else:
        CORS(flask_app, origins=list(origins), supports_credentials=True, methods=_CORS_METHODS)
    return flask_app


init_cors(app, get_settings().cors_allow_origins)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    port = int(os.getenv("PORT") or get_settings().port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
