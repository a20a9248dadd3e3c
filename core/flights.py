# =============================================================================
# core/flights.py  —  Live flight lookup (SerpApi Google Flights engine)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues ONE flight-search request for the traveler's airports and dates and
#   hands the raw JSON payload back as text.  The model reads it as context;
#   we do not parse or rank the offers here.
#
# FAILURE CLASSES (never raised, always returned):
#   HTTP_STATUS    the server responded with an error status
#   NO_RESPONSE    the request went out but no response came back
#   REQUEST_SETUP  the request could not be constructed or sent
#   Each comes with a one-line description that goes into the prompt in place
#   of the flight data.
# =============================================================================

import json
import logging
from typing import Any, Optional

import requests

from core.models import EnrichmentFailure, EnrichmentResult, FlightQuery

logger = logging.getLogger(__name__)

SERPAPI_ENDPOINT = "https://serpapi.com/search.json"

# Google Flights engine codes
_TRIP_TYPE_ROUND = 1
_TRIP_TYPE_ONE_WAY = 2
_TRAVEL_CLASSES = {
    "economy": 1,
    "premium_economy": 2,
    "business": 3,
    "first": 4,
}


def build_flight_params(query: FlightQuery, api_key: str) -> dict[str, Any]:
    params = {
        "engine": "google_flights",
        "departure_id": query.origin,
        "arrival_id": query.destination,
        "outbound_date": query.departure_date,
        "type": _TRIP_TYPE_ROUND if query.is_round_trip else _TRIP_TYPE_ONE_WAY,
        "adults": query.adults,
        "travel_class": _TRAVEL_CLASSES.get(query.travel_class.lower(), 1),
        "currency": query.currency,
        "api_key": api_key,
    }
    if query.is_round_trip:
        params["return_date"] = query.return_date
    return params


def describe_failure(failure: EnrichmentFailure, exc: Exception) -> str:
    """One-line, prompt-ready explanation of a failed lookup."""
    if failure is EnrichmentFailure.HTTP_STATUS:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", "unknown")
        return f"Flight search failed: the server responded with status {status}."
    if failure is EnrichmentFailure.NO_RESPONSE:
        return "Flight search failed: the request was sent but no response was received."
    if failure is EnrichmentFailure.REQUEST_SETUP:
        return f"Flight search failed: the request could not be sent ({exc})."
    return f"Flight search failed unexpectedly ({type(exc).__name__}: {exc})."


def search_flights(
    query: FlightQuery,
    api_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
) -> EnrichmentResult:
    """Look up flights for `query`.

    Args:
        query: Airports, dates, passengers, cabin and currency.
        api_key: SerpApi key.  Without one the lookup is skipped.
        session: Optional requests session (tests pass a fake one).
        timeout: Per-request timeout in seconds.

    Returns:
        ``Ok(json_text)`` on success, otherwise ``Failed(kind, description)``.
    """
    if not api_key:
        logger.info("SERPAPI_API_KEY not set; skipping flight search.")
        return EnrichmentResult.failed(
            EnrichmentFailure.NOT_CONFIGURED,
            "Flight search skipped: no flight-data API key is configured.",
        )

    http = session or requests.Session()
    params = build_flight_params(query, api_key)
    logger.info(f"Searching flights {query.origin} → {query.destination} on {query.departure_date}")

    try:
        response = http.get(SERPAPI_ENDPOINT, params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.HTTPError as e:
        return _failed(EnrichmentFailure.HTTP_STATUS, e)
    except (requests.ConnectionError, requests.Timeout) as e:
        return _failed(EnrichmentFailure.NO_RESPONSE, e)
    except (requests.RequestException, ValueError) as e:
        # ValueError: the body was not JSON
        return _failed(EnrichmentFailure.REQUEST_SETUP, e)
    except Exception as e:
        return _failed(EnrichmentFailure.UNEXPECTED, e)
    finally:
        if session is None:
            http.close()

    return EnrichmentResult.ok(json.dumps(payload, ensure_ascii=False))


def _failed(failure: EnrichmentFailure, exc: Exception) -> EnrichmentResult:
    message = describe_failure(failure, exc)
    logger.warning(f"{message} ({type(exc).__name__})")
    return EnrichmentResult.failed(failure, message)
