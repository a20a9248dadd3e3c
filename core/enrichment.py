# =============================================================================
# core/enrichment.py  —  Gather live context before generation
# =============================================================================
#
# Runs the optional lookups one after the other and files their text under a
# fixed label.  Order is fixed (web search first, then flights) so the
# composed prompt is reproducible for the same inputs.
# =============================================================================

import logging
from typing import Any, Optional

from config import Settings
from core.flights import search_flights
from core.models import EnrichmentBundle, FlightQuery, TripRequest
from core.search import search_enrichment

logger = logging.getLogger(__name__)

REALTIME_LABEL = "Real-time Information"
FLIGHTS_LABEL = "Flight Information"


def gather_enrichment(
    request: TripRequest,
    settings: Settings,
    flight_query: Optional[FlightQuery] = None,
    search_client: Any = None,
    flight_session: Any = None,
) -> EnrichmentBundle:
    """Collect every enabled lookup into an EnrichmentBundle.

    Lookups that are disabled or have no key still leave a (possibly empty)
    section behind; the bundle drops empty text when rendered.
    """
    bundle = EnrichmentBundle()

    if settings.web_search:
        print("🔎 Searching for events and weather...")
        result = search_enrichment(
            request,
            client=search_client,
            api_key=settings.tavily_api_key,
            max_results=settings.search_max_results,
        )
        bundle.add(REALTIME_LABEL, result)

    if flight_query is not None:
        print("✈️  Searching for flights...")
        result = search_flights(
            flight_query,
            api_key=settings.serpapi_api_key,
            session=flight_session,
        )
        bundle.add(FLIGHTS_LABEL, result)

    logger.info(f"Enrichment gathered: {[s.label for s in bundle.sections if s.result.is_ok]} succeeded")
    return bundle
