# =============================================================================
# core/search.py  —  Live events & weather context via Tavily web search
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the destination and travel dates into a couple of natural-language
#   web searches ("events and festivals in ...", "weather forecast for ...")
#   and flattens the hits into plain text for the prompt.
#
# BEST EFFORT:
#   Nothing in here raises.  Every outcome, good or bad, comes back as an
#   EnrichmentResult.  A query that simply found nothing contributes a short
#   explanatory line; any other failure contributes nothing and is logged.
#
# QUERIES RUN ONE AT A TIME, in the order build_search_queries() returns.
# =============================================================================

import logging
from typing import Any, Optional

import requests
from tavily import TavilyClient
from tavily.errors import (
    BadRequestError,
    InvalidAPIKeyError,
    MissingAPIKeyError,
    UsageLimitExceededError,
)

from core.models import EnrichmentFailure, EnrichmentResult, TripRequest

logger = logging.getLogger(__name__)


def build_search_queries(request: TripRequest) -> list[str]:
    dates = f"from {request.start_date} to {request.end_date}"
    return [
        f"events and festivals in {request.destination} {dates}",
        f"weather forecast for {request.destination} {dates}",
    ]


def _classify(exc: Exception) -> EnrichmentFailure:
    if isinstance(exc, (MissingAPIKeyError, InvalidAPIKeyError)):
        return EnrichmentFailure.NOT_CONFIGURED
    if isinstance(exc, (BadRequestError, UsageLimitExceededError, requests.HTTPError)):
        return EnrichmentFailure.HTTP_STATUS
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return EnrichmentFailure.NO_RESPONSE
    if isinstance(exc, requests.RequestException):
        return EnrichmentFailure.REQUEST_SETUP
    return EnrichmentFailure.UNEXPECTED


def search_one(client: Any, query: str, max_results: int = 5) -> EnrichmentResult:
    """Run one search and join the result descriptions with newlines."""
    try:
        response = client.search(query=query, max_results=max_results, search_depth="basic")
        descriptions = [
            str(hit["content"]).strip()
            for hit in (response or {}).get("results", [])
            if hit.get("content")
        ]
    except Exception as e:
        failure = _classify(e)
        logger.warning(f"Search failed ({failure.value}) for query '{query}': {e}")
        return EnrichmentResult.failed(failure, f"Search failed for '{query}': {e}")

    if not descriptions:
        logger.info(f"No search results for query: {query}")
        return EnrichmentResult.failed(
            EnrichmentFailure.NO_RESULTS,
            f"No real-time information found for {query}.",
        )

    logger.info(f"Search returned {len(descriptions)} results for: {query[:50]}")
    return EnrichmentResult.ok("\n".join(descriptions))


def search_enrichment(
    request: TripRequest,
    client: Any = None,
    api_key: Optional[str] = None,
    max_results: int = 5,
) -> EnrichmentResult:
    """Search every query for `request` and concatenate the text blocks.

    Args:
        request: The traveler's answers (destination and dates are used).
        client: Anything with a Tavily-style ``search(query=..., ...)``
            method.  Built from `api_key` when omitted.
        api_key: Tavily key, used only when `client` is None.
        max_results: Hits requested per query.

    Returns:
        ``Ok(text)`` when anything usable came back (explanatory "nothing
        found" lines included), otherwise a ``Failed`` result with empty text.
    """
    if client is None:
        if not api_key:
            logger.info("TAVILY_API_KEY not set; skipping live search.")
            return EnrichmentResult.failed(EnrichmentFailure.NOT_CONFIGURED)
        try:
            client = TavilyClient(api_key=api_key)
        except Exception as e:
            logger.warning(f"Could not create the search client: {e}")
            return EnrichmentResult.failed(_classify(e))

    blocks = []
    last_failure = None
    for query in build_search_queries(request):
        result = search_one(client, query, max_results=max_results)
        if result.is_ok or result.failure is EnrichmentFailure.NO_RESULTS:
            blocks.append(result.as_text())
        else:
            last_failure = result.failure

    if not blocks:
        return EnrichmentResult.failed(last_failure or EnrichmentFailure.UNEXPECTED)
    return EnrichmentResult.ok("\n".join(blocks))
