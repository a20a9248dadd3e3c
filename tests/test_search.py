import pytest
import requests
from tavily.errors import InvalidAPIKeyError

from core.models import EnrichmentFailure
from core.search import build_search_queries, search_enrichment, search_one


class FakeSearchClient:
    """Tavily-shaped client; `replies` maps a query prefix to a dict or exception."""

    def __init__(self, replies):
        self.replies = replies
        self.queries = []

    def search(self, query, **kwargs):
        self.queries.append(query)
        for prefix, reply in self.replies.items():
            if query.startswith(prefix):
                if isinstance(reply, Exception):
                    raise reply
                return reply
        return {"results": []}


def _hits(*contents):
    return {"results": [{"title": f"t{i}", "url": "https://x", "content": c} for i, c in enumerate(contents)]}


def test_queries_mention_destination_and_dates(paris_request):
    events, weather = build_search_queries(paris_request)

    assert events.startswith("events and festivals in Paris")
    assert weather.startswith("weather forecast for Paris")
    for query in (events, weather):
        assert "2025-09-01" in query and "2025-09-03" in query


def test_descriptions_are_joined_per_query_and_across_queries(paris_request):
    client = FakeSearchClient({
        "events": _hits("Jazz festival", "Night market"),
        "weather": _hits("Sunny, 24C"),
    })

    result = search_enrichment(paris_request, client=client)

    assert result.is_ok
    assert result.as_text() == "Jazz festival\nNight market\nSunny, 24C"
    assert client.queries == build_search_queries(paris_request)


def test_query_without_results_contributes_an_explanation(paris_request):
    client = FakeSearchClient({"weather": _hits("Rain expected")})

    result = search_enrichment(paris_request, client=client)

    assert result.is_ok
    lines = result.as_text().splitlines()
    assert lines[0].startswith("No real-time information found for events and festivals in Paris")
    assert lines[1] == "Rain expected"


def test_search_one_reports_no_results():
    result = search_one(FakeSearchClient({}), "events in Nowhere")

    assert result.failure is EnrichmentFailure.NO_RESULTS
    assert "Nowhere" in result.as_text()


@pytest.mark.parametrize("error, expected", [
    (requests.ConnectionError("down"), EnrichmentFailure.NO_RESPONSE),
    (requests.Timeout("slow"), EnrichmentFailure.NO_RESPONSE),
    (InvalidAPIKeyError("bad key"), EnrichmentFailure.NOT_CONFIGURED),
    (RuntimeError("boom"), EnrichmentFailure.UNEXPECTED),
])
def test_search_one_classifies_errors_by_type(error, expected):
    result = search_one(FakeSearchClient({"q": error}), "q")

    assert result.failure is expected
    assert isinstance(result.as_text(), str)


def test_failing_queries_never_raise(paris_request):
    client = FakeSearchClient({"events": RuntimeError("boom"), "weather": requests.ConnectionError()})

    result = search_enrichment(paris_request, client=client)

    assert not result.is_ok
    assert result.as_text() == ""


def test_failed_query_is_dropped_but_others_kept(paris_request):
    client = FakeSearchClient({"events": RuntimeError("boom"), "weather": _hits("Windy")})

    result = search_enrichment(paris_request, client=client)

    assert result.as_text() == "Windy"


def test_malformed_response_is_contained():
    client = FakeSearchClient({"q": {"results": [None]}})

    result = search_one(client, "q")

    assert result.failure is EnrichmentFailure.UNEXPECTED


def test_missing_key_skips_search(paris_request):
    result = search_enrichment(paris_request, client=None, api_key=None)

    assert result.failure is EnrichmentFailure.NOT_CONFIGURED
    assert result.as_text() == ""
