import pytest

from agent.prompt import (
    ITINERARY_TEMPLATE,
    compose_prompt,
    format_prompt,
    render_template,
    template_keys,
)
from core.errors import PromptTemplateError
from core.models import EnrichmentBundle, EnrichmentFailure, EnrichmentResult


def test_paris_prompt_contains_every_answer(paris_request):
    prompt = format_prompt(paris_request)

    for value in ("Paris", "2025-09-01", "2025-09-03", "leisure", "art", "mid-range", "relaxed"):
        assert value in prompt
    assert "{{destination}}" not in prompt
    assert "{{" not in prompt


def test_template_covers_every_request_field(paris_request):
    assert template_keys(ITINERARY_TEMPLATE) == set(paris_request.as_template_values())


def test_template_keeps_its_exact_instructions():
    assert "you will generate a full-day-by-day itinerary that includes:" in ITINERARY_TEMPLATE
    assert "\n- respond in plain text only. Your entire response must be plain text," in ITINERARY_TEMPLATE


def test_rendering_twice_matches_rendering_once(paris_request):
    values = paris_request.as_template_values()
    once = render_template(ITINERARY_TEMPLATE, values)
    twice = render_template(once, values)
    assert once == twice


def test_every_occurrence_is_replaced():
    assert render_template("{{x}}-{{x}}-{{y}}", {"x": "a", "y": "b"}) == "a-a-b"


def test_replacement_text_is_not_rescanned():
    result = render_template("{{a}} {{b}}", {"a": "{{b}}", "b": "x"})
    assert result == "{{b}} x"


def test_extra_values_are_ignored():
    assert render_template("Hi {{name}}", {"name": "Ana", "unused": "zzz"}) == "Hi Ana"


def test_missing_value_leaves_placeholder():
    assert render_template("Go to {{destination}} on {{start_date}}", {"destination": "Rome"}) == (
        "Go to Rome on {{start_date}}"
    )


def test_strict_rendering_fails_fast_on_missing_values():
    with pytest.raises(PromptTemplateError) as excinfo:
        render_template("{{a}} {{b}} {{c}}", {"a": "1"}, strict=True)
    assert excinfo.value.missing == ["b", "c"]


def test_no_escaping_is_applied():
    assert render_template("{{v}}", {"v": "<b>&\"'</b>"}) == "<b>&\"'</b>"


def test_compose_without_context_is_the_plain_prompt(paris_request):
    assert compose_prompt(paris_request) == format_prompt(paris_request)
    assert compose_prompt(paris_request, EnrichmentBundle()) == format_prompt(paris_request)


def test_compose_appends_sections_in_order(paris_request):
    bundle = EnrichmentBundle()
    bundle.add("Real-time Information", EnrichmentResult.ok("Jazz festival on Saturday"))
    bundle.add("Flight Information", EnrichmentResult.failed(
        EnrichmentFailure.NO_RESPONSE, "Flight search failed: no response."))

    prompt = compose_prompt(paris_request, bundle)

    assert prompt.startswith(format_prompt(paris_request))
    realtime = prompt.index("## Real-time Information:")
    flights = prompt.index("## Flight Information:")
    assert realtime < flights
    assert "Jazz festival on Saturday" in prompt
    assert "Flight search failed: no response." in prompt


def test_compose_skips_sections_without_text(paris_request):
    bundle = EnrichmentBundle()
    bundle.add("Real-time Information", EnrichmentResult.failed(EnrichmentFailure.NOT_CONFIGURED))

    assert compose_prompt(paris_request, bundle) == format_prompt(paris_request)
