# =============================================================================
# agent/prompt.py  —  The itinerary prompt and how it gets filled in
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds the fixed travel-assistant template and the functions that turn a
#   TripRequest (plus any live enrichment text) into the final prompt.
#
# RENDERING:
#   The template is a module constant that is never modified.  Rendering
#   returns a new string on every call and keeps no state between requests.
#
# PLACEHOLDER RULES:
#   - {{key}} is replaced by the value for `key`, at every occurrence.
#   - Values are inserted in ONE pass: a value that itself contains "{{...}}"
#     is not re-scanned, so rendering twice gives the same result as once.
#   - Keys with no placeholder are ignored.
#   - Placeholders with no value stay as literal text, unless strict=True.
#   - Nothing is escaped.
# =============================================================================

import re
from collections.abc import Mapping
from typing import Optional

from core.errors import PromptTemplateError
from core.models import EnrichmentBundle, TripRequest

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

ITINERARY_TEMPLATE = """
You are an intelligent travel assistant helping users plan personalized, optimized, and realistic daily travel itineraries. The user will provide their destination, travel dates, trip type, and preferences. Based on that, you will generate a full-day-by-day itinerary that includes:

- Top attractions (famous + hidden gems)
- Local restaurants (based on taste or diet)
- Events/festivals happening during that time (if any)
- Breaks, buffer time, and transit duration
- Local cultural tips or fun facts (1 per day)
- A packing tip or weather advice based on forecast
- respond in plain text only. Your entire response must be plain text, with no markdown formatting such as headers, bolding, or lists.

## User Info:
- Destination: {{destination}}
- Dates: {{start_date}} to {{end_date}}
- Type of Trip: {{trip_type}} (e.g., business, leisure, adventure, food tour, cultural, solo, couple, family)
- Interests: {{interests}} (e.g., art, food, architecture, nightlife, hiking, nature, relaxation, photography)
- Budget: {{budget}} (e.g., budget, mid-range, luxury)
- Travel pace: {{pace}} (e.g., relaxed, medium, packed)
- Extra Notes: {{extra_notes}}

## Instructions:
1. Divide the trip into clear Day 1, Day 2... sections.
2. Each day should include:
   - Morning activity
   - Lunch place (with cuisine suggestion)
   - Afternoon activity
   - Optional evening plan or rest idea
3. Mention entry fees, travel time, local customs briefly if relevant.
4. Try to maximize unique experiences, not just common tourist spots.
5. Include 1 line of travel wisdom or tip each day.

Your entire response must be in plain text. Do not use any markdown.
"""

ENRICHMENT_PREAMBLE = (
    "Use the following live information where it is relevant. "
    "It may be incomplete; do not invent details it does not contain."
)


def template_keys(template: str = ITINERARY_TEMPLATE) -> set[str]:
    """Names of every {{placeholder}} in the template."""
    return set(PLACEHOLDER_PATTERN.findall(template))


def render_template(template: str, values: Mapping[str, str], strict: bool = False) -> str:
    """Substitute {{key}} placeholders from `values`.

    Args:
        template: Text containing {{key}} placeholders.
        values: Key → replacement text.  Extra keys are ignored.
        strict: Raise PromptTemplateError instead of leaving unmatched
            placeholders in the output.

    Returns:
        A new string; `template` itself is never modified.
    """
    if strict:
        missing = sorted(template_keys(template) - set(values))
        if missing:
            raise PromptTemplateError(missing)

    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        if key in values:
            return str(values[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def format_prompt(request: TripRequest) -> str:
    """Fill the itinerary template with the traveler's answers."""
    return render_template(ITINERARY_TEMPLATE, request.as_template_values())


def compose_prompt(request: TripRequest, bundle: Optional[EnrichmentBundle] = None) -> str:
    """The full prompt: filled template followed by any live context."""
    prompt = format_prompt(request)
    context = bundle.render() if bundle is not None else ""
    if not context:
        return prompt
    return f"{prompt}\n{ENRICHMENT_PREAMBLE}\n\n{context}\n"
