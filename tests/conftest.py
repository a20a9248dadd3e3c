import pytest

from core.models import FlightQuery, TripRequest

PLANNER_ENV_VARS = [
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "LLM_MODEL",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "MISTRAL_API_KEY",
    "GROQ_API_KEY",
    "OPENROUTER_API_KEY",
    "TAVILY_API_KEY",
    "SERPAPI_API_KEY",
    "ITINERARY_OUTPUT",
    "ITINERARY_STREAM",
    "ITINERARY_WEB_SEARCH",
    "ITINERARY_FLIGHTS",
    "GENERATION_TIMEOUT",
    "SEARCH_MAX_RESULTS",
    "LOG_LEVEL",
]


class ScriptedInput:
    """Stands in for input(): returns canned answers, records the prompts."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class FakeBackend:
    def __init__(self, fragments=(), text="", error=None):
        self.name = "fake:model"
        self.fragments = list(fragments)
        self.text = text
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text

    def stream(self, prompt):
        self.prompts.append(prompt)
        for fragment in self.fragments:
            yield fragment
        if self.error:
            raise self.error


@pytest.fixture
def clean_env(monkeypatch):
    for name in PLANNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def paris_request():
    return TripRequest(
        destination="Paris",
        start_date="2025-09-01",
        end_date="2025-09-03",
        trip_type="leisure",
        interests="art",
        budget="mid-range",
        pace="relaxed",
        extra_notes="",
    )


@pytest.fixture
def flight_query():
    return FlightQuery(
        origin="SFO",
        destination="CDG",
        departure_date="2025-09-01",
        return_date="2025-09-03",
    )
