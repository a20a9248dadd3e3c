# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses describe every piece of information that flows through a
# run: what the traveler asked for, what the enrichment calls found, and what
# the model wrote back.
#
# LIFETIME:
#   Exactly one TripRequest is collected per process and it is frozen: nothing
#   downstream can change it.  At most one GeneratedItinerary is produced.
#   Nothing here is persisted; the only artifact of a run is the output file.
# =============================================================================

import enum
from dataclasses import asdict, dataclass, field
from typing import Optional


# -----------------------------------------------------------------------------
# TripRequest — the traveler's answers to the intake questions
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TripRequest:
    """The eight values the itinerary prompt is built from.

    Dates are free text ("2025-09-01" is expected but never checked); the
    model copes with whatever the user typed.
    """

    destination: str                   # At least 4 characters (enforced by intake)
    start_date: str
    end_date: str
    trip_type: str                     # business, leisure, adventure, ...
    interests: str                     # art, food, hiking, ...
    budget: str                        # budget, mid-range, luxury
    pace: str                          # relaxed, medium, packed
    extra_notes: str = ""

    def as_template_values(self) -> dict[str, str]:
        """Field name → text, the mapping the prompt template consumes."""
        return {key: str(value) for key, value in asdict(self).items()}


# -----------------------------------------------------------------------------
# FlightQuery — extra answers collected by the flight-aware intake
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class FlightQuery:
    """One flight lookup.  An empty return_date means a one-way search."""

    origin: str                        # Airport identifier, e.g. "SFO"
    destination: str                   # Airport identifier, e.g. "CDG"
    departure_date: str
    return_date: str = ""
    adults: int = 1
    travel_class: str = "economy"
    currency: str = "USD"

    @property
    def is_round_trip(self) -> bool:
        return bool(self.return_date)


# -----------------------------------------------------------------------------
# EnrichmentResult — tagged outcome of a best-effort lookup
# -----------------------------------------------------------------------------
# Callers branch on `failure` (an enum), never on the wording of an error
# message.  Whatever happened, as_text() hands back a string that can be
# dropped straight into the prompt.
# -----------------------------------------------------------------------------
class EnrichmentFailure(enum.Enum):
    NO_RESULTS = "no_results"          # The service answered, but found nothing
    NOT_CONFIGURED = "not_configured"  # No API key: the lookup was skipped
    HTTP_STATUS = "http_status"        # Server responded with an error status
    NO_RESPONSE = "no_response"        # Request sent, no response received
    REQUEST_SETUP = "request_setup"    # Request could not be built or sent
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class EnrichmentResult:
    text: str = ""
    failure: Optional[EnrichmentFailure] = None
    message: str = ""

    @classmethod
    def ok(cls, text: str) -> "EnrichmentResult":
        return cls(text=text)

    @classmethod
    def failed(cls, failure: EnrichmentFailure, message: str = "") -> "EnrichmentResult":
        return cls(failure=failure, message=message)

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    def as_text(self) -> str:
        """The prompt-ready text: the payload on success, else the message."""
        return self.text if self.is_ok else self.message


# -----------------------------------------------------------------------------
# EnrichmentBundle — the labelled context blocks appended to the prompt
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class EnrichmentSection:
    label: str                         # "Real-time Information", "Flight Information"
    result: EnrichmentResult


@dataclass
class EnrichmentBundle:
    """Sections in the order they were gathered.

    Built incrementally during one run.  render() keeps insertion order, so
    events/weather always come before flights.
    """

    sections: list[EnrichmentSection] = field(default_factory=list)

    def add(self, label: str, result: EnrichmentResult) -> None:
        self.sections.append(EnrichmentSection(label=label, result=result))

    def render(self) -> str:
        blocks = []
        for section in self.sections:
            text = section.result.as_text().strip()
            if text:
                blocks.append(f"## {section.label}:\n{text}")
        return "\n\n".join(blocks)


# -----------------------------------------------------------------------------
# GeneratedItinerary — the model's plain-text answer
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GeneratedItinerary:
    text: str
    fragments: tuple[str, ...] = ()    # Stream pieces in arrival order (empty if single-shot)
    backend: str = ""                  # e.g. "gemini:gemini-2.5-flash"
