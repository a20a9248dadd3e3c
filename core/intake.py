# =============================================================================
# core/intake.py  —  Interactive trip questionnaire
# =============================================================================
#
# Asks the traveler a fixed sequence of questions, one line each:
#
#   destination → start date → end date
#   [flight-aware: origin airport → destination airport → departure → return]
#   trip type → interests → budget → pace → extra notes
#
# Only two answers are validated:
#   - the destination must be at least MIN_DESTINATION_LENGTH characters;
#   - in the flight block, airports and the departure date must be non-empty.
# Invalid answers are simply asked again.  Everything else is accepted as
# typed, including empty strings.
#
# `ask` defaults to the built-in input() but any callable taking a prompt and
# returning a line works, which is how the tests drive this module.
# =============================================================================

from typing import Callable, Optional

from core.models import FlightQuery, TripRequest

Ask = Callable[[str], str]

MIN_DESTINATION_LENGTH = 4


def _ask_until(ask: Ask, prompt: str, is_valid: Callable[[str], bool]) -> str:
    """Re-ask `prompt`, without comment, until the answer passes `is_valid`."""
    answer = ask(prompt)
    while not is_valid(answer):
        answer = ask(prompt)
    return answer


def ask_destination(ask: Ask = input) -> str:
    return _ask_until(
        ask,
        "Enter your destination: ",
        lambda value: len(value) >= MIN_DESTINATION_LENGTH,
    )


def collect_flight_query(ask: Ask = input) -> FlightQuery:
    """The flight block of the flight-aware questionnaire."""
    def required(value: str) -> bool:
        return bool(value.strip())

    origin = _ask_until(ask, "Enter the origin airport code (e.g., SFO): ", required)
    destination = _ask_until(ask, "Enter the destination airport code (e.g., CDG): ", required)
    departure = _ask_until(ask, "Enter the departure date (YYYY-MM-DD): ", required)
    return_date = ask("Enter the return date (YYYY-MM-DD, blank for one-way): ")

    return FlightQuery(
        origin=origin.strip().upper(),
        destination=destination.strip().upper(),
        departure_date=departure.strip(),
        return_date=return_date.strip(),
    )


def collect_inputs(ask: Ask = input, with_flights: bool = False) -> tuple[TripRequest, Optional[FlightQuery]]:
    """Run the whole questionnaire.

    Args:
        ask: Line reader; receives the prompt text, returns the answer.
        with_flights: Also collect the flight block (before trip type).

    Returns:
        The TripRequest, and a FlightQuery when `with_flights` is set.
    """
    destination = ask_destination(ask)
    start_date = ask("Enter the start date (YYYY-MM-DD): ")
    end_date = ask("Enter the end date (YYYY-MM-DD): ")

    flight_query = collect_flight_query(ask) if with_flights else None

    request = TripRequest(
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        trip_type=ask("Enter the type of trip (e.g., business, leisure, adventure): "),
        interests=ask("Enter your interests (e.g., art, food, hiking): "),
        budget=ask("Enter your budget (e.g., budget, mid-range, luxury): "),
        pace=ask("Enter your travel pace (e.g., relaxed, medium, packed): "),
        extra_notes=ask("Enter any extra notes: "),
    )
    return request, flight_query


def collect_trip_request(ask: Ask = input) -> TripRequest:
    """The plain eight-question intake (no flight block)."""
    request, _ = collect_inputs(ask, with_flights=False)
    return request
