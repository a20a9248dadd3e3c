# =============================================================================
# main.py  —  Entry Point for the Itinerary Planner
# =============================================================================
#
# HOW TO RUN:
#   python main.py                 # plain questionnaire, streamed output
#   python main.py --flights       # also ask for airports and look up flights
#   python main.py --no-search     # skip the live events/weather search
#   python main.py --no-stream     # wait for the whole itinerary at once
#
# WHAT HAPPENS (strictly one step after another):
#   1. Ask the traveler the trip questions               (core/intake.py)
#   2. Look up live events, weather and flights          (core/enrichment.py)
#   3. Fill the itinerary prompt and append the context  (agent/prompt.py)
#   4. Pick ONE text-generation backend and generate     (agent/generator.py)
#   5. Print the itinerary and overwrite output.txt      (core/output.py)
#
# EXIT CODES:
#   0    itinerary written
#   1    no provider configured, generation failed, or unexpected error
#   130  interrupted (Ctrl-C, or end of input during the questionnaire)
# =============================================================================

import argparse
import dataclasses
import logging
import os
import sys
from typing import Callable, Optional

from dotenv import load_dotenv

# Load .env before anything reads the environment (config, litellm, SDKs)
load_dotenv()

from agent.generator import GenerationMode, generate_itinerary, resolve_backend
from agent.prompt import compose_prompt
from config import Settings
from core.enrichment import gather_enrichment
from core.errors import GenerationError, ProviderUnavailableError
from core.intake import collect_inputs
from core.output import deliver, echo_fragment

logger = logging.getLogger("planner")


def configure_logging(verbose: bool = False) -> None:
    """Log to STDERR; STDOUT is reserved for prompts and the itinerary."""
    requested = os.environ.get("LOG_LEVEL", "").strip().upper() or "WARNING"
    level = logging.getLevelName(requested)
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.WARNING
    if verbose:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [planner] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    if unknown:
        logger.warning(f"Unknown LOG_LEVEL={requested!r}, using WARNING")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a day-by-day travel itinerary.")
    parser.add_argument("--flights", action="store_true", default=None,
                        help="ask for airports and include a live flight lookup")
    parser.add_argument("--no-search", dest="web_search", action="store_false", default=None,
                        help="skip the live events/weather web search")
    parser.add_argument("--no-stream", dest="stream", action="store_false", default=None,
                        help="request the whole itinerary in one response")
    parser.add_argument("--output", help="output file (default: output.txt)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return parser.parse_args(argv)


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Flags given on the command line win over the environment."""
    overrides = {}
    if args.flights is not None:
        overrides["flight_search"] = args.flights
    if args.web_search is not None:
        overrides["web_search"] = args.web_search
    if args.stream is not None:
        overrides["stream"] = args.stream
    if args.output:
        overrides["output_path"] = args.output
    return dataclasses.replace(settings, **overrides)


def run(argv: Optional[list[str]] = None, ask: Callable[[str], str] = input) -> int:
    """One complete planner run.  Returns the process exit code."""
    args = parse_args(argv)
    try:
        configure_logging(args.verbose)
        settings = apply_cli_overrides(Settings.from_env(), args)
    except Exception:
        logger.exception("Could not load settings")
        return 1

    print("=" * 70)
    print("  AI TRAVEL ITINERARY PLANNER")
    print("=" * 70)

    try:
        request, flight_query = collect_inputs(ask, with_flights=settings.flight_search)
    except (EOFError, KeyboardInterrupt):
        print("\n\n👋 Goodbye!")
        return 130

    try:
        bundle = gather_enrichment(request, settings, flight_query=flight_query)
        prompt = compose_prompt(request, bundle)

        backend = resolve_backend(settings)
        mode = GenerationMode.STREAM if settings.stream else GenerationMode.COMPLETE
        print(f"\n🤖 Generating your itinerary with {backend.name}...\n")
        print("-" * 70)

        itinerary = generate_itinerary(prompt, backend, mode=mode, on_fragment=echo_fragment)
        deliver(itinerary, settings.output_path, echoed=mode is GenerationMode.STREAM)
        return 0

    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        return 130
    except ProviderUnavailableError as e:
        print(f"\n⚠️  {e.guidance}")
        return 1
    except GenerationError as e:
        print(f"\n❌ Could not generate the itinerary: {e}")
        return 1
    except Exception:
        logger.exception("Itinerary run failed")
        return 1


def main() -> None:
    sys.exit(run())


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
