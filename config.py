# =============================================================================
# config.py  —  Runtime settings for the itinerary planner
# =============================================================================
#
# Every knob is read from the environment (a .env file is loaded by main.py
# before this runs).  Nothing secret is hard-coded.
#
# PRESENCE MATTERS:
#   The API keys below are all optional.  Which ones are set decides what the
#   run does:
#     - GEMINI_API_KEY / GOOGLE_API_KEY  → direct Gemini streaming backend
#     - otherwise                        → LiteLLM picks whichever provider
#                                          has its key in the environment
#     - TAVILY_API_KEY                   → live events/weather search
#     - SERPAPI_API_KEY                  → live flight lookup
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_OUTPUT_PATH = "output.txt"
DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_SEARCH_MAX_RESULTS = 5


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_str(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _env_number(name: str, default, cast):
    """Read a numeric setting; blank or malformed values fall back to `default`."""
    value = _env_str(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not a valid {cast.__name__}, using {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Everything a single run needs to know about its environment."""

    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    llm_model: Optional[str] = None            # explicit LiteLLM model override
    tavily_api_key: Optional[str] = None
    serpapi_api_key: Optional[str] = None

    generation_timeout: float = DEFAULT_TIMEOUT_SECONDS
    search_max_results: int = DEFAULT_SEARCH_MAX_RESULTS
    output_path: str = DEFAULT_OUTPUT_PATH

    stream: bool = True                        # False → single-shot completion
    web_search: bool = True
    flight_search: bool = False                # flight-aware intake + lookup

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=_env_str("GEMINI_API_KEY") or _env_str("GOOGLE_API_KEY"),
            gemini_model=_env_str("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            llm_model=_env_str("LLM_MODEL"),
            tavily_api_key=_env_str("TAVILY_API_KEY"),
            serpapi_api_key=_env_str("SERPAPI_API_KEY"),
            generation_timeout=_env_number("GENERATION_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float),
            search_max_results=_env_number("SEARCH_MAX_RESULTS", DEFAULT_SEARCH_MAX_RESULTS, int),
            output_path=_env_str("ITINERARY_OUTPUT") or DEFAULT_OUTPUT_PATH,
            stream=_env_flag("ITINERARY_STREAM", True),
            web_search=_env_flag("ITINERARY_WEB_SEARCH", True),
            flight_search=_env_flag("ITINERARY_FLIGHTS", False),
        )
