# =============================================================================
# core/errors.py  —  Exceptions raised across the planner
# =============================================================================
#
# Only the generation stage and strict template rendering raise.  Enrichment
# never does: it returns an EnrichmentResult (see core/models.py) instead.
# =============================================================================

from typing import Optional


class ItineraryError(Exception):
    """Base class for every planner-level failure."""


class PromptTemplateError(ItineraryError):
    """Raised by strict rendering when placeholders have no value."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"No value for template placeholder(s): {', '.join(missing)}")


class GenerationError(ItineraryError):
    """The text-generation backend rejected the request or could not be reached."""

    def __init__(self, message: str, backend: Optional[str] = None):
        self.backend = backend
        super().__init__(message)


class ProviderUnavailableError(GenerationError):
    """No generation backend could be resolved from the environment."""

    def __init__(self, guidance: str):
        self.guidance = guidance
        super().__init__("No AI provider is configured.")
