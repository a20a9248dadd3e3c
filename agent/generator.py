# =============================================================================
# agent/generator.py  —  Text-generation backends and the generation step
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Picks ONE backend for the run and asks it for the itinerary, either as a
#   single completed text or as a live stream of fragments.
#
# BACKEND SELECTION (first match wins, attempted once):
#
#   1. GEMINI_API_KEY / GOOGLE_API_KEY set
#        → GeminiBackend: direct google-genai client, fixed model id.
#
#   2. Otherwise
#        → LiteLLM is asked which candidate model has its credentials in the
#          environment (LLM_MODEL first, then the defaults below) and that
#          model is used through litellm.completion().
#
#   3. Nothing found
#        → ProviderUnavailableError carrying setup guidance.  The caller
#          prints it and stops without touching the output file.
#
# ONE INTERFACE, TWO VARIANTS:
#   Every backend offers
#     complete(prompt) -> str             single-shot
#     stream(prompt)   -> Iterator[str]   lazy, finite, not restartable
#   GenerationMode (from configuration) decides which one is used; there is
#   only one call site, generate_itinerary().
#
# ERRORS:
#   Anything the provider SDK raises is re-raised as GenerationError with a
#   readable message.  Credential problems get a hint naming the variable to
#   check.  There is no retry.
# =============================================================================

import enum
import logging
from collections.abc import Iterator
from typing import Any, Callable, Optional, Protocol

import litellm
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from config import DEFAULT_GEMINI_MODEL, DEFAULT_TIMEOUT_SECONDS, Settings
from core.errors import GenerationError, ProviderUnavailableError
from core.models import GeneratedItinerary

logger = logging.getLogger(__name__)

# Keep litellm from printing its own banners into the itinerary output
litellm.suppress_debug_info = True
litellm.drop_params = True


class GenerationMode(enum.Enum):
    COMPLETE = "complete"
    STREAM = "stream"


class TextBackend(Protocol):
    name: str

    def complete(self, prompt: str) -> str: ...

    def stream(self, prompt: str) -> Iterator[str]: ...


# =============================================================================
# Strategy 1: direct Gemini API
# =============================================================================
class GeminiBackend:
    """google-genai client bound to one model."""

    _CREDENTIAL_STATUS = {400, 401, 403}

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Any = None,
    ):
        self.model = model
        self.name = f"gemini:{model}"
        if client is None:
            # HttpOptions.timeout is in milliseconds
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )
        self._client = client

    def complete(self, prompt: str) -> str:
        try:
            response = self._client.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            raise self._wrap(e) from e
        return response.text or ""

    def stream(self, prompt: str) -> Iterator[str]:
        try:
            for chunk in self._client.models.generate_content_stream(model=self.model, contents=prompt):
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise self._wrap(e) from e

    def _wrap(self, exc: Exception) -> GenerationError:
        if isinstance(exc, genai_errors.ClientError) and exc.code in self._CREDENTIAL_STATUS:
            return GenerationError(
                f"Gemini rejected the request ({exc.code}): {exc.message}. "
                "Check that GEMINI_API_KEY is set to a valid key.",
                backend=self.name,
            )
        return GenerationError(f"Gemini request failed: {exc}", backend=self.name)


# =============================================================================
# Strategy 2: whichever provider LiteLLM finds credentials for
# =============================================================================
class LiteLLMBackend:
    """litellm.completion() bound to one model string ("provider/model")."""

    def __init__(
        self,
        model: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        completion: Optional[Callable[..., Any]] = None,
    ):
        self.model = model
        self.name = f"litellm:{model}"
        self.timeout = timeout
        self._completion = completion or litellm.completion

    def _call(self, prompt: str, stream: bool) -> Any:
        return self._completion(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            timeout=self.timeout,
            stream=stream,
        )

    def complete(self, prompt: str) -> str:
        try:
            response = self._call(prompt, stream=False)
            return response.choices[0].message.content or ""
        except Exception as e:
            raise self._wrap(e) from e

    def stream(self, prompt: str) -> Iterator[str]:
        try:
            for chunk in self._call(prompt, stream=True):
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except Exception as e:
            raise self._wrap(e) from e

    def _wrap(self, exc: Exception) -> GenerationError:
        if isinstance(exc, litellm.AuthenticationError):
            return GenerationError(
                f"{self.model} rejected the API key: {exc}. "
                "Check the provider key in your environment.",
                backend=self.name,
            )
        return GenerationError(f"{self.model} request failed: {exc}", backend=self.name)


# (model string, environment variable it needs), tried in order
PROVIDER_CANDIDATES: list[tuple[str, str]] = [
    ("gpt-4o-mini", "OPENAI_API_KEY"),
    ("anthropic/claude-3-5-haiku-latest", "ANTHROPIC_API_KEY"),
    ("mistral/mistral-small-latest", "MISTRAL_API_KEY"),
    ("groq/llama-3.3-70b-versatile", "GROQ_API_KEY"),
    ("openrouter/openai/gpt-4o", "OPENROUTER_API_KEY"),
]


def setup_guidance() -> str:
    """What to tell the user when no backend can be found."""
    lines = [
        "No AI provider is configured, so no itinerary was generated.",
        "Set ONE of the following environment variables (or add it to a .env file):",
        "  GEMINI_API_KEY      Google AI Studio key (used directly, streaming)",
    ]
    for model, env_var in PROVIDER_CANDIDATES:
        lines.append(f"  {env_var:<19} enables {model}")
    lines.append("Optionally set LLM_MODEL to any LiteLLM model string to choose the model yourself.")
    return "\n".join(lines)


def resolve_best_provider(
    settings: Settings,
    validate: Optional[Callable[..., dict]] = None,
) -> LiteLLMBackend:
    """Return a LiteLLMBackend for the first model whose keys are present.

    Args:
        settings: Run settings (LLM_MODEL override and timeout are used).
        validate: Environment checker with litellm.validate_environment's
            signature; defaults to that function.

    Raises:
        ProviderUnavailableError: No candidate has credentials configured.
    """
    validate = validate or litellm.validate_environment
    candidates = [settings.llm_model] if settings.llm_model else []
    candidates += [model for model, _ in PROVIDER_CANDIDATES]

    for model in candidates:
        try:
            check = validate(model=model)
        except Exception as e:
            logger.info(f"Skipping {model}: {e}")
            continue
        if check.get("keys_in_environment"):
            logger.info(f"Auto-selected provider model: {model}")
            return LiteLLMBackend(model, timeout=settings.generation_timeout)
        logger.debug(f"{model} missing keys: {check.get('missing_keys')}")

    raise ProviderUnavailableError(setup_guidance())


def resolve_backend(
    settings: Settings,
    validate: Optional[Callable[..., dict]] = None,
) -> TextBackend:
    """Direct Gemini when its key is set, otherwise LiteLLM auto-selection."""
    if settings.gemini_api_key:
        logger.info(f"Using direct Gemini backend ({settings.gemini_model})")
        return GeminiBackend(
            settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.generation_timeout,
        )
    return resolve_best_provider(settings, validate=validate)


def generate_itinerary(
    prompt: str,
    backend: TextBackend,
    mode: GenerationMode = GenerationMode.STREAM,
    on_fragment: Optional[Callable[[str], None]] = None,
) -> GeneratedItinerary:
    """Ask `backend` for the itinerary.

    In STREAM mode each fragment is appended in arrival order and passed to
    `on_fragment` as soon as it arrives.  In COMPLETE mode `on_fragment` is
    not called.

    Raises:
        GenerationError: The backend failed, or produced no text at all.
    """
    logger.info(f"Generating with {backend.name} ({mode.value})")

    if mode is GenerationMode.COMPLETE:
        text = backend.complete(prompt)
        fragments: tuple[str, ...] = ()
    else:
        collected = []
        for fragment in backend.stream(prompt):
            collected.append(fragment)
            if on_fragment is not None:
                on_fragment(fragment)
        text = "".join(collected)
        fragments = tuple(collected)

    if not text:
        raise GenerationError("The model returned an empty response.", backend=backend.name)
    return GeneratedItinerary(text=text, fragments=fragments, backend=backend.name)
