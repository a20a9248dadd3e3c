# =============================================================================
# agent/__init__.py
# =============================================================================
# The language-model side of the planner.
#
#   prompt.py     the itinerary template and prompt composition
#   generator.py  backend selection (direct Gemini or LiteLLM auto-pick)
#                 and the single generation call, streamed or single-shot
#
# The model is asked exactly once per run.  It gets the traveler's answers
# plus whatever live context core/enrichment.py managed to find.
# =============================================================================
