# =============================================================================
# core/__init__.py
# =============================================================================
# Everything the planner does that is NOT talking to a language model:
# the data models, the questionnaire, the live lookups (web search, flights)
# and writing the result out.
#
# RULE: nothing in this package imports agent/.  The generation layer
# depends on core/, never the other way round.
# =============================================================================
