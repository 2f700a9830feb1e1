"""
Query resolution layer.

Turns a free-text query into an FAQ answer, a navigation target or
NOT_FOUND, trying cheap deterministic strategies before the model.

Key components:
- FAQMatcher / NavigationMatcher: weighted keyword scoring
- ModelFallbackResolver: model-backed navigation fallback with validation
- ResolutionResult: tagged result consumed by the API
"""
from .match_candidate import MatchCandidate, select_best, outscores
from .keyword_matcher import KeywordMatcher, normalize
from .faq_matcher import FAQMatcher
from .navigation_matcher import NavigationMatcher, fuzzy_word_match
from .model_client import ModelClient, ModelReply, ChatModelClient
from .fallback_resolver import ModelFallbackResolver, FallbackResult, NOT_FOUND
from .resolution_result import ResolutionResult, ResolutionType, KEYWORD_STRATEGY

__all__ = [
    "MatchCandidate",
    "select_best",
    "outscores",
    "KeywordMatcher",
    "normalize",
    "FAQMatcher",
    "NavigationMatcher",
    "fuzzy_word_match",
    "ModelClient",
    "ModelReply",
    "ChatModelClient",
    "ModelFallbackResolver",
    "FallbackResult",
    "NOT_FOUND",
    "ResolutionResult",
    "ResolutionType",
    "KEYWORD_STRATEGY",
]
