"""
Resolution orchestrator: FAQ → navigation keywords → model fallback.

The sole entry point callers use to resolve a query.
"""
import logging
from typing import Optional

from ..resolution.fallback_resolver import FallbackResult, ModelFallbackResolver
from ..resolution.faq_matcher import FAQMatcher
from ..resolution.match_candidate import MatchCandidate
from ..resolution.navigation_matcher import NavigationMatcher
from ..resolution.resolution_result import (
    KEYWORD_STRATEGY,
    NO_MODEL,
    ResolutionResult,
    ResolutionType,
)

logger = logging.getLogger(__name__)


class ResolutionOrchestrator:
    """
    Runs the resolvers in fixed precedence and normalizes their results.

    The two keyword tiers are pure; identical queries always get the same
    keyword result without touching the model. Only queries both tiers
    reject reach the fallback.
    """

    def __init__(
        self,
        faq_matcher: FAQMatcher,
        navigation_matcher: NavigationMatcher,
        fallback: Optional[ModelFallbackResolver] = None,
    ):
        """
        :param faq_matcher: First tier
        :param navigation_matcher: Second tier
        :param fallback: Model tier; None disables it (keyword misses become NOT_FOUND)
        """
        self._faq_matcher = faq_matcher
        self._navigation_matcher = navigation_matcher
        self._fallback = fallback

    def detect(self, query: str) -> ResolutionResult:
        """
        Resolve a query.

        :param query: Trimmed, validated user query
        :return: ResolutionResult (never raises for model failures)
        """
        logger.info(f'Processing query: "{query}"')

        result = self._match_keywords(query)
        if result is not None:
            return result

        if self._fallback is None:
            logger.info("No keyword match and fallback disabled")
            return ResolutionResult(type=ResolutionType.NOT_FOUND)

        logger.info("No keyword match, trying model fallback")
        return self._from_fallback(self._fallback.resolve(query))

    async def adetect(self, query: str) -> ResolutionResult:
        """Async twin of detect(); the fallback call is the only await."""
        logger.info(f'Processing query: "{query}"')

        result = self._match_keywords(query)
        if result is not None:
            return result

        if self._fallback is None:
            logger.info("No keyword match and fallback disabled")
            return ResolutionResult(type=ResolutionType.NOT_FOUND)

        logger.info("No keyword match, trying model fallback")
        return self._from_fallback(await self._fallback.aresolve(query))

    def _match_keywords(self, query: str) -> Optional[ResolutionResult]:
        faq = self._faq_matcher.match(query)
        if faq is not None:
            logger.info("FAQ answer found")
            return self._from_candidate(ResolutionType.FAQ_MATCH, faq)

        navigation = self._navigation_matcher.match(query)
        if navigation is not None:
            logger.info("Navigation detected via keywords")
            return self._from_candidate(ResolutionType.NAVIGATION_MATCH, navigation)

        return None

    @staticmethod
    def _from_candidate(kind: ResolutionType, candidate: MatchCandidate) -> ResolutionResult:
        entry_field = "faq" if kind is ResolutionType.FAQ_MATCH else "navigation"
        return ResolutionResult(
            type=kind,
            model=KEYWORD_STRATEGY,
            tokens=0,
            score=candidate.score,
            matched_keywords=candidate.matched_keywords,
            **{entry_field: candidate.entry},
        )

    @staticmethod
    def _from_fallback(fallback: FallbackResult) -> ResolutionResult:
        if fallback.matched and fallback.entry is not None:
            logger.info(f"Model navigation match: {fallback.intent}")
            return ResolutionResult(
                type=ResolutionType.NAVIGATION_MATCH,
                navigation=fallback.entry,
                model=fallback.model or NO_MODEL,
                tokens=fallback.tokens,
                processing_ms=fallback.processing_ms,
            )

        logger.info("Model fallback found no navigation target")
        return ResolutionResult(
            type=ResolutionType.NOT_FOUND,
            model=fallback.model or NO_MODEL,
            tokens=fallback.tokens,
            processing_ms=fallback.processing_ms,
        )
