"""
Shared scoring pipeline for the deterministic keyword matchers.

Both matchers normalize the query, score every keyword of every entry with
the first rule that applies, sum per entry, keep the best entry and accept it
only above a minimum score. Subclasses supply the entries, the stop words,
the threshold and the word-level rules.
"""
import logging
from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional, Sequence

from .match_candidate import MatchCandidate, select_best

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 100
CONTAINS_SCORE = 50
ALL_WORDS_SCORE = 30
PARTIAL_WORD_SCORE = 10

MIN_TOKEN_LENGTH = 3


def normalize(text: str) -> str:
    return text.lower().strip()


class KeywordMatcher(ABC):
    """
    Deterministic lexical matcher over a sequence of lexicon entries.

    Pure: no I/O, no state changes, same input gives the same output.
    """

    STOP_WORDS: FrozenSet[str] = frozenset()
    MIN_SCORE: int = 0
    strategy_name = "keyword-match"

    @property
    @abstractmethod
    def entries(self) -> Sequence:
        """Entries to score, in lexicon order."""

    @abstractmethod
    def score_words(self, tokens: List[str], keyword_words: List[str]) -> int:
        """
        Word-level rules, applied when neither exact nor substring matching fired.

        :param tokens: Filtered query tokens
        :param keyword_words: Words of the lowercased keyword
        :return: Points for this keyword (0 if no rule applies)
        """

    def tokenize(self, normalized_query: str) -> List[str]:
        """Split on whitespace, dropping short words and stop words."""
        return [
            word for word in normalized_query.split()
            if len(word) >= MIN_TOKEN_LENGTH and word not in self.STOP_WORDS
        ]

    def score_keyword(self, query: str, tokens: List[str], keyword: str) -> int:
        """Score one keyword with the first applicable rule."""
        if query == keyword:
            return EXACT_MATCH_SCORE
        if keyword in query or query in keyword:
            return CONTAINS_SCORE
        return self.score_words(tokens, keyword.split())

    def score_entry(self, entry, query: str, tokens: List[str]) -> MatchCandidate:
        score = 0
        matched: List[str] = []
        for keyword in entry.keywords:
            points = self.score_keyword(query, tokens, normalize(keyword))
            if points:
                score += points
                matched.append(keyword)
        return MatchCandidate(entry=entry, score=score, matched_keywords=tuple(matched))

    def match(self, query: str) -> Optional[MatchCandidate]:
        """
        Find the best-scoring entry for a query.

        :param query: Raw user query
        :return: Best MatchCandidate at or above MIN_SCORE, otherwise None
        """
        normalized = normalize(query)
        if not normalized:
            return None

        tokens = self.tokenize(normalized)
        best = select_best(self.score_entry(entry, normalized, tokens) for entry in self.entries)

        if best is None or best.score < self.MIN_SCORE:
            return None

        logger.info(
            f"{type(self).__name__} match: {self.describe(best.entry)} (score: {best.score})"
        )
        logger.debug(f"Matched keywords: {', '.join(best.matched_keywords)}")
        return best

    def describe(self, entry) -> str:
        return repr(entry)
