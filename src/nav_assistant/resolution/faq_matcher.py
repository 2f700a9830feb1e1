from typing import List, Sequence

from ..lexicon import Lexicon
from ..models import FAQEntry
from .keyword_matcher import ALL_WORDS_SCORE, PARTIAL_WORD_SCORE, KeywordMatcher


class FAQMatcher(KeywordMatcher):
    """
    Keyword matcher for FAQ entries.

    Word rules use exact word equality: a keyword whose words all appear
    among the query tokens scores 30 per word, a partial overlap scores 10
    per overlapping word. Accepted at 30 points or more.
    """

    STOP_WORDS = frozenset({
        "uchun", "bilan", "dan", "ga", "ni", "ning", "lar", "chi",
        "nima", "qanday", "bormi",
    })
    MIN_SCORE = 30

    def __init__(self, lexicon: Lexicon):
        self._lexicon = lexicon

    @property
    def entries(self) -> Sequence[FAQEntry]:
        return self._lexicon.faqs

    def score_words(self, tokens: List[str], keyword_words: List[str]) -> int:
        token_set = set(tokens)
        overlap = sum(1 for word in keyword_words if word in token_set)

        if overlap and overlap == len(keyword_words):
            return ALL_WORDS_SCORE * len(keyword_words)
        if overlap:
            return PARTIAL_WORD_SCORE * overlap
        return 0

    def describe(self, entry: FAQEntry) -> str:
        return entry.question
