from typing import List, Sequence

from ..lexicon import Lexicon
from ..models import NavigationEntry
from .keyword_matcher import ALL_WORDS_SCORE, PARTIAL_WORD_SCORE, KeywordMatcher


def fuzzy_word_match(a: str, b: str) -> bool:
    """Words match fuzzily when either contains the other."""
    return a in b or b in a


class NavigationMatcher(KeywordMatcher):
    """
    Keyword matcher for site navigation entries.

    Word rules are fuzzy (substring either way between words). Multi-word
    keywords need every word matched and score 30 per word; single-word
    keywords score 10. Accepted at 10 points or more: navigation keywords
    are short, so the bar is lower than for FAQs.
    """

    STOP_WORDS = frozenset({"uchun", "bilan", "dan", "ga", "ni", "ning", "lar", "chi"})
    MIN_SCORE = 10

    def __init__(self, lexicon: Lexicon):
        self._lexicon = lexicon

    @property
    def entries(self) -> Sequence[NavigationEntry]:
        return self._lexicon.navigation

    def score_words(self, tokens: List[str], keyword_words: List[str]) -> int:
        def matched(word: str) -> bool:
            return any(fuzzy_word_match(word, token) for token in tokens)

        if len(keyword_words) > 1 and all(matched(word) for word in keyword_words):
            return ALL_WORDS_SCORE * len(keyword_words)
        if len(keyword_words) == 1 and matched(keyword_words[0]):
            return PARTIAL_WORD_SCORE
        return 0

    def describe(self, entry: NavigationEntry) -> str:
        return f"{entry.intent} -> {entry.url}"
