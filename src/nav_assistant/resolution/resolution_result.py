"""
Normalized output of the resolution chain.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..models import FAQEntry, NavigationEntry

KEYWORD_STRATEGY = "keyword-match"
NO_MODEL = "none"


class ResolutionType(Enum):
    """Outcome of resolving a query. Values are the wire names used by the API."""
    FAQ_MATCH = "FAQ"
    NAVIGATION_MATCH = "NAVIGATION"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Tagged result of the resolution chain.

    Attributes:
        type: Which outcome was reached
        faq: Matched FAQ entry (FAQ_MATCH only)
        navigation: Matched navigation entry (NAVIGATION_MATCH only)
        model: Strategy or model name ("keyword-match" for the keyword tiers)
        tokens: Tokens spent by the model, 0 for the keyword tiers
        score: Keyword score, when a keyword matcher produced the result
        matched_keywords: Contributing keywords, when a keyword matcher produced the result
        processing_ms: Model latency, when the model was called
    """
    type: ResolutionType
    faq: Optional[FAQEntry] = None
    navigation: Optional[NavigationEntry] = None
    model: str = NO_MODEL
    tokens: int = 0
    score: Optional[int] = None
    matched_keywords: Tuple[str, ...] = ()
    processing_ms: Optional[int] = None

    def __post_init__(self):
        if self.type is ResolutionType.FAQ_MATCH:
            if self.faq is None or self.navigation is not None:
                raise ValueError("FAQ_MATCH must carry exactly an FAQ entry")
        elif self.type is ResolutionType.NAVIGATION_MATCH:
            if self.navigation is None or self.faq is not None:
                raise ValueError("NAVIGATION_MATCH must carry exactly a navigation entry")
        elif self.faq is not None or self.navigation is not None:
            raise ValueError("NOT_FOUND must not carry an entry")
        if self.tokens < 0:
            raise ValueError(f"Token count must be non-negative, got {self.tokens}")

    @property
    def matched(self) -> bool:
        return self.type is not ResolutionType.NOT_FOUND

    @property
    def url(self) -> Optional[str]:
        return self.navigation.url if self.navigation else None

    @property
    def intent(self) -> Optional[str]:
        return self.navigation.intent if self.navigation else None
