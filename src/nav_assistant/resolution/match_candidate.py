"""
Match candidates and best-candidate selection.
"""
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Tuple, Union

from ..models import FAQEntry, NavigationEntry


@dataclass(frozen=True)
class MatchCandidate:
    """
    One scored lexicon entry.

    Attributes:
        entry: The scored FAQ or navigation entry
        score: Sum of the keyword contributions (never negative)
        matched_keywords: Keywords that contributed, in lexicon order
    """
    entry: Union[FAQEntry, NavigationEntry]
    score: int
    matched_keywords: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f"Score must be non-negative, got {self.score}")


def outscores(challenger: MatchCandidate, incumbent: Optional[MatchCandidate]) -> bool:
    """
    Tie-break comparator: a challenger replaces the incumbent only on a
    strictly higher score, so the first entry in lexicon order keeps a tie.
    """
    return incumbent is None or challenger.score > incumbent.score


def select_best(candidates: Iterable[MatchCandidate]) -> Optional[MatchCandidate]:
    """Fold candidates (in lexicon order) down to the best one, or None if empty."""
    return reduce(
        lambda best, candidate: candidate if outscores(candidate, best) else best,
        candidates,
        None,
    )
