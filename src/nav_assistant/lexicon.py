"""
Immutable lexicon of FAQ and navigation entries.

Built once at startup and shared read-only by every request.
"""
from typing import Dict, Iterable, Optional, Tuple
from .models import FAQEntry, NavigationEntry


class Lexicon:
    """
    Read-only table of FAQ entries and navigation entries.

    Entry order is preserved: matchers break score ties in favour of the
    entry that appears first.
    """

    __slots__ = ("_faqs", "_navigation", "_by_url")

    def __init__(
        self,
        faqs: Iterable[FAQEntry],
        navigation: Iterable[NavigationEntry],
    ):
        """
        :param faqs: FAQ entries in lexicon order
        :param navigation: Navigation entries in lexicon order
        :raises ValueError: On blank keywords or duplicate navigation URLs
        """
        self._faqs: Tuple[FAQEntry, ...] = tuple(faqs)
        self._navigation: Tuple[NavigationEntry, ...] = tuple(navigation)

        for entry in self._faqs + self._navigation:
            if any(not keyword or not keyword.strip() for keyword in entry.keywords):
                raise ValueError(f"Blank keyword in lexicon entry: {entry!r}")

        by_url: Dict[str, NavigationEntry] = {}
        for entry in self._navigation:
            if entry.url in by_url:
                raise ValueError(f"Duplicate navigation URL: {entry.url}")
            by_url[entry.url] = entry
        self._by_url = by_url

    @property
    def faqs(self) -> Tuple[FAQEntry, ...]:
        return self._faqs

    @property
    def navigation(self) -> Tuple[NavigationEntry, ...]:
        return self._navigation

    def find_by_url(self, url: str) -> Optional[NavigationEntry]:
        """Exact lookup of a navigation entry by URL."""
        return self._by_url.get(url)

    def __len__(self) -> int:
        return len(self._faqs) + len(self._navigation)

    def __repr__(self) -> str:
        return f"Lexicon(faqs={len(self._faqs)}, navigation={len(self._navigation)})"
