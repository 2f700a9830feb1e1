from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class FAQEntry:
    id: Union[int, str]
    question: str
    category: str
    answer: str
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class NavigationEntry:
    url: str
    intent: str
    keywords: Tuple[str, ...]
