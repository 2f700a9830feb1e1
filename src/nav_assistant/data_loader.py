import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import LexiconLoadError
from .lexicon import Lexicon
from .models import FAQEntry, NavigationEntry

logger = logging.getLogger(__name__)


def _check_keywords(keywords: List[str]) -> List[str]:
    if any(not keyword.strip() for keyword in keywords):
        raise ValueError("keywords must be non-empty strings")
    return keywords


class NavigationRecord(BaseModel):
    url: str = Field(min_length=1)
    intent: str = Field(min_length=1)
    keywords: List[str] = Field(min_length=1)

    @field_validator("keywords")
    @classmethod
    def keywords_not_blank(cls, keywords: List[str]) -> List[str]:
        return _check_keywords(keywords)


class FAQRecord(BaseModel):
    id: Union[int, str]
    question: str = Field(min_length=1)
    category: str = ""
    answer: str = Field(min_length=1)
    keywords: List[str] = Field(min_length=1)

    @field_validator("keywords")
    @classmethod
    def keywords_not_blank(cls, keywords: List[str]) -> List[str]:
        return _check_keywords(keywords)


class LexiconLoader:
    """
    Loads the site map and FAQ JSON files into a Lexicon.

    The site map is a JSON array of ``{url, intent, keywords}`` objects; the
    FAQ file is ``{"faqs": [{id, question, category, answer, keywords}]}``.
    Any problem is raised as LexiconLoadError: the service must not start
    with an empty or corrupt lexicon.
    """

    def __init__(self, site_map_path: str, faq_path: str):
        self.site_map_path = site_map_path
        self.faq_path = faq_path

    def load(self) -> Lexicon:
        navigation = self.load_navigation()
        faqs = self.load_faqs()

        try:
            lexicon = Lexicon(faqs=faqs, navigation=navigation)
        except ValueError as e:
            raise LexiconLoadError(str(e)) from e

        logger.info(f"Lexicon loaded: {len(faqs)} FAQ entries, {len(navigation)} navigation entries")
        return lexicon

    def load_navigation(self) -> List[NavigationEntry]:
        data = self._read_json(self.site_map_path)
        if not isinstance(data, list):
            raise LexiconLoadError(f"{self.site_map_path}: expected a JSON array of sections")

        records = [self._parse(NavigationRecord, row, self.site_map_path, i) for i, row in enumerate(data)]
        return [
            NavigationEntry(url=r.url, intent=r.intent, keywords=tuple(r.keywords))
            for r in records
        ]

    def load_faqs(self) -> List[FAQEntry]:
        data = self._read_json(self.faq_path)
        if not isinstance(data, dict) or not isinstance(data.get("faqs"), list):
            raise LexiconLoadError(f"{self.faq_path}: expected an object with a 'faqs' array")

        records = [self._parse(FAQRecord, row, self.faq_path, i) for i, row in enumerate(data["faqs"])]
        return [
            FAQEntry(
                id=r.id,
                question=r.question,
                category=r.category,
                answer=r.answer,
                keywords=tuple(r.keywords),
            )
            for r in records
        ]

    def _read_json(self, path: str):
        try:
            return json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise LexiconLoadError(f"Lexicon file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise LexiconLoadError(f"Invalid JSON in {path}: {e}") from e

    def _parse(self, model, row, path: str, index: int):
        try:
            return model.model_validate(row)
        except ValidationError as e:
            raise LexiconLoadError(f"{path}: invalid entry #{index}: {e}") from e
