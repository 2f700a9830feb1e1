"""
Tests for lexicon loading and validation.
"""
import json

import pytest

from nav_assistant.data_loader import LexiconLoader
from nav_assistant.exceptions import LexiconLoadError
from nav_assistant.lexicon import Lexicon


NAV = [{"url": "/news", "intent": "Yangiliklar", "keywords": ["yangiliklar", "xabarlar"]}]
FAQS = {"faqs": [{"id": 1, "question": "Narxlar?", "category": "Narxlar", "answer": "Kelishiladi.",
                  "keywords": ["narxlar"]}]}


def write_files(tmp_path, navigation=NAV, faqs=FAQS):
    site_map = tmp_path / "siteMap.json"
    faq = tmp_path / "faq.json"
    site_map.write_text(json.dumps(navigation) if not isinstance(navigation, str) else navigation, encoding="utf-8")
    faq.write_text(json.dumps(faqs) if not isinstance(faqs, str) else faqs, encoding="utf-8")
    return LexiconLoader(site_map_path=str(site_map), faq_path=str(faq))


class TestLexiconLoader:

    def test_shipped_data(self, site_lexicon):
        assert len(site_lexicon.navigation) == 10
        assert len(site_lexicon.faqs) == 5
        assert site_lexicon.find_by_url("/corporativ/monitoring").intent == "Monitoring"

    def test_entries_keep_file_order(self, tmp_path):
        navigation = NAV + [{"url": "/contacts", "intent": "Aloqa", "keywords": ["aloqa"]}]

        lexicon = write_files(tmp_path, navigation=navigation).load()

        assert [e.url for e in lexicon.navigation] == ["/news", "/contacts"]
        assert lexicon.faqs[0].keywords == ("narxlar",)

    def test_missing_file(self, tmp_path):
        loader = LexiconLoader(site_map_path=str(tmp_path / "none.json"), faq_path=str(tmp_path / "none.json"))

        with pytest.raises(LexiconLoadError, match="not found"):
            loader.load()

    def test_invalid_json(self, tmp_path):
        with pytest.raises(LexiconLoadError, match="Invalid JSON"):
            write_files(tmp_path, faqs="{not json").load()

    def test_site_map_must_be_array(self, tmp_path):
        with pytest.raises(LexiconLoadError, match="array"):
            write_files(tmp_path, navigation={"sections": NAV}).load()

    def test_faq_file_needs_faqs_key(self, tmp_path):
        with pytest.raises(LexiconLoadError, match="faqs"):
            write_files(tmp_path, faqs=FAQS["faqs"]).load()

    def test_blank_keyword(self, tmp_path):
        navigation = [{"url": "/news", "intent": "Yangiliklar", "keywords": ["yangiliklar", "  "]}]

        with pytest.raises(LexiconLoadError):
            write_files(tmp_path, navigation=navigation).load()

    def test_empty_keyword_list(self, tmp_path):
        navigation = [{"url": "/news", "intent": "Yangiliklar", "keywords": []}]

        with pytest.raises(LexiconLoadError):
            write_files(tmp_path, navigation=navigation).load()

    def test_duplicate_url(self, tmp_path):
        with pytest.raises(LexiconLoadError, match="Duplicate"):
            write_files(tmp_path, navigation=NAV + NAV).load()


class TestLexicon:

    def test_rejects_blank_keyword(self, make_faq):
        with pytest.raises(ValueError):
            Lexicon(faqs=[make_faq(1, "")], navigation=[])

    def test_find_by_url_is_exact(self, make_nav):
        lexicon = Lexicon(faqs=[], navigation=[make_nav("/news", "xabarlar")])

        assert lexicon.find_by_url("/news") is not None
        assert lexicon.find_by_url("/news/") is None
        assert lexicon.find_by_url(" /news") is None

    def test_repr(self, site_lexicon):
        assert repr(site_lexicon) == "Lexicon(faqs=5, navigation=10)"
