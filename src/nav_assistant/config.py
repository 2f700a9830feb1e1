from dataclasses import dataclass, field
from typing import List

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "https://kuprikqurilish.uz",
    "http://kuprikqurilish.uz",
]


@dataclass
class NavAssistantConfig:
    # Lexicon data
    site_map_path: str = "data/siteMap.json"
    faq_path: str = "data/faq.json"

    # LLM
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 10.0
    enable_fallback: bool = True

    # Request log
    request_log_dir: str = "logs"
    log_retention_days: int = 30

    # HTTP boundary
    max_query_length: int = 500
    rate_limit: str = "20 per minute"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
