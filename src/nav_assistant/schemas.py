from dataclasses import dataclass
from typing import Optional

from .resolution.resolution_result import ResolutionResult


@dataclass
class ChatReply:
    message: str
    model: str
    tokens: int = 0
    processing_ms: Optional[int] = None
    error: Optional[str] = None


@dataclass
class ChatResponse:
    resolution: ResolutionResult
    reply: ChatReply
    latency_ms: Optional[int] = None
