from .chat_responder import ChatResponder, APOLOGY_MESSAGE, NAVIGATION_FALLBACK_MESSAGE

__all__ = ["ChatResponder", "APOLOGY_MESSAGE", "NAVIGATION_FALLBACK_MESSAGE"]
