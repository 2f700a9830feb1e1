"""
Query validation at the HTTP boundary.

The resolution core expects a trimmed, non-empty, length-bounded string;
this is where that is enforced.
"""
from .exceptions import ValidationError


class InputValidator:
    """
    Validates user queries before they reach the resolution core.

    Error messages are user-facing (Uzbek), matching the rest of the API.
    """

    MAX_QUERY_LENGTH = 500

    REQUIRED_MESSAGE = "Query is required"
    EMPTY_MESSAGE = "Bo'sh xabar yuborib bo'lmaydi"
    TOO_LONG_MESSAGE = "Xabar juda uzun (maksimal {max_length} belgi)"

    @staticmethod
    def require_query(query) -> str:
        """
        Check that a query was supplied as a string.

        :raises ValidationError: If missing or not a string
        """
        if not query or not isinstance(query, str):
            raise ValidationError(InputValidator.REQUIRED_MESSAGE)
        return query

    @staticmethod
    def sanitize_query(query, max_length: int = MAX_QUERY_LENGTH) -> str:
        """
        Validate and normalize a user query.

        :param query: Raw query from the request body
        :param max_length: Maximum length after trimming
        :return: Trimmed query without NUL bytes
        :raises ValidationError: If missing, empty or too long
        """
        query = InputValidator.require_query(query)

        sanitized = query.replace("\x00", "").strip()
        if not sanitized:
            raise ValidationError(InputValidator.EMPTY_MESSAGE)

        if len(sanitized) > max_length:
            raise ValidationError(InputValidator.TOO_LONG_MESSAGE.format(max_length=max_length))

        return sanitized
