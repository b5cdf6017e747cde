class TranslationError(Exception):
    """Raised when a translation or QA pass fails."""


class TranslationValidationError(TranslationError):
    """Raised when the provider response does not have the expected shape."""


class TranslationNetworkError(TranslationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
