class WordShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:wordshortener_error'


class ShortenerError(WordShortenerError):
    """Base exception for all URL shortener errors."""

    error_code = 'shortener:shortener_error'


class InvalidUrlError(ShortenerError):
    """Raised when a submitted URL is not a syntactically valid absolute URL."""

    error_code = 'shortener:invalid_url'


class NoAvailableWordsError(ShortenerError):
    """Raised when every word of the vocabulary is bound to a live link."""

    error_code = 'shortener:no_available_words'


class UrlNotFoundError(ShortenerError):
    """Raised when a word is not bound to a live link (absent or expired)."""

    error_code = 'shortener:url_not_found'


class MessageBoardError(WordShortenerError):
    """Base exception for all message board errors."""

    error_code = 'board:message_board_error'


class InvalidMessageError(MessageBoardError):
    """Raised when a posted message is missing or empty."""

    error_code = 'board:invalid_message'


class InvalidQueryError(MessageBoardError):
    """Raised when message listing parameters are invalid."""

    error_code = 'board:invalid_query'


class MessageNotFoundError(MessageBoardError):
    """Raised when a message id does not exist."""

    error_code = 'board:message_not_found'


class ConfigurationError(WordShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(WordShortenerError):
    """Base exception for all infrastructure errors."""

    error_code = 'infra:infrastructure_error'


class StorageError(InfrastructureError):
    """Raised when the durable store fails (connection loss, timeout, etc.)."""

    error_code = 'infra:storage_error'
