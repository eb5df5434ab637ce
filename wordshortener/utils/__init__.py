from wordshortener.utils.config import AppConfig, app_env, app_name, app_prefix, load_config
from wordshortener.utils.helpers import utcnow, base_url, get_short_url, require_environment, guarantee_500_response
from wordshortener.utils.logging import initialize_logging
from wordshortener.utils.urls import validate_url
from wordshortener.utils.words import load_words, parse_words, default_wordlist_path


__all__ = [
    'AppConfig',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utcnow',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
    'validate_url',
    'load_words',
    'parse_words',
    'default_wordlist_path',
]
