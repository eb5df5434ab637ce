"""Vocabulary loading for the WordPool

Word list format:
    - one word per line;
    - blank lines and lines starting with '#' are ignored;
    - duplicates are dropped (first occurrence wins);
    - words must match [A-Za-z0-9_-]+ so they are safe as a URL path segment.

Functions:
    default_wordlist_path() -> Path
        Path of the word list bundled with the package.
    load_words(path) -> tuple[str, ...]
        Read and validate a word list file.
"""

import re
import logging
from pathlib import Path

from wordshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


def default_wordlist_path() -> Path:
    return Path(__file__).resolve().parent.parent / 'data' / 'words.txt'


def parse_words(lines) -> tuple[str, ...]:
    """Parse word list lines into an ordered tuple of unique words

    Raises:
        BadConfigurationError:
            If a word contains characters outside [A-Za-z0-9_-] or no word is left.
    """
    words = {}
    for lineno, line in enumerate(lines, start=1):
        word = line.strip()
        if not word or word.startswith('#'):
            continue
        if not WORD_PATTERN.match(word):
            raise BadConfigurationError(f'Invalid word {word!r} on line {lineno} of the word list.')
        if word in words:
            logger.warning('Duplicate word in word list, ignoring.', extra={'word': word, 'line': lineno})
            continue
        words[word] = None

    if not words:
        raise BadConfigurationError('Word list is empty.')
    return tuple(words)


def load_words(path: str | Path | None = None) -> tuple[str, ...]:
    """Read the vocabulary from `path` (or the bundled list)

    Raises:
        BadConfigurationError:
            If the file can't be read or its content is invalid.

    Example:
        >>> words = load_words()
        >>> 'otter' in words
        True
    """
    path = Path(path) if path is not None else default_wordlist_path()
    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise BadConfigurationError(f"Can't read word list at {path}.") from e

    words = parse_words(content.splitlines())
    logger.debug('Loaded word list.', extra={'path': str(path), 'words': len(words)})
    return words
