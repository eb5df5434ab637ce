"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a ShortLinkModel is not found in the data store.

    MessageDoesNotExistError:
        Raised when a message id is not found in the data store.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from wordshortener.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link with word 'otter' not found.")
    Traceback (most recent call last):
        ...
    wordshortener.dao.exceptions.ShortLinkNotFoundError: Short link with word 'otter' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a ShortLinkModel is not found in the data store."""

    pass


class MessageDoesNotExistError(DAOError):
    """Exception raised when a message is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
