"""Exceptions raised by the indexing pipeline.

Contract violations (duplicate ids, incompatible schemata, malformed item
sources) are raised immediately to the caller and never retried.
"""


class SearchFrameworkError(Exception):
    """Base class of all errors raised by the framework."""


class DuplicateKeyError(SearchFrameworkError, ValueError):
    """An object with the same identifier is already registered."""


class SchemaConflictError(SearchFrameworkError, ValueError):
    """The schemata of two collections cannot be fused."""


class CollectionNotFoundError(SearchFrameworkError, KeyError):
    """No collection with the requested identifier is attached."""


class FieldNotFoundError(SearchFrameworkError, KeyError):
    """No field with the requested identifier is attached."""


class NormalizerNotFoundError(SearchFrameworkError, KeyError):
    """No normalizer is attached for the requested data type."""


class InvalidScheduledItemsError(SearchFrameworkError, TypeError):
    """A collection returned something that cannot be iterated as scheduled items."""
