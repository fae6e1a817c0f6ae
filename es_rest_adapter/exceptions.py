"""Exceptions raised by the Elasticsearch REST adapter."""


class ElasticSearchAdapterError(Exception):
    """Base class for adapter errors."""


class ConfigurationError(ElasticSearchAdapterError):
    """Raised when the adapter cannot be configured from its properties."""


class ClientNotStartedError(ElasticSearchAdapterError):
    """Raised when a request is issued before the REST client is started."""
