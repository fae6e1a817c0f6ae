"""Index naming strategies.

A strategy derives the concrete index name from a base name and a timestamp.
Strategies are registered by name and selected with the ``indexNameBuilder``
property.
"""

from datetime import datetime, timezone, tzinfo
from typing import Dict, Optional, Protocol, Type
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from es_rest_adapter.es.settings import (DEFAULT_DATE_FORMAT,
                                         DEFAULT_INDEX_NAME, AdapterConfig)
from es_rest_adapter.exceptions import ConfigurationError


class IndexNameBuilder(Protocol):
    def configure(self, config: AdapterConfig) -> None:
        ...

    @property
    def index_prefix(self) -> str:
        ...

    def build(self, name: str, timestamp: Optional[datetime] = None) -> str:
        ...

    def next_index_name(self, timestamp: Optional[datetime] = None) -> str:
        ...


class SimpleIndexNameBuilder:
    """Uses the configured index name as is."""

    def __init__(self) -> None:
        self._index_name = DEFAULT_INDEX_NAME

    def configure(self, config: AdapterConfig) -> None:
        self._index_name = config.index_name

    @property
    def index_prefix(self) -> str:
        return self._index_name

    def build(self, name: str, timestamp: Optional[datetime] = None) -> str:
        return name

    def next_index_name(self, timestamp: Optional[datetime] = None) -> str:
        return self.build(self._index_name, timestamp)


class TimeBasedIndexNameBuilder:
    """Rolls the index by appending the formatted date: ``<name>-<date>``.

    Naive timestamps are treated as UTC and converted to the configured time zone.
    """

    def __init__(self) -> None:
        self._index_name = DEFAULT_INDEX_NAME
        self._date_format = DEFAULT_DATE_FORMAT
        self._time_zone: tzinfo = timezone.utc

    def configure(self, config: AdapterConfig) -> None:
        try:
            self._time_zone = ZoneInfo(config.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown time zone: {config.time_zone!r}") from e
        self._index_name = config.index_name
        self._date_format = config.date_format

    @property
    def index_prefix(self) -> str:
        return self._index_name

    @property
    def date_format(self) -> str:
        return self._date_format

    @property
    def time_zone(self) -> tzinfo:
        return self._time_zone

    def build(self, name: str, timestamp: Optional[datetime] = None) -> str:
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return f"{name}-{timestamp.astimezone(self._time_zone).strftime(self._date_format)}"

    def next_index_name(self, timestamp: Optional[datetime] = None) -> str:
        return self.build(self._index_name, timestamp)


INDEX_NAME_BUILDERS: Dict[str, Type[IndexNameBuilder]] = {
    "simple": SimpleIndexNameBuilder,
    "time_based": TimeBasedIndexNameBuilder,
}


def register_index_name_builder(name: str, builder_cls: Type[IndexNameBuilder]) -> None:
    """Register a strategy under ``name``, replacing any previous one."""
    INDEX_NAME_BUILDERS[name] = builder_cls


def get_index_name_builder(name: str) -> IndexNameBuilder:
    """Instantiate the strategy registered under ``name``.

    Raises:
        ConfigurationError: If no strategy is registered under ``name``
    """
    builder_cls = INDEX_NAME_BUILDERS.get(name)
    if builder_cls is None:
        raise ConfigurationError(
            f"Could not instantiate index name builder. Unknown name: {name!r} "
            f"(available: {', '.join(sorted(INDEX_NAME_BUILDERS))})"
        )
    return builder_cls()
