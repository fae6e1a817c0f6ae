"""Elasticsearch REST adapter lifecycle.

``ElasticSearch`` binds the elasticsearch properties into an ``AdapterConfig``,
builds the index naming strategy and starts and stops the REST client.

Usage:
    with ElasticSearch.from_file(Path("elasticsearch.properties")) as es:
        es.execute_request("/_cluster/health")
"""

from pathlib import Path
from types import TracebackType
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from elasticsearch import Elasticsearch

from es_rest_adapter.es.client import RestClient, create_rest_client
from es_rest_adapter.es.index_name import (IndexNameBuilder,
                                          TimeBasedIndexNameBuilder,
                                          get_index_name_builder)
from es_rest_adapter.es.settings import AdapterConfig, config_from_properties
from es_rest_adapter.exceptions import (ClientNotStartedError,
                                        ConfigurationError)
from es_rest_adapter.logging.logger import log_debug, log_error, log_info
from es_rest_adapter.logging.schema import DebugCategory
from es_rest_adapter.properties import load_properties

DEFAULT_CONFIG_CONTAINER_INFO = "ElasticSearch Configs"


class ElasticSearch:
    def __init__(
        self,
        properties: Optional[Mapping[str, str]] = None,
        *,
        properties_file: Optional[Path] = None,
    ) -> None:
        self.properties: Dict[str, str] = dict(properties or {})
        self.properties_file = properties_file
        self._config: Optional[AdapterConfig] = None
        self._index_name_builder: Optional[IndexNameBuilder] = None
        self._rest_client: Optional[RestClient] = None

    @classmethod
    def from_file(cls, path: Path) -> "ElasticSearch":
        """Create an adapter from a ``.properties`` file."""
        properties = load_properties(path)
        log_info(f"loaded {len(properties)} elasticsearch properties", file=str(path), count=len(properties))
        return cls(properties, properties_file=path)

    # === Accessors ===

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> AdapterConfig:
        if self._config is None:
            raise ConfigurationError("ElasticSearch adapter is not configured, call configure() first")
        return self._config

    @property
    def index_name_builder(self) -> IndexNameBuilder:
        if self._index_name_builder is None:
            raise ConfigurationError("ElasticSearch adapter is not configured, call configure() first")
        return self._index_name_builder

    @property
    def index_date_format(self) -> Optional[str]:
        """Date format of a time based index naming strategy, None for other strategies."""
        builder = self.index_name_builder
        if isinstance(builder, TimeBasedIndexNameBuilder):
            return builder.date_format
        return None

    @property
    def rest_hostnames(self) -> List[str]:
        return self.config.rest_hostnames

    @property
    def index_name(self) -> str:
        return self.config.index_name

    @property
    def index_type(self) -> str:
        return self.config.index_type

    @property
    def ttl_ms(self) -> int:
        return self.config.ttl_ms

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    @property
    def rest_client(self) -> Optional[RestClient]:
        """The started REST client, None if not started."""
        return self._rest_client

    @property
    def config_container_info(self) -> str:
        if self.properties_file is not None:
            return str(self.properties_file)
        return DEFAULT_CONFIG_CONTAINER_INFO

    # === Lifecycle ===

    def configure(self, start: bool = True) -> None:
        """Bind the properties and build the index naming strategy.

        Args:
            start: Start the REST client after configuring. Pass False when
                the caller manages the lifecycle and calls start() itself.

        Raises:
            ConfigurationError: If the properties are invalid or the index
                naming strategy cannot be built
        """
        config = config_from_properties(self.properties)

        try:
            builder = get_index_name_builder(config.index_name_builder)
            builder.configure(config)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError("Could not instantiate index name builder.") from e

        self._config = config
        self._index_name_builder = builder
        log_debug(
            "elasticsearch adapter configured",
            debug_category=DebugCategory.CONFIG,
            config=config.masked_dump(),
        )

        if start:
            self.start()

    def start(self) -> None:
        """Start the REST client.

        Nothing is started when no REST hostnames are configured. A failure
        while starting is logged and leaves the adapter without a client.
        """
        config = self.config
        if not config.rest_hostnames:
            log_info("no elasticsearch REST hostnames configured, REST client not started")
            return
        if self._rest_client is not None:
            log_debug("REST client already started", debug_category=DebugCategory.CONFIG)
            return

        es_client: Optional[Elasticsearch] = None
        try:
            log_info(f"starting ElasticSearch REST client: {','.join(config.rest_hostnames)}",
                     hosts=config.rest_hostnames)
            es_client = create_rest_client(config)
            self._rest_client = RestClient(es_client, self.index_name_builder)
            log_info("ElasticSearch REST client started", hosts=config.rest_hostnames)
        except Exception as e:
            log_error("ElasticSearch REST client start failed", error=e, hosts=config.rest_hostnames)
            self._rest_client = None
            if es_client is not None:
                es_client.close()

    def stop(self) -> None:
        log_info("ElasticSearch REST client stopping")
        if self._rest_client is not None:
            self._rest_client.close()
            self._rest_client = None

    def execute_request(
        self,
        path: str,
        entity: Union[str, bytes, Dict[str, Any], List[Any], None] = None,
        method: Optional[str] = None,
    ) -> Any:
        """Issue a REST request through the started client.

        Raises:
            ClientNotStartedError: If the REST client is not started
        """
        if self._rest_client is None:
            log_debug(f"request to {path} without REST client", debug_category=DebugCategory.CLIENT_NOT_STARTED,
                      path=path)
            raise ClientNotStartedError("ElasticSearch REST client is not started")
        return self._rest_client.execute_request(path, entity, method)

    def __enter__(self) -> "ElasticSearch":
        if not self.is_configured:
            self.configure()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.stop()
