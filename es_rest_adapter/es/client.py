"""Elasticsearch REST client management."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlsplit

from elasticsearch import Elasticsearch

from es_rest_adapter.es.index_name import IndexNameBuilder
from es_rest_adapter.es.settings import DEFAULT_PORT, AdapterConfig

JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"
NDJSON_ENDPOINTS = ("_bulk", "_msearch", "_msearch/template")


def normalize_host(host: str) -> str:
    """Complete a hostname into a URL with scheme and port.

    ``127.0.0.1`` becomes ``http://127.0.0.1:9200``.
    """
    url = host if "://" in host else f"http://{host}"
    parts = urlsplit(url)
    if parts.port is None:
        url = f"{parts.scheme}://{parts.netloc}:{DEFAULT_PORT}{parts.path}"
    return url.rstrip("/")


def create_rest_client(config: AdapterConfig) -> Elasticsearch:
    """Create an Elasticsearch client for the configured REST hostnames."""
    hosts: List[str] = [normalize_host(host) for host in config.rest_hostnames]
    kwargs: Dict[str, Any] = {"request_timeout": config.request_timeout}
    if config.elastic_user:
        kwargs["basic_auth"] = (config.elastic_user, config.elastic_password)
    return Elasticsearch(hosts, **kwargs)


def _decode_entity(entity: Union[str, bytes, Dict[str, Any], List[Any], None]) -> Any:
    if not isinstance(entity, (str, bytes)):
        return entity
    try:
        return json.loads(entity)
    except ValueError:
        # ndjson bodies and other raw payloads are forwarded untouched
        return entity


def _request_headers(path: str) -> Dict[str, str]:
    endpoint = path.split("?", 1)[0].rstrip("/")
    content_type = NDJSON_CONTENT_TYPE if endpoint.endswith(NDJSON_ENDPOINTS) else JSON_CONTENT_TYPE
    return {"accept": JSON_CONTENT_TYPE, "content-type": content_type}


class RestClient:
    """An Elasticsearch client bound to an index naming strategy."""

    def __init__(self, es_client: Elasticsearch, index_name_builder: IndexNameBuilder) -> None:
        self.es_client = es_client
        self.index_name_builder = index_name_builder

    def execute_request(
        self,
        path: str,
        entity: Union[str, bytes, Dict[str, Any], List[Any], None] = None,
        method: Optional[str] = None,
    ) -> Any:
        """Issue a REST request and return the response body.

        Args:
            path: Request path, e.g. ``/_cluster/health``
            entity: Request body; JSON strings are decoded, other strings are sent raw
            method: HTTP method (default: POST with a body, GET without)

        Returns:
            The decoded response body
        """
        if not path.startswith("/"):
            path = f"/{path}"
        if method is None:
            method = "GET" if entity is None else "POST"

        response = self.es_client.perform_request(
            method.upper(),
            path,
            headers=_request_headers(path),
            body=_decode_entity(entity),
        )
        return response.body

    def index_name(self, timestamp: Optional[datetime] = None) -> str:
        return self.index_name_builder.next_index_name(timestamp)

    def ping(self) -> bool:
        return bool(self.es_client.ping())

    def close(self) -> None:
        self.es_client.close()
