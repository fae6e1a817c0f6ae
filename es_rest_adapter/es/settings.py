"""Elasticsearch adapter settings.

This module holds the property keys read from the ``.properties`` file, their
defaults and the binding of raw properties into a typed ``AdapterConfig``.
"""

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, Field, ValidationError

from es_rest_adapter.exceptions import ConfigurationError
from es_rest_adapter.logging.logger import log_debug, log_info
from es_rest_adapter.logging.schema import DebugCategory
from es_rest_adapter.ttl import DEFAULT_TTL, parse_ttl

# === Property Keys ===

REST_HOSTNAMES = "elasticsearch.rest.hostNames"
INDEX_NAME = "indexName"
INDEX_TYPE = "indexType"
BATCH_SIZE = "batchSize"
TTL = "ttl"
ELASTIC_USER = "elasticUser"
ELASTIC_PASSWORD = "elasticPassword"
INDEX_NAME_BUILDER = "indexNameBuilder"
DATE_FORMAT = "dateFormat"
TIME_ZONE = "timeZone"
REQUEST_TIMEOUT = "elasticsearch.requestTimeout"

# === Defaults ===

DEFAULT_INDEX_NAME = "flume"
DEFAULT_INDEX_TYPE = "log"
DEFAULT_BATCH_SIZE = 100
DEFAULT_INDEX_NAME_BUILDER = "time_based"
DEFAULT_DATE_FORMAT = "%Y.%m.%d"
DEFAULT_TIME_ZONE = "Etc/UTC"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Port used for hostnames given without one
DEFAULT_PORT = 9200


class AdapterConfig(BaseModel):
    """Settings bound from the elasticsearch properties."""

    rest_hostnames: List[str] = Field(default_factory=list)
    index_name: str = DEFAULT_INDEX_NAME
    index_type: str = DEFAULT_INDEX_TYPE
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)
    ttl_ms: int = DEFAULT_TTL
    elastic_user: str = ""
    elastic_password: str = ""
    index_name_builder: str = DEFAULT_INDEX_NAME_BUILDER
    date_format: str = DEFAULT_DATE_FORMAT
    time_zone: str = DEFAULT_TIME_ZONE
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    def masked_dump(self) -> Dict[str, Any]:
        """Dump as JSON-compatible dict with the password hidden."""
        dumped = self.model_dump(mode="json")
        if dumped["elastic_password"]:
            dumped["elastic_password"] = "********"
        return dumped


def split_hostnames(hostnames: str) -> List[str]:
    """Split a comma separated hostnames value, dropping empty entries."""
    return [host.strip() for host in hostnames.strip().split(",") if host.strip()]


def config_from_properties(properties: Mapping[str, str]) -> AdapterConfig:
    """Bind raw properties into an AdapterConfig.

    Empty values keep the default.

    Raises:
        ConfigurationError: If a value cannot be converted or is out of range
    """
    def get(key: str) -> str:
        value = properties.get(key)
        if value is None:
            return ""
        if value.strip() == "":
            log_debug(f"{key} is empty, keeping the default", debug_category=DebugCategory.EMPTY_PROPERTY)
            return ""
        return value

    values: Dict[str, Any] = {}

    hostnames = get(REST_HOSTNAMES).strip()
    if hostnames:
        values["rest_hostnames"] = split_hostnames(hostnames)
    else:
        log_debug(f"{REST_HOSTNAMES} is not set", debug_category=DebugCategory.CONFIG)

    # Credentials and names are kept verbatim
    for key, field in [
        (INDEX_NAME, "index_name"),
        (INDEX_TYPE, "index_type"),
        (ELASTIC_USER, "elastic_user"),
        (ELASTIC_PASSWORD, "elastic_password"),
        (DATE_FORMAT, "date_format"),
    ]:
        value = get(key)
        if value:
            values[field] = value

    for key, field in [
        (INDEX_NAME_BUILDER, "index_name_builder"),
        (TIME_ZONE, "time_zone"),
    ]:
        value = get(key).strip()
        if value:
            values[field] = value

    batch_size = get(BATCH_SIZE).strip()
    if batch_size:
        try:
            values["batch_size"] = int(batch_size)
        except ValueError as e:
            raise ConfigurationError(f"{BATCH_SIZE} must be an integer: {batch_size!r}") from e

    request_timeout = get(REQUEST_TIMEOUT).strip()
    if request_timeout:
        try:
            values["request_timeout"] = float(request_timeout)
        except ValueError as e:
            raise ConfigurationError(f"{REQUEST_TIMEOUT} must be a number: {request_timeout!r}") from e

    ttl = get(TTL)
    if ttl:
        values["ttl_ms"] = parse_ttl(ttl)
        log_info(f"elasticsearch.TTL: {values['ttl_ms']}, config value is: {ttl}")

    try:
        return AdapterConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid elasticsearch properties: {e}") from e
