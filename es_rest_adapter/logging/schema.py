from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from es_rest_adapter.config import Config

# log_level usage:
# - DEBUG: Detailed info for debugging (fallback values, unknown qualifiers). Shown in stderr only when Config.debug is set.
# - INFO: Lifecycle of the adapter and the client, resolved settings. Shown in stderr.
# - WARNING: Succeeded but incomplete (setting ignored or defaulted). Shown in stderr.
# - ERROR: Failed and recovered (e.g. client start failure). Shown in stderr.
# - CRITICAL: Fatal, processing stops (raises exception). Shown in stderr.
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# lifecycle is expressed in the extra field:
# - lifecycle="start": run started
# - lifecycle="end": run completed successfully
# - lifecycle="failed": run failed
Lifecycle = Literal["start", "end", "failed"]


class DebugCategory(str, Enum):
    """DEBUG log category for aggregation."""
    # Configuration
    CONFIG = "config"

    # TTL parsing
    UNKNOWN_TTL_QUALIFIER = "unknown_ttl_qualifier"
    TTL_AMOUNT_TOO_LONG = "ttl_amount_too_long"

    # Properties file parsing
    EMPTY_PROPERTY = "empty_property"

    # Client lifecycle
    CLIENT_NOT_STARTED = "client_not_started"


class Extra(BaseModel):
    """
    Additional structured data for log records.

    Reserved fields have predefined meanings.
    Additional arbitrary fields are allowed via extra="allow".
    """
    model_config = ConfigDict(extra="allow")

    lifecycle: Optional[Lifecycle] = Field(
        default=None,
        description="Run lifecycle stage: start, end, or failed",
    )
    file: Optional[str] = Field(
        default=None,
        description="File path being processed",
        examples=["/etc/es/elasticsearch.properties"],
    )
    index: Optional[str] = Field(
        default=None,
        description="Elasticsearch index name",
        examples=["flume", "flume-2026.10.19"],
    )
    hosts: Optional[list[str]] = Field(
        default=None,
        description="Elasticsearch REST endpoints",
        examples=[["http://127.0.0.1:9200"]],
    )
    path: Optional[str] = Field(
        default=None,
        description="REST request path",
        examples=["/_cluster/health"],
    )
    debug_category: Optional[DebugCategory] = Field(
        default=None,
        description="DEBUG log category for aggregation",
        examples=["unknown_ttl_qualifier", "config"],
    )
    count: Optional[int] = Field(
        default=None,
        description="Count of items (for summary logs)",
        ge=0,
    )


class LoggerContext(BaseModel):
    """Runtime context for logger."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    run_name: str = Field(
        ...,
        description="Name of the run",
    )
    run_id: str = Field(
        ...,
        description="Unique run identifier: {YYYYMMDD}_{run_name}_{hex4}",
    )
    run_date: date = Field(
        ...,
        description="Run date (TODAY when logger was initialized)",
    )
    log_file: Path = Field(
        ...,
        description="Path to the JSONL log file",
    )
    config: Config = Field(
        ...,
        description="Config instance",
    )


class ErrorInfo(BaseModel):
    """Exception information for error logs."""

    type: str = Field(
        ...,
        description="Exception class name",
        examples=["ConfigurationError", "ConnectionError"],
    )
    message: str = Field(
        ...,
        description="Exception message (str(e))",
    )
    traceback: Optional[str] = Field(
        default=None,
        description="Full traceback string",
    )


class LogRecord(BaseModel):
    """Single log record."""

    timestamp: datetime = Field(
        ...,
        description="Log timestamp in UTC",
        examples=["2026-10-19T10:30:00+00:00"],
    )

    # run identifiers
    run_date: date = Field(
        ...,
        description="Run date (TODAY when logger was initialized)",
        examples=["2026-10-19"],
    )
    run_id: str = Field(
        ...,
        description="Unique run identifier: {YYYYMMDD}_{run_name}_{hex4}, or 'adhoc' outside a run",
        examples=["20261019_es_rest_request_a1b2"],
    )
    run_name: str = Field(
        ...,
        description="Name of the run (CLI command name or 'adhoc')",
        examples=["es_rest_request", "es_rest_parse_ttl"],
    )

    # log source (module path)
    source: str = Field(
        ...,
        description="Python module path where log was emitted",
        examples=["es_rest_adapter.es.search"],
    )

    log_level: LogLevel = Field(
        ...,
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    message: Optional[str] = Field(
        default=None,
        description="Human-readable log message",
    )
    error: Optional[ErrorInfo] = Field(
        default=None,
        description="Error information (set when exception occurred)",
    )
    extra: Extra = Field(
        default_factory=Extra,
        description="Additional structured data (lifecycle, file, index, etc.)",
    )
