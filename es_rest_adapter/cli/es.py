"""Elasticsearch REST adapter CLI commands.

Usage:
    es_rest_parse_ttl 2w
    es_rest_show_config --properties /path/to/elasticsearch.properties
    es_rest_request --properties /path/to/elasticsearch.properties --path /_cluster/health
    es_rest_request --path /my-index/_search --body '{"query": {"match_all": {}}}'
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from es_rest_adapter.config import Config, get_config
from es_rest_adapter.es.search import ElasticSearch
from es_rest_adapter.es.settings import config_from_properties
from es_rest_adapter.logging.logger import (log_debug, log_error, log_info,
                                            run_logger)
from es_rest_adapter.properties import load_properties
from es_rest_adapter.ttl import parse_ttl


def _resolve_properties_file(config: Config, properties_file: Optional[str]) -> Path:
    if properties_file:
        return Path(properties_file)
    if config.properties_file is not None:
        return config.properties_file
    raise SystemExit("error: --properties is required (or set ES_REST_ADAPTER_PROPERTIES_FILE)")


# === Parse TTL ===


def parse_parse_ttl_args(args: list[str]) -> tuple[Config, str]:
    parser = argparse.ArgumentParser(description="Convert a TTL specifier (e.g. 5s, 2w, 7) to milliseconds.")
    parser.add_argument("ttl", help="TTL specifier: <number>[ms|s|m|h|d|w]")

    parsed = parser.parse_args(args)
    config = get_config()

    return config, parsed.ttl


def main_parse_ttl() -> None:
    config, ttl = parse_parse_ttl_args(sys.argv[1:])
    with run_logger(config=config):
        ttl_ms = parse_ttl(ttl)
        log_info(f"TTL {ttl!r} is {ttl_ms} ms")
        print(ttl_ms)


# === Show Config ===


def parse_show_config_args(args: list[str]) -> tuple[Config, Path]:
    parser = argparse.ArgumentParser(description="Show the elasticsearch settings bound from a properties file.")
    parser.add_argument(
        "--properties",
        help="Path to the .properties file (default: $ES_REST_ADAPTER_PROPERTIES_FILE)",
    )

    parsed = parser.parse_args(args)
    config = get_config()

    return config, _resolve_properties_file(config, parsed.properties)


def main_show_config() -> None:
    config, properties_file = parse_show_config_args(sys.argv[1:])
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json"))
        try:
            adapter_config = config_from_properties(load_properties(properties_file))
        except Exception as e:
            log_error("failed to load elasticsearch settings", error=e, file=str(properties_file))
            sys.exit(1)
        print(json.dumps(adapter_config.masked_dump(), indent=2))


# === Request ===


def parse_request_args(args: list[str]) -> tuple[Config, Path, str, Optional[str], Optional[str]]:
    parser = argparse.ArgumentParser(description="Issue a REST request to Elasticsearch.")
    parser.add_argument(
        "--properties",
        help="Path to the .properties file (default: $ES_REST_ADAPTER_PROPERTIES_FILE)",
    )
    parser.add_argument(
        "--path",
        required=True,
        help="Request path, e.g. /_cluster/health",
    )
    parser.add_argument(
        "--method",
        default=None,
        help="HTTP method (default: POST with a body, GET without)",
    )
    body_group = parser.add_mutually_exclusive_group()
    body_group.add_argument(
        "--body",
        default=None,
        help="Request body",
    )
    body_group.add_argument(
        "--body-file",
        type=Path,
        default=None,
        help="File holding the request body",
    )

    parsed = parser.parse_args(args)
    config = get_config()

    body: Optional[str] = parsed.body
    if parsed.body_file is not None:
        body = parsed.body_file.read_text(encoding="utf-8")

    return config, _resolve_properties_file(config, parsed.properties), parsed.path, parsed.method, body


def main_request() -> None:
    config, properties_file, path, method, body = parse_request_args(sys.argv[1:])
    with run_logger(config=config):
        log_debug("config loaded", config=config.model_dump(mode="json"))
        try:
            with ElasticSearch.from_file(properties_file) as es:
                log_info(f"requesting {method or ('GET' if body is None else 'POST')} {path}", path=path)
                response = es.execute_request(path, body, method)
        except Exception as e:
            log_error("failed to execute request", error=e, path=path)
            sys.exit(1)
        print(json.dumps(response, indent=2, ensure_ascii=False, default=str))
