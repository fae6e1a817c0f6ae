"""Tests for the ElasticSearch adapter lifecycle."""
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from es_rest_adapter.es.search import ElasticSearch
from es_rest_adapter.es.index_name import SimpleIndexNameBuilder
from es_rest_adapter.exceptions import (ClientNotStartedError,
                                        ConfigurationError)

PROPERTIES = {
    "elasticsearch.rest.hostNames": "127.0.0.1:9200",
    "indexName": "demo",
    "ttl": "3h",
    "batchSize": "50",
}


class TestConfigure:
    def test_configure_without_start(self) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure(start=False)

        assert es.is_configured
        assert es.rest_hostnames == ["127.0.0.1:9200"]
        assert es.index_name == "demo"
        assert es.index_type == "log"
        assert es.ttl_ms == 10800000
        assert es.batch_size == 50
        assert es.index_date_format == "%Y.%m.%d"
        assert es.rest_client is None

    def test_index_name_builder(self) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure(start=False)
        ts = datetime(2026, 10, 19, tzinfo=timezone.utc)
        assert es.index_name_builder.next_index_name(ts) == "demo-2026.10.19"

    def test_simple_builder_has_no_date_format(self) -> None:
        es = ElasticSearch({**PROPERTIES, "indexNameBuilder": "simple"})
        es.configure(start=False)
        assert isinstance(es.index_name_builder, SimpleIndexNameBuilder)
        assert es.index_date_format is None

    def test_unknown_builder(self) -> None:
        es = ElasticSearch({"indexNameBuilder": "org.example.Missing"})
        with pytest.raises(ConfigurationError, match="Could not instantiate index name builder"):
            es.configure()
        assert not es.is_configured

    def test_builder_failure_is_wrapped(self) -> None:
        es = ElasticSearch(PROPERTIES)
        with patch("es_rest_adapter.es.search.get_index_name_builder") as mock_get:
            mock_get.return_value.configure.side_effect = RuntimeError("boom")
            with pytest.raises(ConfigurationError) as exc_info:
                es.configure(start=False)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_accessors_before_configure(self) -> None:
        es = ElasticSearch(PROPERTIES)
        with pytest.raises(ConfigurationError):
            _ = es.config
        with pytest.raises(ConfigurationError):
            _ = es.index_name_builder

    def test_config_container_info(self, properties_file: Path) -> None:
        assert ElasticSearch(PROPERTIES).config_container_info == "ElasticSearch Configs"
        assert ElasticSearch.from_file(properties_file).config_container_info == str(properties_file)


@patch("es_rest_adapter.es.search.create_rest_client")
class TestLifecycle:
    def test_configure_starts_client(self, mock_create: MagicMock) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure()

        mock_create.assert_called_once_with(es.config)
        assert es.rest_client is not None
        assert es.rest_client.es_client is mock_create.return_value
        assert es.rest_client.index_name_builder is es.index_name_builder

    def test_no_hostnames_no_client(self, mock_create: MagicMock) -> None:
        es = ElasticSearch({"indexName": "demo"})
        es.configure()

        mock_create.assert_not_called()
        assert es.rest_client is None

    def test_start_failure_is_swallowed(self, mock_create: MagicMock) -> None:
        mock_create.side_effect = ValueError("bad host")
        es = ElasticSearch(PROPERTIES)
        es.configure()

        assert es.rest_client is None
        with pytest.raises(ClientNotStartedError):
            es.execute_request("/_cluster/health")

    def test_start_twice_keeps_client(self, mock_create: MagicMock) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure()
        client = es.rest_client
        es.start()

        assert es.rest_client is client
        mock_create.assert_called_once()

    def test_stop_closes_client(self, mock_create: MagicMock) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure()
        es.stop()

        mock_create.return_value.close.assert_called_once()
        assert es.rest_client is None

        es.stop()
        mock_create.return_value.close.assert_called_once()

    def test_execute_request(self, mock_create: MagicMock) -> None:
        mock_create.return_value.perform_request.return_value.body = {"status": "green"}
        es = ElasticSearch(PROPERTIES)
        es.configure()

        assert es.execute_request("/_cluster/health") == {"status": "green"}
        args, _ = mock_create.return_value.perform_request.call_args
        assert args == ("GET", "/_cluster/health")

    def test_execute_request_before_start(self, mock_create: MagicMock) -> None:
        es = ElasticSearch(PROPERTIES)
        es.configure(start=False)
        with pytest.raises(ClientNotStartedError):
            es.execute_request("/_cluster/health")

    def test_context_manager(self, mock_create: MagicMock) -> None:
        with ElasticSearch(PROPERTIES) as es:
            assert es.rest_client is not None
        mock_create.return_value.close.assert_called_once()
        assert es.rest_client is None

    def test_context_manager_stops_on_error(self, mock_create: MagicMock) -> None:
        with pytest.raises(RuntimeError):
            with ElasticSearch(PROPERTIES):
                raise RuntimeError("fail")
        mock_create.return_value.close.assert_called_once()

    def test_from_file(self, mock_create: MagicMock, properties_file: Path) -> None:
        es = ElasticSearch.from_file(properties_file)
        es.configure()

        assert es.rest_hostnames == ["127.0.0.1:9200", "127.0.0.2:9200"]
        assert es.config.elastic_user == "elastic"
        assert es.ttl_ms == 2 * 86400000
        assert es.batch_size == 500
        ts = datetime(2026, 10, 19, 20, 0, tzinfo=timezone.utc)
        assert es.index_name_builder.next_index_name(ts) == "demo-2026.10.20"
        mock_create.assert_called_once()
