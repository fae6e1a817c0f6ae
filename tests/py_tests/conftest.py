import os
import sys
from pathlib import Path
from typing import Generator

import pytest

from es_rest_adapter.config import Config
from es_rest_adapter.logging.logger import _ctx


@pytest.fixture(scope="session", autouse=True)
def reset_argv() -> Generator[None, None, None]:
    original_argv = sys.argv[:]
    sys.argv = ["es_rest_adapter"]

    yield

    sys.argv = original_argv


@pytest.fixture(scope="session", autouse=True)
def reset_os_env() -> Generator[None, None, None]:
    original_os_env = {k: v for k, v in os.environ.items() if k.startswith("ES_REST_ADAPTER_")}
    keys = original_os_env.keys()
    for k in keys:
        del os.environ[k]

    yield

    for k in keys:
        os.environ[k] = original_os_env[k]


@pytest.fixture()
def test_config(tmp_path: Path) -> Config:
    return Config(result_dir=tmp_path.joinpath("result"))


@pytest.fixture()
def clean_ctx() -> Generator[None, None, None]:
    """Clean up logger context after each test."""
    yield
    _ctx.set(None)


@pytest.fixture()
def properties_file(tmp_path: Path) -> Path:
    path = tmp_path.joinpath("elasticsearch.properties")
    path.write_text(
        "\n".join([
            "# elasticsearch settings",
            "elasticsearch.rest.hostNames=127.0.0.1:9200, 127.0.0.2:9200",
            "indexName=demo",
            "indexType=doc",
            "batchSize=500",
            "ttl=2d",
            "elasticUser=elastic",
            "elasticPassword=changeme",
            "indexNameBuilder=time_based",
            "dateFormat=%Y.%m.%d",
            "timeZone=Asia/Tokyo",
        ]) + "\n",
        encoding="utf-8",
    )
    return path
