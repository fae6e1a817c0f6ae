import os
from datetime import datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel

RESULT_DIR = Path.cwd().joinpath("es_rest_adapter_results")  # Path to dump logs
DATE_FORMAT = "%Y%m%d"
LOCAL_TZ = ZoneInfo("Etc/UTC")
TODAY = datetime.now(LOCAL_TZ).date()
TODAY_STR = TODAY.strftime(DATE_FORMAT)

LOG_DIR_NAME = "logs"


class Config(BaseModel):
    debug: bool = False
    result_dir: Path = RESULT_DIR
    properties_file: Optional[Path] = None  # .properties file holding the elasticsearch settings


default_config = Config()
ENV_PREFIX = "ES_REST_ADAPTER"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Config:
    properties_file = os.environ.get(f"{ENV_PREFIX}_PROPERTIES_FILE")
    return Config(
        debug=_env_flag(os.environ.get(f"{ENV_PREFIX}_DEBUG", str(default_config.debug))),
        result_dir=Path(os.environ.get(f"{ENV_PREFIX}_RESULT_DIR", default_config.result_dir)),
        properties_file=Path(properties_file) if properties_file else default_config.properties_file,
    )
