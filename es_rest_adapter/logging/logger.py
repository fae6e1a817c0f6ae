import inspect
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from secrets import token_hex
from typing import Any, Iterator, Optional

from es_rest_adapter.config import (LOCAL_TZ, LOG_DIR_NAME, TODAY, TODAY_STR,
                                    Config, default_config)
from es_rest_adapter.logging.schema import (ErrorInfo, Extra, LoggerContext,
                                            LogLevel, LogRecord)

ADHOC_RUN_NAME = "adhoc"

_ctx: ContextVar[Optional[LoggerContext]] = ContextVar("_ctx", default=None)


def _default_run_name() -> str:
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).stem or ADHOC_RUN_NAME
    return ADHOC_RUN_NAME


def init_logger(
    *,
    run_name: Optional[str] = None,
    config: Optional[Config] = None,
) -> LoggerContext:
    if config is None:
        config = default_config
    if run_name is None:
        run_name = _default_run_name()
    run_id = f"{TODAY_STR}_{run_name}_{token_hex(2)}"
    log_file = config.result_dir.joinpath(LOG_DIR_NAME, f"{run_id}.log.jsonl")

    ctx = LoggerContext(
        run_name=run_name,
        run_id=run_id,
        run_date=TODAY,
        log_file=log_file,
        config=config,
    )
    _ctx.set(ctx)

    log_file.parent.mkdir(parents=True, exist_ok=True)

    return ctx


@contextmanager
def run_logger(
    *,
    run_name: Optional[str] = None,
    config: Optional[Config] = None,
) -> Iterator[LoggerContext]:
    """Initialize the logger for a run and record its lifecycle.

    Logs a start record on enter, an end record on normal exit and a failed
    record (with the exception) when the body raises. The exception is re-raised.
    """
    ctx = init_logger(run_name=run_name, config=config)
    _log("INFO", f"{ctx.run_name} started", _source=_detect_source(3), lifecycle="start")
    try:
        yield ctx
    except BaseException as e:
        _log("CRITICAL", f"{ctx.run_name} failed", error=e, _source=_detect_source(3), lifecycle="failed")
        raise
    else:
        _log("INFO", f"{ctx.run_name} completed", _source=_detect_source(3), lifecycle="end")


def log_debug(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("DEBUG", message, error=error, **extra)


def log_info(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("INFO", message, error=error, **extra)


def log_warn(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("WARNING", message, error=error, **extra)


def log_error(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("ERROR", message, error=error, **extra)


def log_critical(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("CRITICAL", message, error=error, **extra)


def _log(
    log_level: LogLevel,
    message: Optional[str],
    *,
    error: Optional[BaseException] = None,
    _source: Optional[str] = None,
    **extra: Any,
) -> None:
    ctx = _ctx.get()

    error_info: Optional[ErrorInfo] = None
    if error is not None:
        error_info = ErrorInfo(
            type=type(error).__name__,
            message=str(error),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        )

    record = LogRecord(
        timestamp=datetime.now(LOCAL_TZ),
        run_date=ctx.run_date if ctx else TODAY,
        run_id=ctx.run_id if ctx else ADHOC_RUN_NAME,
        run_name=ctx.run_name if ctx else ADHOC_RUN_NAME,
        source=_source or _detect_source(3),
        log_level=log_level,
        message=message,
        error=error_info,
        extra=Extra(**extra),
    )

    # Outside a run, records are not persisted
    if ctx is not None:
        _append_jsonl(ctx.log_file, record)
    _emit_stderr(record, show_debug=ctx.config.debug if ctx else False)


def _append_jsonl(path: Path, record: LogRecord) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(record.model_dump_json(exclude_none=True))
        f.write("\n")


def _emit_stderr(record: LogRecord, show_debug: bool = False) -> None:
    try:
        if record.log_level == "DEBUG" and not show_debug:
            return

        ts = record.timestamp.isoformat(timespec="seconds")
        line = f"{ts} - {record.run_name} - {record.log_level}"
        if record.message:
            line += f" - {record.message}"
        if record.error is not None:
            line += f" ({record.error.type}: {record.error.message})"

        sys.stderr.write(line + "\n")
        sys.stderr.flush()

    except Exception:
        pass


def _detect_source(depth: int) -> str:
    frame = inspect.currentframe()
    try:
        caller = frame
        for _ in range(depth):
            if caller is None:
                return "<unknown>"
            caller = caller.f_back
        if caller is None:
            return "<unknown>"

        module = inspect.getmodule(caller)
        if module and module.__name__:
            return module.__name__

        return "<unknown>"
    finally:
        del frame
