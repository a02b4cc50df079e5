import logging
import sys
from pathlib import Path

from loguru import logger

from src.authbridge.runtime.config.config_data import ConfigData
from src.authbridge.runtime.context import get_config

_PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (uvicorn, sqlalchemy, passlib) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # The request middleware already logs every request
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def library_log_levels(config: ConfigData) -> dict[str, int]:
    """Levels for the third-party loggers this service routes through loguru."""
    return {
        # SQL statements only when the database is configured to echo them
        "sqlalchemy.engine": logging.INFO if config.database.echo else logging.WARNING,
        "sqlalchemy.pool": logging.WARNING,
        # passlib reports bcrypt backend version probing at WARNING
        "passlib": logging.ERROR,
        "uvicorn": logging.INFO,
        "uvicorn.error": logging.INFO,
        "uvicorn.access": logging.CRITICAL,
    }


def configure_logging(config: ConfigData | None = None) -> None:
    """Install loguru sinks and route stdlib logging into them."""
    config = config or get_config()
    cfg = config.logging
    verbose_errors = config.app.environment != "production"
    as_json = cfg.format == "json"

    logger.remove()
    logger.configure(
        extra={"request_id": "-"},
        patcher=lambda record: record["extra"].setdefault("request_id", "-"),
    )

    logger.add(
        sys.stderr,
        level=cfg.level,
        format="{message}" if as_json else _PLAIN_FORMAT,
        serialize=as_json,
        colorize=not as_json,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if as_json else _PLAIN_FORMAT,
            serialize=as_json,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=verbose_errors,
            diagnose=verbose_errors,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    for name, level in library_log_levels(config).items():
        logging.getLogger(name).setLevel(level)

    logger.info(
        "Logging configured for namespace {} ({} database, level {}, format {})",
        config.tenancy.namespace_key,
        "sqlite" if config.database.is_sqlite else "server",
        cfg.level,
        cfg.format,
    )
