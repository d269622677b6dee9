import logging
import sys
from pathlib import Path

from loguru import logger

from src.app.runtime.context import get_config


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Request logging middleware already covers access logs
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # depth=2 points Loguru at the original caller, not this handler
        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging() -> None:
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment

    # Reset Loguru and guarantee a default request_id
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    fmt_plain = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "[<cyan>{extra[request_id]}</cyan>] | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    is_json = cfg.format == "json"
    debug_tracebacks = env != "production"

    # Console
    logger.add(
        sys.stderr,
        level=cfg.level,
        format="{message}" if is_json else fmt_plain,
        colorize=not is_json,
        serialize=is_json,
        backtrace=debug_tracebacks,
        diagnose=debug_tracebacks,
    )

    # File
    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if is_json else fmt_plain,
            serialize=is_json,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=debug_tracebacks,
            diagnose=debug_tracebacks,
        )

    # Route stdlib logging (uvicorn, SQLAlchemy) through Loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    logger.info(
        "Logging configured",
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=env,
    )
