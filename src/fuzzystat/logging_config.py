from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler

PACKAGE_LOGGER = "fuzzystat"
# requests' transport logs every connection at DEBUG; keep it out of the thermostat log
QUIET_LOGGERS = ("urllib3", "requests")
FORMAT = "%(asctime)s %(levelname)s [%(shortname)s.%(funcName)s] %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

class ShortFormatter(logging.Formatter):
    """
    Formatter that exposes %(shortname)s = last component of logger name
    (e.g. fuzzystat.simulation.SimulationStepper -> SimulationStepper)
    """
    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.rsplit('.', 1)[-1]
        return super().format(record)

def _level(level: str | int | None, default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(level.strip().upper())
    return lvl if isinstance(lvl, int) else default

def setup_logging(enabled: bool = True, level: str | int = "INFO", log_file: str | None = None,
                  package_level: str | int | None = None, force: bool = False) -> None:
    """
    Configure logging once per process.
    Root gets `level`; the fuzzystat namespace gets `package_level` (falls back to
    `level`) so decision tracing can go to DEBUG without third-party chatter.
    Enable/disable with env FZS_LOGGING=1/0; levels via FZS_LOG_LEVEL / FZS_PKG_LOG_LEVEL.
    """
    # If already configured, do not duplicate handlers
    if getattr(setup_logging, "_configured", False) and not force:
        return

    if not enabled:
        logging.disable(logging.CRITICAL)
        setup_logging._configured = True
        return

    logging.disable(logging.NOTSET)
    root_lvl = _level(level)
    pkg_lvl = _level(package_level, root_lvl)
    formatter = ShortFormatter(fmt=FORMAT, datefmt=DATEFMT)

    sh = logging.StreamHandler(stream=sys.stdout)
    sh.setFormatter(formatter)
    handlers: list[logging.Handler] = [sh]

    file_error: OSError | None = None
    if log_file:
        try:
            if os.path.dirname(log_file):
                os.makedirs(os.path.dirname(log_file), exist_ok=True)
            fh = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=3)
            fh.setFormatter(formatter)
            handlers.append(fh)
        except OSError as e:
            # Keep console logging; report once handlers exist
            file_error = e

    # Records propagate to root handlers regardless of the root level
    logging.basicConfig(level=root_lvl, handlers=handlers, force=True)
    logging.getLogger(PACKAGE_LOGGER).setLevel(pkg_lvl)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_lvl, logging.WARNING))
    if file_error is not None:
        logging.getLogger(__name__).warning("Log file %s unavailable, console only: %s", log_file, file_error)
    setup_logging._configured = True

def resolve_logging_from_env_and_cfg(cfg) -> tuple[bool, str, str | None, str | None]:
    """
    Determine enabled/level/file/package level; env first, then cfg.logging.
    Env:
      FZS_LOGGING=1|0, FZS_LOG_LEVEL=DEBUG|INFO|..., FZS_LOG_FILE=/path/to/log,
      FZS_PKG_LOG_LEVEL=DEBUG|INFO|... (fuzzystat.* only)
    """
    lcfg = getattr(cfg, "logging", None)
    enabled = bool(getattr(lcfg, "enabled", True))
    level = str(getattr(lcfg, "level", "INFO"))
    log_file = getattr(lcfg, "file", None)
    package_level = getattr(lcfg, "package_level", None)

    env_enabled = os.getenv("FZS_LOGGING")
    if env_enabled is not None:
        enabled = env_enabled.lower() not in ("0", "false", "no")
    level = os.getenv("FZS_LOG_LEVEL", level)
    log_file = os.getenv("FZS_LOG_FILE", log_file)
    package_level = os.getenv("FZS_PKG_LOG_LEVEL", package_level)
    return enabled, level, log_file, package_level
