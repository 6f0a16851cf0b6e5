from __future__ import annotations

import logging
import os
import sys
import time
from logging.config import dictConfig, fileConfig
from typing import Any, IO, Mapping, Optional, Sequence, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .config import Config
    from .message import HttpMessage


CONFIG_DEFAULTS = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "rawhttp.error": {"qualname": "rawhttp.error"},
        "rawhttp.wire": {"level": "INFO", "propagate": False, "qualname": "rawhttp.wire"},
    },
}


def _create_logger(
    name: str, target: Union[logging.Logger, str, None], sys_default: IO
) -> Optional[logging.Logger]:
    if isinstance(target, logging.Logger):
        return target

    logger = logging.getLogger(name)
    if target:
        logger.handlers = [
            logging.StreamHandler(sys_default) if target == "-" else logging.FileHandler(target)
        ]

    # hasHandlers() here will allow logger configuration from dict/file
    return logger if logger.hasHandlers() else None


class Logger:
    def __init__(self, config: "Config") -> None:
        self.wire_log_format = config.wire_log_format

        log_config = CONFIG_DEFAULTS.copy()

        if config.logconfig is not None:
            log_config["__file__"] = config.logconfig
            log_config["here"] = os.path.dirname(config.logconfig)
            fileConfig(
                config.logconfig, defaults=log_config, disable_existing_loggers=False  # type: ignore
            )
        else:
            if config.logconfig_dict is not None:
                log_config.update(config.logconfig_dict)
            dictConfig(log_config)

        self.wire_logger = _create_logger("rawhttp.wire", config.wirelog, sys.stdout)
        self.error_logger = _create_logger("rawhttp.error", config.errorlog, sys.stderr)

        # Only the library loggers are configured, the root logger belongs to the application
        if config.loglevel is not None and self.error_logger is not None:
            self.error_logger.setLevel(logging.getLevelName(config.loglevel.upper()))

    def wire(self, message: "HttpMessage", written: Sequence[int], duration: float) -> None:
        if self.wire_logger is not None:
            self.wire_logger.info(self.wire_log_format, self.atoms(message, written, duration))

    def critical(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.critical(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.error(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.warning(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.info(message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.debug(message, *args, **kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.exception(message, *args, **kwargs)

    def log(self, level: int, message: str, *args: Any, **kwargs: Any) -> None:
        if self.error_logger is not None:
            self.error_logger.log(level, message, *args, **kwargs)

    def atoms(
        self, message: "HttpMessage", written: Sequence[int], duration: float
    ) -> Mapping[str, str]:
        """Create and return a wire log atoms dictionary.

        This can be overidden and customised if desired. It should
        return a mapping between a wire log format key and a value.
        """
        return WireLogAtoms(message, written, duration)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.error_logger, name)


class WireLogAtoms(dict):
    def __init__(self, message: "HttpMessage", written: Sequence[int], duration: float) -> None:
        for name, value in message.headers:
            self[f"{{{name.lower()}}}h"] = value
        for name, value in os.environ.items():
            self[f"{{{name.lower()}}}e"] = value
        start_line = message.start_line
        body = message.body
        self.update(
            {
                "t": time.strftime("[%d/%b/%Y:%H:%M:%S %z]"),
                "l": str(start_line),
                "m": getattr(start_line, "method", "-"),
                "U": getattr(start_line, "target", "-"),
                "s": getattr(start_line, "status_code", "-"),
                "H": str(start_line.http_version),
                "n": len(written),
                "b": written[0] if written else 0,
                "B": sum(written),
                "k": type(body).__name__ if body is not None else "-",
                "T": int(duration),
                "D": int(duration * 1_000_000),
                "L": f"{duration:.6f}",
                "p": f"<{os.getpid()}>",
            }
        )

    def __getitem__(self, key: str) -> str:
        try:
            if key.startswith("{"):
                return super().__getitem__(key.lower())
            else:
                return super().__getitem__(key)
        except KeyError:
            return "-"
