import os
import logging
import sys
import uvicorn


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log output."""

    # ANSI color codes
    grey = "\x1b[38;21m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    orange = "\x1b[38;5;208m"
    reset = "\x1b[0m"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: green,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red
    }

    def format(self, record):
        formatted = super().format(record)

        # Only colorize if outputting to terminal
        if sys.stdout.isatty():
            log_color = self.COLORS.get(record.levelno, self.grey)

            # "timestamp - LEVEL - name - message"
            parts = formatted.split(' - ', 3)
            if len(parts) >= 3:
                timestamp, level = parts[0], parts[1]
                rest = ' - '.join(parts[2:])
                formatted = f"{self.orange}{timestamp}{self.reset} - {log_color}{level}{self.reset} - {rest}"

        return formatted


def setup_logging():
    """Route the root logger and uvicorn's loggers through one colored stdout handler."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter(
        '%(asctime)s - %(levelname)-8s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    for name in ("uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(logging.INFO)


setup_logging()


def configure_module_logging():
    """Set spiget_backend log levels from LOG_LEVEL (default INFO)."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if log_level not in valid_levels:
        log_level = "INFO"

    backend_modules = [
        "spiget_backend",  # Root module - this catches all sub-modules
        "spiget_backend.api",
        "spiget_backend.business_logic",
        "spiget_backend.repositories",
        "spiget_backend.spigot",
        "spiget_backend.exceptions",
    ]

    for module in backend_modules:
        logging.getLogger(module).setLevel(getattr(logging, log_level))

    if log_level in ["ERROR", "CRITICAL"]:
        # Suppress access logs in quiet mode
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return log_level


if __name__ == "__main__":
    level = configure_module_logging()

    uvicorn_log_level = os.environ.get("UVICORN_LOG_LEVEL", "info").lower()

    print(f"Starting server with log level: {level}, Uvicorn log level: {uvicorn_log_level}")

    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "colored": {
                "()": ColoredFormatter,
                "fmt": "%(asctime)s - %(levelname)-8s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "colored",
                "stream": "ext://sys.stdout"
            },
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": uvicorn_log_level.upper(),
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": uvicorn_log_level.upper(),
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["default"],
                "level": "INFO" if uvicorn_log_level != "error" else "WARNING",
                "propagate": False
            }
        }
    }

    uvicorn.run(
        "spiget_backend.server:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        log_config=log_config,
        workers=int(os.environ.get("WORKERS", "1")),
    )
