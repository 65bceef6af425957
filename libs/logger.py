import logging
import os
from contextvars import ContextVar

# Set by the session middleware in main.py for the lifetime of a request.
session_id_var: ContextVar[str] = ContextVar("session_id", default="-")


class SessionFilter(logging.Filter):
    """
    Stamps every record with the session id of the request being served.
    """

    def filter(self, record):
        record.session_id = session_id_var.get()
        return True


class ColoredFormatter(logging.Formatter):
    """
    A custom formatter that adds color to log messages based on their level.
    """

    COLORS = {
        "DEBUG": "\033[94m",  # Blue
        "INFO": "\033[92m",  # Green
        "WARNING": "\033[93m",  # Yellow
        "ERROR": "\033[91m",  # Red
        "CRITICAL": "\033[95m",  # Magenta
        "RESET": "\033[0m",  # Reset color
    }

    def __init__(self, fmt=None, datefmt=None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        log_message = super().format(record)
        if not self.use_color:
            return log_message
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        return f"{color}{log_message}{self.COLORS['RESET']}"


def get_logger(name: str) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        name: The name of the logger, typically __name__ of the calling module.

    Returns:
        A configured logging.Logger instance whose records carry the
        current request's session id.
    """
    logger = logging.getLogger(name)
    logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

    # Ensure handlers are not duplicated if get_logger is called multiple times
    if not logger.handlers:
        ch = logging.StreamHandler()
        formatter = ColoredFormatter(
            "%(levelname)s - %(name)s - [%(session_id)s] %(message)s -----> %(asctime)s",
            use_color=ch.stream.isatty(),
        )
        ch.setFormatter(formatter)
        ch.addFilter(SessionFilter())
        logger.addHandler(ch)

    return logger
