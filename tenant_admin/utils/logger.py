import logging
from typing import Optional

from tenant_admin.core.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every RPC/HTTP round trip at INFO or DEBUG
NOISY_LOGGERS = ("google", "grpc", "urllib3", "botocore", "boto3")

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach the service handler to the root logger and set its level.

    Safe to call again (e.g. from the CLI) to change the level; the handler
    is installed only once and never stacked on an existing root handler.
    """
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        if not root.handlers:
            root.addHandler(_handler)

    root.setLevel((level or settings.log_level).upper())
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if _handler is None:
        configure_logging()
    return logging.getLogger(name or "tenant_admin")
