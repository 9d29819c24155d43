import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True  # No namespaces configured, allow everything
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, allowed_namespaces=None) -> logging.Logger:
    """
    Attach a stdout handler to the "busana" package logger.

    Modules log through logging.getLogger(__name__), so every logger under
    busana.* inherits this handler and level. Calling it again replaces the
    previous handler instead of stacking duplicates.
    """
    app_logger = logging.getLogger("busana")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, "_busana_handler", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._busana_handler = True
    if allowed_namespaces:
        console_handler.addFilter(NamespaceFilter(allowed_namespaces))
    app_logger.addHandler(console_handler)

    # Query-level chatter from the ORM stays out of the report logs unless asked for.
    logging.getLogger("tortoise").setLevel(logging.WARNING)
    return app_logger
