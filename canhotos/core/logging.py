import logging


class PrivacyFilter(logging.Filter):
    """Redact credentials passed to loggers through ``extra``."""

    BLOCKED_KEYS = {"password", "senha", "password_hash", "token"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    root = logging.getLogger()
    # Filters on a logger are skipped for records propagated from child loggers.
    for handler in root.handlers:
        if not any(isinstance(existing, PrivacyFilter) for existing in handler.filters):
            handler.addFilter(PrivacyFilter())
