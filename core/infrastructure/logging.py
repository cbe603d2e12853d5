"""
Logging infrastructure.

Process-wide logging setup; modules log through logging.getLogger(__name__).
"""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    Args:
        level: Level name, e.g. "INFO" or "DEBUG"
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    # Keep per-statement SQL out of INFO output unless echo_sql is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
