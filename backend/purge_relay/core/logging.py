import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler at ``level`` unless one is already configured."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("purge_relay").setLevel(level.upper())
