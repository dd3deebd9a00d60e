import logging

LOG_FORMAT = "[CitrusCrush] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Install a basic stderr handler for the ``citrus`` loggers."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("citrus").setLevel(level)
