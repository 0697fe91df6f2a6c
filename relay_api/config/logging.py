import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """
    Set up the root logger with a single stdout handler.

    Does nothing if the root logger already has handlers, e.g. when the host
    process configured logging itself.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG".
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
