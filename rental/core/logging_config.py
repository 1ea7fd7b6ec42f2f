import logging

from rental.core.config import settings

LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
