import logging

LOGGER_NAME = "pokedex_bff"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.setLevel(level.upper())
