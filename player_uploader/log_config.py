import logging

LOG_FORMAT = "[%(asctime)s][%(levelname)s][%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

HANDLER_NAME = "player_uploader"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once; the handler is only installed the first time.
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        raise ValueError(
            f"Invalid LOG_LEVEL: {level}. Must be one of {', '.join(VALID_LEVELS)}."
        )

    logger = logging.getLogger("player_uploader")
    logger.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    return logger
