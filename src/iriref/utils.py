import logging


def makeSimpleLogger(name: str, level: int = logging.INFO) -> logging.Logger:
    logger: logging.Logger = logging.getLogger(name)
    logger.setLevel(level)
    ch: logging.StreamHandler = logging.StreamHandler()
    fmt: str = (
        "[%(asctime)s] - %(levelname)8s - "
        "%(name)14s - "
        "%(filename)16s:%(lineno)-4d - "
        "%(message)s"
    )
    ch.setFormatter(logging.Formatter(fmt))
    logger.addHandler(ch)
    return logger


# library use stays quiet unless the application turns the level down
log: logging.Logger = makeSimpleLogger("iriref", level=logging.WARNING)
