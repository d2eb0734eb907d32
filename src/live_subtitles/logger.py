import sys
import logging
from loguru import logger


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (requests/urllib3, Qt bindings) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO"):
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level.upper(),
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # requests logs every connection at DEBUG
    for lib in ["urllib3", "requests", "keyboard"]:
        logging.getLogger(lib).handlers = []
        logging.getLogger(lib).propagate = True
        logging.getLogger(lib).setLevel(logging.WARNING)

__all__ = ["logger", "setup_logging"]
