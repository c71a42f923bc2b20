# hlsl_assets/log.py
import logging
import os

logger = logging.getLogger("hlsl_assets")


def _set_log_level() -> None:
    logger.setLevel(logging.WARNING)
    level = os.getenv("HLSL_ASSETS_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except ValueError:
            logger.warning(f"Invalid hlsl_assets log level: {level}")


_set_log_level()
