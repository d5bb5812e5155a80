# meshdepth/utils/logger.py
# ---------------------------------------------------------------
# Минимальный логгер пакета.  Все сообщения идут в "meshdepth".
# ---------------------------------------------------------------

import logging

LOGGER_NAME = "meshdepth"


def init_logger(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger(LOGGER_NAME)


def set_level(level) -> None:
    """Поменять уровень логгера пакета (строка 'DEBUG' или int)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(level)


logger = init_logger()
