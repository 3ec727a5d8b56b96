"""Logging configuration for the ray tracer."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = "INFO"

_ROOT_LOGGERS = ("core", "renderers", "scene_builders", "main")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    콘솔 로깅 설정. 여러 번 호출해도 핸들러는 하나만 붙는다.

    Args:
        level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        "main" 로거
    """
    if level is None:
        level = DEFAULT_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)

    for name in _ROOT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        if not any(getattr(h, "_raytracer_handler", False) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            handler._raytracer_handler = True
            logger.addHandler(handler)
        for handler in logger.handlers:
            handler.setLevel(numeric_level)

    return logging.getLogger("main")
