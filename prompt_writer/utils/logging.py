"""
Logging utilities for the Prompt Writer backend.

Provides standardized logger configuration.

Logging rules:
- NEVER log bearer tokens, API keys, or the Supabase publishable key
- NEVER log full template bodies or user-written prompts (may contain private text)
- Log ids, counts, category labels, confidence values and error codes

Acceptable logging:
- High-level events (e.g., "Model recommendation matched rule")
- Non-sensitive metadata (e.g., "template_id=42, format=text")
- Unrecognized answer values (e.g., "purpose='codng' not recognized")
"""

import logging
from typing import Optional, Union

from prompt_writer.config import settings


def resolve_level(level: Union[int, str, None]) -> int:
    """Map a level name or number to a logging level, defaulting to settings.LOG_LEVEL."""
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from prompt_writer.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    logger.setLevel(resolve_level(level))

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
