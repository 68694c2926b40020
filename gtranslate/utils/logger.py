# -*- coding: utf-8 -*-
"""
Sensitive Data Masking and Logging Setup
========================================
Masks request tokens and proxy credentials before log records are written.
"""

import logging
import re
from typing import Optional

# Patterns to mask
MASKS = [
    (re.compile(r'([?&]tk=)[0-9.]+'), r'\1***MASKED***'),  # request token
    (re.compile(r'(\w+://)[^/\s:@]+:[^/\s@]+@'), r'\1***:***@'),  # proxy user:pass
]


def mask(text: str) -> str:
    for pattern, replacement in MASKS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Masks sensitive values in log records."""

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = mask(record.msg)

        # Arguments too, e.g. log.info("GET %s", url)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(mask(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True


def setup_logger(name: str = "gtranslate", log_file: Optional[str] = None, level=logging.INFO):
    """Configure the package logger with masking handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Drop existing handlers so repeated calls don't duplicate output
    if logger.handlers:
        logger.handlers = []

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    return logger
