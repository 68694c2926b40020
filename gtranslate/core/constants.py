# -*- coding: utf-8 -*-
"""
Core Constants
==============
Centralized configuration constants for the gtranslate core.
Hosts, user agents and the token micro-programs live here so they can be
updated without touching the logic.
"""

import re

# ============================================================================
# TRANSLATION ENDPOINTS
# ============================================================================

DEFAULT_SERVICE_URLS = [
    "translate.google.com",
]

TRANSLATE_PATH = "/translate_a/single"

# Used by Translator.get_available_languages_http
LANGUAGES_DOCS_URL = "https://cloud.google.com/translate/docs/languages"
LANGUAGES_DOCS_COOKIE = "_ga_devsite=GA1.3.3578724760.1690567683"

# Fixed flags for the response shape (dj=1 -> JSON object with "sentences")
RESPONSE_FLAGS = [
    ("dt", "t"),
    ("dt", "bd"),
    ("dj", "1"),
    ("source", "popup"),
]

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

# ============================================================================
# TOKEN DERIVATION
# ============================================================================

# Embedded assignment in the host page, e.g. tkk:'448487.932609646'
KEY_PAIR_RE = re.compile(r"([A-Za-z_$][\w$]*):'(-?\d+)\.(-?\d+)'")
DEFAULT_KEY_NAME = "tkk"

# Mix programs: groups of (combine op, shift direction, magnitude)
MIX_PROGRAM_STEP = "+-a^+6"
MIX_PROGRAM_FINAL = "+-3^+b+-f"

MASK_32 = 0xFFFFFFFF
TOKEN_MODULUS = 1000000
HOUR_MS = 3600000

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# ============================================================================
# TIMEOUTS & RETRIES
# ============================================================================

REQUEST_TIMEOUT_TOTAL = 15
KEY_FALLBACK_RETRY = 60  # seconds before a synthetic pair is re-fetched
