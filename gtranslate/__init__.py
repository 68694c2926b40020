# -*- coding: utf-8 -*-
"""
gtranslate
==========

Async client for the browser translate endpoint, including the ``tk``
request-token derivation.
"""

from gtranslate.core.acquirer import TokenAcquirer
from gtranslate.core.exceptions import (
    HTTPStatusError, InvalidLanguageError, KeyFetchError, KeyParseError,
    ResponseParseError, TranslatorError, TransportError,
)
from gtranslate.core.key_store import KeyPair, KeyPairCache, KeyPairStore
from gtranslate.core.languages import DEFAULT_LANGUAGE, DEFAULT_LANGUAGES, LanguageTable
from gtranslate.core.token import derive_token
from gtranslate.core.translator import (
    LDResponse, LDResult, Sentence, Translated, Translator, get_default_service_urls,
)
from gtranslate.utils.config import ConfigManager, TranslatorConfig
from gtranslate.version import VERSION

__all__ = [
    'Translator', 'TranslatorConfig', 'ConfigManager',
    'Translated', 'Sentence', 'LDResponse', 'LDResult',
    'TokenAcquirer', 'KeyPair', 'KeyPairCache', 'KeyPairStore', 'derive_token',
    'LanguageTable', 'DEFAULT_LANGUAGES', 'DEFAULT_LANGUAGE',
    'get_default_service_urls',
    'TranslatorError', 'KeyFetchError', 'KeyParseError', 'HTTPStatusError',
    'TransportError', 'ResponseParseError', 'InvalidLanguageError',
    'VERSION',
]
