# -*- coding: utf-8 -*-
"""Exception hierarchy for the gtranslate client."""

from typing import Optional


class TranslatorError(Exception):
    """Base class for every error raised by gtranslate."""


class KeyFetchError(TranslatorError):
    """The host page holding the key pair could not be downloaded."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class KeyParseError(TranslatorError):
    """The host page was downloaded but no usable key pair was found in it."""


class HTTPStatusError(TranslatorError):
    """An endpoint answered with an unexpected status code.

    A token the server rejects shows up here as well; the two cases cannot
    be told apart from the client side.
    """

    def __init__(self, status: int, url: str = ""):
        super().__init__(f"expected status 200, got: {status} ({url})")
        self.status = status
        self.url = url


class TransportError(TranslatorError):
    """Network failure while talking to an endpoint."""


class ResponseParseError(TranslatorError):
    """Response body did not have the expected JSON shape."""


class InvalidLanguageError(TranslatorError, ValueError):
    def __init__(self, lang: str, default: str = "auto"):
        super().__init__(f"invalid language '{lang}'")
        self.lang = lang
        self.default = default
