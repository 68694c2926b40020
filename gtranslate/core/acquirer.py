# -*- coding: utf-8 -*-
"""Token acquirer: current key pair + token transform."""

import logging

from gtranslate.core.key_store import KeyPair, KeyPairStore
from gtranslate.core.token import derive_token


class TokenAcquirer:
    """Produces ``tk`` values for the request builder.

    Example usage, with a store whose current pair is ``KeyPair(0, 0)``:
        >>> acquirer = TokenAcquirer(store)
        >>> await acquirer.do("")
        '0.0'
    """

    def __init__(self, store: KeyPairStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def do(self, text: str) -> str:
        pair = await self.store.current()
        token = derive_token(text, pair)
        self.logger.debug(f"Derived token for {len(text)} chars of text")
        return token

    async def refresh(self) -> KeyPair:
        """Drop the cached pair and fetch a new one right away."""
        self.logger.debug("Manual key pair refresh requested")
        return await self.store.refresh()
