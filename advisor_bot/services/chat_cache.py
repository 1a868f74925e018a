"""Bounded in-memory cache keyed by chat ID.

Backs the per-chat conversation history and recently shown cards. Entries
live for the lifetime of the process; once ``max_chats`` is exceeded the
least recently used chat is dropped.
"""

import logging
from collections import OrderedDict
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChatCache(Generic[T]):
    """LRU mapping of chat ID to a value."""

    def __init__(self, max_chats: int = 10000) -> None:
        if max_chats < 1:
            raise ValueError("max_chats must be positive")
        self.max_chats = max_chats
        self._entries: OrderedDict[int, T] = OrderedDict()

    def get(self, chat_id: int) -> T | None:
        value = self._entries.get(chat_id)
        if value is not None:
            self._entries.move_to_end(chat_id)
        return value

    def set(self, chat_id: int, value: T) -> None:
        self._entries[chat_id] = value
        self._entries.move_to_end(chat_id)

        while len(self._entries) > self.max_chats:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted chat %s from cache", evicted)

    def clear(self) -> None:
        self._entries.clear()
