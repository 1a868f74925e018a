"""Per-chat conversation history.

Keeps the most recent turns of every chat so they can be sent along with
the next message to the recommendation API. History is in-memory only and
is lost on restart.
"""

import logging

from ..models import Turn
from .chat_cache import ChatCache

logger = logging.getLogger(__name__)


class ConversationStore:
    """Bounded history of the last ``history_limit`` turns per chat."""

    def __init__(self, history_limit: int = 2, max_chats: int = 10000) -> None:
        """Initialize conversation store.

        Args:
            history_limit: Turns kept per chat, oldest evicted first.
            max_chats: Chats kept before the least recently used is dropped.
        """
        if history_limit < 1:
            raise ValueError("history_limit must be positive")
        self.history_limit = history_limit
        self._histories: ChatCache[list[Turn]] = ChatCache(max_chats)

    def get(self, chat_id: int) -> list[Turn]:
        """Return a copy of the chat history, empty for unseen chats."""
        return list(self._histories.get(chat_id) or [])

    def append(self, chat_id: int, turn: Turn) -> None:
        """Append a turn and keep only the most recent ``history_limit`` turns."""
        history = self.get(chat_id)
        history.append(turn)
        self._histories.set(chat_id, history[-self.history_limit:])

    def reset(self, chat_id: int) -> None:
        """Start the chat over with an empty history."""
        self._histories.set(chat_id, [])
        logger.debug("Conversation history reset for chat %s", chat_id)

    def clear(self) -> None:
        self._histories.clear()
