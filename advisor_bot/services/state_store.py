"""Persisted favorites and feedback store.

The whole durable state of the bot is one small JSON document::

    {"favorites": {"<chat_id>": [<card>, ...]},
     "feedback": {"<chat_id>": {"<issuer>|<cardName>": {"likes": 0, "dislikes": 0}}}}

It is loaded once at startup and rewritten in full after every mutation,
before the mutating call returns. Mutations are serialized by a lock so
concurrent button presses never overwrite each other. A crash in the middle
of a flush can lose that last write, but never leaves a truncated file
behind because the document is written to a temporary file and renamed.
"""

import asyncio
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ..models import Card, FavoriteResult, FeedbackEntry, FeedbackKind, StateDocument

logger = logging.getLogger(__name__)


class StateStore:
    """Durable per-chat favorites and per-card feedback tallies."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the store and load the state file.

        Args:
            path: Location of the JSON state document.
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()
        self._document = self._load()

    def _load(self) -> StateDocument:
        """Read the state file, falling back to empty state.

        Returns:
            Parsed document, or an empty one if the file is missing or invalid.
        """
        if not self.path.exists():
            logger.info("State file %s not found, starting with empty state", self.path)
            return StateDocument()

        try:
            raw = self.path.read_text(encoding="utf-8")
            document = StateDocument.model_validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Failed to load state file {self.path}, starting with empty state: {e}")
            return StateDocument()

        logger.info(
            "Loaded state: %d chats with favorites, %d chats with feedback",
            len(document.favorites),
            len(document.feedback),
        )
        return document

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def _commit(self, document: StateDocument) -> None:
        """Write ``document`` to disk, then make it the current state.

        The in-memory document is only replaced after a successful write, so
        a failed flush leaves memory and disk in agreement.
        """
        payload = document.model_dump_json(by_alias=True, indent=2)
        await asyncio.to_thread(self._write, payload)
        self._document = document

    def favorites(self, chat_id: int) -> list[Card]:
        """Saved cards of a chat in the order they were added."""
        return list(self._document.favorites.get(chat_id, []))

    def feedback(self, chat_id: int, slug: str) -> FeedbackEntry:
        """Feedback tally for a card, zeroed if none was recorded."""
        entry = self._document.feedback.get(chat_id, {}).get(slug)
        return entry.model_copy() if entry else FeedbackEntry()

    async def add_favorite(self, chat_id: int, card: Card) -> FavoriteResult:
        """Save a card unless a card with the same slug is already saved.

        Args:
            chat_id: Chat saving the card.
            card: Card to save.

        Returns:
            FavoriteResult with ``added`` False if the card was already present.
        """
        async with self._lock:
            saved = self._document.favorites.get(chat_id, [])
            if any(existing.slug == card.slug for existing in saved):
                return FavoriteResult(added=False)

            favorites = {**self._document.favorites, chat_id: [*saved, card.model_copy(deep=True)]}
            await self._commit(self._document.model_copy(update={"favorites": favorites}))

        logger.info("Chat %s saved favorite %s", chat_id, card.slug)
        return FavoriteResult(added=True)

    async def remove_favorite(self, chat_id: int, index: int) -> bool:
        """Remove a saved card by its position in the favorites list.

        Returns:
            True if a card was removed, False if the index is out of range.
        """
        async with self._lock:
            saved = self._document.favorites.get(chat_id, [])
            if not 0 <= index < len(saved):
                return False

            removed = saved[index]
            remaining = saved[:index] + saved[index + 1:]
            favorites = dict(self._document.favorites)
            if remaining:
                favorites[chat_id] = remaining
            else:
                del favorites[chat_id]
            await self._commit(self._document.model_copy(update={"favorites": favorites}))

        logger.info("Chat %s removed favorite %s", chat_id, removed.slug)
        return True

    async def record_feedback(self, chat_id: int, card: Card, kind: FeedbackKind) -> FeedbackEntry:
        """Increment the like or dislike counter of a card.

        Returns:
            Updated tally for the card.
        """
        async with self._lock:
            chat_feedback = self._document.feedback.get(chat_id, {})
            entry = chat_feedback.get(card.slug, FeedbackEntry())
            if kind is FeedbackKind.LIKE:
                entry = entry.model_copy(update={"likes": entry.likes + 1})
            else:
                entry = entry.model_copy(update={"dislikes": entry.dislikes + 1})

            feedback = {**self._document.feedback, chat_id: {**chat_feedback, card.slug: entry}}
            await self._commit(self._document.model_copy(update={"feedback": feedback}))

        logger.info("Chat %s left %s feedback on %s", chat_id, kind.value, card.slug)
        return entry.model_copy()
