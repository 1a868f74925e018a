"""Inline button callback routing.

Decodes callback data once into a ``CallbackAction`` and applies it:
saving a card to favorites, recording like/dislike feedback, or removing a
favorite and re-rendering the favorites message in place. Every callback
query is answered, with a visible alert when nothing could be done.
"""

import logging

from telegram import CallbackQuery, Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ..models import Card, FeedbackKind
from ..services.card_registry import CardRegistry
from ..services.state_store import StateStore
from .messages import (
    CALLBACK_ALREADY_SAVED,
    CALLBACK_CHAT_NOT_FOUND,
    CALLBACK_ERROR,
    CALLBACK_NOT_FOUND,
    CALLBACK_REMOVED,
    CALLBACK_SAVED,
    CALLBACK_THANKS,
    NO_FAVORITES_MESSAGE,
)
from .response_formatter import ResponseFormatter
from .types import ActionKind, CallbackAction

logger = logging.getLogger(__name__)

_FEEDBACK_KINDS = {
    ActionKind.FB_LIKE: FeedbackKind.LIKE,
    ActionKind.FB_DISLIKE: FeedbackKind.DISLIKE,
}


class CallbackRouter:
    """Dispatches inline button presses against favorites and feedback state."""

    def __init__(
        self,
        state_store: StateStore,
        card_registry: CardRegistry,
        response_formatter: ResponseFormatter,
    ) -> None:
        self.state_store = state_store
        self.card_registry = card_registry
        self.response_formatter = response_formatter

    async def handle(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle a callback query from an inline button.

        Args:
            update: Telegram update carrying the callback query.
            context: Bot context.
        """
        query = update.callback_query
        if query is None:
            return

        chat = update.effective_chat
        if chat is None:
            await query.answer(CALLBACK_CHAT_NOT_FOUND, show_alert=True)
            return

        action = CallbackAction.decode(query.data)
        if action is None:
            logger.warning("Chat %s sent unknown callback data %r", chat.id, query.data)
            await query.answer(CALLBACK_NOT_FOUND, show_alert=True)
            return

        try:
            await self.dispatch(chat.id, action, query)
        except Exception as e:
            logger.error(f"Error handling callback {action.encode()} in chat {chat.id}: {e}")
            await query.answer(CALLBACK_ERROR, show_alert=True)

    async def dispatch(self, chat_id: int, action: CallbackAction, query: CallbackQuery) -> None:
        """Apply a decoded action and answer the query."""
        if action.kind is ActionKind.FAV_REMOVE:
            await self._remove_favorite(chat_id, action.index, query)
            return

        message_id = query.message.message_id if query.message else None
        card = self.card_registry.get(chat_id, action.index, message_id)
        if card is None:
            await query.answer(CALLBACK_NOT_FOUND, show_alert=True)
            return

        if action.kind is ActionKind.FAV_SAVE:
            await self._save_favorite(chat_id, card, query)
        else:
            await self.state_store.record_feedback(chat_id, card, _FEEDBACK_KINDS[action.kind])
            await query.answer(CALLBACK_THANKS)

    async def _save_favorite(self, chat_id: int, card: Card, query: CallbackQuery) -> None:
        result = await self.state_store.add_favorite(chat_id, card)
        await query.answer(CALLBACK_SAVED if result.added else CALLBACK_ALREADY_SAVED)

    async def _remove_favorite(self, chat_id: int, index: int, query: CallbackQuery) -> None:
        if not await self.state_store.remove_favorite(chat_id, index):
            await query.answer(CALLBACK_NOT_FOUND, show_alert=True)
            return

        favorites = self.state_store.favorites(chat_id)
        if favorites:
            await query.edit_message_text(
                self.response_formatter.format_favorites(favorites),
                parse_mode=ParseMode.HTML,
                reply_markup=self.response_formatter.favorites_keyboard(favorites),
            )
        else:
            await query.edit_message_text(NO_FAVORITES_MESSAGE)

        await query.answer(CALLBACK_REMOVED)
