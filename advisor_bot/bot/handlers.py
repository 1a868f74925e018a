"""Telegram bot handlers.

Thin handlers that resolve their collaborators from the dependency-injection
container stored in ``bot_data`` and delegate to the recommendation client,
conversation and state stores, the response formatter and the callback
router.
"""

import logging

from telegram import Update
from telegram.constants import ChatAction, ParseMode
from telegram.ext import ContextTypes

from ..core.container import CONTAINER_KEY, Container
from ..models import RecommendationReply, Turn
from .messages import (
    DEFAULT_USERNAME,
    GENERIC_ERROR_MESSAGE,
    HEALTH_FAILED_MESSAGE,
    HEALTH_OK_MESSAGE,
    NO_FAVORITES_MESSAGE,
    NON_TEXT_MESSAGE,
    SERVICE_UNAVAILABLE_MESSAGE,
    START_MESSAGE,
)

logger = logging.getLogger(__name__)


def _container(context: ContextTypes.DEFAULT_TYPE) -> Container:
    return context.bot_data[CONTAINER_KEY]


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command.

    Starts the conversation over and greets the user. Favorites and feedback
    are left untouched.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if not update.message or not update.effective_chat:
        return

    chat_id = update.effective_chat.id
    _container(context).conversation_store().reset(chat_id)

    user = update.effective_user
    username = (user.username if user else None) or update.effective_chat.username
    await update.message.reply_text(START_MESSAGE.format(username=username or DEFAULT_USERNAME))
    logger.info(f"Chat {chat_id} started a new conversation")


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle free-text messages.

    Sends the message with the recent history to the recommendation API,
    replies with the response text and one message per recommended card,
    and records the exchange in the conversation history. When the API
    cannot be reached the history is left unchanged.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if not update.message or not update.effective_chat:
        return

    text = update.message.text
    if not text:
        await reject_non_text(update, context)
        return

    chat_id = update.effective_chat.id
    container = _container(context)
    conversation = container.conversation_store()

    logger.info(f"Received message from chat {chat_id}")

    try:
        await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)

        reply = await container.recommendation_client().recommend(conversation.get(chat_id), text)
        if reply is None:
            await update.message.reply_text(SERVICE_UNAVAILABLE_MESSAGE)
            return

        await _send_reply(update, context, chat_id, reply)

        conversation.append(chat_id, Turn(role="user", content=text))
        conversation.append(chat_id, Turn(role="bot", content=reply.response_text or ""))

    except Exception as e:
        logger.error(f"Error processing message from chat {chat_id}: {e}")
        await update.message.reply_text(GENERIC_ERROR_MESSAGE)


async def _send_reply(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    chat_id: int,
    reply: RecommendationReply,
) -> None:
    """Send the response text and the card messages of a reply."""
    message = update.message
    if message is None:
        return

    if reply.response_text:
        await message.reply_text(reply.response_text)

    if not reply.cards:
        return

    container = _container(context)
    formatter = container.response_formatter()

    message_ids = []
    for index, card in enumerate(reply.cards):
        sent = await message.reply_text(
            formatter.format_card(card),
            parse_mode=ParseMode.HTML,
            reply_markup=formatter.card_keyboard(index),
        )
        message_ids.append(sent.message_id)

    # Registered only once every card message has an ID
    container.card_registry().set_last(chat_id, reply.cards, message_ids)


async def reject_non_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Answer photos, stickers and other non-text messages with guidance."""
    if update.message:
        await update.message.reply_text(NON_TEXT_MESSAGE)


async def favorites_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /favorites command.

    Lists saved cards with one remove button per card, or tells the user
    there is nothing saved yet.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if not update.message or not update.effective_chat:
        return

    container = _container(context)
    favorites = container.state_store().favorites(update.effective_chat.id)

    if not favorites:
        await update.message.reply_text(NO_FAVORITES_MESSAGE)
        return

    formatter = container.response_formatter()
    await update.message.reply_text(
        formatter.format_favorites(favorites),
        parse_mode=ParseMode.HTML,
        reply_markup=formatter.favorites_keyboard(favorites),
    )


async def health_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /health command with a single-attempt check of the API."""
    if not update.message:
        return

    healthy = await _container(context).recommendation_client().check_health()
    await update.message.reply_text(HEALTH_OK_MESSAGE if healthy else HEALTH_FAILED_MESSAGE)


async def handle_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route inline button presses to the callback router."""
    await _container(context).callback_router().handle(update, context)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors escaping other handlers and apologize to the user.

    Args:
        update: Update being processed, if any.
        context: Bot context carrying the raised error.
    """
    logger.error("Unhandled error while processing update", exc_info=context.error)

    if not isinstance(update, Update):
        return

    try:
        if update.callback_query:
            await update.callback_query.answer(GENERIC_ERROR_MESSAGE, show_alert=True)
        elif update.effective_message:
            await update.effective_message.reply_text(GENERIC_ERROR_MESSAGE)
    except Exception as e:
        logger.warning(f"Failed to notify user about error: {e}")
