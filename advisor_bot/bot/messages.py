"""Telegram bot message templates and constants.

Contains all user-facing message templates, callback notices, and button
labels. Centralizes message management for consistent user experience
across different bot features.
"""

# Bot commands and descriptions
START_MESSAGE = (
    "Welcome to Networth Credit Card Advisor Bot, @{username}!\n\n"
    "I can help you find the best credit card based on your spending habits and preferences.\n\n"
    "Tell me a bit about your spending habits (groceries, dining, travel, or online shopping)?"
)
DEFAULT_USERNAME = "there"

# Error messages
SERVICE_UNAVAILABLE_MESSAGE = (
    "⚠️ I'm having trouble reaching the recommendation service right now. "
    "Please try again in a moment."
)
GENERIC_ERROR_MESSAGE = "❌ Sorry, something went wrong while handling your message. Please try again."
NON_TEXT_MESSAGE = (
    "I can only read text messages. "
    "Please describe your spending habits or ask about a credit card in words."
)

# Favorites
NO_FAVORITES_MESSAGE = (
    "You have no favorites yet. Tap ⭐ Save under a recommended card to keep it here."
)
FAVORITES_HEADER = "⭐ <b>Your favorite cards</b>"
FAVORITE_LINE = "{number}. <b>{card_name}</b> ({issuer})"

# Health check
HEALTH_OK_MESSAGE = "✅ Recommendation service is reachable."
HEALTH_FAILED_MESSAGE = "❌ Recommendation service is not responding."

# Card rendering
CARD_NAME_LINE = "<b>{card_name}</b>"
CARD_ISSUER_LINE = "Issuer: {issuer}"
CARD_NETWORK_LINE = "Network: {network} ({network_tier})"
CARD_DETAIL_LINE = "<b>{label}:</b> {value}"
MISSING_VALUE = "N/A"

# Inline button labels
BUTTON_SAVE = "⭐ Save"
BUTTON_LIKE = "👍"
BUTTON_DISLIKE = "👎"
BUTTON_REMOVE = "❌ Remove {number}. {card_name}"

# Callback notices
CALLBACK_SAVED = "⭐ Saved to favorites"
CALLBACK_ALREADY_SAVED = "Already in favorites"
CALLBACK_THANKS = "Thanks for your feedback!"
CALLBACK_REMOVED = "Removed from favorites"
CALLBACK_NOT_FOUND = "Card not found. It may be from an older message, please ask again."
CALLBACK_CHAT_NOT_FOUND = "Chat not found."
CALLBACK_ERROR = "❌ Something went wrong, please try again."
