"""Response formatting for bot messages and inline keyboards.

Renders recommended cards and favorites lists as Telegram HTML and builds
the inline keyboards whose callback data the callback router decodes.
All values coming from the recommendation API are HTML-escaped.
"""

import html
import re
from typing import Any

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from ..models import Card
from .messages import (
    BUTTON_DISLIKE,
    BUTTON_LIKE,
    BUTTON_REMOVE,
    BUTTON_SAVE,
    CARD_DETAIL_LINE,
    CARD_ISSUER_LINE,
    CARD_NAME_LINE,
    CARD_NETWORK_LINE,
    FAVORITE_LINE,
    FAVORITES_HEADER,
    MISSING_VALUE,
)
from .types import ActionKind, CallbackAction

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")
_WHITESPACE = re.compile(r"\s+")


def humanize_label(key: str) -> str:
    """Turn a camelCase or snake_case detail key into a readable label.

    ``annualFee`` becomes ``Annual Fee`` and ``reward_rate`` becomes
    ``Reward rate``.
    """
    label = _CAMEL_BOUNDARY.sub(r" \1", key).replace("_", " ")
    label = _WHITESPACE.sub(" ", label).strip()
    return label[:1].upper() + label[1:]


def _display_value(value: Any) -> str:
    if value is None or value == "":
        return MISSING_VALUE
    return html.escape(str(value))


class ResponseFormatter:
    """Formats cards, favorites lists and their inline keyboards."""

    def format_card(self, card: Card) -> str:
        """Format a single card as an HTML message.

        Args:
            card: Card from the recommendation reply.

        Returns:
            Name, issuer and network lines followed by one line per detail.
        """
        lines = [
            CARD_NAME_LINE.format(card_name=html.escape(card.card_name)),
            CARD_ISSUER_LINE.format(issuer=html.escape(card.issuer)),
            CARD_NETWORK_LINE.format(
                network=html.escape(card.network),
                network_tier=html.escape(card.network_tier),
            ),
        ]

        if card.details:
            lines.append("")
            for key, value in card.details.items():
                lines.append(
                    CARD_DETAIL_LINE.format(
                        label=html.escape(humanize_label(key)), value=_display_value(value)
                    )
                )

        return "\n".join(lines)

    def card_keyboard(self, index: int) -> InlineKeyboardMarkup:
        """Build save/like/dislike buttons for the card at ``index`` of the batch."""
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(
                        BUTTON_SAVE,
                        callback_data=CallbackAction(ActionKind.FAV_SAVE, index).encode(),
                    ),
                    InlineKeyboardButton(
                        BUTTON_LIKE,
                        callback_data=CallbackAction(ActionKind.FB_LIKE, index).encode(),
                    ),
                    InlineKeyboardButton(
                        BUTTON_DISLIKE,
                        callback_data=CallbackAction(ActionKind.FB_DISLIKE, index).encode(),
                    ),
                ]
            ]
        )

    def format_favorites(self, favorites: list[Card]) -> str:
        """Format the numbered favorites list.

        Args:
            favorites: Saved cards, must not be empty.

        Returns:
            HTML message listing the saved cards.
        """
        lines = [FAVORITES_HEADER, ""]
        for number, card in enumerate(favorites, start=1):
            lines.append(
                FAVORITE_LINE.format(
                    number=number,
                    card_name=html.escape(card.card_name),
                    issuer=html.escape(card.issuer),
                )
            )
        return "\n".join(lines)

    def favorites_keyboard(self, favorites: list[Card]) -> InlineKeyboardMarkup:
        """Build one remove button per saved card, in list order."""
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(
                        BUTTON_REMOVE.format(number=index + 1, card_name=card.card_name),
                        callback_data=CallbackAction(ActionKind.FAV_REMOVE, index).encode(),
                    )
                ]
                for index, card in enumerate(favorites)
            ]
        )

