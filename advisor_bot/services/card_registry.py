"""Registry of the cards most recently shown in each chat.

Inline button callback data can only carry a short token, so buttons under a
card reference its position in the last batch shown. The registry maps that
position back to the full card until the next batch replaces it. Each
position is bound to the message that displayed it, so a button under a
message from an older batch never resolves to a card of the current one.
"""

from typing import NamedTuple

from ..models import Card
from .chat_cache import ChatCache


class ShownBatch(NamedTuple):
    """Cards of one reply and the IDs of the messages showing them."""

    cards: list[Card]
    message_ids: list[int]


class CardRegistry:
    """Last shown batch of cards per chat."""

    def __init__(self, max_chats: int = 10000) -> None:
        self._batches: ChatCache[ShownBatch] = ChatCache(max_chats)

    def set_last(self, chat_id: int, cards: list[Card], message_ids: list[int]) -> None:
        """Replace the whole cached batch for the chat.

        Args:
            chat_id: Chat the cards were shown in.
            cards: Cards in display order.
            message_ids: ID of the message showing each card, in the same order.

        Raises:
            ValueError: If the two sequences differ in length.
        """
        if len(cards) != len(message_ids):
            raise ValueError("Every shown card needs exactly one message ID")
        self._batches.set(chat_id, ShownBatch(list(cards), list(message_ids)))

    def get(self, chat_id: int, index: int, message_id: int | None) -> Card | None:
        """Resolve a button index to a card of the current batch.

        Args:
            chat_id: Chat the button was pressed in.
            index: Position carried in the callback data.
            message_id: ID of the message the button belongs to.

        Returns:
            The card, or None if the chat has no batch, the index is out of
            range, or the message is not the one showing that card.
        """
        batch = self._batches.get(chat_id)
        if batch is None or not 0 <= index < len(batch.cards):
            return None
        if message_id is None or batch.message_ids[index] != message_id:
            return None
        return batch.cards[index]

    def clear(self) -> None:
        self._batches.clear()
