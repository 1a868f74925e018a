"""Data models for the advisor bot application.

Defines Pydantic models for the data exchanged with the recommendation API
(turns, cards, replies) and for the persisted favorites/feedback document.
Card field names follow the API's camelCase wire format through aliases.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Turn(BaseModel):
    """One message in a conversation.

    Attributes:
        role: Speaker of the message, the user or the bot.
        content: Message text.
    """

    role: Literal["user", "bot"]
    content: str = ""


class Card(BaseModel):
    """Credit card record supplied by the recommendation API.

    Unknown fields sent by the API are kept so that a saved favorite
    round-trips through the state file unchanged.

    Attributes:
        card_name: Display name of the card.
        issuer: Issuing bank.
        network: Payment network (Visa, Mastercard, ...).
        network_tier: Network tier (Signature, World Elite, ...).
        details: Free-form attribute mapping rendered as label/value lines.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    card_name: str = Field(default="", alias="cardName")
    issuer: str = ""
    network: str = ""
    network_tier: str = Field(default="", alias="networkTier")
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("card_name", "issuer", "network", "network_tier", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("details", mode="before")
    @classmethod
    def _none_as_no_details(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def slug(self) -> str:
        """Identity used for favorite de-duplication and feedback keys."""
        return f"{self.issuer}|{self.card_name}"


class RecommendationReply(BaseModel):
    """Structured reply from the recommendation API.

    Attributes:
        response_text: Free text answer, None if the API sent none.
        cards: Recommended cards, empty if none.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    response_text: str | None = Field(default=None, alias="responseText")
    cards: list[Card] = Field(default_factory=list)

    @field_validator("cards", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ChatResponse(BaseModel):
    """Envelope returned by the recommendation API."""

    model_config = ConfigDict(extra="ignore")

    reply: RecommendationReply = Field(default_factory=RecommendationReply)

    @field_validator("reply", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class FeedbackKind(str, Enum):
    """Kind of feedback a user can leave on a card."""

    LIKE = "like"
    DISLIKE = "dislike"


class FeedbackEntry(BaseModel):
    """Like/dislike tally for one card in one chat."""

    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)


class FavoriteResult(BaseModel):
    """Outcome of saving a card to favorites.

    Attributes:
        added: False when a card with the same slug was already saved.
    """

    added: bool


class StateDocument(BaseModel):
    """Persisted favorites and feedback, the whole durable state of the bot.

    Attributes:
        favorites: Saved cards per chat in insertion order.
        feedback: Feedback tallies per chat keyed by card slug.
    """

    favorites: dict[int, list[Card]] = Field(default_factory=dict)
    feedback: dict[int, dict[str, FeedbackEntry]] = Field(default_factory=dict)
