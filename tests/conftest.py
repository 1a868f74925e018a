"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including environment setup,
sample cards, a container wired to a temporary state file, and builders for
mocked Telegram updates and contexts.
"""

import itertools
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from advisor_bot.core.container import CONTAINER_KEY, create_container
from advisor_bot.models import Card

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "test_bot_token_placeholder")
TEST_CHAT_ID = 12345


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup test environment variables for all tests."""
    monkeypatch.setenv("BOT_TOKEN", TEST_BOT_TOKEN)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    for key in (
        "RECOMMENDATION_API_URL",
        "RECOMMENDATION_TIMEOUT",
        "RECOMMENDATION_MAX_ATTEMPTS",
        "RECOMMENDATION_RETRY_DELAY",
        "STATE_FILE_PATH",
        "HISTORY_LIMIT",
        "MAX_CACHED_CHATS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_cards():
    """Sample Card objects as returned by the recommendation API."""
    return {
        "card_a": Card.model_validate(
            {
                "cardName": "Card A",
                "issuer": "BankX",
                "network": "Visa",
                "networkTier": "Signature",
                "details": {"annualFee": "$95", "reward_rate": "2%"},
            }
        ),
        "card_b": Card.model_validate(
            {
                "cardName": "Card B",
                "issuer": "BankY",
                "network": "Mastercard",
                "networkTier": "World Elite",
                "details": {},
            }
        ),
        "card_c": Card.model_validate(
            {
                "cardName": "Card C",
                "issuer": "BankZ",
                "network": "Amex",
                "networkTier": "Platinum",
            }
        ),
    }


@pytest.fixture
def state_path(tmp_path):
    """Location of the state file inside a not yet existing directory."""
    return tmp_path / "data" / "state.json"


@pytest.fixture
def container(state_path):
    """Container wired to a temporary state file and no retry delay."""
    return create_container(
        {
            "api": {
                "url": "https://recommendations.test/chat",
                "timeout": 15.0,
                "max_attempts": 3,
                "retry_base_delay": 0.0,
            },
            "storage": {"state_path": str(state_path)},
            "conversation": {"history_limit": 2, "max_cached_chats": 100},
        }
    )


@pytest.fixture
def mock_recommendation_client(container):
    """Replace the recommendation client with an AsyncMock."""
    client = MagicMock()
    client.recommend = AsyncMock(return_value=None)
    client.check_health = AsyncMock(return_value=True)
    container.recommendation_client.override(client)
    yield client
    container.recommendation_client.reset_override()


@pytest.fixture
def make_context(container):
    """Build a bot context whose bot_data carries the container."""
    def _make_context():
        context = MagicMock()
        context.bot_data = {CONTAINER_KEY: container}
        context.bot.send_chat_action = AsyncMock()
        return context

    return _make_context


@pytest.fixture
def make_message_update():
    """Build an update for a message in the test chat.

    Every reply gets a fresh message ID and is collected in
    ``update.sent_messages`` so tests can press buttons under it.
    """
    message_ids = itertools.count(1000)

    def _make_update(text: str | None = "Test message", chat_id: int = TEST_CHAT_ID):
        update = MagicMock()
        update.sent_messages = []

        def _reply(*args, **kwargs):
            sent = MagicMock(message_id=next(message_ids))
            update.sent_messages.append(sent)
            return sent

        update.message.text = text
        update.message.reply_text = AsyncMock(side_effect=_reply)
        update.effective_chat.id = chat_id
        update.effective_chat.username = None
        update.effective_user.username = "test_user"
        return update

    return _make_update


@pytest.fixture
def make_callback_update():
    """Build an update for an inline button press in the test chat."""
    def _make_update(
        data: str, chat_id: int | None = TEST_CHAT_ID, message_id: int | None = None
    ):
        update = MagicMock()
        update.callback_query.data = data
        update.callback_query.message.message_id = message_id
        update.callback_query.answer = AsyncMock()
        update.callback_query.edit_message_text = AsyncMock()
        if chat_id is None:
            update.effective_chat = None
        else:
            update.effective_chat.id = chat_id
        return update

    return _make_update
