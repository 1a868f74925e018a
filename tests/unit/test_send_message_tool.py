"""Tests for the send_message operator tool."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from telegram.constants import ParseMode
from telegram.error import NetworkError

from advisor_bot.tools import send_message as tool


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.send_message = AsyncMock(return_value=MagicMock(to_json=MagicMock(return_value="{}")))
    with patch.object(tool, "Bot") as mock_bot_cls:
        mock_bot_cls.return_value.__aenter__.return_value = bot
        yield bot


def test_missing_token_fails(monkeypatch):
    monkeypatch.setattr(tool.config.bot, "bot_token", "")

    assert tool.main(["42", "hello"]) == 1


def test_sends_joined_text_as_html(monkeypatch, mock_bot):
    monkeypatch.setattr(tool.config.bot, "bot_token", "token")

    assert tool.main(["42", "hello", "<b>world</b>"]) == 0

    mock_bot.send_message.assert_awaited_once_with(
        chat_id=42, text="hello <b>world</b>", parse_mode=ParseMode.HTML
    )


def test_default_text(monkeypatch, mock_bot):
    monkeypatch.setattr(tool.config.bot, "bot_token", "token")

    tool.main(["42"])

    assert mock_bot.send_message.await_args.kwargs["text"] == tool.DEFAULT_MESSAGE


def test_telegram_error_fails(monkeypatch, mock_bot):
    monkeypatch.setattr(tool.config.bot, "bot_token", "token")
    mock_bot.send_message.side_effect = NetworkError("unreachable")

    assert tool.main(["42"]) == 1


def test_non_numeric_chat_id_rejected(monkeypatch):
    monkeypatch.setattr(tool.config.bot, "bot_token", "token")

    with pytest.raises(SystemExit) as exc_info:
        tool.main(["not-a-number"])

    assert exc_info.value.code != 0


def test_usage_errors_are_reported_before_missing_token(monkeypatch, capsys):
    monkeypatch.setattr(tool.config.bot, "bot_token", "")

    with pytest.raises(SystemExit) as exc_info:
        tool.main(["--help"])

    assert exc_info.value.code == 0
    assert "chat_id" in capsys.readouterr().out
