"""Tests for application startup wiring."""

import pytest
from telegram.ext import CallbackQueryHandler, CommandHandler

from advisor_bot import main as entry
from advisor_bot.core.container import CONTAINER_KEY


def test_missing_token_is_fatal(monkeypatch):
    monkeypatch.setattr(entry.config.bot, "bot_token", "")

    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        entry.main()


def test_build_application_registers_handlers(container):
    app = entry.build_application("123456:TEST-token", container)

    assert app.bot_data[CONTAINER_KEY] is container
    handlers = app.handlers[0]
    commands = {
        command
        for handler in handlers
        if isinstance(handler, CommandHandler)
        for command in handler.commands
    }
    assert commands == {"start", "favorites", "health"}
    assert any(isinstance(handler, CallbackQueryHandler) for handler in handlers)
    assert app.error_handlers


@pytest.mark.asyncio
async def test_cleanup_releases_container(container, sample_cards):
    app = entry.build_application("123456:TEST-token", container)
    container.card_registry().set_last(1, [sample_cards["card_a"]], [100])

    await entry.cleanup_resources(app)

    assert CONTAINER_KEY not in app.bot_data
    assert container.card_registry().get(1, 0, 100) is None
