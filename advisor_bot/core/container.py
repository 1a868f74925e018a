"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. The container is created once per process,
stored in the bot application's ``bot_data`` and torn down on shutdown, so
handlers never reach for module-level state.
"""

from dependency_injector import containers, providers

from advisor_bot.bot.callbacks import CallbackRouter
from advisor_bot.bot.response_formatter import ResponseFormatter
from advisor_bot.services.card_registry import CardRegistry
from advisor_bot.services.conversation import ConversationStore
from advisor_bot.services.recommendation import RecommendationClient
from advisor_bot.services.state_store import StateStore

CONTAINER_KEY = "container"


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Configuration()

    # Services
    recommendation_client = providers.Singleton(
        RecommendationClient,
        api_url=config.api.url,
        timeout=config.api.timeout,
        max_attempts=config.api.max_attempts,
        retry_base_delay=config.api.retry_base_delay,
    )
    state_store = providers.Singleton(StateStore, path=config.storage.state_path)
    conversation_store = providers.Singleton(
        ConversationStore,
        history_limit=config.conversation.history_limit,
        max_chats=config.conversation.max_cached_chats,
    )
    card_registry = providers.Singleton(
        CardRegistry, max_chats=config.conversation.max_cached_chats
    )

    # Bot components
    response_formatter = providers.Singleton(ResponseFormatter)
    callback_router = providers.Singleton(
        CallbackRouter,
        state_store=state_store,
        card_registry=card_registry,
        response_formatter=response_formatter,
    )


def create_container(settings: dict | None = None) -> Container:
    """Create a container configured from the application settings.

    Args:
        settings: Nested configuration mapping, defaults to the global config.

    Returns:
        Configured container.
    """
    if settings is None:
        from advisor_bot.config import config

        settings = config.as_dict()

    container = Container()
    container.config.from_dict(settings)
    return container
