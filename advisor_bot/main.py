"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles both
webhook mode (for production deployment on Railway) and polling mode (for local
development). Configures logging, wires the dependency-injection container and
registers bot handlers for commands, messages and inline buttons.
"""

import logging

from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from .bot.handlers import (
    error_handler,
    favorites_command,
    handle_callback,
    handle_message,
    health_command,
    reject_non_text,
    start,
)
from .config import config
from .core.container import CONTAINER_KEY, Container, create_container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=getattr(logging, config.bot.log_level.upper(), logging.INFO),
)
# httpx logs every Bot API request URL, which contains the token
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


async def initialize_resources(application: Application) -> None:
    """Load persisted state before the first update is processed."""
    container: Container = application.bot_data[CONTAINER_KEY]
    store = container.state_store()
    logger.info(f"State store ready at {store.path}")


async def cleanup_resources(application: Application) -> None:
    """Drop in-memory per-chat caches and release container singletons."""
    container: Container | None = application.bot_data.pop(CONTAINER_KEY, None)
    if container is None:
        return

    try:
        container.conversation_store().clear()
        container.card_registry().clear()
        container.reset_singletons()
        logger.info("Container resources released")
    except Exception as e:
        logger.warning(f"Error during cleanup: {e}")


def build_application(token: str, container: Container) -> Application:
    """Create the bot application and register all handlers.

    Args:
        token: Telegram bot API token.
        container: Configured dependency-injection container.

    Returns:
        Application ready to be run.
    """
    app = (
        Application.builder()
        .token(token)
        .post_init(initialize_resources)
        .post_shutdown(cleanup_resources)
        .build()
    )
    app.bot_data[CONTAINER_KEY] = container

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("favorites", favorites_command))
    app.add_handler(CommandHandler("health", health_command))
    app.add_handler(CallbackQueryHandler(handle_callback))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
    app.add_handler(
        MessageHandler(~filters.TEXT & ~filters.COMMAND & ~filters.StatusUpdate.ALL, reject_non_text)
    )
    app.add_error_handler(error_handler)

    return app


def main() -> None:
    """Main application entry point.

    Initializes the Telegram bot application with proper configuration,
    registers command and message handlers, and starts the bot in either
    webhook mode (production) or polling mode (development).

    Raises:
        RuntimeError: If BOT_TOKEN environment variable is not set.
    """
    if not config.bot.bot_token:
        raise RuntimeError("Set BOT_TOKEN environment variable")

    app = build_application(config.bot.bot_token, create_container(config.as_dict()))

    # Run in webhook or polling mode
    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook on port {config.bot.port}")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.warning("No public domain found; falling back to long-polling")
        app.run_polling()


if __name__ == "__main__":
    main()
