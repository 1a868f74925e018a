"""Send a one-off message to a chat with the bot's credentials.

Usage::

    python -m advisor_bot.tools.send_message <chat_id> "Your message"

The message is sent with HTML parse mode. Useful for checking that the bot
token works and that a given chat can be reached.
"""

import argparse
import asyncio
import logging
import sys

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import TelegramError

from ..config import config

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Hello from programmatic test."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a Telegram message as the bot.")
    parser.add_argument("chat_id", type=int, help="Target chat ID")
    parser.add_argument("text", nargs="*", help="Message text (HTML allowed)")
    return parser.parse_args(argv)


async def send_message(token: str, chat_id: int, text: str) -> int:
    """Send ``text`` to ``chat_id``.

    Returns:
        Process exit status, 0 on success.
    """
    try:
        async with Bot(token) as bot:
            message = await bot.send_message(chat_id=chat_id, text=text, parse_mode=ParseMode.HTML)
    except TelegramError as e:
        logger.error(f"Failed to send message: {e}")
        return 1

    print(message.to_json())
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s", level=logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    args = parse_args(argv)

    token = config.bot.bot_token
    if not token:
        logger.error("Missing BOT_TOKEN in environment")
        return 1

    text = " ".join(args.text) if args.text else DEFAULT_MESSAGE
    return asyncio.run(send_message(token, args.chat_id, text))


if __name__ == "__main__":
    sys.exit(main())
