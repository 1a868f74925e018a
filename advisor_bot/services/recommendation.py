"""Recommendation API client with bounded retries.

Sends the chat history and the user's message to the credit card
recommendation service. Every attempt uses a fresh, non-pooled connection
and a fixed timeout; failed attempts are retried with linear backoff until
the attempt cap is reached, after which the client reports the service as
unavailable by returning None instead of raising.
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from ..models import ChatResponse, RecommendationReply, Turn

logger = logging.getLogger(__name__)

HEALTH_CHECK_MESSAGE = "ping"


class RecommendationClient:
    """HTTP client for the recommendation API."""

    def __init__(
        self,
        api_url: str,
        timeout: float = 15.0,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ) -> None:
        """Initialize recommendation client.

        Args:
            api_url: Endpoint accepting chat history and a message.
            timeout: Per-attempt timeout in seconds.
            max_attempts: Default attempt cap for fetch().
            retry_base_delay: Delay unit for linear backoff, in seconds.
        """
        self.api_url = api_url
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_base_delay = retry_base_delay

    @staticmethod
    def build_payload(history: list[Turn], message: str) -> dict[str, Any]:
        """Build the request body expected by the recommendation API."""
        return {
            "chat_history": [turn.model_dump() for turn in history],
            "message": message,
            "isCards": True,
            "preferences": {},
            "ownCardData": {},
        }

    async def _post(self, payload: dict[str, Any]) -> Any:
        """Perform a single request attempt.

        Raises:
            aiohttp.ClientError: On network errors and non-success statuses.
            asyncio.TimeoutError: When the attempt exceeds the timeout.
            ValueError: When the body is not valid JSON.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        connector = aiohttp.TCPConnector(force_close=True)
        async with aiohttp.ClientSession(timeout=timeout, connector=connector) as session:
            headers = {"Content-Type": "application/json"}
            async with session.post(self.api_url, json=payload, headers=headers) as response:
                response.raise_for_status()
                return await response.json()

    async def fetch(self, payload: dict[str, Any], max_attempts: int | None = None) -> Any | None:
        """Send a payload, retrying failed attempts with linear backoff.

        The delay before attempt ``n + 1`` is ``n * retry_base_delay``.

        Args:
            payload: JSON request body.
            max_attempts: Attempt cap, defaults to the client's setting.

        Returns:
            Decoded JSON body, or None once every attempt has failed.
        """
        attempts = max_attempts if max_attempts is not None else self.max_attempts

        for attempt in range(1, attempts + 1):
            try:
                return await self._post(payload)
            except asyncio.TimeoutError:
                logger.warning(
                    "Recommendation API attempt %d/%d timed out after %ss",
                    attempt, attempts, self.timeout,
                )
            except (aiohttp.ClientError, ValueError) as e:
                logger.warning(
                    "Recommendation API attempt %d/%d failed: %s", attempt, attempts, e
                )

            if attempt < attempts:
                await asyncio.sleep(attempt * self.retry_base_delay)

        logger.error("Recommendation API unavailable after %d attempts", attempts)
        return None

    async def recommend(self, history: list[Turn], message: str) -> RecommendationReply | None:
        """Ask the recommendation API for a reply to the user's message.

        Args:
            history: Recent conversation turns of the chat.
            message: The user's new message.

        Returns:
            Parsed reply, or None if the service could not be reached.
        """
        data = await self.fetch(self.build_payload(history, message))
        if data is None:
            return None

        try:
            return ChatResponse.model_validate(data).reply
        except ValidationError as e:
            logger.error(f"Unexpected recommendation API response: {e}")
            return None

    async def check_health(self) -> bool:
        """Probe the API with a single attempt and no backoff."""
        data = await self.fetch(self.build_payload([], HEALTH_CHECK_MESSAGE), max_attempts=1)
        return data is not None
