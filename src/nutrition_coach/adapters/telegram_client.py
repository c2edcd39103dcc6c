"""Telegram Bot API client used for admin notifications."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_API_BASE = "https://api.telegram.org"


class TelegramClient(Protocol):
    """Interface for outgoing Telegram messages."""

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a Telegram chat."""


@dataclass
class HttpxTelegramClient(TelegramClient):
    """Telegram client implemented with httpx."""

    bot_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, bot_token: str) -> "HttpxTelegramClient":
        """Create a Telegram client with a managed httpx session."""
        return cls(bot_token=bot_token, http_client=httpx.AsyncClient())

    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a message using Telegram's sendMessage API."""
        url = f"{_API_BASE}/bot{self.bot_token}/sendMessage"
        payload: dict[str, object] = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        response = await self.http_client.post(url, json=payload, timeout=10)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
