"""Error reporting port with logging and Telegram implementations."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutrition_coach.adapters.telegram_client import TelegramClient

_logger = logging.getLogger(__name__)

_MAX_CONTEXT_VALUE_LENGTH = 300


class ErrorReporter(Protocol):
    """Receives operational events worth an operator's attention."""

    async def report(self, event: str, context: dict[str, object]) -> None:
        """Report an event with structured context."""


@dataclass
class LoggingErrorReporter(ErrorReporter):
    """Reporter that only writes to the application log."""

    async def report(self, event: str, context: dict[str, object]) -> None:
        """Log the event as a warning."""
        _logger.warning("%s: %s", event, context)


@dataclass
class TelegramErrorReporter(ErrorReporter):
    """Reporter that forwards events to an admin Telegram chat."""

    telegram_client: TelegramClient
    admin_chat_id: int
    environment: str = "local"

    async def report(self, event: str, context: dict[str, object]) -> None:
        """Send the event to the admin chat; delivery failures are only logged."""
        try:
            await self.telegram_client.send_message(
                chat_id=self.admin_chat_id,
                text=format_report(event, context, self.environment),
            )
        except Exception:
            _logger.exception("Failed to deliver error report", extra={"event": event})


def format_report(event: str, context: dict[str, object], environment: str) -> str:
    """Render an event as a plain-text admin message."""
    lines = [f"[{environment}] {event}"]
    for key, value in context.items():
        rendered = str(value)
        if len(rendered) > _MAX_CONTEXT_VALUE_LENGTH:
            rendered = rendered[:_MAX_CONTEXT_VALUE_LENGTH] + "..."
        lines.append(f"{key}: {rendered}")
    return "\n".join(lines)
