"""
Notification Service
====================
Chat notification sinks announcing a newly finalized Ticket.

Implementations:
    SlackService — Slack incoming webhook, Block Kit message
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from intake.core.config import HTTP_TIMEOUT_SECONDS
from intake.core.exceptions import NotificationError
from intake.models.ticket import Ticket

logger = logging.getLogger(__name__)

_DESCRIPTION_PREVIEW_CHARS = 300


class NotificationSink(ABC):

    @abstractmethod
    async def send_ticket_notification(self, ticket: Ticket, ticket_url: Optional[str] = None) -> None:
        ...


def build_slack_message(ticket: Ticket, ticket_url: Optional[str] = None) -> Dict[str, Any]:
    """Block Kit payload: header, key fields, description preview, components, link."""
    description = ticket.description[:_DESCRIPTION_PREVIEW_CHARS]
    if len(ticket.description) > _DESCRIPTION_PREVIEW_CHARS:
        description += "..."

    blocks = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f"New Ticket: {ticket.title}", "emoji": True},
        },
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": f"*ID:* {ticket.id}"},
                {"type": "mrkdwn", "text": f"*Severity:* {ticket.severity}"},
                {"type": "mrkdwn", "text": f"*Created:* {ticket.created_at.strftime('%Y-%m-%d %H:%M:%S %Z')}"},
                {"type": "mrkdwn", "text": f"*Status:* {ticket.status}"},
            ],
        },
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"*Description:*\n{description}"},
        },
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": f"*Affected Components:* {', '.join(ticket.affected_components)}",
            },
        },
    ]

    if ticket_url:
        blocks.append({
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"<{ticket_url}|View Ticket in Tracker>"},
        })

    return {"blocks": blocks}


class SlackService(NotificationSink):

    def __init__(self, webhook_url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_ticket_notification(self, ticket: Ticket, ticket_url: Optional[str] = None) -> None:
        message = build_slack_message(ticket, ticket_url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=message)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error sending Slack notification for %s: %s", ticket.id, exc)
            raise NotificationError("Failed to send Slack notification") from exc

        logger.info("Slack notification sent for ticket %s", ticket.id)
