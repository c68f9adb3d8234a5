"""
Ticket Dispatcher
=================
Best-effort delivery of a finalized Ticket to the configured sinks.

Order:
    1. Tracker (if configured)      → external id + URL
    2. Notification (if configured) → message, with the tracker URL when known

Fault tolerance:
    - Sink failures are logged and collected in DispatchResult.errors
    - Nothing is raised; the 'finished' dialogue result always stands
    - No retries
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from intake.core import config
from intake.core.exceptions import IntegrationError
from intake.models.ticket import ExternalTicketRef, Ticket
from intake.services.notification_service import NotificationSink, SlackService
from intake.services.tracker_service import JiraService, TicketSink

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    external: Optional[ExternalTicketRef] = None
    notified: bool = False
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "external_id": self.external.id if self.external else None,
            "external_url": self.external.url if self.external else None,
            "notified": self.notified,
            "errors": list(self.errors),
        }


def build_services() -> Tuple[Optional[TicketSink], Optional[NotificationSink]]:
    """
    Build the sinks enabled by configuration.

    Returns (None, None) unless USE_EXTERNAL_SERVICES is true.
    """
    if not config.USE_EXTERNAL_SERVICES:
        return None, None

    tracker: Optional[TicketSink] = None
    if config.JIRA_API_URL:
        tracker = JiraService(
            api_url=config.JIRA_API_URL,
            email=config.JIRA_EMAIL,
            api_token=config.JIRA_API_TOKEN,
            project_key=config.JIRA_PROJECT_KEY,
            reproducibility_field=config.JIRA_REPRODUCIBILITY_FIELD,
        )

    notifier: Optional[NotificationSink] = None
    if config.SLACK_WEBHOOK_URL:
        notifier = SlackService(webhook_url=config.SLACK_WEBHOOK_URL)

    if tracker is None and notifier is None:
        logger.warning("USE_EXTERNAL_SERVICES is set but no Jira or Slack settings were found")
    return tracker, notifier


async def dispatch_ticket(
    ticket: Ticket,
    tracker: Optional[TicketSink] = None,
    notifier: Optional[NotificationSink] = None,
) -> DispatchResult:
    result = DispatchResult()

    if tracker is not None:
        try:
            result.external = await tracker.create_ticket(ticket)
        except IntegrationError as exc:
            logger.warning("Tracker dispatch failed for %s: %s", ticket.id, exc)
            result.errors.append(f"tracker: {exc}")
        except Exception as exc:
            logger.error("Unexpected tracker failure for %s: %s", ticket.id, exc, exc_info=True)
            result.errors.append(f"tracker: {exc}")

    if notifier is not None:
        ticket_url = result.external.url if result.external else None
        try:
            await notifier.send_ticket_notification(ticket, ticket_url)
            result.notified = True
        except IntegrationError as exc:
            logger.warning("Notification dispatch failed for %s: %s", ticket.id, exc)
            result.errors.append(f"notification: {exc}")
        except Exception as exc:
            logger.error("Unexpected notification failure for %s: %s", ticket.id, exc, exc_info=True)
            result.errors.append(f"notification: {exc}")

    return result
