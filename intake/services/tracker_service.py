"""
Tracker Service
===============
Ticket-creation sinks that push a finalized Ticket into an issue tracker.

Only the driver calls these, and only after the dialogue is 'finished'.
Failures raise TrackerError; the dispatcher decides how to report them.

Implementations:
    JiraService — Jira REST API v2, basic auth (email + API token)
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from intake.core.config import HTTP_TIMEOUT_SECONDS
from intake.core.exceptions import TrackerError
from intake.models.ticket import ExternalTicketRef, Ticket

logger = logging.getLogger(__name__)

# Ticket severity → Jira priority name
JIRA_PRIORITY_MAP: Dict[str, str] = {
    "critical": "Highest",
    "high": "High",
    "medium": "Medium",
    "low": "Low",
}
_DEFAULT_PRIORITY = "Medium"


class TicketSink(ABC):
    """Anything that can store a finalized Ticket and hand back a reference."""

    @abstractmethod
    async def create_ticket(self, ticket: Ticket) -> ExternalTicketRef:
        ...

    @abstractmethod
    async def update_ticket(self, external_id: str, updates: Dict[str, Any]) -> ExternalTicketRef:
        ...


class JiraService(TicketSink):
    """
    Creates and updates Jira issues of type Bug.

    Field mapping:
        title               → summary
        description         → description
        severity            → priority (see JIRA_PRIORITY_MAP)
        affected_components → components[].name
        reproducibility     → reproducibility_field, when one is configured
    """

    def __init__(
        self,
        api_url: str,
        email: str,
        api_token: str,
        project_key: str,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        reproducibility_field: Optional[str] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.project_key = project_key
        self.reproducibility_field = reproducibility_field or None
        self.timeout = timeout
        self._auth = (email, api_token)
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _browse_url(self, key: str) -> str:
        return f"{self.api_url}/browse/{key}"

    @staticmethod
    def _priority(severity: Optional[str]) -> Dict[str, str]:
        return {"name": JIRA_PRIORITY_MAP.get(severity or "", _DEFAULT_PRIORITY)}

    def build_issue_payload(self, ticket: Ticket) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "project": {"key": self.project_key},
            "summary": ticket.title,
            "description": ticket.description,
            "issuetype": {"name": "Bug"},
            "priority": self._priority(ticket.severity),
            "components": [{"name": c} for c in ticket.affected_components],
        }
        if self.reproducibility_field:
            fields[self.reproducibility_field] = ticket.reproducibility
        return {"fields": fields}

    async def create_ticket(self, ticket: Ticket) -> ExternalTicketRef:
        url = f"{self.api_url}/rest/api/2/issue"
        try:
            async with httpx.AsyncClient(
                headers=self.headers, auth=self._auth, timeout=self.timeout
            ) as client:
                response = await client.post(url, json=self.build_issue_payload(ticket))
                response.raise_for_status()
                key = response.json()["key"]
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.error("Error creating Jira ticket for %s: %s", ticket.id, exc)
            raise TrackerError("Failed to create Jira ticket") from exc

        logger.info("Created Jira issue %s for ticket %s", key, ticket.id)
        return ExternalTicketRef(id=key, url=self._browse_url(key))

    async def update_ticket(self, external_id: str, updates: Dict[str, Any]) -> ExternalTicketRef:
        fields: Dict[str, Any] = {}
        if updates.get("title"):
            fields["summary"] = updates["title"]
        if updates.get("description"):
            fields["description"] = updates["description"]
        if updates.get("severity"):
            fields["priority"] = self._priority(updates["severity"])
        if updates.get("reproducibility") and self.reproducibility_field:
            fields[self.reproducibility_field] = updates["reproducibility"]

        url = f"{self.api_url}/rest/api/2/issue/{external_id}"
        try:
            async with httpx.AsyncClient(
                headers=self.headers, auth=self._auth, timeout=self.timeout
            ) as client:
                response = await client.put(url, json={"fields": fields})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error updating Jira ticket %s: %s", external_id, exc)
            raise TrackerError("Failed to update Jira ticket") from exc

        return ExternalTicketRef(id=external_id, url=self._browse_url(external_id))
