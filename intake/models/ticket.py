"""
Ticket Models
=============
Records handed from the dialogue engine to its driver.

    Evidence          — presence flags for screenshots, logs and videos
    Question          — the next question and the slot it fills
    TicketSummary     — draft shown to the user for confirmation
    Ticket            — immutable finalized ticket
    ExternalTicketRef — identifier / URL returned by an issue tracker
"""
from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict

SlotField = Literal["severity", "reproducibility", "evidence", "affected_components"]


class Evidence(BaseModel):
    screenshots: bool = False
    logs: bool = False
    videos: bool = False

    def any_present(self) -> bool:
        return self.screenshots or self.logs or self.videos


class Question(BaseModel):
    question: str
    field: SlotField


class TicketSummary(BaseModel):
    problem_statement: str
    severity: str
    reproducibility: str
    evidence: Evidence
    affected_components: List[str]
    summary: str


class Ticket(BaseModel):
    """Finalized ticket. Frozen: no attribute may be reassigned once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    severity: str
    reproducibility: str
    evidence: Evidence
    affected_components: List[str]
    status: Literal["pending", "in_review"] = "pending"
    created_at: datetime


class ExternalTicketRef(BaseModel):
    id: str
    url: str
