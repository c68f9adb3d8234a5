"""
Ticket Formatter
================
Produces the final, immutable Ticket once the user accepts the draft.

Title heuristic (deliberate, not a truncation bug):
    - take the text before the first period
    - if that text is longer than 10 characters, it is the title
    - otherwise the title is the first 60 characters of the statement

Description template (markdown):
    ## Problem Description / ## Reproducibility / ## Evidence / ## Affected Components
    Evidence lists only the flags that are true.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from intake.core import config
from intake.core.exceptions import IncompleteTicketError
from intake.dialogue.missing_info import evaluate_missing_info, missing_fields
from intake.models.slot_model import SlotModel
from intake.models.ticket import Evidence, Ticket

_TITLE_MIN_SENTENCE_LENGTH = 10
_TITLE_MAX_LENGTH = 60


def generate_ticket_id(prefix: Optional[str] = None) -> str:
    """Process-unique identifier like TICKET-3F9A1C2E."""
    return f"{prefix or config.TICKET_ID_PREFIX}-{uuid.uuid4().hex[:8].upper()}"


def build_title(problem_statement: str) -> str:
    first_sentence = problem_statement.split(".")[0]
    if len(first_sentence) > _TITLE_MIN_SENTENCE_LENGTH:
        return first_sentence
    return problem_statement[:_TITLE_MAX_LENGTH]


def _evidence_bullets(evidence: Evidence) -> List[str]:
    bullets = []
    if evidence.screenshots:
        bullets.append("- Screenshots available")
    if evidence.logs:
        bullets.append("- Logs available")
    if evidence.videos:
        bullets.append("- Videos available")
    return bullets


def build_description(model: SlotModel) -> str:
    sections = [
        "## Problem Description",
        model.problem_statement,
        "",
        "## Reproducibility",
        model.reproducibility or "",
        "",
        "## Evidence",
        *_evidence_bullets(model.evidence),
        "",
        "## Affected Components",
        *(f"- {component}" for component in model.affected_components or []),
    ]
    return "\n".join(sections).strip()


def finalize(
    model: SlotModel,
    now: Optional[datetime] = None,
    ticket_id: Optional[str] = None,
) -> Ticket:
    """
    Build the finalized Ticket from a complete slot model.

    Parameters
    ----------
    model : SlotModel
        Slot model with every required slot present.
    now : datetime, optional
        Creation timestamp; defaults to the current UTC time.
    ticket_id : str, optional
        Explicit identifier; defaults to generate_ticket_id().

    Raises
    ------
    IncompleteTicketError
        If any required slot is still missing.
    """
    missing = missing_fields(evaluate_missing_info(model))
    if missing:
        raise IncompleteTicketError(missing)

    return Ticket(
        id=ticket_id or generate_ticket_id(),
        title=build_title(model.problem_statement),
        description=build_description(model),
        severity=model.severity,
        reproducibility=model.reproducibility,
        evidence=model.evidence.model_copy(),
        affected_components=list(model.affected_components),
        status="pending",
        created_at=now or datetime.now(timezone.utc),
    )
