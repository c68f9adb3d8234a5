"""
Question Selector
=================
Picks the next question for the first missing slot in priority order:
    severity → reproducibility → evidence → affected_components

Exactly one canonical question per slot. The controller tracks the asked
slot explicitly, so question wording can change without affecting which
slot an answer fills.
"""
from typing import Optional

from intake.core.constants import AFFECTED_COMPONENTS, EVIDENCE, REPRODUCIBILITY, SEVERITY
from intake.dialogue.missing_info import missing_fields
from intake.models.slot_model import MissingInfo
from intake.models.ticket import Question

QUESTIONS: dict[str, str] = {
    SEVERITY: "What is the severity of this issue? (critical, high, medium, or low)",
    REPRODUCIBILITY: (
        "How reproducible is this issue? Please describe steps to reproduce "
        "or frequency of occurrence."
    ),
    EVIDENCE: (
        "Do you have any evidence (screenshots, logs, videos) of the issue? "
        "Please specify which ones you have available."
    ),
    AFFECTED_COMPONENTS: "Which components or features are affected by this issue?",
}


def next_question(missing: MissingInfo) -> Optional[Question]:
    """Return the question for the highest-priority missing slot, or None."""
    fields = missing_fields(missing)
    if not fields:
        return None
    field = fields[0]
    return Question(question=QUESTIONS[field], field=field)
