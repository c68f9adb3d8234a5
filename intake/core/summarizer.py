"""
Summarizer
==========
Renders the human-readable draft shown to the user before confirmation.

STRICT DETERMINISM CONTRACT:
  - This module NEVER calls an LLM.
  - This module NEVER mutates the slot model.
  - Given the same slot model, it ALWAYS returns the exact same draft.

The draft layout (byte-for-byte):

    Issue Summary:
    --------------
    Problem: {problem_statement}
    Severity: {severity}
    Reproducibility: {reproducibility}
    Evidence: Screenshots ✓, Logs ✗, Videos ✗
    Affected Components: {a, b, c}
"""
from intake.core.constants import CHECK_MARK, CROSS_MARK
from intake.core.exceptions import IncompleteTicketError
from intake.dialogue.missing_info import evaluate_missing_info, missing_fields
from intake.models.slot_model import SlotModel
from intake.models.ticket import Evidence, TicketSummary


def _mark(label: str, present: bool) -> str:
    return f"{label} {CHECK_MARK if present else CROSS_MARK}"


def format_evidence_checklist(evidence: Evidence) -> str:
    return ", ".join([
        _mark("Screenshots", evidence.screenshots),
        _mark("Logs", evidence.logs),
        _mark("Videos", evidence.videos),
    ])


def summarize(model: SlotModel) -> TicketSummary:
    """
    Build the confirmation draft for a complete slot model.

    Raises
    ------
    IncompleteTicketError
        If any required slot is still missing.
    """
    missing = missing_fields(evaluate_missing_info(model))
    if missing:
        raise IncompleteTicketError(missing)

    components = list(model.affected_components or [])
    lines = [
        "Issue Summary:",
        "--------------",
        f"Problem: {model.problem_statement}",
        f"Severity: {model.severity}",
        f"Reproducibility: {model.reproducibility}",
        f"Evidence: {format_evidence_checklist(model.evidence)}",
        f"Affected Components: {', '.join(components)}",
    ]

    return TicketSummary(
        problem_statement=model.problem_statement,
        severity=model.severity,
        reproducibility=model.reproducibility,
        evidence=model.evidence.model_copy(),
        affected_components=components,
        summary="\n".join(lines),
    )
