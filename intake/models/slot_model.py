"""
Slot Model
==========
Pydantic models holding the facts collected during one intake session.

Fields:
    problem_statement   — initial free-text description (set once by start)
    severity            — critical / high / medium / low, None until extracted
    reproducibility     — free text, accepted verbatim
    evidence            — Evidence presence flags (screenshots / logs / videos)
    affected_components — user-declared component list, None until extracted
    missing_info        — derived MissingInfo, recomputed after every mutation
    current_question    — question text awaiting an answer (None when idle)
    pending_field       — slot the current question targets (None when idle)
    responses           — slot name → last raw answer (audit trail)
    ticket_summary      — last rendered draft text
    confirmation        — user's accept / reject decision on the draft
    final_ticket        — Ticket, set only after a confirmed finalization

missing_info is never written by extraction logic. Only the evaluator in
intake/dialogue/missing_info.py produces it.
"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from intake.models.ticket import Evidence, SlotField, Ticket

Severity = Literal["critical", "high", "medium", "low"]


class MissingInfo(BaseModel):
    severity: bool = True
    reproducibility: bool = True
    evidence: bool = True
    affected_components: bool = True


class SlotModel(BaseModel):
    problem_statement: str = ""
    severity: Optional[Severity] = None
    reproducibility: Optional[str] = None
    evidence: Evidence = Field(default_factory=Evidence)
    affected_components: Optional[List[str]] = None

    missing_info: MissingInfo = Field(default_factory=MissingInfo)
    current_question: Optional[str] = None
    pending_field: Optional[SlotField] = None
    responses: Dict[str, str] = Field(default_factory=dict)

    ticket_summary: Optional[str] = None
    confirmation: Optional[bool] = None
    final_ticket: Optional[Ticket] = None
