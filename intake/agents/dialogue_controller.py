"""
Dialogue Controller
===================
Stateful orchestrator for one ticket-intake session.
Drives the Extract → Evaluate → Ask / Summarize → Finalize loop.

States:
    initial        — no problem statement yet
    ask_question   — at least one slot missing, a question is pending
    confirm_ticket — every slot present, draft generated, awaiting yes / no
    finished       — terminal, ticket finalized

Verbs (each returns a StepResult):
    start(problem_statement)  — initial only
    respond(raw_text)         — only while a question is pending
    confirm(confirmed)        — confirm_ticket only
    current_step()            — re-run the common step without mutating slots

Common step (after start, respond, and a rejected confirm):
    recompute missing_info → first missing slot ? ask it : summarize

Rejection loop:
    A rejected draft re-runs the common step as-is. If nothing is missing the
    same draft is offered again; no slot is cleared for re-asking.

Out-of-order calls raise DialoguePreconditionError before any mutation.
The controller holds no locks and performs no I/O; the driver serializes
turns per session.
"""
import logging
from typing import Optional

from intake.core.exceptions import DialoguePreconditionError
from intake.core.summarizer import summarize
from intake.core.ticket_formatter import finalize
from intake.dialogue.missing_info import evaluate_missing_info
from intake.dialogue.question_selector import next_question
from intake.models.slot_model import SlotModel
from intake.models.step_result import StepResult
from intake.models.ticket import Ticket
from intake.parser.slot_extractor import apply_response
from intake.state.dialogue_state import DialogueState

logger = logging.getLogger(__name__)


class DialogueController:
    """
    Owns one SlotModel and sequences the pure intake functions over it.
    """

    def __init__(self, session_id: str = "") -> None:
        self.session_id = session_id
        self._model = SlotModel()
        self._state = DialogueState.INITIAL

    # -----------------------------------------------------------------------
    # Read-only accessors
    # -----------------------------------------------------------------------
    @property
    def state(self) -> DialogueState:
        return self._state

    @property
    def model(self) -> SlotModel:
        """Deep copy of the slot model; edits do not affect the session."""
        return self._model.model_copy(deep=True)

    @property
    def is_finished(self) -> bool:
        return self._state is DialogueState.FINISHED

    @property
    def final_ticket(self) -> Optional[Ticket]:
        return self._model.final_ticket

    # -----------------------------------------------------------------------
    # Verbs
    # -----------------------------------------------------------------------
    def start(self, problem_statement: str) -> StepResult:
        self._require_state("start", DialogueState.INITIAL)
        if not problem_statement or not problem_statement.strip():
            raise ValueError("problem_statement must not be empty")

        self._model.problem_statement = problem_statement
        logger.info("[%s] Session started", self.session_id or "-")
        return self._advance()

    def respond(self, raw_text: str) -> StepResult:
        field = self._model.pending_field
        if field is None:
            raise DialoguePreconditionError(
                "respond", self._state.value, "no question is pending"
            )

        model = apply_response(self._model, field, raw_text)
        model.current_question = None
        model.pending_field = None
        self._model = model
        logger.debug("[%s] Applied response for '%s'", self.session_id or "-", field)
        return self._advance()

    def confirm(self, confirmed: bool) -> StepResult:
        self._require_state("confirm", DialogueState.CONFIRM_TICKET)

        if not confirmed:
            self._model.confirmation = False
            logger.info("[%s] Draft rejected, re-entering question loop", self.session_id or "-")
            return self._advance()

        ticket = finalize(self._model)
        self._model.confirmation = True
        self._model.final_ticket = ticket
        self._state = DialogueState.FINISHED
        logger.info("[%s] Ticket %s finalized", self.session_id or "-", ticket.id)
        return StepResult(next_step=DialogueState.FINISHED.value, ticket=ticket)

    def current_step(self) -> StepResult:
        """Re-run the common step; yields the same payload until a slot changes."""
        if self._state in (DialogueState.INITIAL, DialogueState.FINISHED):
            raise DialoguePreconditionError(
                "current_step", self._state.value, "no active dialogue step"
            )
        return self._advance()

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------
    def _require_state(self, operation: str, expected: DialogueState) -> None:
        if self._state is not expected:
            raise DialoguePreconditionError(
                operation, self._state.value, f"expected '{expected.value}'"
            )

    def _advance(self) -> StepResult:
        """Common step: recompute missing_info, then ask or summarize."""
        self._model.missing_info = evaluate_missing_info(self._model)

        question = next_question(self._model.missing_info)
        if question is not None:
            self._model.current_question = question.question
            self._model.pending_field = question.field
            self._state = DialogueState.ASK_QUESTION
            logger.debug("[%s] Asking for '%s'", self.session_id or "-", question.field)
            return StepResult(next_step=DialogueState.ASK_QUESTION.value, question=question)

        summary = summarize(self._model)
        self._model.ticket_summary = summary.summary
        self._state = DialogueState.CONFIRM_TICKET
        logger.debug("[%s] All slots filled, awaiting confirmation", self.session_id or "-")
        return StepResult(next_step=DialogueState.CONFIRM_TICKET.value, summary=summary)
