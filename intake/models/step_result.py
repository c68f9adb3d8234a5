"""
Step Result Model
Pydantic model returned by every Dialogue Controller verb.
"""
from typing import Literal, Optional

from pydantic import BaseModel

from intake.models.ticket import Question, Ticket, TicketSummary

NextStep = Literal["ask_question", "confirm_ticket", "finished"]


class StepResult(BaseModel):
    next_step: NextStep
    question: Optional[Question] = None
    summary: Optional[TicketSummary] = None
    ticket: Optional[Ticket] = None
