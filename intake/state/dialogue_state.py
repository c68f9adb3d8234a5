"""
Dialogue State
Names of the intake state machine's states.

    initial → ask_question ⇄ confirm_ticket → finished
"""
from enum import Enum


class DialogueState(str, Enum):
    INITIAL = "initial"
    ASK_QUESTION = "ask_question"
    CONFIRM_TICKET = "confirm_ticket"
    FINISHED = "finished"
